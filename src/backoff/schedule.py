#!/usr/bin/env python3
"""Preview the backoff schedule a retry loop would follow."""

import math
import os
import pandas as pd
from .calculate import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_TIME_MS,
    backoff_bounds_ms,
)


ENV_OPTIONS = {
    'BACKOFF_BASE_TIME_MS': ('base_time_ms', float),
    'BACKOFF_MAX_TIME_MS': ('max_time_ms', float),
    'BACKOFF_MAX_ATTEMPTS': ('max_attempts', float),
    'BACKOFF_RANDOMIZATION_FACTOR': ('randomization_factor', float),
}


# === Functional Core ===

def schedule_attempts(max_attempts):
    """List attempt numbers to preview, including one past saturation.

    Args:
        max_attempts: Configured maximum attempts (floored at 0 here only)

    Returns:
        List of ints [0, 1, ..., max_attempts + 1]
    """
    try:
        last = max(0, math.floor(max_attempts))
    except (ValueError, OverflowError):
        # nan or inf: nothing sensible to enumerate past attempt 0
        last = 0
    return list(range(last + 2))


def backoff_schedule(**options):
    """Build a table of delay bounds per attempt.

    Args:
        **options: Keyword options accepted by calc_backoff_ms
            (base_time_ms, max_time_ms, max_attempts, randomization_factor)

    Returns:
        DataFrame with columns attempt, min_delay_ms, max_delay_ms, capped
    """
    max_attempts = options.get('max_attempts', DEFAULT_MAX_ATTEMPTS)
    max_time_ms = options.get('max_time_ms', DEFAULT_MAX_TIME_MS)

    rows = []
    for attempt in schedule_attempts(max_attempts):
        low, high = backoff_bounds_ms(attempt, **options)
        rows.append({
            'attempt': attempt,
            'min_delay_ms': float(low),
            'max_delay_ms': float(high),
            'capped': attempt > 0 and high == max_time_ms,
        })

    return pd.DataFrame(rows, columns=['attempt', 'min_delay_ms', 'max_delay_ms', 'capped'])


# === I/O Layer ===

def load_backoff_options(env=None):
    """Read backoff overrides from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Dict of calc_backoff_ms keyword options for the variables that are set

    Raises:
        ValueError: If a variable is set to something that does not parse
    """
    env = os.environ if env is None else env

    options = {}
    for name, (keyword, parse) in ENV_OPTIONS.items():
        raw = env.get(name)
        if not raw:
            continue
        try:
            options[keyword] = parse(raw)
        except ValueError:
            raise ValueError(f"{name} must be a {parse.__name__}, got {raw!r}") from None
    return options


def main():
    """Print the backoff schedule for the configured options."""
    options = load_backoff_options()
    if options:
        overrides = ', '.join(f"{k}={v}" for k, v in options.items())
        print(f"Backoff overrides: {overrides}")
    else:
        print("No backoff overrides set, using defaults")

    schedule = backoff_schedule(**options)
    print(f"\n{schedule.to_string(index=False)}")

    worst_case_ms = schedule['max_delay_ms'].sum()
    print(f"\n✓ {len(schedule)} attempts previewed")
    print(f"✓ Worst-case total wait: {worst_case_ms / 1000:.1f}s")


if __name__ == '__main__':
    main()

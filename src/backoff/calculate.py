"""Pure functions for exponential backoff with jitter."""

import math
import random


DEFAULT_ATTEMPT = 0
DEFAULT_BASE_TIME_MS = 1000
DEFAULT_MAX_TIME_MS = 86_400_000  # 24h
DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_RANDOMIZATION_FACTOR = 0.25


def _exponential_delay_ms(base_time_ms, attempt):
    """Return base_time_ms * 2**(attempt - 1), going infinite on overflow."""
    try:
        return base_time_ms * 2.0 ** (attempt - 1)
    except OverflowError:
        # 0 * inf is nan, same as the float arithmetic would give
        return base_time_ms * math.inf


def calc_backoff_ms(
    attempt=DEFAULT_ATTEMPT,
    base_time_ms=DEFAULT_BASE_TIME_MS,
    max_time_ms=DEFAULT_MAX_TIME_MS,
    max_attempts=DEFAULT_MAX_ATTEMPTS,
    randomization_factor=DEFAULT_RANDOMIZATION_FACTOR,
    random_source=random.random,
):
    """
    Calculate the backoff delay before the next retry.

    Args:
        attempt: Current attempt number (0 means nothing has been retried yet)
        base_time_ms: Delay for the first retry (attempt 1), before jitter
        max_time_ms: Upper bound on the returned delay
        max_attempts: Attempt number past which the delay saturates at max_time_ms
        randomization_factor: Fraction of the delay added as random jitter
        random_source: Callable returning a uniform float in [0, 1)

    Returns:
        Delay in milliseconds: 0 for attempt <= 0, max_time_ms past
        max_attempts, otherwise base_time_ms * 2**(attempt-1) plus jitter,
        capped at max_time_ms. Inputs are not validated.
    """
    if attempt <= 0:
        return 0

    if attempt > max_attempts:
        return max_time_ms

    backoff_time = _exponential_delay_ms(base_time_ms, attempt)
    randomization = random_source() * randomization_factor * backoff_time

    if math.isnan(max_time_ms):
        return max_time_ms
    return min(backoff_time + randomization, max_time_ms)


def backoff_bounds_ms(attempt=DEFAULT_ATTEMPT, **options):
    """Return (low, high): the delay with no jitter and with full jitter.

    Accepts the same keyword options as calc_backoff_ms, except random_source.
    """
    low = calc_backoff_ms(attempt, random_source=lambda: 0.0, **options)
    high = calc_backoff_ms(attempt, random_source=lambda: 1.0, **options)
    return low, high

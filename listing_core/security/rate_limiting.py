"""
Fixed-window rate limiting for user actions.
"""
import re
import math
import time
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from listing_core.security.exceptions import RateLimitExceeded, InvalidInput


logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security')


DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_WINDOW_MS = 60000

_PERIOD_SECONDS = {
    'sec': 1,
    'second': 1,
    'min': 60,
    'minute': 60,
    'hour': 3600,
    'day': 86400,
}

_PERIOD_PATTERN = re.compile(r'(\d*)(sec|second|min|minute|hour|day)s?')


@dataclass
class RateLimitRecord:
    """Attempt counter for one key, valid until ``reset_at`` (milliseconds on the limiter clock)."""
    count: int
    reset_at: int
    blocked: bool = False


@dataclass(frozen=True)
class RateLimitPolicy:
    """
    Named limit for a kind of action, e.g. login or sign-up.

    ``block_ms`` is how long a key stays blocked once it runs out of
    attempts. None keeps it blocked until its window ends.
    """
    name: str
    max_attempts: int
    window_ms: int
    block_ms: Optional[int] = None

    @classmethod
    def from_string(cls, name: str, limit_str: str,
                    block_str: Optional[str] = None) -> 'RateLimitPolicy':
        max_attempts, window_ms = parse_limit(limit_str)
        block_ms = parse_period(block_str) if block_str else None
        return cls(name=name, max_attempts=max_attempts, window_ms=window_ms, block_ms=block_ms)


@dataclass
class RateLimitResult:
    allowed: bool
    retry_after: int = 0
    error: Optional[str] = None


def parse_period(period_str: str) -> int:
    """
    Parse a period like '5min', 'hour' or '30seconds' into milliseconds.

    Raises:
        ValueError: If the string is malformed or the multiplier is zero
    """
    match = _PERIOD_PATTERN.fullmatch((period_str or '').strip())
    if not match:
        raise ValueError(f"Invalid rate limit period: {period_str!r}")

    digits, unit = match.groups()
    multiplier = int(digits) if digits else 1
    if multiplier <= 0:
        raise ValueError(f"Invalid rate limit period: {period_str!r}")

    return multiplier * _PERIOD_SECONDS[unit] * 1000


def parse_limit(limit_str: str) -> Tuple[int, int]:
    """
    Parse a rate limit string like '10/5min' or '100/hour'.

    Args:
        limit_str: Attempts and period separated by '/'. The period is a
            unit ('sec', 'min', 'hour', 'day', plurals accepted) optionally
            preceded by a multiplier

    Returns:
        Tuple of (max_attempts, window_ms)

    Raises:
        ValueError: If the string is malformed
    """
    if not limit_str or '/' not in limit_str:
        raise ValueError(f"Invalid rate limit: {limit_str!r}")

    rate, period = limit_str.strip().split('/', 1)
    rate = int(rate)
    if rate <= 0:
        raise ValueError(f"Invalid rate limit: {limit_str!r}")

    return rate, parse_period(period)


def format_wait_message(seconds: int, action_name: Optional[str] = None) -> str:
    """Build the message shown to a user who must wait before retrying."""
    minutes = seconds // 60

    if minutes > 0:
        wait = f"{minutes} minuto{'s' if minutes > 1 else ''}"
    else:
        wait = f"{seconds} segundo{'s' if seconds > 1 else ''}"

    return (
        f"Por segurança, aguarde {wait} antes de tentar "
        f"{action_name or 'esta ação'} novamente."
    )


def should_bypass_rate_limit(is_premium: bool) -> bool:
    """Paying users are not throttled."""
    return bool(is_premium)


class RateLimiter:
    """
    Fixed-window attempt counter keyed by an arbitrary string.

    The first attempt for a key opens a window of ``window_ms``. Attempts
    are counted until ``max_attempts`` is reached, after which the key is
    blocked until the window ends. Blocked attempts do not extend the
    window.

    Times are kept in whole milliseconds of ``clock``, which returns
    seconds like ``time.monotonic``.

    Not thread-safe; callers on several threads must serialize access.
    """

    def __init__(self, max_keys: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic,
                 policies: Optional[Dict[str, RateLimitPolicy]] = None):
        self.max_keys = max_keys or None
        self.clock = clock
        self.policies = dict(policies or {})
        self._records = OrderedDict()  # key -> RateLimitRecord

        logger.info(f"RateLimiter initialized (max_keys={self.max_keys})")

    def __len__(self):
        return len(self._records)

    def __contains__(self, key):
        return key in self._records

    def now_ms(self) -> int:
        return round(self.clock() * 1000)

    def check(self, key: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
              window_ms: int = DEFAULT_WINDOW_MS) -> bool:
        """
        Record an attempt for ``key``.

        Returns:
            True if the attempt is allowed, False if the key is blocked
        """
        now = self.now_ms()
        record = self._records.get(key)

        if record is None or now > record.reset_at:
            self._records[key] = RateLimitRecord(count=1, reset_at=now + window_ms)
            self._touch(key)
            return True

        self._touch(key)

        if record.count >= max_attempts:
            security_logger.warning(f"Rate limit exceeded for key {key!r}")
            return False

        record.count += 1
        return True

    def block(self, key: str, block_ms: int):
        """
        Replace the rest of the window of a blocked ``key`` with ``block_ms``.

        Only the first call per window has an effect, so later blocked
        attempts never push the block further out.
        """
        record = self._records.get(key)
        if record is None or record.blocked:
            return

        record.reset_at = self.now_ms() + block_ms
        record.blocked = True
        security_logger.warning(f"Blocked key {key!r} for {block_ms} ms")

    def get_reset(self, key: str) -> int:
        """Seconds until the window for ``key`` ends, 0 if there is none."""
        record = self._records.get(key)
        if record is None:
            return 0

        now = self.now_ms()
        if now > record.reset_at:
            return 0

        return math.ceil((record.reset_at - now) / 1000)

    def get_record(self, key: str) -> Optional[RateLimitRecord]:
        return self._records.get(key)

    def reset(self, key: Optional[str] = None):
        """Forget one key, or every key when ``key`` is None."""
        if key is None:
            self._records.clear()
        else:
            self._records.pop(key, None)

    def sweep(self) -> int:
        """Drop expired records and return how many were removed."""
        now = self.now_ms()
        expired = [key for key, record in self._records.items() if now > record.reset_at]
        for key in expired:
            del self._records[key]

        if expired:
            logger.debug(f"Swept {len(expired)} expired rate limit records")

        return len(expired)

    def get_policy(self, name: str) -> RateLimitPolicy:
        try:
            return self.policies[name]
        except KeyError:
            raise InvalidInput(f"Unknown rate limit policy: {name}")

    def check_action(self, policy, key: str, action_name: Optional[str] = None) -> RateLimitResult:
        """
        Check an attempt against a named policy.

        A key that runs out of attempts is blocked for the policy's
        ``block_ms`` when it has one, otherwise until its window ends.

        Args:
            policy: Policy name or RateLimitPolicy
            key: Caller identity, e.g. email, user id or IP
            action_name: Action shown in the wait message, e.g. 'login'

        Returns:
            RateLimitResult with a user-facing message when blocked
        """
        if not isinstance(policy, RateLimitPolicy):
            policy = self.get_policy(policy)

        scoped_key = f"{policy.name}:{key}"
        if self.check(scoped_key, policy.max_attempts, policy.window_ms):
            return RateLimitResult(allowed=True)

        if policy.block_ms is not None:
            self.block(scoped_key, policy.block_ms)

        retry_after = self.get_reset(scoped_key)
        return RateLimitResult(
            allowed=False,
            retry_after=retry_after,
            error=format_wait_message(retry_after, action_name)
        )

    def hit(self, policy, key: str, action_name: Optional[str] = None):
        """Like check_action, but raises RateLimitExceeded when blocked."""
        result = self.check_action(policy, key, action_name)
        if not result.allowed:
            raise RateLimitExceeded(result.error, retry_after=result.retry_after)

    def _touch(self, key: str):
        self._records.move_to_end(key)
        if self.max_keys is not None:
            while len(self._records) > self.max_keys:
                evicted, _ = self._records.popitem(last=False)
                logger.debug(f"Evicted rate limit record for key {evicted!r}")


_default_limiter = RateLimiter()


def get_default_limiter() -> RateLimiter:
    return _default_limiter


def check_rate_limit(key: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                     window_ms: int = DEFAULT_WINDOW_MS,
                     limiter: Optional[RateLimiter] = None) -> bool:
    """Check ``key`` against the given limiter, or the process-wide one."""
    return (limiter if limiter is not None else _default_limiter).check(key, max_attempts, window_ms)


def get_rate_limit_reset(key: str, limiter: Optional[RateLimiter] = None) -> int:
    """Seconds until ``key`` is unblocked on the given or process-wide limiter."""
    return (limiter if limiter is not None else _default_limiter).get_reset(key)

"""
Client-side Rate Limiter

Throttles repeated failed attempts at an action (sign-in, password reset,
guest order lookup) in the visitor's local storage:
- max_attempts failures inside window_seconds trigger a lockout
- a lockout lasts lockout_seconds
- a successful attempt resets the counter

This only slows down a casual user; the backend enforces the real limits.
"""
import math
import time
from dataclasses import dataclass, asdict
from typing import Callable, NamedTuple, Optional

from storefront.errors import StorageError
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.storage import KeyValueStore, JsonSnapshotStorage, StorageKeys, get_default_store

logger = get_logger(__name__)


@dataclass(frozen=True)
class RateLimitConfig:
    max_attempts: int = 5
    window_seconds: float = 15 * 60
    lockout_seconds: float = 30 * 60


@dataclass
class RateLimitState:
    """Persisted counter for one action."""
    attempts: int = 0
    first_attempt_time: float = 0  # 0 means no attempt in the current window
    lockout_until: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RateLimitState":
        if not isinstance(data, dict):
            raise TypeError("rate limit state must be an object")
        attempts = data.get("attempts", 0)
        first = data.get("first_attempt_time", 0)
        lockout = data.get("lockout_until")
        if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 0:
            raise ValueError(f"invalid attempts: {attempts!r}")
        if not isinstance(first, (int, float)) or isinstance(first, bool):
            raise ValueError(f"invalid first_attempt_time: {first!r}")
        if lockout is not None and (not isinstance(lockout, (int, float)) or isinstance(lockout, bool)):
            raise ValueError(f"invalid lockout_until: {lockout!r}")
        return cls(attempts=attempts, first_attempt_time=first, lockout_until=lockout)


class RateLimitCheck(NamedTuple):
    allowed: bool
    remaining_attempts: int
    lockout_remaining: Optional[int]  # minutes


class AttemptResult(NamedTuple):
    allowed: bool
    message: str


class LockoutStatus(NamedTuple):
    is_locked: bool
    remaining_minutes: int


def _minutes(seconds: float) -> int:
    return math.ceil(seconds / 60)


class RateLimiter:
    """Attempt counter for one action, stored under rateLimit_<action>."""

    def __init__(
        self,
        store: KeyValueStore,
        action: str,
        config: Optional[RateLimitConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.action = action
        self.config = config or RateLimitConfig()
        self.clock = clock
        self._storage = JsonSnapshotStorage(store, StorageKeys.rate_limit_key(action))

    def _get_state(self) -> RateLimitState:
        snapshot = self._storage.load()
        if snapshot is None:
            return RateLimitState()
        try:
            return RateLimitState.from_dict(snapshot)
        except (TypeError, ValueError) as e:
            logger.warning(f"Resetting unreadable rate limit state for {sanitize_string_for_logging(self.action)}: {e}")
            return RateLimitState()

    def _set_state(self, state: RateLimitState) -> None:
        try:
            self._storage.save(state.to_dict())
        except StorageError as e:
            # The verdict for this call stands; only the memory of it is lost
            logger.warning(f"Could not save rate limit state for {sanitize_string_for_logging(self.action)}: {e}")

    def _window_expired(self, state: RateLimitState, now: float) -> bool:
        return bool(state.first_attempt_time) and now - state.first_attempt_time > self.config.window_seconds

    def check(self) -> RateLimitCheck:
        """Whether another attempt is allowed right now. Clears expired windows and lockouts."""
        now = self.clock()
        state = self._get_state()

        if state.lockout_until is not None and now < state.lockout_until:
            return RateLimitCheck(False, 0, _minutes(state.lockout_until - now))

        if state.lockout_until is not None or self._window_expired(state, now):
            self._set_state(RateLimitState())
            return RateLimitCheck(True, self.config.max_attempts, None)

        remaining = self.config.max_attempts - state.attempts
        return RateLimitCheck(remaining > 0, remaining, None)

    def record_attempt(self, success: bool = False) -> AttemptResult:
        """
        Record the outcome of an attempt.

        Returns:
            AttemptResult; allowed is False while locked out or when this
            failure triggered the lockout. message is shown to the visitor.
        """
        now = self.clock()
        state = self._get_state()

        if self._window_expired(state, now):
            state = RateLimitState()

        if state.lockout_until is not None and now < state.lockout_until:
            minutes = _minutes(state.lockout_until - now)
            return AttemptResult(False, f"Too many attempts. Please try again in {minutes} minutes.")

        if state.lockout_until is not None:
            state = RateLimitState()

        if success:
            self._set_state(RateLimitState())
            return AttemptResult(True, "")

        attempts = state.attempts + 1
        first_attempt_time = state.first_attempt_time or now

        if attempts >= self.config.max_attempts:
            self._set_state(RateLimitState(attempts, first_attempt_time, now + self.config.lockout_seconds))
            logger.info(f"Locked out {sanitize_string_for_logging(self.action)} after {attempts} failed attempts")
            minutes = _minutes(self.config.lockout_seconds)
            return AttemptResult(False, f"Too many failed attempts. Account locked for {minutes} minutes.")

        self._set_state(RateLimitState(attempts, first_attempt_time, None))
        remaining = self.config.max_attempts - attempts
        return AttemptResult(True, f"{remaining} attempt{'' if remaining == 1 else 's'} remaining.")

    def reset(self) -> None:
        self._set_state(RateLimitState())

    def lockout_status(self) -> LockoutStatus:
        now = self.clock()
        state = self._get_state()
        if state.lockout_until is not None and now < state.lockout_until:
            return LockoutStatus(True, _minutes(state.lockout_until - now))
        return LockoutStatus(False, 0)


def create_rate_limiter(
    action: str,
    config: Optional[RateLimitConfig] = None,
    store: Optional[KeyValueStore] = None,
) -> RateLimiter:
    return RateLimiter(store if store is not None else get_default_store(), action, config)

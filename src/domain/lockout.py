"""
Login Lockout Policy

Pure state machine for per-account brute-force protection. Holds no
state of its own; callers pass the current counters in and persist what
comes back out.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class LockoutState:
    failed_login_count: int = 0
    lock_until: Optional[datetime] = None

    @classmethod
    def of(cls, user) -> "LockoutState":
        return cls(
            failed_login_count=user.failed_login_count or 0,
            lock_until=user.lock_until,
        )


class LockoutPolicy:
    """
    Lock an account for lock_duration once failed_login_count reaches threshold.

    Business Rules:
    - Locked accounts reject login without checking the password
    - Every failure increments the counter, locked or not
    - An existing lock is never extended by further failures
    - A successful login clears both the counter and the lock
    """

    def __init__(self, threshold: int = 5, lock_duration: timedelta = timedelta(hours=2)):
        if threshold < 1:
            raise ValueError("threshold must be at least 1")
        self.threshold = threshold
        self.lock_duration = lock_duration

    def is_locked(self, state: LockoutState, now: datetime) -> bool:
        return state.lock_until is not None and state.lock_until > now

    def on_failure(self, state: LockoutState, now: datetime) -> LockoutState:
        count = state.failed_login_count + 1
        lock_until = state.lock_until
        if count >= self.threshold and not self.is_locked(state, now):
            lock_until = now + self.lock_duration
        return LockoutState(failed_login_count=count, lock_until=lock_until)

    def on_success(self, state: LockoutState) -> LockoutState:
        return LockoutState(failed_login_count=0, lock_until=None)

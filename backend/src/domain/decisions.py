"""Allow/deny verdicts shared by the authorization and lifecycle guards."""

from dataclasses import dataclass
from typing import Optional, Type

from errors import AppError


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of a guard evaluation.

    A denial carries the error kind and message the caller should raise, so
    403 (authorization) and 400 (lifecycle) failures never get conflated.
    """
    allowed: bool
    error: Optional[Type[AppError]] = None
    message: Optional[str] = None

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, error: Type[AppError], message: Optional[str] = None) -> "GuardDecision":
        return cls(allowed=False, error=error, message=message)

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise self.error(self.message)

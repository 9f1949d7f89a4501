"""Matters domain module - publication lifecycle and mutation gates"""

from .matter_status import (
    EDITABLE_STATUSES,
    LifecycleGuard,
    MatterOperation,
    MatterStatus,
    NOT_EDITABLE_MESSAGE,
)

__all__ = [
    "EDITABLE_STATUSES",
    "LifecycleGuard",
    "MatterOperation",
    "MatterStatus",
    "NOT_EDITABLE_MESSAGE",
]

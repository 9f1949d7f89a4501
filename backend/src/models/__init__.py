"""SQLAlchemy models for the gazette backend"""

from .base import Base
from .secretaria import Secretaria
from .user import User
from .matter import Matter
from .attachment import MatterAttachment
from .audit_log import AuditLog

__all__ = [
    "Base",
    "Secretaria",
    "User",
    "Matter",
    "MatterAttachment",
    "AuditLog",
]

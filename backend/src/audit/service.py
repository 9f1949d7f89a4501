"""Audit trail for successful security-relevant operations.

Entries are added to the caller's session and flushed, never committed here:
the audit row belongs to the same transaction as the change it records, so a
rolled-back operation leaves no audit trace.

Audit actions:
- LOGIN_SUCCESS, LOGIN_FAILED
- ATTACHMENT_DELETED
"""

from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from models.audit_log import AuditLog


def log_audit_event(
    db: Session,
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    user_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditLog:
    """Create an audit log entry.

    Args:
        db: Database session (the caller owns commit/rollback)
        action: Event action (e.g., "ATTACHMENT_DELETED")
        entity_type: Type of entity affected (e.g., "attachment")
        entity_id: ID of affected entity
        user_id: Acting user (None for anonymous or bypass requests)
        metadata: Additional context stored as JSON
        ip_address: Client IP address
        user_agent: Client User-Agent header

    Returns:
        AuditLog: The flushed audit log entry

    Example:
        log_audit_event(
            db,
            action="ATTACHMENT_DELETED",
            entity_type="attachment",
            entity_id=attachment.id,
            user_id=principal.id,
            metadata={"matter_id": matter.id, "original_name": attachment.original_name},
        )
    """
    entry = AuditLog(
        user_id=user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        metadata_json=metadata,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.add(entry)
    db.flush()
    return entry


def client_ip(request: Request) -> Optional[str]:
    """Client address, preferring the first X-Forwarded-For hop (proxies)."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None

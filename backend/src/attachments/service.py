"""Attachment operations behind the authentication pipeline.

Every operation takes an AuthResult (token or bypass) and runs the same
sequence: resolve the resource (404 before any authorization), authorize
against the parent matter's secretaria (403), then for mutations check the
matter lifecycle (400).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from audit.service import log_audit_event
from auth.policy import Action, AuthorizationGuard
from auth.principal import AuthResult
from domain.matters import LifecycleGuard, MatterOperation
from errors import AccessDenied, AppError, InvalidLifecycleState, NotFound, UnexpectedFailure
from models.attachment import MatterAttachment
from models.matter import Matter
from observability.metrics import attachment_operations_total
from .content import MaterializedContent, resolve_attachment_content

logger = logging.getLogger(__name__)

ATTACHMENT_NOT_FOUND = "Anexo não encontrado"
MATTER_NOT_FOUND = "Matéria não encontrada"
DELETE_FAILED = "Erro ao remover anexo"
DOWNLOAD_FAILED = "Erro ao baixar anexo"
DELETE_SUCCEEDED = "Anexo removido com sucesso"

_OUTCOMES = {
    AccessDenied: "denied",
    NotFound: "not_found",
    InvalidLifecycleState: "invalid_state",
}


def _outcome(error: AppError) -> str:
    return _OUTCOMES.get(type(error), "error")


@dataclass(frozen=True)
class DeletionResult:
    attachment_id: int
    matter_id: int
    remaining_attachments: int
    has_attachments: bool


class AttachmentService:
    """Read and remove matter attachments for an authenticated principal."""

    def __init__(
        self,
        db: Session,
        authorization_guard: AuthorizationGuard,
        lifecycle_guard: Optional[LifecycleGuard] = None,
    ):
        self._db = db
        self._authorization = authorization_guard
        self._lifecycle = lifecycle_guard or LifecycleGuard()

    def _load_with_matter(self, attachment_id: int) -> Tuple[MatterAttachment, Matter]:
        row = (
            self._db.query(MatterAttachment, Matter)
            .join(Matter, MatterAttachment.matter_id == Matter.id)
            .filter(MatterAttachment.id == attachment_id)
            .first()
        )
        if row is None:
            raise NotFound(ATTACHMENT_NOT_FOUND)
        return row

    def matter_lock_query(self, matter_id: int) -> Query:
        """SELECT ... FOR UPDATE on the parent matter, refreshing any cached row.

        Holding this lock serializes removals of sibling attachments, and the
        refreshed status is the one the lifecycle check must see.
        """
        return (
            self._db.query(Matter)
            .filter(Matter.id == matter_id)
            .with_for_update()
            .populate_existing()
        )

    def _authorize(self, auth: AuthResult, matter: Matter, action: Action) -> None:
        self._authorization.authorize(auth.principal, matter.secretaria_id, action).raise_if_denied()

    def download(self, auth: AuthResult, attachment_id: int) -> Tuple[MatterAttachment, MaterializedContent]:
        """Resolve, authorize (READ) and materialize an attachment.

        Raises:
            NotFound (404), AccessDenied (403), UnexpectedFailure (500)
        """
        try:
            attachment, matter = self._load_with_matter(attachment_id)
            self._authorize(auth, matter, Action.READ)
            content = resolve_attachment_content(attachment)
        except AppError as e:
            attachment_operations_total.labels(operation="download", outcome=_outcome(e)).inc()
            raise
        except SQLAlchemyError as e:
            attachment_operations_total.labels(operation="download", outcome="error").inc()
            logger.error(f"Attachment download failed: attachment_id={attachment_id}", exc_info=True)
            raise UnexpectedFailure(DOWNLOAD_FAILED, details=str(e)) from e

        attachment_operations_total.labels(operation="download", outcome="success").inc()
        logger.info(
            f"Attachment downloaded: attachment_id={attachment.id}, matter_id={matter.id}, "
            f"user_id={auth.principal.id}, bypass={auth.via_bypass}"
        )
        return attachment, content

    def list_for_matter(self, auth: AuthResult, matter_id: int) -> List[MatterAttachment]:
        """Attachments of a matter the principal may read, oldest first."""
        try:
            matter = self._db.query(Matter).filter(Matter.id == matter_id).first()
            if matter is None:
                raise NotFound(MATTER_NOT_FOUND)
            self._authorize(auth, matter, Action.READ)
            attachments = (
                self._db.query(MatterAttachment)
                .filter(MatterAttachment.matter_id == matter_id)
                .order_by(MatterAttachment.uploaded_at, MatterAttachment.id)
                .all()
            )
        except AppError as e:
            attachment_operations_total.labels(operation="list", outcome=_outcome(e)).inc()
            raise

        attachment_operations_total.labels(operation="list", outcome="success").inc()
        return attachments

    def delete(
        self,
        auth: AuthResult,
        attachment_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> DeletionResult:
        """Remove an attachment and recompute the matter's has_attachments flag.

        One transaction covers: matter row lock, lifecycle check on the locked
        row, delete, sibling recount, flag update and audit entry. The lock
        serializes concurrent removals of sibling attachments, so the flag
        always matches the remaining count. Any failure rolls everything back.

        Raises:
            NotFound (404), AccessDenied (403), InvalidLifecycleState (400),
            UnexpectedFailure (500)
        """
        try:
            attachment, matter = self._load_with_matter(attachment_id)
            self._authorize(auth, matter, Action.DELETE)

            locked_matter = self.matter_lock_query(matter.id).one()
            self._lifecycle.check_mutation_allowed(
                locked_matter.status, MatterOperation.REMOVE_ATTACHMENT
            ).raise_if_denied()

            deleted = (
                self._db.query(MatterAttachment)
                .filter(MatterAttachment.id == attachment.id)
                .delete(synchronize_session=False)
            )
            if deleted == 0:
                # Removed by a concurrent request between lookup and lock
                raise NotFound(ATTACHMENT_NOT_FOUND)

            remaining = (
                self._db.query(func.count(MatterAttachment.id))
                .filter(MatterAttachment.matter_id == locked_matter.id)
                .scalar()
            )
            locked_matter.has_attachments = remaining > 0

            log_audit_event(
                self._db,
                action="ATTACHMENT_DELETED",
                entity_type="attachment",
                entity_id=attachment.id,
                user_id=None if auth.via_bypass else auth.principal.id,
                metadata={
                    "matter_id": locked_matter.id,
                    "original_name": attachment.original_name,
                    "remaining_attachments": remaining,
                    "bypass": auth.via_bypass,
                },
                ip_address=ip_address,
                user_agent=user_agent,
            )
            self._db.commit()
        except AppError as e:
            self._db.rollback()
            attachment_operations_total.labels(operation="delete", outcome=_outcome(e)).inc()
            raise
        except SQLAlchemyError as e:
            self._db.rollback()
            attachment_operations_total.labels(operation="delete", outcome="error").inc()
            logger.error(f"Attachment removal rolled back: attachment_id={attachment_id}", exc_info=True)
            raise UnexpectedFailure(DELETE_FAILED, details=str(e)) from e

        attachment_operations_total.labels(operation="delete", outcome="success").inc()
        logger.info(
            f"Attachment removed: attachment_id={attachment_id}, matter_id={locked_matter.id}, "
            f"remaining={remaining}, user_id={auth.principal.id}, bypass={auth.via_bypass}"
        )
        return DeletionResult(
            attachment_id=attachment_id,
            matter_id=locked_matter.id,
            remaining_attachments=remaining,
            has_attachments=remaining > 0,
        )

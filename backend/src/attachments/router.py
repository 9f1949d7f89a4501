"""Attachment API endpoints.

- GET    /attachments/{attachment_id}/download
- DELETE /attachments/{attachment_id}
- GET    /matters/{matter_id}/attachments
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response
from sqlalchemy.orm import Session

from audit.service import client_ip
from auth.dependencies import CurrentAuth, get_authorization_guard
from auth.policy import AuthorizationGuard
from database import get_db
from .content import build_download_headers
from .schemas import AttachmentDeleteResponse, AttachmentListResponse, AttachmentResponse
from .service import DELETE_SUCCEEDED, AttachmentService

router = APIRouter(tags=["Attachments"])

# Ids are BIGINT-sized; larger values are rejected with 422 before any query
MAX_RESOURCE_ID = 2**63 - 1

AttachmentId = Annotated[int, Path(ge=1, le=MAX_RESOURCE_ID)]
MatterId = Annotated[int, Path(ge=1, le=MAX_RESOURCE_ID)]


def get_attachment_service(
    db: Session = Depends(get_db),
    guard: AuthorizationGuard = Depends(get_authorization_guard),
) -> AttachmentService:
    return AttachmentService(db=db, authorization_guard=guard)


@router.get("/attachments/{attachment_id}/download")
def download_attachment(
    attachment_id: AttachmentId,
    auth: CurrentAuth,
    service: AttachmentService = Depends(get_attachment_service),
):
    """Download an attachment.

    Returns the materialized body with Content-Type/Content-Disposition for
    the resolved content and X-File-Name/X-File-Size/X-File-Type for the
    declared metadata.
    """
    attachment, content = service.download(auth, attachment_id)
    return Response(
        content=content.body,
        media_type=content.content_type,
        headers=build_download_headers(attachment, content),
    )


@router.delete("/attachments/{attachment_id}", response_model=AttachmentDeleteResponse)
def delete_attachment(
    attachment_id: AttachmentId,
    request: Request,
    auth: CurrentAuth,
    service: AttachmentService = Depends(get_attachment_service),
):
    """Remove an attachment from a matter still in draft or submitted status."""
    result = service.delete(
        auth,
        attachment_id,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    return AttachmentDeleteResponse(
        message=DELETE_SUCCEEDED,
        attachment_id=result.attachment_id,
        matter_id=result.matter_id,
        remaining_attachments=result.remaining_attachments,
        has_attachments=result.has_attachments,
    )


@router.get("/matters/{matter_id}/attachments", response_model=AttachmentListResponse)
def list_matter_attachments(
    matter_id: MatterId,
    auth: CurrentAuth,
    service: AttachmentService = Depends(get_attachment_service),
):
    attachments = service.list_for_matter(auth, matter_id)
    return AttachmentListResponse(
        attachments=[AttachmentResponse.model_validate(a) for a in attachments]
    )

"""Pydantic schemas for attachment endpoints"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    matter_id: int
    original_name: str
    mime_type: str
    file_size: int
    uploaded_at: Optional[datetime] = None


class AttachmentListResponse(BaseModel):
    attachments: List[AttachmentResponse]


class AttachmentDeleteResponse(BaseModel):
    """Confirmation of a removal, with the recomputed matter flag."""
    message: str
    attachment_id: int
    matter_id: int
    remaining_attachments: int
    has_attachments: bool

"""MatterAttachment SQLAlchemy model

Attachments have no ownership of their own: their tenant is always the
secretaria of the parent matter.
"""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import relationship

from .base import Base


class MatterAttachment(Base):
    """File metadata attached to a matter. File bytes are not stored here."""
    __tablename__ = "matter_attachments"
    __table_args__ = (
        Index("ix_matter_attachments_matter_id", "matter_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    matter_id = Column(Integer, ForeignKey("matters.id", ondelete="CASCADE"), nullable=False)
    original_name = Column(Text, nullable=False)
    mime_type = Column(Text, nullable=False)
    file_size = Column(BigInteger, nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    matter = relationship("Matter", back_populates="attachments")

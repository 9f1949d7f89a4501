"""Matter SQLAlchemy model

A matter (matéria) is a gazette document moving through the publication
lifecycle. It belongs to exactly one secretaria and may carry attachments.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import relationship

from domain.matters import MatterStatus
from .base import Base

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in MatterStatus)


class Matter(Base):
    """Gazette matter.

    ``has_attachments`` is derived data: it must equal "at least one row in
    matter_attachments references this matter". Attachment removal recomputes
    it inside the same transaction as the delete.
    """
    __tablename__ = "matters"
    __table_args__ = (
        Index("ix_matters_secretaria_status", "secretaria_id", "status"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default=MatterStatus.DRAFT.value, server_default=MatterStatus.DRAFT.value)
    secretaria_id = Column(Integer, ForeignKey("secretarias.id", ondelete="RESTRICT"), nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    has_attachments = Column(Boolean, nullable=False, default=False, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    secretaria = relationship("Secretaria", back_populates="matters")
    author = relationship("User")
    attachments = relationship(
        "MatterAttachment",
        back_populates="matter",
        order_by="MatterAttachment.uploaded_at",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Matter(id={self.id}, status='{self.status}', secretaria_id={self.secretaria_id})>"

"""Secretaria model - municipal department, the tenant boundary"""

from sqlalchemy import Boolean, Column, DateTime, Integer, Text, func
from sqlalchemy.orm import relationship, validates

from .base import Base


class Secretaria(Base):
    """Municipal department (secretaria) that owns matters.

    Users with the ``secretaria`` role only see matters, and therefore
    attachments, that belong to their own department.
    """
    __tablename__ = "secretarias"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    acronym = Column(Text, nullable=False, unique=True)
    active = Column(Boolean, nullable=False, default=True, server_default="1")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    users = relationship("User", back_populates="secretaria")
    matters = relationship("Matter", back_populates="secretaria")

    @validates('acronym')
    def validate_acronym(self, key, value):
        """Acronyms are stored upper-case (SEMAD, SEMED, ...)."""
        if not value or not value.strip():
            raise ValueError("Secretaria acronym cannot be empty")
        return value.strip().upper()

    def __repr__(self):
        return f"<Secretaria(id={self.id}, acronym='{self.acronym}')>"

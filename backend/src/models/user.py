"""User SQLAlchemy model"""

import re

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship, validates

from .base import Base


class User(Base):
    """User model representing accounts of the gazette backoffice.

    ``secretaria_id`` is only set for department-scoped roles; admin and SEMAD
    accounts see every department. Passwords are hashed using Argon2id.
    Inactive accounts never authenticate.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    secretaria_id = Column(Integer, ForeignKey("secretarias.id", ondelete="SET NULL"), nullable=True)
    active = Column(Boolean, nullable=False, default=True, server_default="1")
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    secretaria = relationship("Secretaria", back_populates="users")

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'semad', 'secretaria', 'publico')",
            name='role'
        ),
    )

    @validates('email')
    def validate_email(self, key, value):
        """Basic email format validation"""
        if not re.match(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$', value):
            raise ValueError("Invalid email format")
        return value.lower()

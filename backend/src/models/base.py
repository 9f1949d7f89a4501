"""Base SQLAlchemy declarative base for all models"""

from sqlalchemy import JSON, MetaData, TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

# Deterministic constraint names so migrations and models agree
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class PortableJSONB(TypeDecorator):
    """JSON column stored as JSONB on PostgreSQL and plain JSON on SQLite.

    The test suite runs against in-memory SQLite, so every model column must
    stay portable.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))

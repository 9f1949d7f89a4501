"""Schema tests: the ORM metadata agrees with the Alembic revision

Constraint names come from the naming convention on Base, so the names
hard-coded in migrations/versions/001_create_gazette_tables.py must match.
"""

import pytest
from sqlalchemy import CheckConstraint, ForeignKeyConstraint

from models import Base


EXPECTED_TABLES = {"secretarias", "users", "matters", "matter_attachments", "audit_logs"}


def _constraint_names(table_name, kind):
    table = Base.metadata.tables[table_name]
    return {c.name for c in table.constraints if isinstance(c, kind)}


def test_all_tables_registered():
    assert EXPECTED_TABLES <= set(Base.metadata.tables)


@pytest.mark.parametrize("table_name,expected", [
    ("users", {"ck_users_role"}),
    ("matters", {"ck_matters_status"}),
])
def test_check_constraint_names(table_name, expected):
    assert _constraint_names(table_name, CheckConstraint) == expected


@pytest.mark.parametrize("table_name,column,ondelete", [
    ("matter_attachments", "matter_id", "CASCADE"),
    ("matter_attachments", "uploaded_by", "SET NULL"),
    ("matters", "secretaria_id", "RESTRICT"),
    ("users", "secretaria_id", "SET NULL"),
    ("audit_logs", "user_id", "SET NULL"),
])
def test_foreign_key_delete_rules(table_name, column, ondelete):
    table = Base.metadata.tables[table_name]
    fks = [c for c in table.constraints if isinstance(c, ForeignKeyConstraint) and column in c.columns.keys()]

    assert len(fks) == 1
    assert fks[0].ondelete == ondelete


def test_matter_status_constraint_lists_every_status():
    from domain.matters import MatterStatus

    (constraint,) = [c for c in Base.metadata.tables["matters"].constraints if isinstance(c, CheckConstraint)]
    sql = str(constraint.sqltext)
    for status in MatterStatus:
        assert f"'{status.value}'" in sql


def test_attachments_indexed_by_matter():
    indexes = {ix.name: [c.name for c in ix.columns] for ix in Base.metadata.tables["matter_attachments"].indexes}
    assert indexes["ix_matter_attachments_matter_id"] == ["matter_id"]

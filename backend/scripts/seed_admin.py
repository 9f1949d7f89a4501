#!/usr/bin/env python
"""Seed script to create the first secretaria and admin user.

This script should be run once during initial setup. Further accounts are
created by the admin through the backoffice.

Usage:
    python backend/scripts/seed_admin.py

Environment Variables:
    DATABASE_URL: PostgreSQL connection string
    PASSWORD_PEPPER: Password hashing pepper (required)
    ADMIN_EMAIL: Email for admin user (default: admin@diario.example.gov.br)
    ADMIN_PASSWORD: Password for admin user (default: Diario2024)
    ADMIN_NAME: Display name for admin user (default: Administrador do Sistema)
    SECRETARIA_NAME: Department name (default: Secretaria Municipal de Administração)
    SECRETARIA_ACRONYM: Department acronym (default: SEMAD)
"""

import os
import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from sqlalchemy.exc import SQLAlchemyError

from auth.password import hash_password, validate_password_strength
from auth.roles import UserRole
from config import get_settings
from database import get_db_session
from models.secretaria import Secretaria
from models.user import User


def main():
    """Create the initial secretaria and admin user."""
    settings = get_settings()
    if not settings.PASSWORD_PEPPER:
        print("ERROR: PASSWORD_PEPPER environment variable is required")
        sys.exit(1)

    admin_email = os.getenv("ADMIN_EMAIL", "admin@diario.example.gov.br").lower()
    admin_password = os.getenv("ADMIN_PASSWORD", "Diario2024")
    admin_name = os.getenv("ADMIN_NAME", "Administrador do Sistema")
    secretaria_name = os.getenv("SECRETARIA_NAME", "Secretaria Municipal de Administração")
    secretaria_acronym = os.getenv("SECRETARIA_ACRONYM", "SEMAD").upper()

    is_valid, error_msg = validate_password_strength(admin_password)
    if not is_valid:
        print(f"ERROR: Password does not meet strength requirements: {error_msg}")
        sys.exit(1)

    try:
        with get_db_session() as session:
            if session.query(User).filter(User.email == admin_email).first():
                print(f"ERROR: User with email {admin_email} already exists")
                sys.exit(1)

            secretaria = session.query(Secretaria).filter(
                Secretaria.acronym == secretaria_acronym
            ).first()
            if secretaria is None:
                secretaria = Secretaria(name=secretaria_name, acronym=secretaria_acronym)
                session.add(secretaria)
                session.flush()

            admin_user = User(
                name=admin_name,
                email=admin_email,
                password_hash=hash_password(admin_password, settings),
                role=UserRole.ADMIN.value,
                secretaria_id=secretaria.id,
                active=True,
            )
            session.add(admin_user)
            session.flush()

            print("SUCCESS: Admin user created")
            print(f"  ID:         {admin_user.id}")
            print(f"  Secretaria: {secretaria.acronym} ({secretaria.id})")
            print(f"  Email:      {admin_user.email}")
            print(f"  Name:       {admin_user.name}")
            print(f"  Role:       {admin_user.role}")
    except SQLAlchemyError as e:
        print(f"ERROR: Failed to create admin user: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

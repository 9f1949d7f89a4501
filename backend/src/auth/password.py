"""Password hashing and verification using Argon2id

This module provides secure password hashing using Argon2id with OWASP-recommended
parameters and a server-side PASSWORD_PEPPER for additional security.

OWASP Parameters:
- Memory cost: 65536 KB (64 MB)
- Time cost: 3 iterations
- Parallelism: 4 threads
"""

import re

from argon2 import PasswordHasher, Type
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError

from config import Settings
from errors import ServerMisconfigured


_hasher = PasswordHasher(
    memory_cost=65536,  # 64 MB
    time_cost=3,
    parallelism=4,
    hash_len=32,
    salt_len=16,
    type=Type.ID  # Argon2id variant
)


def _get_pepper(settings: Settings) -> str:
    if not settings.PASSWORD_PEPPER:
        raise ServerMisconfigured("Configuração de senha ausente no servidor")
    return settings.PASSWORD_PEPPER


def hash_password(password: str, settings: Settings) -> str:
    """Hash a password using Argon2id with the server pepper.

    Args:
        password: Plain text password to hash
        settings: Application settings holding PASSWORD_PEPPER

    Returns:
        str: Argon2id hash string (format: $argon2id$v=19$m=65536,t=3,p=4$...$...)

    Raises:
        ValueError: If password is empty
        ServerMisconfigured: If PASSWORD_PEPPER is not set
    """
    if not password:
        raise ValueError("Password cannot be empty")

    return _hasher.hash(password + _get_pepper(settings))


def verify_password(password: str, hash: str, settings: Settings) -> bool:
    """Verify a password against an Argon2id hash.

    Returns:
        bool: True if password matches hash, False otherwise
    """
    if not password or not hash:
        return False

    try:
        _hasher.verify(hash, password + _get_pepper(settings))
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def validate_password_strength(password: str) -> tuple[bool, str]:
    """Validate password meets strength requirements.

    Requirements:
    - Minimum 8 characters
    - At least one uppercase letter, one lowercase letter and one digit

    Example:
        >>> validate_password_strength("fraca")
        (False, 'A senha deve ter pelo menos 8 caracteres')
        >>> validate_password_strength("Diario2024")
        (True, '')
    """
    if len(password) < 8:
        return False, "A senha deve ter pelo menos 8 caracteres"

    if not re.search(r'[A-Z]', password):
        return False, "A senha deve conter ao menos uma letra maiúscula"

    if not re.search(r'[a-z]', password):
        return False, "A senha deve conter ao menos uma letra minúscula"

    if not re.search(r'\d', password):
        return False, "A senha deve conter ao menos um dígito"

    return True, ""

"""
Security utilities for generating retrieval secrets
"""
import secrets

from core.exceptions import SecretGenerationError

# Characters a secret may contain
SECRET_ALPHABET = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "@!?$&#<>"
)
SECRET_LENGTH = 8


def make_random_str(digit: int = SECRET_LENGTH) -> str:
    """
    Generate a random string drawn uniformly from SECRET_ALPHABET

    Args:
        digit: Number of characters in the string (default 8)

    Returns:
        Random string of the requested length

    Raises:
        ValueError: If digit is less than 1
        SecretGenerationError: If the OS random source cannot supply entropy
    """
    if digit < 1:
        raise ValueError("digit must be a positive integer")
    try:
        return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(digit))
    except (OSError, NotImplementedError) as exc:
        raise SecretGenerationError("unexpected error generating secret") from exc

"""Log-safe hashing of user identifiers and message text.

Chat utterances and session/user identifiers never appear raw in logs.
Identifiers are hashed with a deployment salt; message text is fingerprinted
without a salt so the same utterance can be correlated across services.
"""
import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32

_PII_SALT: Optional[str] = None


def configure_pii_salt(salt: str) -> None:
    """Configure the identifier hashing salt.

    Must be called during application startup before hash_pii().

    Args:
        salt: Secret salt value, at least MIN_SALT_LENGTH characters

    Raises:
        ValueError: If salt is empty or too short
    """
    global _PII_SALT
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "PII_SALT_CONFIGURATION_FAILED",
            extra={"reason": "Salt too short or empty", "min_length": MIN_SALT_LENGTH}
        )
        raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")

    _PII_SALT = salt
    logger.info("PII_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def hash_pii(value: str) -> str:
    """Hash a user or session identifier for logging.

    Args:
        value: Identifier to hash

    Returns:
        64-char hex SHA-256 digest of salt + value

    Raises:
        RuntimeError: If the salt has not been configured
    """
    if _PII_SALT is None:
        logger.critical(
            "PII_HASH_FAILED",
            extra={"reason": "Salt not configured", "action": "call configure_pii_salt()"}
        )
        raise RuntimeError("PII salt not configured. Call configure_pii_salt() first.")

    return hashlib.sha256(f"{_PII_SALT}{value}".encode()).hexdigest()


def hash_text_for_audit(text: Optional[str]) -> str:
    """Fingerprint message text for logs. Never raises.

    Args:
        text: Raw message text (None is treated as empty)

    Returns:
        SHA-256 hex digest of the UTF-8 text
    """
    return hashlib.sha256((text or "").encode("utf-8", errors="replace")).hexdigest()

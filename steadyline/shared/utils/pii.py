"""Keyed hashing of user identifiers before they reach a log line.

The key comes from PII_HASH_SALT and is installed once at startup with
configure_pii_salt(). Message text has no hashing helper: it is never
logged in any form.
"""
import hashlib
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32

_PII_SALT: Optional[bytes] = None


def configure_pii_salt(salt: str) -> None:
    """Install the HMAC key used by hash_pii().

    Raises:
        ValueError: If the salt is shorter than MIN_SALT_LENGTH
    """
    global _PII_SALT
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "PII_SALT_REJECTED",
            extra={"salt_length": len(salt or ""), "min_length": MIN_SALT_LENGTH},
        )
        raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")

    _PII_SALT = salt.encode("utf-8")
    logger.info("PII_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def hash_pii(value: str) -> str:
    """Return the HMAC-SHA256 hex digest of an identifier.

    Raises:
        RuntimeError: If configure_pii_salt() has not been called
    """
    if _PII_SALT is None:
        raise RuntimeError("PII salt not configured; call configure_pii_salt() at startup")
    return hmac.new(_PII_SALT, value.encode("utf-8"), hashlib.sha256).hexdigest()

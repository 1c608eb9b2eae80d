"""Shared utilities for Steadyline services."""
from .pii import hash_pii, configure_pii_salt

__all__ = ["hash_pii", "configure_pii_salt"]

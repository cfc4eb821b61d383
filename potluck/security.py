from __future__ import annotations

from flask import current_app
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


def hash_host_pin(pin: str) -> str:
    """Store an argon2 hash of the shared host PIN instead of the PIN itself."""
    return pwd_context.hash(pin)


def verify_host_pin(pin: str, stored_hash: str) -> bool:
    return pwd_context.verify(pin, stored_hash)


def check_host_pin(pin) -> bool:
    """
    Single shared-secret check used by every PIN-gated endpoint.

    HOST_CREDENTIAL_CHECK, when configured, replaces the built-in check with
    any callable taking the submitted pin and returning a bool.
    """
    custom = current_app.config.get("HOST_CREDENTIAL_CHECK")
    if custom is not None:
        return bool(custom(pin))

    if not isinstance(pin, str) or not pin:
        return False
    stored_hash = current_app.config.get("HOST_PIN_HASH")
    if not stored_hash:
        return False
    return verify_host_pin(pin, stored_hash)

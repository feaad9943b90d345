# vdv_inventory/utils/security.py

import base64
import logging
import secrets
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from vdv_inventory.core.config import settings

log = logging.getLogger(__name__)

TOKEN_BYTES = 12  # 16 url-safe characters, short enough for small stickers


# Encryption for machine credentials (lock PINs, named passwords)
# Master key should be set in environment variable: ENCRYPTION_MASTER_KEY
@lru_cache(maxsize=4)
def _derive_key(master_key: str) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=b"vdv-inventory-salt-v1",  # Static salt (app-level encryption)
        iterations=100000,
    )
    return base64.urlsafe_b64encode(kdf.derive(master_key.encode()))


def _fernet() -> Fernet:
    return Fernet(_derive_key(settings.encryption_master_key))


def encrypt_secret(plain: str) -> str:
    """Encrypt a secret for storage in database"""
    if not plain:
        return ""
    return _fernet().encrypt(plain.encode()).decode()


def decrypt_secret(encrypted: str) -> str:
    """Decrypt a secret from database storage"""
    if not encrypted:
        return ""

    try:
        return _fernet().decrypt(encrypted.encode()).decode()
    except InvalidToken:
        # Wrong master key or corrupted value
        log.warning("could not decrypt stored secret; returning empty value")
        return ""


def generate_token() -> str:
    """Random URL-safe token used as a QR payload."""
    return secrets.token_urlsafe(TOKEN_BYTES)

"""Encryption helpers for secrets stored at rest as ``ENC:`` values.

Values are AES-256-CBC encrypted with PKCS7 padding. The key is the
SHA-256 digest of the configured secret and the stored form is
``ENC:`` + base64(iv || ciphertext).
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .config import ManagerConfig
from .errors import NotConfigured

ENC_PREFIX = "ENC:"
_IV_SIZE = 16


def _key(secret: Optional[str]) -> bytes:
    if not secret:
        raise NotConfigured("CONFIG_SECRET is required to (de)crypt config values.")
    return hashlib.sha256(secret.encode("utf-8")).digest()


def encrypt_value(plain: str, secret: Optional[str]) -> str:
    key = _key(secret)
    iv = os.urandom(_IV_SIZE)
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plain.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return ENC_PREFIX + base64.b64encode(iv + ciphertext).decode("ascii")


def decrypt_value(payload: str, secret: Optional[str]) -> str:
    """Decrypt a base64 payload (with or without the ``ENC:`` prefix)."""
    key = _key(secret)
    if payload.startswith(ENC_PREFIX):
        payload = payload[len(ENC_PREFIX):]
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Invalid encrypted payload.") from exc
    if len(raw) <= _IV_SIZE or (len(raw) - _IV_SIZE) % _IV_SIZE:
        raise ValueError("Invalid encrypted payload.")

    iv, ciphertext = raw[:_IV_SIZE], raw[_IV_SIZE:]
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError("Decryption failed.") from exc


def maybe_decrypt(value: Optional[str], secret: Optional[str]) -> Optional[str]:
    """Decrypt ``ENC:`` values and pass anything else through."""
    if value is None or not value.startswith(ENC_PREFIX):
        return value
    return decrypt_value(value, secret)


@dataclass(frozen=True)
class BotCredentials:
    """Bot account credentials as stored; decrypted only in ``resolve``."""

    email: Optional[str]
    password: Optional[str]
    secret: Optional[str] = None

    @classmethod
    def from_config(cls, config: ManagerConfig) -> "BotCredentials":
        return cls(
            email=config.bot_email,
            password=config.bot_password,
            secret=config.config_secret,
        )

    def resolve(self) -> tuple[str, str]:
        if not self.email or not self.password:
            raise NotConfigured("BOT_EMAIL and BOT_PASSWORD must be set.")
        try:
            return (
                maybe_decrypt(self.email, self.secret),
                maybe_decrypt(self.password, self.secret),
            )
        except ValueError as exc:
            raise NotConfigured("bot credentials could not be decrypted") from exc

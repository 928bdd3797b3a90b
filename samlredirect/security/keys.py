"""Key management utilities for signing."""

from __future__ import annotations

import abc
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..errors import SigningError


class KeyProvider(metaclass=abc.ABCMeta):
    """Turns configured key material into a usable private key."""

    @abc.abstractmethod
    def get_signing_key(
        self, private_key: Optional[str], passphrase: Optional[str] = None
    ) -> rsa.RSAPrivateKey:
        """Return the private key used for signing."""
        raise NotImplementedError


class PemKeyProvider(KeyProvider):
    """Loads PEM encoded, optionally encrypted, RSA private keys."""

    def get_signing_key(
        self, private_key: Optional[str], passphrase: Optional[str] = None
    ) -> rsa.RSAPrivateKey:
        if not private_key:
            raise SigningError("No private key configured for signing")
        password = passphrase.encode("utf-8") if passphrase else None
        try:
            key = serialization.load_pem_private_key(private_key.encode("utf-8"), password=password)
        except (ValueError, TypeError) as e:
            raise SigningError(f"Unable to load private key: {e}") from e
        if not isinstance(key, rsa.RSAPrivateKey):
            raise SigningError(f"Unsupported private key type: {type(key).__name__}")
        return key

"""Message signing services for the Redirect binding."""

from __future__ import annotations

import abc
from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from ..constants import RSA_SHA1, RSA_SHA256, RSA_SHA512
from ..errors import SigningError
from .keys import KeyProvider, PemKeyProvider

_HASHES = {
    RSA_SHA1: hashes.SHA1,
    RSA_SHA256: hashes.SHA256,
    RSA_SHA512: hashes.SHA512,
}


class MessageSigner(metaclass=abc.ABCMeta):
    """Signs the exact octet string of a Redirect binding query."""

    @abc.abstractmethod
    def sign(
        self,
        octets: bytes,
        private_key: Optional[str],
        passphrase: Optional[str],
        algorithm: str,
    ) -> bytes:
        """Return the raw signature over ``octets``."""
        raise NotImplementedError


class RsaMessageSigner(MessageSigner):
    """RSASSA-PKCS1-v1_5 signatures selected by XML-DSig algorithm URI."""

    def __init__(self, key_provider: Optional[KeyProvider] = None) -> None:
        self.key_provider = key_provider or PemKeyProvider()

    def sign(
        self,
        octets: bytes,
        private_key: Optional[str],
        passphrase: Optional[str],
        algorithm: str,
    ) -> bytes:
        hash_cls = _HASHES.get(algorithm)
        if hash_cls is None:
            raise SigningError(f"Unsupported signature algorithm: {algorithm}")
        key = self.key_provider.get_signing_key(private_key, passphrase)
        return key.sign(octets, padding.PKCS1v15(), hash_cls())

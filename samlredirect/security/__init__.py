"""Signing collaborators for redirect URLs."""

from __future__ import annotations

from .keys import KeyProvider, PemKeyProvider
from .signer import MessageSigner, RsaMessageSigner

__all__ = ["KeyProvider", "PemKeyProvider", "MessageSigner", "RsaMessageSigner"]

"""Exceptions raised while building Redirect binding messages."""

from __future__ import annotations


class SamlRedirectError(Exception):
    """Base class for all samlredirect errors."""


class ConfigurationError(SamlRedirectError, ValueError):
    """Required metadata or settings are missing or invalid."""


class TemplateContractError(SamlRedirectError, TypeError):
    """A custom template callback broke its ``(id, context)`` contract."""


class SigningError(SamlRedirectError):
    """The signer could not produce a signature for the message."""

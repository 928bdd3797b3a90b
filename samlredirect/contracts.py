"""Core message contracts for the Redirect binding."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import DEFAULT_SIGNATURE_ALGORITHM, SAML_REQUEST, SAML_RESPONSE
from .errors import TemplateContractError


class MessageKind(str, Enum):
    """Protocol messages that can travel over the Redirect binding."""

    AUTHN_REQUEST = "AuthnRequest"
    LOGOUT_REQUEST = "LogoutRequest"
    LOGOUT_RESPONSE = "LogoutResponse"

    @property
    def query_param(self) -> str:
        """Query parameter name carrying a message of this kind."""
        if self is MessageKind.LOGOUT_RESPONSE:
            return SAML_RESPONSE
        return SAML_REQUEST


class BindingContext(BaseModel):
    """Message identifier paired with the raw XML or the final redirect URL."""

    model_config = ConfigDict(frozen=True)

    id: str
    context: str


TemplateCallback = Callable[[str], Any]


def coerce_binding_context(result: Any) -> BindingContext:
    """Validate what a template callback returned into a ``BindingContext``.

    Accepts a ``BindingContext``, a mapping with ``id`` and ``context`` keys or
    an ``(id, context)`` pair.
    """
    if isinstance(result, BindingContext):
        return result
    if isinstance(result, tuple) and len(result) == 2:
        result = {"id": result[0], "context": result[1]}
    if not isinstance(result, Mapping):
        raise TemplateContractError(
            f"Template callback must return an (id, context) pair, got {type(result).__name__}"
        )
    try:
        return BindingContext.model_validate(dict(result))
    except ValidationError as e:
        raise TemplateContractError(f"Template callback returned an invalid context: {e}") from e


class SigningSettings(BaseModel):
    """Key material and algorithm used to sign one message."""

    model_config = ConfigDict(frozen=True)

    private_key: Optional[str] = Field(default=None, description="PEM encoded private key")
    private_key_pass: Optional[str] = None
    signature_algorithm: str = DEFAULT_SIGNATURE_ALGORITHM


class EncodingRequest(BaseModel):
    """Normalized input of the Redirect query encoder."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    kind: MessageKind
    is_signed: bool = False
    raw_xml: str
    relay_state: Optional[str] = None
    signing: SigningSettings = Field(default_factory=SigningSettings)


class LogoutUser(BaseModel):
    """Subject being logged out."""

    model_config = ConfigDict(frozen=True)

    logout_name_id: str
    session_index: str


class LogoutRequestInfo(BaseModel):
    """What is known about the logout request being answered."""

    model_config = ConfigDict(frozen=True)

    request_id: Optional[str] = None

    @classmethod
    def from_extract(cls, extract: Mapping[str, Any]) -> "LogoutRequestInfo":
        """Build from an extraction result shaped ``{"logoutrequest": {"id": ...}}``."""
        logout_request = extract.get("logoutrequest") or {}
        return cls(request_id=logout_request.get("id"))

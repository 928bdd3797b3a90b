"""samlredirect: SAML 2.0 HTTP-Redirect binding message construction."""

from .binding import (
    build_redirect_url,
    login_request_context,
    login_request_redirect_url,
    logout_request_context,
    logout_request_redirect_url,
    logout_response_context,
    logout_response_redirect_url,
)
from .config import Entity, EntityMetadata, EntitySettings, load_entity
from .contracts import (
    BindingContext,
    EncodingRequest,
    LogoutRequestInfo,
    LogoutUser,
    MessageKind,
    SigningSettings,
)
from .encoding import decode_redirect_payload, encode_redirect_payload
from .errors import (
    ConfigurationError,
    SamlRedirectError,
    SigningError,
    TemplateContractError,
)

__version__ = "0.1.0"
__all__ = [
    "BindingContext",
    "ConfigurationError",
    "EncodingRequest",
    "Entity",
    "EntityMetadata",
    "EntitySettings",
    "LogoutRequestInfo",
    "LogoutUser",
    "MessageKind",
    "SamlRedirectError",
    "SigningError",
    "SigningSettings",
    "TemplateContractError",
    "build_redirect_url",
    "decode_redirect_payload",
    "encode_redirect_payload",
    "load_entity",
    "login_request_context",
    "login_request_redirect_url",
    "logout_request_context",
    "logout_request_redirect_url",
    "logout_response_context",
    "logout_response_redirect_url",
]

"""Entity metadata and settings, optionally loaded from YAML."""

from __future__ import annotations

import logging
import os
import uuid
from typing import Callable, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    BINDINGS,
    DEFAULT_NAME_ID_FORMAT,
    DEFAULT_SIGNATURE_ALGORITHM,
    SIGNATURE_ALGORITHMS,
)
from .contracts import SigningSettings
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Return a fresh message identifier (never starts with a digit)."""
    return "_" + uuid.uuid4().hex


def _normalize_bindings(value: Dict[str, str]) -> Dict[str, str]:
    return {BINDINGS.get(binding, binding): location for binding, location in value.items()}


class EntityMetadata(BaseModel):
    """Read-only view of one party's metadata.

    Endpoint maps are keyed by binding URN; the shorthands ``redirect`` and
    ``post`` are accepted and normalized on construction.
    """

    model_config = ConfigDict(frozen=True)

    entity_id: str
    single_sign_on_service: Dict[str, str] = Field(default_factory=dict)
    single_logout_service: Dict[str, str] = Field(default_factory=dict)
    assertion_consumer_service: Dict[str, str] = Field(default_factory=dict)

    @field_validator(
        "single_sign_on_service",
        "single_logout_service",
        "assertion_consumer_service",
    )
    @classmethod
    def _check_bindings(cls, value: Dict[str, str]) -> Dict[str, str]:
        return _normalize_bindings(value)

    def _lookup(self, services: Dict[str, str], name: str, binding: str) -> str:
        location = services.get(BINDINGS.get(binding, binding))
        if not location:
            raise ConfigurationError(
                f"No {name} declared for binding {binding} in metadata of {self.entity_id}"
            )
        return location

    def get_entity_id(self) -> str:
        return self.entity_id

    def get_single_sign_on_service(self, binding: str) -> str:
        return self._lookup(self.single_sign_on_service, "SingleSignOnService", binding)

    def get_single_logout_service(self, binding: str) -> str:
        return self._lookup(self.single_logout_service, "SingleLogoutService", binding)

    def get_assertion_consumer_service(self, binding: str) -> str:
        return self._lookup(
            self.assertion_consumer_service, "AssertionConsumerService", binding
        )

    def find_assertion_consumer_service(self, *bindings: str) -> Optional[str]:
        """First AssertionConsumerService declared for ``bindings``, in order."""
        for binding in bindings:
            location = self.assertion_consumer_service.get(BINDINGS.get(binding, binding))
            if location:
                return location
        return None


class EntitySettings(BaseModel):
    """Operational settings of one party."""

    model_config = ConfigDict(frozen=True)

    login_request_template: Optional[str] = None
    logout_request_template: Optional[str] = None
    logout_response_template: Optional[str] = None
    id_generator: Callable[[], str] = Field(default=generate_id, exclude=True)

    login_name_id_format: str = DEFAULT_NAME_ID_FORMAT
    logout_name_id_format: str = DEFAULT_NAME_ID_FORMAT
    allow_create: bool = False

    request_signature_algorithm: str = DEFAULT_SIGNATURE_ALGORITHM
    private_key: Optional[str] = Field(default=None, repr=False)
    private_key_pass: Optional[str] = Field(default=None, repr=False)

    # Whether this party signs its AuthnRequests
    authn_requests_signed: bool = False
    # Whether this party expects logout messages sent to it to be signed
    want_logout_request_signed: bool = False
    want_logout_response_signed: bool = False

    @field_validator("request_signature_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        if value not in SIGNATURE_ALGORITHMS:
            raise ValueError(f"Unsupported signature algorithm: {value}")
        return value

    def generate_id(self) -> str:
        return self.id_generator()

    @property
    def signing(self) -> SigningSettings:
        """Key material used when this party signs a message."""
        return SigningSettings(
            private_key=self.private_key,
            private_key_pass=self.private_key_pass,
            signature_algorithm=self.request_signature_algorithm,
        )


class Entity(BaseModel):
    """One SAML party: its metadata together with its settings."""

    model_config = ConfigDict(frozen=True)

    metadata: Optional[EntityMetadata] = None
    settings: EntitySettings = Field(default_factory=EntitySettings)


def load_entity(path: Optional[str] = None) -> Entity:
    """Load an entity from a YAML file.

    Args:
        path: Optional path to config file. Falls back to SAMLREDIRECT_CONFIG
            env variable or 'saml.yaml' in the current directory.

    The file holds ``metadata`` and ``settings`` sections. ``settings`` may
    name a ``private_key_file`` (relative to the config file) instead of an
    inline ``private_key``; SAMLREDIRECT_PRIVATE_KEY_PASS overrides the
    passphrase.
    """

    config_path = path or os.getenv("SAMLREDIRECT_CONFIG", "saml.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.warning(f"Config file {config_path} not found, entity has no metadata")
        data = {}

    settings = dict(data.get("settings") or {})
    key_file = settings.pop("private_key_file", None)
    if key_file:
        key_path = os.path.join(os.path.dirname(os.path.abspath(config_path)), key_file)
        try:
            with open(key_path) as f:
                settings["private_key"] = f.read()
        except OSError as e:
            raise ConfigurationError(f"Unable to read private key file {key_path}: {e}") from e

    env_pass = os.getenv("SAMLREDIRECT_PRIVATE_KEY_PASS")
    if env_pass:
        settings["private_key_pass"] = env_pass

    try:
        return Entity(metadata=data.get("metadata"), settings=settings)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid entity configuration in {config_path}: {e}") from e

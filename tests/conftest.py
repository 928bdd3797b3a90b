"""Shared fixtures: RSA key material and a service/identity provider pair."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from samlredirect.config import Entity, EntityMetadata, EntitySettings


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_pem(rsa_key):
    return rsa_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def idp_metadata():
    return EntityMetadata(
        entity_id="https://idp.example/metadata",
        single_sign_on_service={"redirect": "https://idp.example/sso"},
        single_logout_service={"redirect": "https://idp.example/slo"},
    )


@pytest.fixture
def sp_metadata():
    return EntityMetadata(
        entity_id="https://sp.example/metadata",
        single_logout_service={"redirect": "https://sp.example/slo"},
        assertion_consumer_service={"redirect": "https://sp.example/acs"},
    )


@pytest.fixture
def idp(idp_metadata):
    return Entity(metadata=idp_metadata, settings=EntitySettings(id_generator=lambda: "_idp1"))


@pytest.fixture
def sp(sp_metadata):
    return Entity(metadata=sp_metadata, settings=EntitySettings(id_generator=lambda: "_sp1"))


@pytest.fixture
def signing_sp(sp_metadata, private_pem):
    return Entity(
        metadata=sp_metadata,
        settings=EntitySettings(
            id_generator=lambda: "_sp1",
            private_key=private_pem,
            authn_requests_signed=True,
        ),
    )

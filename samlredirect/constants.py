"""Wire names, namespaces and algorithm identifiers used by the Redirect binding."""

from __future__ import annotations

from types import MappingProxyType

# Query parameter names
SAML_REQUEST = "SAMLRequest"
SAML_RESPONSE = "SAMLResponse"
RELAY_STATE = "RelayState"
SIG_ALG = "SigAlg"
SIGNATURE = "Signature"

BINDING_REDIRECT = "urn:oasis:names:tc:SAML:2.0:bindings:HTTP-Redirect"
BINDING_POST = "urn:oasis:names:tc:SAML:2.0:bindings:HTTP-POST"

BINDINGS = MappingProxyType(
    {
        "redirect": BINDING_REDIRECT,
        "post": BINDING_POST,
    }
)

NAME_ID_FORMATS = MappingProxyType(
    {
        "emailAddress": "urn:oasis:names:tc:SAML:1.1:nameid-format:emailAddress",
        "persistent": "urn:oasis:names:tc:SAML:2.0:nameid-format:persistent",
        "transient": "urn:oasis:names:tc:SAML:2.0:nameid-format:transient",
        "entity": "urn:oasis:names:tc:SAML:2.0:nameid-format:entity",
        "unspecified": "urn:oasis:names:tc:SAML:1.1:nameid-format:unspecified",
        "kerberos": "urn:oasis:names:tc:SAML:2.0:nameid-format:kerberos",
        "windowsDomainQualifiedName": "urn:oasis:names:tc:SAML:1.1:nameid-format:WindowsDomainQualifiedName",
        "x509SubjectName": "urn:oasis:names:tc:SAML:1.1:nameid-format:X509SubjectName",
    }
)
DEFAULT_NAME_ID_FORMAT = "emailAddress"

STATUS_SUCCESS = "urn:oasis:names:tc:SAML:2.0:status:Success"

RSA_SHA1 = "http://www.w3.org/2000/09/xmldsig#rsa-sha1"
RSA_SHA256 = "http://www.w3.org/2001/04/xmldsig-more#rsa-sha256"
RSA_SHA512 = "http://www.w3.org/2001/04/xmldsig-more#rsa-sha512"

SIGNATURE_ALGORITHMS = frozenset({RSA_SHA1, RSA_SHA256, RSA_SHA512})
DEFAULT_SIGNATURE_ALGORITHM = RSA_SHA256

# ``encodeURIComponent`` leaves these unescaped in addition to ``-_.~`` and
# alphanumerics; receivers rebuild the signing input from these exact bytes.
URI_COMPONENT_SAFE = "!*'()"

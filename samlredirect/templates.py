"""Default message templates and placeholder substitution."""

from __future__ import annotations

import re
from typing import Any, Mapping
from xml.sax.saxutils import escape

DEFAULT_LOGIN_REQUEST_TEMPLATE = (
    '<samlp:AuthnRequest xmlns:samlp="urn:oasis:names:tc:SAML:2.0:protocol" '
    'xmlns:saml="urn:oasis:names:tc:SAML:2.0:assertion" '
    'ID="{ID}" Version="2.0" IssueInstant="{IssueInstant}" Destination="{Destination}" '
    'ProtocolBinding="urn:oasis:names:tc:SAML:2.0:bindings:HTTP-POST" '
    'AssertionConsumerServiceURL="{AssertionConsumerServiceURL}">'
    "<saml:Issuer>{Issuer}</saml:Issuer>"
    '<samlp:NameIDPolicy Format="{NameIDFormat}" AllowCreate="{AllowCreate}"/>'
    "</samlp:AuthnRequest>"
)

DEFAULT_LOGOUT_REQUEST_TEMPLATE = (
    '<samlp:LogoutRequest xmlns:samlp="urn:oasis:names:tc:SAML:2.0:protocol" '
    'xmlns:saml="urn:oasis:names:tc:SAML:2.0:assertion" '
    'ID="{ID}" Version="2.0" IssueInstant="{IssueInstant}" Destination="{Destination}">'
    "<saml:Issuer>{Issuer}</saml:Issuer>"
    '<saml:NameID SPNameQualifier="{EntityID}" Format="{NameIDFormat}">{NameID}</saml:NameID>'
    "<samlp:SessionIndex>{SessionIndex}</samlp:SessionIndex>"
    "</samlp:LogoutRequest>"
)

DEFAULT_LOGOUT_RESPONSE_TEMPLATE = (
    '<samlp:LogoutResponse xmlns:samlp="urn:oasis:names:tc:SAML:2.0:protocol" '
    'xmlns:saml="urn:oasis:names:tc:SAML:2.0:assertion" '
    'ID="{ID}" Version="2.0" IssueInstant="{IssueInstant}" Destination="{Destination}" '
    'InResponseTo="{InResponseTo}">'
    "<saml:Issuer>{Issuer}</saml:Issuer>"
    '<samlp:Status><samlp:StatusCode Value="{StatusCode}"/></samlp:Status>'
    "</samlp:LogoutResponse>"
)

_ATTRIBUTE_PLACEHOLDER = re.compile(r'\s+[\w:.-]+="\{(\w+)\}"')
_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def replace_tags_by_value(template: str, values: Mapping[str, Any]) -> str:
    """Substitute ``{Name}`` placeholders in ``template`` with ``values``.

    Values are XML-escaped. An attribute whose whole value is a placeholder
    missing from ``values`` is removed; any other unknown placeholder is left
    as is.
    """

    def drop_attribute(match: re.Match) -> str:
        return match.group(0) if match.group(1) in values else ""

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return escape(_render(values[name]), _ATTRIBUTE_ENTITIES)

    return _PLACEHOLDER.sub(substitute, _ATTRIBUTE_PLACEHOLDER.sub(drop_attribute, template))

"""Binding-level API: build SAML messages as HTTP-Redirect URLs."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .config import Entity
from .constants import (
    BINDING_POST,
    BINDING_REDIRECT,
    DEFAULT_NAME_ID_FORMAT,
    NAME_ID_FORMATS,
    RELAY_STATE,
    SIG_ALG,
    SIGNATURE,
    STATUS_SUCCESS,
)
from .contracts import (
    BindingContext,
    EncodingRequest,
    LogoutRequestInfo,
    LogoutUser,
    MessageKind,
    SigningSettings,
    TemplateCallback,
    coerce_binding_context,
)
from .encoding import base64_encode, encode_redirect_payload, percent_encode
from .errors import ConfigurationError, TemplateContractError
from .query import RedirectQuery
from .security import MessageSigner, RsaMessageSigner
from .templates import (
    DEFAULT_LOGIN_REQUEST_TEMPLATE,
    DEFAULT_LOGOUT_REQUEST_TEMPLATE,
    DEFAULT_LOGOUT_RESPONSE_TEMPLATE,
    replace_tags_by_value,
)

logger = logging.getLogger(__name__)


def build_redirect_url(
    request: EncodingRequest, signer: Optional[MessageSigner] = None
) -> str:
    """Encode ``request.raw_xml`` into a redirect URL, signing it if required.

    Parameters are appended as ``<SAMLRequest|SAMLResponse>``, ``SigAlg``
    (signed only), ``RelayState`` (non-empty only), ``Signature`` (signed
    only). The signature covers the query string exactly as it stands before
    ``Signature`` is appended.
    """
    query = RedirectQuery(request.base_url)
    query.add(request.kind.query_param, encode_redirect_payload(request.raw_xml))
    if request.is_signed:
        query.add(SIG_ALG, percent_encode(request.signing.signature_algorithm))
    if request.relay_state:
        query.add(RELAY_STATE, percent_encode(request.relay_state))
    if request.is_signed:
        signature = sign_query(query.query_string(), request.signing, signer)
        query.add(SIGNATURE, percent_encode(signature))
    logger.debug(
        f"Built {request.kind.value} redirect with separator {query.separator!r} "
        f"and parameters {[name for name, _ in query.params]}"
    )
    return query.build()


def sign_query(
    octet_string: str,
    signing: SigningSettings,
    signer: Optional[MessageSigner] = None,
) -> str:
    """Return the base64 signature over ``octet_string``.

    Errors raised by ``signer`` propagate unchanged.
    """
    signer = signer or RsaMessageSigner()
    signature = signer.sign(
        octet_string.encode("ascii"),
        signing.private_key,
        signing.private_key_pass,
        signing.signature_algorithm,
    )
    if isinstance(signature, str):
        return signature
    return base64_encode(signature)


def _require_metadata(*entities: Optional[Entity]) -> None:
    for entity in entities:
        if entity is None or entity.metadata is None:
            raise ConfigurationError("Missing declaration of metadata")


def _issue_instant() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_name_id_format(name: str) -> str:
    """Map a NameID format shorthand to its URN, falling back to emailAddress."""
    urn = NAME_ID_FORMATS.get(name)
    if urn is None:
        logger.warning(f"Unknown NameID format {name!r}, using {DEFAULT_NAME_ID_FORMAT}")
        return NAME_ID_FORMATS[DEFAULT_NAME_ID_FORMAT]
    return urn


def _from_template_callback(
    template: str, template_callback: Optional[TemplateCallback]
) -> BindingContext:
    if template_callback is None:
        raise TemplateContractError("A custom template is configured but no template callback was given")
    return coerce_binding_context(template_callback(template))


def _login_request(
    idp: Optional[Entity],
    sp: Optional[Entity],
    template_callback: Optional[TemplateCallback],
) -> Tuple[str, BindingContext]:
    _require_metadata(idp, sp)
    sp_meta = sp.metadata
    sp_setting = sp.settings
    base = idp.metadata.get_single_sign_on_service(BINDING_REDIRECT)

    if sp_setting.login_request_template:
        return base, _from_template_callback(sp_setting.login_request_template, template_callback)

    message_id = sp_setting.generate_id()
    values: Dict[str, Any] = {
        "ID": message_id,
        "Destination": base,
        "Issuer": sp_meta.get_entity_id(),
        "IssueInstant": _issue_instant(),
        "NameIDFormat": resolve_name_id_format(sp_setting.login_name_id_format),
        "EntityID": sp_meta.get_entity_id(),
        "AllowCreate": sp_setting.allow_create,
    }
    # Without an ACS the attribute is dropped and the IdP uses its default
    acs_url = sp_meta.find_assertion_consumer_service(BINDING_REDIRECT, BINDING_POST)
    if acs_url:
        values["AssertionConsumerServiceURL"] = acs_url
    else:
        logger.warning(f"No AssertionConsumerService declared for {sp_meta.entity_id}")
    raw = replace_tags_by_value(DEFAULT_LOGIN_REQUEST_TEMPLATE, values)
    return base, BindingContext(id=message_id, context=raw)


def _logout_request(
    user: Union[LogoutUser, Mapping[str, Any]],
    init: Optional[Entity],
    target: Optional[Entity],
    template_callback: Optional[TemplateCallback],
) -> Tuple[str, BindingContext]:
    _require_metadata(init, target)
    init_setting = init.settings
    base = target.metadata.get_single_logout_service(BINDING_REDIRECT)

    if init_setting.logout_request_template:
        return base, _from_template_callback(init_setting.logout_request_template, template_callback)

    user = LogoutUser.model_validate(user)
    entity_id = init.metadata.get_entity_id()
    message_id = init_setting.generate_id()
    raw = replace_tags_by_value(
        DEFAULT_LOGOUT_REQUEST_TEMPLATE,
        {
            "ID": message_id,
            "Destination": base,
            "EntityID": entity_id,
            "Issuer": entity_id,
            "IssueInstant": _issue_instant(),
            "NameIDFormat": resolve_name_id_format(init_setting.logout_name_id_format),
            "NameID": user.logout_name_id,
            "SessionIndex": user.session_index,
        },
    )
    return base, BindingContext(id=message_id, context=raw)


def _logout_response(
    request_info: Optional[LogoutRequestInfo],
    init: Optional[Entity],
    target: Optional[Entity],
    template_callback: Optional[TemplateCallback],
) -> Tuple[str, BindingContext]:
    _require_metadata(init, target)
    init_setting = init.settings
    base = target.metadata.get_single_logout_service(BINDING_REDIRECT)

    if init_setting.logout_response_template:
        return base, _from_template_callback(init_setting.logout_response_template, template_callback)

    entity_id = init.metadata.get_entity_id()
    message_id = init_setting.generate_id()
    values: Dict[str, Any] = {
        "ID": message_id,
        "Destination": base,
        "Issuer": entity_id,
        "EntityID": entity_id,
        "IssueInstant": _issue_instant(),
        "StatusCode": STATUS_SUCCESS,
    }
    if request_info is not None and request_info.request_id:
        values["InResponseTo"] = request_info.request_id
    raw = replace_tags_by_value(DEFAULT_LOGOUT_RESPONSE_TEMPLATE, values)
    return base, BindingContext(id=message_id, context=raw)


def login_request_context(
    idp: Optional[Entity],
    sp: Optional[Entity],
    template_callback: Optional[TemplateCallback] = None,
) -> BindingContext:
    """Identifier and raw XML of an ``AuthnRequest`` from ``sp`` to ``idp``."""
    return _login_request(idp, sp, template_callback)[1]


def logout_request_context(
    user: Union[LogoutUser, Mapping[str, Any]],
    init: Optional[Entity],
    target: Optional[Entity],
    template_callback: Optional[TemplateCallback] = None,
) -> BindingContext:
    """Identifier and raw XML of a ``LogoutRequest`` from ``init`` to ``target``."""
    return _logout_request(user, init, target, template_callback)[1]


def logout_response_context(
    request_info: Optional[LogoutRequestInfo],
    init: Optional[Entity],
    target: Optional[Entity],
    template_callback: Optional[TemplateCallback] = None,
) -> BindingContext:
    """Identifier and raw XML of a ``LogoutResponse`` from ``init`` to ``target``."""
    return _logout_response(request_info, init, target, template_callback)[1]


def _redirect(
    message: BindingContext,
    base: str,
    kind: MessageKind,
    is_signed: bool,
    signing: SigningSettings,
    relay_state: Optional[str],
    signer: Optional[MessageSigner],
) -> BindingContext:
    url = build_redirect_url(
        EncodingRequest(
            base_url=base,
            kind=kind,
            is_signed=is_signed,
            raw_xml=message.context,
            relay_state=relay_state,
            signing=signing,
        ),
        signer=signer,
    )
    logger.info(f"Built {kind.value} {message.id} for {base} (signed={is_signed})")
    return BindingContext(id=message.id, context=url)


def login_request_redirect_url(
    idp: Optional[Entity],
    sp: Optional[Entity],
    template_callback: Optional[TemplateCallback] = None,
    relay_state: Optional[str] = None,
    signer: Optional[MessageSigner] = None,
) -> BindingContext:
    """Redirect URL carrying an ``AuthnRequest`` to the IdP's SSO endpoint.

    Args:
        idp: Identity provider the request is sent to.
        sp: Service provider issuing the request; its settings decide the
            template, the NameID format and whether the request is signed.
        template_callback: Called with ``sp``'s custom login template, if one
            is configured, and must return the ``(id, context)`` pair.
        relay_state: Optional state echoed back by the IdP.
        signer: Signing collaborator, RSA by default.

    Raises:
        ConfigurationError: If either party lacks metadata.
    """
    base, message = _login_request(idp, sp, template_callback)
    return _redirect(
        message,
        base,
        MessageKind.AUTHN_REQUEST,
        sp.settings.authn_requests_signed,
        sp.settings.signing,
        relay_state,
        signer,
    )


def logout_request_redirect_url(
    user: Union[LogoutUser, Mapping[str, Any]],
    init: Optional[Entity],
    target: Optional[Entity],
    relay_state: Optional[str] = None,
    template_callback: Optional[TemplateCallback] = None,
    signer: Optional[MessageSigner] = None,
) -> BindingContext:
    """Redirect URL carrying a ``LogoutRequest`` to ``target``'s SLO endpoint.

    ``user`` supplies the NameID and session index of the subject. The
    request is signed with ``init``'s key when ``target`` wants logout
    requests signed.
    """
    base, message = _logout_request(user, init, target, template_callback)
    return _redirect(
        message,
        base,
        MessageKind.LOGOUT_REQUEST,
        target.settings.want_logout_request_signed,
        init.settings.signing,
        relay_state,
        signer,
    )


def logout_response_redirect_url(
    request_info: Optional[LogoutRequestInfo],
    init: Optional[Entity],
    target: Optional[Entity],
    relay_state: Optional[str] = None,
    template_callback: Optional[TemplateCallback] = None,
    signer: Optional[MessageSigner] = None,
) -> BindingContext:
    """Redirect URL carrying a successful ``LogoutResponse`` to ``target``.

    ``InResponseTo`` is set from ``request_info`` when the id of the
    answered request is known.
    """
    base, message = _logout_response(request_info, init, target, template_callback)
    return _redirect(
        message,
        base,
        MessageKind.LOGOUT_RESPONSE,
        target.settings.want_logout_response_signed,
        init.settings.signing,
        relay_state,
        signer,
    )

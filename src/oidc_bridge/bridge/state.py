"""Per-attempt authentication state.

AuthenticationState is created fresh for each authentication attempt and
discarded when the attempt completes. It is exchanged with the attribute
processing pipeline as a plain dict using these keys:

    Attributes                          source attributes (name -> values)
    AuthSource                          auth source name
    Source, IdPMetadata                 upstream IdP metadata
    OidcProviderMetadata                OIDC provider discovery metadata
    OidcRelyingPartyMetadata            client metadata, secret removed
    OidcAuthorizationRequestParameters  relevant authorization request params

Any other key returned by the auth source is carried through unchanged.
"""

from __future__ import annotations

__all__ = [
    "AuthenticationState",
    "normalize_attributes",
]

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from oidc_bridge.constants import (
    CLIENT_SECRET_KEY,
    RELEVANT_AUTHZ_PARAMS,
    STATE_ATTRIBUTES,
    STATE_AUTH_SOURCE,
    STATE_IDP_METADATA,
    STATE_OIDC_AUTHZ_REQUEST_PARAMETERS,
    STATE_OIDC_PROVIDER_METADATA,
    STATE_OIDC_RELYING_PARTY_METADATA,
    STATE_SOURCE,
)

_KNOWN_KEYS = frozenset(
    {
        STATE_ATTRIBUTES,
        STATE_AUTH_SOURCE,
        STATE_SOURCE,
        STATE_IDP_METADATA,
        STATE_OIDC_PROVIDER_METADATA,
        STATE_OIDC_RELYING_PARTY_METADATA,
        STATE_OIDC_AUTHZ_REQUEST_PARAMETERS,
    }
)


def normalize_attributes(raw: Any) -> dict[str, list[str]]:
    """Coerce an attribute mapping to name -> list of string values.

    A bare scalar becomes a one-element list. A non-mapping input yields {}.
    """
    if not isinstance(raw, Mapping):
        return {}

    attributes: dict[str, list[str]] = {}
    for name, values in raw.items():
        if values is None:
            attributes[str(name)] = []
        elif not isinstance(values, (list, tuple)):
            attributes[str(name)] = [str(values)]
        else:
            attributes[str(name)] = [str(v) for v in values]
    return attributes


class AuthenticationState(BaseModel):
    """State of one authentication attempt.

    Attributes:
        auth_source: Auth source the user authenticated against.
        attributes: Source attributes (after processing, once processed).
        session_data: Other session keys returned by the auth source.
        idp_metadata: Upstream identity provider metadata.
        oidc_provider_metadata: OIDC provider discovery metadata.
        relying_party_metadata: Client metadata without the client secret.
        authorization_request_parameters: Only response_type, client_id,
            redirect_uri, scope and code_challenge_method.
    """

    auth_source: str
    attributes: dict[str, list[str]] = Field(default_factory=dict)
    session_data: dict[str, Any] = Field(default_factory=dict)
    idp_metadata: dict[str, Any] = Field(default_factory=dict)
    oidc_provider_metadata: dict[str, Any] = Field(default_factory=dict)
    relying_party_metadata: dict[str, Any] = Field(default_factory=dict)
    authorization_request_parameters: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def assemble(
        cls,
        *,
        auth_source: str,
        auth_data: Mapping[str, Any],
        oidc_provider_metadata: Mapping[str, Any],
        relying_party_metadata: Mapping[str, Any],
        request_parameters: Mapping[str, str],
        idp_metadata: Mapping[str, Any],
    ) -> "AuthenticationState":
        """Build the state for a fresh attempt.

        Strips the client secret and keeps only the authorization request
        parameters relevant to attribute release decisions.

        Args:
            auth_source: Resolved auth source name.
            auth_data: Session data from AuthSource.get_auth_data().
            oidc_provider_metadata: OIDC provider discovery metadata.
            relying_party_metadata: ClientRecord.to_dict() output.
            request_parameters: Authorization request query parameters.
            idp_metadata: Upstream IdP metadata.

        Returns:
            New AuthenticationState.
        """
        return cls(
            auth_source=auth_source,
            attributes=normalize_attributes(auth_data.get(STATE_ATTRIBUTES)),
            session_data={k: copy.deepcopy(v) for k, v in auth_data.items() if k not in _KNOWN_KEYS},
            idp_metadata=dict(idp_metadata),
            oidc_provider_metadata=dict(oidc_provider_metadata),
            relying_party_metadata={
                k: v for k, v in relying_party_metadata.items() if k != CLIENT_SECRET_KEY
            },
            authorization_request_parameters={
                k: str(v) for k, v in request_parameters.items() if k in RELEVANT_AUTHZ_PARAMS
            },
        )

    def to_state_dict(self) -> dict[str, Any]:
        """Render the wire dict handed to the processing pipeline.

        The result is a deep copy; mutating it never changes this model.
        """
        state: dict[str, Any] = copy.deepcopy(self.session_data)
        state.update(
            {
                STATE_ATTRIBUTES: copy.deepcopy(self.attributes),
                STATE_AUTH_SOURCE: self.auth_source,
                STATE_OIDC_PROVIDER_METADATA: copy.deepcopy(self.oidc_provider_metadata),
                STATE_OIDC_RELYING_PARTY_METADATA: copy.deepcopy(self.relying_party_metadata),
                STATE_OIDC_AUTHZ_REQUEST_PARAMETERS: dict(self.authorization_request_parameters),
                STATE_SOURCE: copy.deepcopy(self.idp_metadata),
                STATE_IDP_METADATA: copy.deepcopy(self.idp_metadata),
            }
        )
        return state

    def with_processed(self, state: Mapping[str, Any]) -> "AuthenticationState":
        """Return a copy carrying the attributes from a processed state dict.

        Only attributes are taken back; a missing or malformed "Attributes"
        entry yields no attributes.
        """
        return self.model_copy(update={"attributes": normalize_attributes(state.get(STATE_ATTRIBUTES))})

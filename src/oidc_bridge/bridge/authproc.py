"""Attribute processing pipeline.

Runs an ordered chain of filters over the authentication state dict before
the user is reconciled. Filters may add, drop or rename source attributes.
Lower priority runs first; equal priorities keep configuration order.

Built-in filters (configured by name in OIDCConfig.authproc):
- attribute_add: add static attribute values
- attribute_limit: keep only listed attributes
- attribute_map: rename attributes

Custom filters are any object with process(state: dict) -> None; pass them
to AuthProcService directly.
"""

from __future__ import annotations

__all__ = [
    "AttributeAdd",
    "AttributeLimit",
    "AttributeMap",
    "AuthProcFilter",
    "AuthProcService",
    "FILTER_REGISTRY",
    "create_authproc_service",
]

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from oidc_bridge.bridge.state import normalize_attributes
from oidc_bridge.constants import DEFAULT_AUTHPROC_PRIORITY, STATE_ATTRIBUTES
from oidc_bridge.exceptions import ConfigurationError
from oidc_bridge.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from oidc_bridge.config import AuthProcFilterConfig


@runtime_checkable
class AuthProcFilter(Protocol):
    """One step of the processing pipeline. Mutates state in place."""

    priority: int

    def process(self, state: dict[str, Any]) -> None:
        ...


def _attributes(state: dict[str, Any]) -> dict[str, list[str]]:
    """Get state["Attributes"], normalizing it in place."""
    attributes = normalize_attributes(state.get(STATE_ATTRIBUTES))
    state[STATE_ATTRIBUTES] = attributes
    return attributes


class AttributeAdd:
    """Add static values to attributes.

    Config:
        attributes: name -> value or list of values.
        replace: If True, replace existing values instead of appending.
    """

    def __init__(
        self,
        attributes: Mapping[str, Any],
        replace: bool = False,
        priority: int = DEFAULT_AUTHPROC_PRIORITY,
    ) -> None:
        self.attributes = normalize_attributes(attributes)
        self.replace = replace
        self.priority = priority

    def process(self, state: dict[str, Any]) -> None:
        current = _attributes(state)
        for name, values in self.attributes.items():
            if self.replace or name not in current:
                current[name] = list(values)
            else:
                current[name] = current[name] + [v for v in values if v not in current[name]]


class AttributeLimit:
    """Drop every attribute not explicitly allowed.

    Config:
        allowed: Attribute names to keep.
    """

    def __init__(self, allowed: Iterable[str], priority: int = DEFAULT_AUTHPROC_PRIORITY) -> None:
        self.allowed = frozenset(allowed)
        self.priority = priority

    def process(self, state: dict[str, Any]) -> None:
        current = _attributes(state)
        state[STATE_ATTRIBUTES] = {k: v for k, v in current.items() if k in self.allowed}


class AttributeMap:
    """Rename attributes, keeping their values.

    Config:
        mapping: old name -> new name. A renamed attribute replaces any existing
            attribute with the new name.
    """

    def __init__(self, mapping: Mapping[str, str], priority: int = DEFAULT_AUTHPROC_PRIORITY) -> None:
        self.mapping = dict(mapping)
        self.priority = priority

    def process(self, state: dict[str, Any]) -> None:
        current = _attributes(state)
        renamed: dict[str, list[str]] = {}
        for name, values in current.items():
            target = self.mapping.get(name, name)
            if target in renamed and target == name:
                continue  # a renamed attribute already claimed this name
            renamed[target] = values
        state[STATE_ATTRIBUTES] = renamed


FILTER_REGISTRY: dict[str, type] = {
    "attribute_add": AttributeAdd,
    "attribute_limit": AttributeLimit,
    "attribute_map": AttributeMap,
}


class AuthProcService:
    """Runs attribute processing filters in priority order.

    Implements the AuthProcessor protocol.

    Usage:
        service = AuthProcService([AttributeLimit(["uid", "mail"])])
        state = service.process_state(state)
    """

    def __init__(self, filters: Iterable[AuthProcFilter] = ()) -> None:
        # sorted() is stable: equal priorities keep the given order
        self._filters = sorted(filters, key=lambda f: f.priority)

    @property
    def filters(self) -> list[AuthProcFilter]:
        return list(self._filters)

    def process_state(self, state: dict[str, Any]) -> dict[str, Any]:
        """Apply every filter to state and return it.

        Args:
            state: Authentication state dict (see bridge.state).

        Returns:
            The processed state dict (same object, mutated).
        """
        for auth_filter in self._filters:
            auth_filter.process(state)
        return state


def create_authproc_service(filter_configs: Iterable["AuthProcFilterConfig"]) -> AuthProcService:
    """Build the pipeline from configuration.

    Args:
        filter_configs: Configured filters (name, priority, options).

    Returns:
        AuthProcService with the configured filters.

    Raises:
        ConfigurationError: If a filter name is unknown or its options are invalid.
    """
    filters: list[AuthProcFilter] = []
    for index, filter_config in enumerate(filter_configs):
        filter_class = FILTER_REGISTRY.get(filter_config.filter)
        if filter_class is None:
            raise ConfigurationError(
                f"Unknown authproc filter '{filter_config.filter}' at position {index}. "
                f"Available filters: {', '.join(sorted(FILTER_REGISTRY))}"
            )
        try:
            filters.append(filter_class(priority=filter_config.priority, **filter_config.config))
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid options for authproc filter '{filter_config.filter}' at position {index}: {e}"
            ) from e

    get_system_logger().debug(
        {
            "event": "authproc_chain_built",
            "message": f"Attribute processing chain built with {len(filters)} filter(s)",
            "filters": [type(f).__name__ for f in filters],
        }
    )
    return AuthProcService(filters)

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import os
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

if TYPE_CHECKING:
    from .node import LocatorNode

Parameters = Mapping[Any, Any]
AttributesChainMapper = Callable[[Sequence["Attributes"]], Any]

EMPTY_ATTRIBUTES: Mapping[str, str] = MappingProxyType({})

_TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}

_OPTION_ALIASES = {
    "id_attribute": "id_attribute",
    "idAttribute": "id_attribute",
    "pathAttribute": "id_attribute",
    "testIdAttribute": "id_attribute",
    "child_separator": "child_separator",
    "childSeparator": "child_separator",
    "pathSeparator": "child_separator",
    "testIdSeparator": "child_separator",
    "parameter_prefix": "parameter_prefix",
    "parameterPrefix": "parameter_prefix",
    "parameterAttributePrefix": "parameter_prefix",
    "disable_wildcards": "disable_wildcards",
    "disableWildcards": "disable_wildcards",
    "is_production": "is_production",
    "isProduction": "is_production",
    "map_attributes_chain": "map_attributes_chain",
    "mapAttributesChain": "map_attributes_chain",
    "distinguish_missing_parameters": "distinguish_missing_parameters",
}


class LocatorState(Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    ACTIVATED = "activated"
    DUPLICATE = "duplicate"


@dataclass(frozen=True, slots=True)
class LocatorOptions:
    id_attribute: str = "data-testid"
    child_separator: str = "-"
    parameter_prefix: str = "data-test-"
    disable_wildcards: bool = False
    is_production: bool = False
    map_attributes_chain: AttributesChainMapper | None = None
    distinguish_missing_parameters: bool = False

    @property
    def wildcards(self) -> bool:
        return not self.disable_wildcards

    def merged(self, **overrides: Any) -> LocatorOptions:
        return replace(self, **overrides)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> LocatorOptions:
        """Build options from a mapping, accepting both snake_case and camelCase names.

        ``supportWildcardsInCssSelectors`` is accepted as the inverse of
        ``disable_wildcards``.
        """
        values: dict[str, Any] = {}
        for key, value in payload.items():
            if key == "supportWildcardsInCssSelectors":
                values["disable_wildcards"] = not bool(value)
                continue
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise ValueError(f"Unknown locator option: {key}")
            values[name] = value
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LocatorOptions:
        env = os.environ if environ is None else environ
        defaults = cls()
        production = str(env.get("LOCATORTREE_PRODUCTION", "")).strip().lower() in _TRUTHY_ENV_VALUES
        return cls(
            id_attribute=env.get("LOCATORTREE_ID_ATTRIBUTE") or defaults.id_attribute,
            child_separator=env.get("LOCATORTREE_CHILD_SEPARATOR", defaults.child_separator),
            parameter_prefix=env.get("LOCATORTREE_PARAMETER_PREFIX", defaults.parameter_prefix),
            is_production=production,
        )


class LocatorMark(str):
    """Id attribute value that remembers the locator and parameters it came from."""

    locator: LocatorNode
    parameters: Parameters | None

    def __new__(cls, path: str, locator: LocatorNode, parameters: Parameters | None) -> LocatorMark:
        mark = super().__new__(cls, path)
        mark.locator = locator
        mark.parameters = parameters
        return mark

    def to_json(self) -> str:
        return str.__str__(self)

    def __reduce__(self) -> tuple[type[str], tuple[str]]:
        # Copies and pickles keep only the id value.
        return str, (str.__str__(self),)


class Attributes(dict):
    """Ordered attribute mapping; the id attribute is always the first key."""

    def __str__(self) -> str:
        for value in self.values():
            return str(value)
        return ""

    def to_json(self) -> str:
        return str(self)


@dataclass(frozen=True, slots=True)
class Selector:
    css: str

    @classmethod
    def from_css(cls, css: str) -> Selector:
        return cls(css)

    def __str__(self) -> str:
        return self.css

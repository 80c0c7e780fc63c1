from __future__ import annotations

from typing import Any, Mapping

from .attributes import iter_parameter_attributes
from .errors import MissingLocatorError
from .models import LocatorMark
from .node import node_options
from .production import PRODUCTION_LOCATOR


def find_mark(properties: Mapping[str, Any] | None) -> LocatorMark | None:
    for value in (properties or {}).values():
        if isinstance(value, LocatorMark):
            return value
    return None


def locator_from_properties(properties: Mapping[str, Any] | None, *, production: bool = False) -> Any:
    """Return the locator whose attributes were spread into ``properties``."""
    if production:
        return PRODUCTION_LOCATOR
    mark = find_mark(properties)
    if mark is None:
        raise MissingLocatorError(properties)
    return mark.locator


def get_locator_parameters(properties: Mapping[str, Any] | None, *, production: bool = False) -> Any:
    if production:
        return PRODUCTION_LOCATOR
    mark = find_mark(properties)
    if mark is None:
        raise MissingLocatorError(properties)
    return mark.parameters


def remove_mark_from_properties(properties: Mapping[str, Any]) -> Mapping[str, Any]:
    mark = find_mark(properties)
    if mark is None:
        return properties

    options = node_options(mark.locator)
    locator_keys = {options.id_attribute}
    locator_keys.update(name for name, _value in iter_parameter_attributes(mark.parameters, options.parameter_prefix))
    return {key: value for key, value in properties.items() if key not in locator_keys}

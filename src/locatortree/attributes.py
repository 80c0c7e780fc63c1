from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .models import EMPTY_ATTRIBUTES, Attributes, LocatorOptions, Parameters


def iter_parameter_attributes(
    parameters: Parameters | None,
    parameter_prefix: str,
) -> list[tuple[str, str]]:
    if parameters is None or not isinstance(parameters, Mapping):
        return []
    pairs: list[tuple[str, str]] = []
    for key, value in parameters.items():
        if value is None:
            continue
        pairs.append((f"{parameter_prefix}{key}", str(value)))
    return pairs


def build_attributes(
    locator_id: Any,
    parameters: Parameters | None = None,
    *,
    id_attribute: str,
    parameter_prefix: str,
) -> Attributes:
    """Return the id attribute followed by one attribute per non-``None`` parameter."""
    attributes = Attributes()
    attributes[id_attribute] = locator_id
    for name, value in iter_parameter_attributes(parameters, parameter_prefix):
        attributes[name] = value
    return attributes


def build_test_id(parts: tuple[Any, ...], separator: str) -> str:
    """Join id fragments; a trailing mapping holds parameters and is not part of the id.

    A ``None`` or empty fragment anywhere makes the whole id empty.
    """
    pieces: list[str] = []
    for index, part in enumerate(parts):
        if part is None:
            return ""
        if index == len(parts) - 1 and isinstance(part, Mapping):
            break
        text = str(part)
        if text == "":
            return ""
        pieces.append(text)
    return separator.join(pieces)


def trailing_parameters(parts: tuple[Any, ...]) -> Parameters | None:
    if parts and isinstance(parts[-1], Mapping):
        return parts[-1]
    return None


@dataclass(frozen=True, slots=True)
class SimpleLocatorKit:
    get_test_id: Callable[..., str]
    locator: Callable[..., Mapping[str, str]]


def create_simple_locator(options: LocatorOptions | None = None) -> SimpleLocatorKit:
    opts = options or LocatorOptions()
    if opts.is_production:
        return SimpleLocatorKit(get_test_id=lambda *_parts: "", locator=lambda *_parts: EMPTY_ATTRIBUTES)

    def get_test_id(*parts: Any) -> str:
        return build_test_id(parts, opts.child_separator)

    def locator(*parts: Any) -> Mapping[str, str]:
        test_id = get_test_id(*parts)
        if test_id == "":
            return EMPTY_ATTRIBUTES
        return build_attributes(
            test_id,
            trailing_parameters(parts),
            id_attribute=opts.id_attribute,
            parameter_prefix=opts.parameter_prefix,
        )

    return SimpleLocatorKit(get_test_id=get_test_id, locator=locator)

from __future__ import annotations

import re
from typing import Iterable, Mapping, Sequence

WILDCARD = "*"
_WILDCARD_RUN = re.compile(r"\*+")


def escape_css_attribute_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def exact_css(name: str, value: str) -> str:
    return f'[{name}="{escape_css_attribute_value(value)}"]'


def starts_with_css(name: str, value: str) -> str:
    return f'[{name}^="{escape_css_attribute_value(value)}"]'


def contains_css(name: str, value: str) -> str:
    return f'[{name}*="{escape_css_attribute_value(value)}"]'


def ends_with_css(name: str, value: str) -> str:
    return f'[{name}$="{escape_css_attribute_value(value)}"]'


def present_css(name: str) -> str:
    return f"[{name}]"


def attribute_css_fragments(name: str, value: str, wildcards: bool = True) -> list[str]:
    """Split one attribute into CSS attribute-selector fragments.

    With wildcards enabled, runs of ``*`` mark the places where any text may
    appear: ``"a*b"`` becomes a starts-with plus an ends-with fragment,
    interior parts become contains fragments and a bare ``"*"`` only requires
    the attribute to be present.
    """
    if not wildcards or WILDCARD not in value:
        return [exact_css(name, value)]

    parts = _WILDCARD_RUN.split(value)
    first, last = parts[0], parts[-1]
    starts_with_wildcard = first == ""
    ends_with_wildcard = last == ""

    if starts_with_wildcard and ends_with_wildcard and len(parts) == 2:
        return [present_css(name)]

    fragments: list[str] = []
    if not starts_with_wildcard:
        fragments.append(starts_with_css(name, first))
    for part in parts[1:-1]:
        fragments.append(contains_css(name, part))
    if not ends_with_wildcard:
        fragments.append(ends_with_css(name, last))

    return fragments


def attribute_css(name: str, value: str, wildcards: bool = True) -> str:
    return "".join(attribute_css_fragments(name, value, wildcards))


def css_from_pairs(pairs: Iterable[tuple[str, str]], wildcards: bool = True) -> str:
    return "".join(attribute_css(name, str(value), wildcards) for name, value in pairs)


def css_from_attributes(attributes: Mapping[str, str], wildcards: bool = True) -> str:
    return css_from_pairs(attributes.items(), wildcards)


def css_from_attributes_chain(chain: Sequence[Mapping[str, str]], wildcards: bool = True) -> str:
    """Descendant selector for a chain of element attributes, root first."""
    selectors = [css for css in (css_from_attributes(item, wildcards) for item in chain) if css]
    if not selectors:
        return "*"
    return " ".join(selectors)

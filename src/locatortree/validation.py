from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from .node import LocatorNode

if TYPE_CHECKING:
    from playwright.sync_api import Page

LOGGER = logging.getLogger("locatortree.validation")


@dataclass(frozen=True, slots=True)
class SelectorValidation:
    unique: bool
    match_count: int
    message: str


def selector_css(selector: Any, parameters: Any = None) -> str:
    if isinstance(selector, LocatorNode):
        return selector.to_css(parameters) or ""
    css = getattr(selector, "css", None)
    if isinstance(css, str):
        return css
    return str(selector or "")


def count_selector_matches(page: Page, selector: Any, parameters: Any = None) -> int:
    css = selector_css(selector, parameters).strip()
    if not css:
        return 0
    try:
        return len(page.query_selector_all(css))
    except Exception as exc:
        LOGGER.debug("Selector %s could not be evaluated: %s", css, exc)
        return 0


def validate_selector(page: Page, selector: Any, parameters: Any = None) -> SelectorValidation:
    match_count = count_selector_matches(page, selector, parameters)
    if match_count == 0:
        return SelectorValidation(False, 0, "Locator matches no element in DOM.")
    if match_count > 1:
        return SelectorValidation(False, match_count, "Locator is not unique in DOM.")
    return SelectorValidation(True, 1, "Locator is unique.")

from __future__ import annotations

import logging
from typing import Any, Callable
import unicodedata

from .errors import EmptyArgumentListError, ForeignSelectorError
from .models import LocatorOptions, Parameters, Selector
from .node import LocatorContext, LocatorNode

CreateSelector = Callable[[str], Any]

# Punctuation and symbols in the order the CLDR root collation sorts them;
# they all sort before digits and letters.
_PUNCTUATION_ORDER = " _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_PUNCTUATION_RANK = {char: index for index, char in enumerate(_PUNCTUATION_ORDER)}
_DIGIT_BASE = len(_PUNCTUATION_ORDER)
_LETTER_BASE = _DIGIT_BASE + 10
_OTHER_BASE = _LETTER_BASE + 26


def _decompose(char: str) -> tuple[str, str]:
    """Split a character into its base character and combining accents."""
    decomposed = unicodedata.normalize("NFD", char)
    return decomposed[0], decomposed[1:]


def _primary_weight(base: str) -> int:
    rank = _PUNCTUATION_RANK.get(base)
    if rank is not None:
        return rank
    if "0" <= base <= "9":
        return _DIGIT_BASE + ord(base) - ord("0")
    lower = base.lower()
    if "a" <= lower <= "z":
        return _LETTER_BASE + ord(lower) - ord("a")
    return _OTHER_BASE + ord(lower)


def collation_key(text: str) -> tuple[tuple[int, ...], tuple[str, ...], tuple[bool, ...], str]:
    """Sort key that orders CSS strings like an English locale collator.

    Characters are compared by base letter first, ignoring accents and case,
    punctuation before digits before letters. Ties are broken by accents
    (unaccented first), then by case (lowercase first), then by the raw string.
    """
    decomposed = [_decompose(char) for char in text]
    primary = tuple(_primary_weight(base) for base, _ in decomposed)
    accents = tuple(marks for _, marks in decomposed)
    case = tuple(base.isupper() for base, _ in decomposed)
    return primary, accents, case, text


def css_of_fragments(fragments: tuple[str, ...]) -> str:
    if len(fragments) == 1:
        return fragments[0]
    return f":is({', '.join(fragments)})"


class SelectorFunctions(LocatorContext):
    """Selector-mode locator trees plus the combinators over their selectors.

    ``create_selector`` turns a CSS string into whatever object the test
    framework uses (a Playwright ``page.locator`` works). Selectors are
    cached by CSS string, so equal CSS always yields the same object.
    """

    def __init__(
        self,
        create_selector: CreateSelector = Selector.from_css,
        options: LocatorOptions | None = None,
    ) -> None:
        super().__init__(options)
        self.logger = logging.getLogger("locatortree.selector_functions")
        self._create_selector = create_selector
        self._by_css: dict[str, Any] = {}
        self._fragments: dict[int, tuple[str, ...]] = {}

    def create_locator_in_tests(self, locator_id: str) -> LocatorNode:
        return LocatorNode(self, locator_id)

    def render(self, node: LocatorNode, parameters: Parameters | None, has_parameters: bool) -> Any:
        css = node.to_css(parameters)
        return self.selector_for_css(css, (css,))

    def selector_for_css(self, css: str, fragments: tuple[str, ...] | None = None) -> Any:
        with self.lock:
            selector = self._by_css.get(css)
            if selector is None:
                selector = self._create_selector(css)
                self._by_css[css] = selector
                self._fragments[id(selector)] = fragments or (css,)
                self.logger.debug("Created selector %s", css)
            return selector

    def fragments_of(self, selector: Any) -> tuple[str, ...]:
        fragments = self._fragments.get(id(selector))
        if fragments is None or self._by_css.get(css_of_fragments(fragments)) is not selector:
            raise ForeignSelectorError(selector)
        return fragments

    def css_of(self, selector: Any) -> str:
        return css_of_fragments(self.fragments_of(selector))

    def find_any_of_selectors(self, *selectors: Any) -> Any:
        """Union of selectors as ``:is(...)``, flattening earlier unions."""
        if not selectors:
            raise EmptyArgumentListError()
        if len(selectors) == 1:
            return selectors[0]

        unique: dict[str, None] = {}
        for selector in selectors:
            for fragment in self.fragments_of(selector):
                unique.setdefault(fragment, None)

        fragments = tuple(sorted(unique, key=collation_key))
        return self.selector_for_css(css_of_fragments(fragments), fragments)

    def find_chain_of_selectors(self, *selectors: Any) -> Any:
        """Descendant chain of selectors, left to right."""
        if not selectors:
            raise EmptyArgumentListError()
        if len(selectors) == 1:
            return selectors[0]

        css = " ".join(self.css_of(selector) for selector in selectors)
        return self.selector_for_css(css)


def create_selector_functions(
    create_selector: CreateSelector = Selector.from_css,
    options: LocatorOptions | None = None,
) -> SelectorFunctions:
    return SelectorFunctions(create_selector, options)

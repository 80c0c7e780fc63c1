from __future__ import annotations

from typing import Any, Callable
import weakref

from .attributes import create_simple_locator
from .css import css_from_attributes
from .errors import EmptyArgumentListError, ForeignSelectorError
from .models import LocatorOptions

CreateLocatorByCss = Callable[[str], Any]
CombineSelectors = Callable[..., str]
LocatorOperator = Callable[..., Any]


class LocatorTestUtils:
    """Builds test-framework locators from composite test ids and combines them.

    Every locator produced here remembers its CSS selector, so the
    operators (``and_``, ``chain``, ``has``, ``not_``, ``or_``) can combine
    them into new locators. The record lives only as long as the locator.
    """

    def __init__(
        self,
        create_locator_by_css: CreateLocatorByCss,
        options: LocatorOptions | None = None,
        *,
        wildcards: bool = True,
    ) -> None:
        options = (options or LocatorOptions()).merged(is_production=False)
        if not wildcards:
            options = options.merged(disable_wildcards=True)
        self.options = options
        self._kit = create_simple_locator(self.options)
        self._create_locator_by_css = create_locator_by_css
        self._selectors: dict[int, tuple[Callable[[], Any], str]] = {}

        self.and_ = self.create_locator_operator(lambda *selectors: "".join(selectors))
        self.chain = self.create_locator_operator(lambda *selectors: " ".join(selectors))
        self.has = self.create_locator_operator(lambda *selectors: f":has({', '.join(selectors)})")
        self.not_ = self.create_locator_operator(lambda *selectors: f":not({', '.join(selectors)})")
        self.or_ = self.create_locator_operator(
            lambda *selectors: selectors[0] if len(selectors) == 1 else f":is({', '.join(selectors)})"
        )

    def get_test_id(self, *parts: Any) -> str:
        return self._kit.get_test_id(*parts)

    def get_selector(self, *parts: Any) -> str:
        return css_from_attributes(self._kit.locator(*parts), self.options.wildcards)

    def locator(self, *parts: Any) -> Any:
        return self._create(self.get_selector(*parts))

    def selector_of(self, locator: Any) -> str:
        record = self._selectors.get(id(locator))
        if record is None or record[0]() is not locator:
            raise ForeignSelectorError(locator)
        return record[1]

    def create_locator_operator(self, combine: CombineSelectors) -> LocatorOperator:
        def operator(*locators: Any) -> Any:
            if not locators:
                raise EmptyArgumentListError()
            selectors = [self.selector_of(locator) for locator in locators]
            selector = combine(*selectors)
            if selector == selectors[0]:
                return locators[0]
            return self._create(selector)

        return operator

    def _create(self, selector: str) -> Any:
        locator = self._create_locator_by_css(selector)
        key = id(locator)
        selectors = self._selectors
        try:
            ref: Callable[[], Any] = weakref.ref(locator, lambda _, key=key: selectors.pop(key, None))
        except TypeError:
            # Locators without weak reference support are kept alive.
            ref = _strong_ref(locator)
        selectors[key] = (ref, selector)
        return locator


def _strong_ref(value: Any) -> Callable[[], Any]:
    return lambda: value


def create_test_utils(
    create_locator_by_css: CreateLocatorByCss,
    options: LocatorOptions | None = None,
    *,
    wildcards: bool = True,
) -> LocatorTestUtils:
    return LocatorTestUtils(create_locator_by_css, options, wildcards=wildcards)

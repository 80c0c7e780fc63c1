from dataclasses import dataclass
import gc

import pytest

from locatortree.errors import EmptyArgumentListError, ForeignSelectorError
from locatortree.models import LocatorOptions
from locatortree.operators import create_test_utils


@dataclass(slots=True, weakref_slot=True)
class _FakeLocator:
    selector: str


@dataclass(slots=True)
class _StrongLocator:
    selector: str


def test_locator_builds_selector_from_composite_id() -> None:
    utils = create_test_utils(_FakeLocator)

    assert utils.locator("foo").selector == '[data-testid="foo"]'
    assert utils.locator("foo", "bar", {"qux": 3}).selector == '[data-testid="foo-bar"][data-test-qux="3"]'
    assert utils.locator("foo", {"qux": "bar*baz"}).selector == (
        '[data-testid="foo"][data-test-qux^="bar"][data-test-qux$="baz"]'
    )
    assert utils.locator("foo") is not utils.locator("foo")
    assert utils.get_selector("foo", "bar") == '[data-testid="foo-bar"]'
    assert utils.get_test_id("foo", "bar") == "foo-bar"


def test_empty_test_id_gives_empty_selector() -> None:
    utils = create_test_utils(_FakeLocator)
    assert utils.locator("foo", None, {"bar": 3}).selector == ""
    assert utils.get_selector("foo", "bar", None, {"bar": 3}) == ""
    assert utils.get_test_id(None, "foo", "bar") == ""


def test_non_default_options_are_respected() -> None:
    options = LocatorOptions(
        id_attribute="data-othertestid",
        child_separator="|",
        parameter_prefix="data-othertest-",
        disable_wildcards=True,
    )
    utils = create_test_utils(_FakeLocator, options)
    assert utils.locator("foo", "quux", {"qux": "bar*baz"}).selector == (
        '[data-othertestid="foo|quux"][data-othertest-qux="bar*baz"]'
    )


def test_production_option_is_ignored_for_test_utils() -> None:
    utils = create_test_utils(_FakeLocator, LocatorOptions(is_production=True))
    assert utils.locator("foo").selector == '[data-testid="foo"]'


def test_operators_combine_selectors() -> None:
    utils = create_test_utils(_FakeLocator)
    foo = utils.locator("foo")
    bar = utils.locator("bar")

    assert utils.and_(foo, bar).selector == '[data-testid="foo"][data-testid="bar"]'
    assert utils.chain(foo, bar).selector == '[data-testid="foo"] [data-testid="bar"]'
    assert utils.has(foo, bar).selector == ':has([data-testid="foo"], [data-testid="bar"])'
    assert utils.not_(foo).selector == ':not([data-testid="foo"])'
    assert utils.or_(foo, bar).selector == ':is([data-testid="foo"], [data-testid="bar"])'
    assert utils.chain(utils.or_(foo, bar), foo).selector == (
        ':is([data-testid="foo"], [data-testid="bar"]) [data-testid="foo"]'
    )


def test_operators_return_first_locator_when_selector_is_unchanged() -> None:
    utils = create_test_utils(_FakeLocator)
    foo = utils.locator("foo")
    assert utils.or_(foo) is foo
    assert utils.chain(foo) is foo
    assert utils.and_(foo) is foo


def test_operators_validate_arguments() -> None:
    utils = create_test_utils(_FakeLocator)
    with pytest.raises(EmptyArgumentListError):
        utils.or_()
    with pytest.raises(ForeignSelectorError):
        utils.chain(utils.locator("foo"), _FakeLocator('[data-testid="bar"]'))


def test_custom_operator() -> None:
    utils = create_test_utils(_FakeLocator)
    sibling = utils.create_locator_operator(lambda *selectors: " ~ ".join(selectors))
    assert sibling(utils.locator("a"), utils.locator("b")).selector == '[data-testid="a"] ~ [data-testid="b"]'


def test_wildcards_keyword_turns_off_wildcard_matching() -> None:
    utils = create_test_utils(_FakeLocator, wildcards=False)
    assert utils.locator("foo", {"qux": "bar*baz"}).selector == '[data-testid="foo"][data-test-qux="bar*baz"]'
    assert utils.get_selector("a*b") == '[data-testid="a*b"]'

    wildcard_options = LocatorOptions(disable_wildcards=False)
    assert create_test_utils(_FakeLocator, wildcard_options, wildcards=False).get_selector("a*b") == (
        '[data-testid="a*b"]'
    )


def test_dropped_locators_are_forgotten() -> None:
    utils = create_test_utils(_FakeLocator)
    kept = utils.locator("kept")
    for index in range(1000):
        utils.locator("item", {"n": index})
    gc.collect()

    assert len(utils._selectors) == 1
    assert utils.selector_of(kept) == '[data-testid="kept"]'


def test_locators_without_weak_references_still_combine() -> None:
    utils = create_test_utils(_StrongLocator)
    foo = utils.locator("foo")
    bar = utils.locator("bar")
    assert utils.or_(foo, bar).selector == ':is([data-testid="foo"], [data-testid="bar"])'

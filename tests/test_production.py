import copy
import json
import pickle

import pytest

from locatortree.models import EMPTY_ATTRIBUTES
from locatortree.production import PRODUCTION_LOCATOR, ProductionLocator


def test_production_locator_is_a_singleton() -> None:
    assert ProductionLocator() is PRODUCTION_LOCATOR
    assert copy.copy(PRODUCTION_LOCATOR) is PRODUCTION_LOCATOR
    assert copy.deepcopy(PRODUCTION_LOCATOR) is PRODUCTION_LOCATOR
    assert pickle.loads(pickle.dumps(PRODUCTION_LOCATOR)) is PRODUCTION_LOCATOR


def test_any_chain_of_access_and_calls_is_absorbed() -> None:
    locator = PRODUCTION_LOCATOR
    assert locator.foo.bar.baz is locator
    assert locator["qux-quux"].child("x") is locator
    assert locator() is EMPTY_ATTRIBUTES
    assert locator.foo.bar({"qux": 1}) is EMPTY_ATTRIBUTES
    assert locator.a.b.c(1, 2, key="value") == {}


def test_conversions_are_empty() -> None:
    locator = PRODUCTION_LOCATOR
    assert str(locator.foo) == ""
    assert locator.to_json() == ""
    assert locator.to_css({"a": "b*"}) == ""
    assert json.dumps({**locator()}) == "{}"
    assert int(locator) == 0
    assert float(locator) == 0.0
    assert not locator
    assert len(locator) == 0
    assert list(locator) == []


def test_mutation_is_silently_absorbed() -> None:
    locator = PRODUCTION_LOCATOR
    locator.foo = "bar"
    del locator.foo
    locator["foo"] = 1
    del locator["foo"]
    assert locator.foo is locator


def test_empty_attributes_are_read_only() -> None:
    with pytest.raises(TypeError):
        EMPTY_ATTRIBUTES["data-testid"] = "x"
    assert dict(EMPTY_ATTRIBUTES) == {}

from dataclasses import dataclass

from locatortree.cache_key import NO_ARGS_KEY, cache_key, call_key, with_length


class _Named:
    def __init__(self, label: str) -> None:
        self.label = label

    def __str__(self) -> str:
        return "named"


@dataclass(slots=True)
class _Slotted:
    qux: str


def test_with_length_prefixes_string_form() -> None:
    assert with_length("abc") == "3:abc"
    assert with_length(12) == "2:12"
    assert with_length("") == "0:"


def test_values_of_different_types_get_different_keys() -> None:
    values = [None, 0, 3, "3", "0", "+0", "foo", True, False, 1, 1.0, {}, [], ()]
    keys = {cache_key(value) for value in values}
    assert len(keys) == len(values)


def test_structurally_equal_values_share_a_key() -> None:
    assert cache_key({"foo": 1, "bar": "baz"}) == cache_key(dict(foo=1, bar="baz"))
    assert cache_key(_Named("a")) == cache_key(_Named("a"))
    assert cache_key(_Slotted("x")) == cache_key(_Slotted("x"))


def test_entry_order_and_content_change_the_key() -> None:
    assert cache_key({"foo": 1, "bar": 2}) != cache_key({"bar": 2, "foo": 1})
    assert cache_key({"foo": 1}) != cache_key({"foo": "1"})
    assert cache_key(_Named("a")) != cache_key(_Named("b"))
    assert cache_key(_Slotted("x")) != cache_key(_Slotted("y"))


def test_explicit_none_values_are_part_of_the_key() -> None:
    assert cache_key({"foo": 1, "qux": None}) != cache_key({"foo": 1})


def test_length_prefix_prevents_ambiguous_boundaries() -> None:
    assert cache_key({"ab": "c"}) != cache_key({"a": "bc"})


def test_call_key_treats_missing_and_none_as_equal_by_default() -> None:
    assert call_key(()) == NO_ARGS_KEY
    assert call_key((None,)) == NO_ARGS_KEY
    assert call_key(({},)) != NO_ARGS_KEY


def test_call_key_can_distinguish_missing_from_none() -> None:
    assert call_key((), distinguish_missing=True) == NO_ARGS_KEY
    assert call_key((None,), distinguish_missing=True) != NO_ARGS_KEY

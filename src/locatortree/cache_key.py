from __future__ import annotations

from typing import Any, Mapping

NO_ARGS_KEY = "noArgs"

_SCALAR_TYPES = (str, bytes, int, float, complex, bool, type(None))


def with_length(value: Any) -> str:
    text = str(value)
    return f"{len(text)}:{text}"


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


def own_entries(value: Any) -> list[tuple[Any, Any]]:
    """Top-level entries of a value: mapping items, sequence items or instance fields."""
    if isinstance(value, _SCALAR_TYPES):
        return []
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, (list, tuple)):
        return list(enumerate(value))

    entries: list[tuple[Any, Any]] = []
    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        entries.extend(instance_dict.items())
    for name in _slot_names(type(value)):
        if hasattr(value, name):
            entries.append((name, getattr(value, name)))
    return entries


def cache_key(value: Any) -> str:
    """Deterministic lookup key for a parameter value.

    The key is the type name plus the length-prefixed ``str`` of the value,
    followed by every top-level entry as a length-prefixed key and value.
    Entries are not walked recursively.
    """
    cls = type(value)
    parts = [f"{cls.__module__}.{cls.__qualname__}", with_length(value)]
    for key, item in own_entries(value):
        parts.append(with_length(key))
        parts.append(with_length(item))
    return "".join(parts)


def call_key(args: tuple[Any, ...], distinguish_missing: bool = False) -> str:
    if not args:
        return NO_ARGS_KEY
    if len(args) == 1 and args[0] is None and not distinguish_missing:
        return NO_ARGS_KEY
    if len(args) == 1:
        return cache_key(args[0])
    return "".join(with_length(cache_key(arg)) for arg in args)

from __future__ import annotations

from typing import Any, Iterator, Mapping

from .models import EMPTY_ATTRIBUTES


class ProductionLocator:
    """Absorbing stand-in for a whole locator tree in production builds.

    Any attribute access returns the same object, any call returns the
    shared empty attributes, and conversions yield empty values. Nothing
    raises and nothing is allocated per access.
    """

    __slots__ = ()

    _instance: ProductionLocator | None = None

    def __new__(cls) -> ProductionLocator:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __call__(self, *args: Any, **kwargs: Any) -> Mapping[str, str]:
        return EMPTY_ATTRIBUTES

    def __getattr__(self, name: str) -> ProductionLocator:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self

    def __getitem__(self, name: Any) -> ProductionLocator:
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        pass

    def __delattr__(self, name: str) -> None:
        pass

    def __setitem__(self, name: Any, value: Any) -> None:
        pass

    def __delitem__(self, name: Any) -> None:
        pass

    def child(self, name: Any) -> ProductionLocator:
        return self

    def to_css(self, parameters: Any = None) -> str:
        return ""

    def to_json(self) -> str:
        return ""

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "PRODUCTION_LOCATOR"

    def __bool__(self) -> bool:
        return False

    def __int__(self) -> int:
        return 0

    def __float__(self) -> float:
        return 0.0

    def __len__(self) -> int:
        return 0

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __copy__(self) -> ProductionLocator:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> ProductionLocator:
        return self

    def __reduce__(self) -> str:
        return "PRODUCTION_LOCATOR"


PRODUCTION_LOCATOR = ProductionLocator()

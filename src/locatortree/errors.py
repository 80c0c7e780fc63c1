from __future__ import annotations


class LocatorError(Exception):
    """Base class for every error raised by locatortree."""


class DuplicateLocatorError(LocatorError):
    def __init__(self, locator_id: str) -> None:
        super().__init__(f'More than one locator with id "{locator_id}" was registered.')
        self.locator_id = locator_id


class PrematureCallError(LocatorError):
    def __init__(self, locator_id: str) -> None:
        super().__init__(f'Locator "{locator_id}" was called before options were set.')
        self.locator_id = locator_id


class MissingLocatorError(LocatorError):
    def __init__(self, properties: object) -> None:
        super().__init__(f"Properties are not marked with a locator: {properties!r}")


InvalidPropertiesError = MissingLocatorError


class ImmutabilityViolation(LocatorError, TypeError):
    pass


class EmptyArgumentListError(LocatorError, ValueError):
    def __init__(self) -> None:
        super().__init__("Empty argument list")


class ForeignSelectorError(LocatorError, ValueError):
    def __init__(self, selector: object) -> None:
        super().__init__(f"Selector was not created by this locator engine: {selector!r}")

"""Hierarchical test-id attributes and CSS selectors for UI elements."""

from __future__ import annotations

from .attributes import SimpleLocatorKit, build_attributes, build_test_id, create_simple_locator
from .cache_key import cache_key, call_key
from .css import attribute_css, css_from_attributes, css_from_attributes_chain
from .errors import (
    DuplicateLocatorError,
    EmptyArgumentListError,
    ForeignSelectorError,
    ImmutabilityViolation,
    InvalidPropertiesError,
    LocatorError,
    MissingLocatorError,
    PrematureCallError,
)
from .models import EMPTY_ATTRIBUTES, Attributes, LocatorMark, LocatorOptions, LocatorState, Selector
from .node import LocatorNode, create_root_locator
from .operators import LocatorTestUtils, create_test_utils
from .production import PRODUCTION_LOCATOR, ProductionLocator
from .properties import get_locator_parameters, locator_from_properties, remove_mark_from_properties
from .registry import LocatorRegistry
from .selector_functions import SelectorFunctions, create_selector_functions

__version__ = "0.1.0"

__all__ = [
    "EMPTY_ATTRIBUTES",
    "PRODUCTION_LOCATOR",
    "Attributes",
    "DuplicateLocatorError",
    "EmptyArgumentListError",
    "ForeignSelectorError",
    "ImmutabilityViolation",
    "InvalidPropertiesError",
    "LocatorError",
    "LocatorMark",
    "LocatorNode",
    "LocatorOptions",
    "LocatorRegistry",
    "LocatorState",
    "LocatorTestUtils",
    "MissingLocatorError",
    "PrematureCallError",
    "ProductionLocator",
    "Selector",
    "SelectorFunctions",
    "SimpleLocatorKit",
    "attribute_css",
    "build_attributes",
    "build_test_id",
    "cache_key",
    "call_key",
    "create_root_locator",
    "create_selector_functions",
    "create_simple_locator",
    "create_test_utils",
    "css_from_attributes",
    "css_from_attributes_chain",
    "get_locator_parameters",
    "locator_from_properties",
    "remove_mark_from_properties",
]

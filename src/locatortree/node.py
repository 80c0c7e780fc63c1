from __future__ import annotations

import logging
import threading
from typing import Any

from .attributes import build_attributes, iter_parameter_attributes
from .cache_key import NO_ARGS_KEY, call_key
from .css import css_from_pairs
from .errors import ImmutabilityViolation
from .models import Attributes, LocatorMark, LocatorOptions, Parameters

ROOT_CHILD_NAME = "root"

LOGGER = logging.getLogger("locatortree.node")


class LocatorContext:
    """Shared state of one locator tree: options, activation and output mode.

    The base context is always active and renders attribute mappings.
    """

    def __init__(self, options: LocatorOptions | None = None) -> None:
        self.options = options or LocatorOptions()
        self.lock = threading.RLock()
        self.generation = 0

    def is_active(self) -> bool:
        return True

    def report_premature_call(self, node: LocatorNode) -> None:
        return None

    def create_child(self, parent: LocatorNode, name: str) -> LocatorNode:
        LOGGER.debug("Creating child locator %r under %s", name, parent.locator_id)
        return LocatorNode(self, name, parent)

    def render(self, node: LocatorNode, parameters: Parameters | None, has_parameters: bool) -> Any:
        opts = self.options
        path = node.locator_id

        if opts.map_attributes_chain is not None:
            attributes = build_attributes(
                path,
                parameters,
                id_attribute=opts.id_attribute,
                parameter_prefix=opts.parameter_prefix,
            )
            if has_parameters:
                return LocatorNode(self, node._name, node._parent, attributes)
            return opts.map_attributes_chain(node._attributes_chain())

        return build_attributes(
            LocatorMark(path, node, parameters),
            parameters,
            id_attribute=opts.id_attribute,
            parameter_prefix=opts.parameter_prefix,
        )


class LocatorNode:
    """One addressable path of a locator tree.

    Reading an attribute returns the child node with that name, created on
    first access. Calling the node returns its output for the given
    parameters, cached per parameter key. Nodes cannot be modified from the
    outside.
    """

    __slots__ = ("_context", "_name", "_parent", "_children", "_cache", "_generation", "_bound")

    def __init__(
        self,
        context: LocatorContext,
        name: str,
        parent: LocatorNode | None = None,
        bound_attributes: Attributes | None = None,
    ) -> None:
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_children", {})
        object.__setattr__(self, "_cache", {})
        object.__setattr__(self, "_generation", context.generation)
        object.__setattr__(self, "_bound", bound_attributes)

    @property
    def locator_id(self) -> str:
        if self._parent is None:
            return self._name
        return f"{self._parent.locator_id}{self._context.options.child_separator}{self._name}"

    def child(self, name: Any) -> LocatorNode:
        key = str(name)
        if key == ROOT_CHILD_NAME:
            return self
        node = self._children.get(key)
        if node is not None:
            return node
        with self._context.lock:
            node = self._children.get(key)
            if node is None:
                node = self._context.create_child(self, key)
                self._children[key] = node
        return node

    def _attributes_chain(self) -> list[Attributes]:
        opts = self._context.options
        chain = [self._bound or Attributes({opts.id_attribute: self.locator_id})]
        current = self._parent
        while current is not None:
            if current._bound is not None:
                chain.insert(0, current._bound)
            current = current._parent
        return chain

    def to_css(self, parameters: Parameters | None = None) -> str | None:
        context = self._context
        if not context.is_active():
            context.report_premature_call(self)
            return None
        opts = context.options
        pairs = [(opts.id_attribute, self.locator_id)]
        pairs.extend(iter_parameter_attributes(parameters, opts.parameter_prefix))
        return css_from_pairs(pairs, opts.wildcards)

    def to_json(self) -> str:
        return self.locator_id

    def __call__(self, *args: Any) -> Any:
        context = self._context
        if not context.is_active():
            context.report_premature_call(self)
            return None
        if len(args) > 1:
            raise TypeError(f"Locator {self.locator_id} accepts at most one parameters argument")

        key = call_key(args, context.options.distinguish_missing_parameters)
        cache = self._current_cache()
        if key in cache:
            return cache[key]

        with context.lock:
            cache = self._current_cache()
            if key not in cache:
                parameters = args[0] if args else None
                cache[key] = context.render(self, parameters, key != NO_ARGS_KEY)
            return cache[key]

    def _current_cache(self) -> dict[str, Any]:
        generation = self._context.generation
        if self._generation != generation:
            object.__setattr__(self, "_cache", {})
            object.__setattr__(self, "_generation", generation)
        return self._cache

    def __getattr__(self, name: str) -> LocatorNode:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self.child(name)

    def __getitem__(self, name: Any) -> LocatorNode:
        return self.child(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutabilityViolation(f"Cannot set {name!r} on locator {self.locator_id}")

    def __delattr__(self, name: str) -> None:
        raise ImmutabilityViolation(f"Cannot delete {name!r} from locator {self.locator_id}")

    def __setitem__(self, name: Any, value: Any) -> None:
        raise ImmutabilityViolation(f"Cannot set {name!r} on locator {self.locator_id}")

    def __delitem__(self, name: Any) -> None:
        raise ImmutabilityViolation(f"Cannot delete {name!r} from locator {self.locator_id}")

    def __str__(self) -> str:
        return self.locator_id

    def __repr__(self) -> str:
        return f"LocatorNode({self.locator_id!r})"


def node_options(node: LocatorNode) -> LocatorOptions:
    return node._context.options


def create_root_locator(prefix: str, options: LocatorOptions | None = None) -> Any:
    """Create an always-active attribute tree rooted at ``prefix``.

    Returns the production locator when ``options.is_production`` is set.
    """
    from .production import PRODUCTION_LOCATOR

    opts = options or LocatorOptions()
    if opts.is_production:
        return PRODUCTION_LOCATOR
    return LocatorNode(LocatorContext(opts), prefix)

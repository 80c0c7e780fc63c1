from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Iterator, Mapping

from .errors import DuplicateLocatorError, PrematureCallError
from .models import LocatorOptions, LocatorState
from .node import ROOT_CHILD_NAME, LocatorContext, LocatorNode
from .production import PRODUCTION_LOCATOR

LocatorTree = Mapping[str, Any]


@dataclass(slots=True)
class RegistryEntry:
    node: LocatorNode
    tree: LocatorTree = field(default_factory=dict)
    state: LocatorState = LocatorState.REGISTERED


class LocatorRegistry(LocatorContext):
    """Registry of named locator trees with two-phase setup.

    Trees are registered when modules are defined, before the attribute
    names and separator are known. ``activate`` later supplies the options,
    checks that every declared id is unique and that no locator was called
    too early, and from then on every node renders real attributes.
    """

    def __init__(self, *, production: bool | None = None) -> None:
        super().__init__(LocatorOptions())
        self.logger = logging.getLogger("locatortree.registry")
        self.production = LocatorOptions.from_env().is_production if production is None else production
        self._entries: list[RegistryEntry] = []
        self._index: dict[str, LocatorNode] = {}
        self._activated = False
        self._duplicate_ids: list[str] = []
        self._premature_id: str | None = None

    @property
    def activated(self) -> bool:
        return self._activated

    def is_active(self) -> bool:
        return self._activated

    def report_premature_call(self, node: LocatorNode) -> None:
        if self._premature_id is None:
            self._premature_id = node.locator_id
            self.logger.warning("Locator %s was called before options were set.", self._premature_id)

    def register(self, locator_id: str, tree: LocatorTree | None = None) -> Any:
        if not locator_id:
            raise ValueError("Locator id must be a non-empty string.")
        if self.production:
            return PRODUCTION_LOCATOR

        with self.lock:
            node = LocatorNode(self, locator_id)
            entry = RegistryEntry(node, dict(tree or {}))
            _materialize(node, entry.tree)

            if self._activated:
                declared: dict[str, LocatorNode] = {}
                for declared_id, declared_node in _declared_ids(node, entry.tree, self.options.child_separator):
                    if declared.get(declared_id) is declared_node:
                        continue
                    if declared_id in self._index or declared_id in declared:
                        self.logger.warning("Duplicate locator %s registered after activation.", declared_id)
                        raise DuplicateLocatorError(declared_id)
                    declared[declared_id] = declared_node
                self._index.update(declared)
                entry.state = LocatorState.ACTIVATED
            elif any(item.node.locator_id == locator_id for item in self._entries):
                entry.state = LocatorState.DUPLICATE
                self._duplicate_ids.append(locator_id)
                self.logger.warning("Duplicate locator %s registered.", locator_id)

            self._entries.append(entry)
            self.logger.debug("Registered locator %s", locator_id)
            return node

    def activate(self, options: LocatorOptions | Mapping[str, Any] | None = None) -> None:
        opts = _coerce_options(options)
        with self.lock:
            if self.production:
                self.options = opts
                self._activated = True
                return

            if self._duplicate_ids:
                raise DuplicateLocatorError(self._duplicate_ids[0])
            if self._premature_id is not None:
                raise PrematureCallError(self._premature_id)

            index: dict[str, LocatorNode] = {}
            for entry in self._entries:
                for declared_id, node in _declared_ids(entry.node, entry.tree, opts.child_separator):
                    if index.get(declared_id) is node:
                        continue
                    if declared_id in index:
                        entry.state = LocatorState.DUPLICATE
                        self._duplicate_ids.append(declared_id)
                        self.logger.warning("Duplicate locator %s found on activation.", declared_id)
                        raise DuplicateLocatorError(declared_id)
                    index[declared_id] = node

            self.options = opts
            self._index = index
            self._activated = True
            self.generation += 1
            for entry in self._entries:
                entry.state = LocatorState.ACTIVATED

        self.logger.info("Activated %d locators from %d trees.", len(index), len(self._entries))

    def state_of(self, locator_id: str) -> LocatorState:
        with self.lock:
            if locator_id in self._duplicate_ids:
                return LocatorState.DUPLICATE
            if self._activated:
                return LocatorState.ACTIVATED if locator_id in self._index else LocatorState.UNREGISTERED
            for entry in self._entries:
                if entry.node.locator_id == locator_id:
                    return entry.state
            return LocatorState.UNREGISTERED

    def get(self, locator_id: str) -> LocatorNode | None:
        return self._index.get(locator_id)

    def __contains__(self, locator_id: object) -> bool:
        return locator_id in self._index

    def __len__(self) -> int:
        return len(self._index)


def _coerce_options(options: LocatorOptions | Mapping[str, Any] | None) -> LocatorOptions:
    if options is None:
        return LocatorOptions()
    if isinstance(options, LocatorOptions):
        return options
    return LocatorOptions.from_mapping(options)


def _materialize(node: LocatorNode, tree: LocatorTree) -> None:
    for name, subtree in tree.items():
        child = node.child(name)
        if isinstance(subtree, Mapping):
            _materialize(child, subtree)


def _declared_ids(
    node: LocatorNode,
    tree: LocatorTree,
    separator: str,
    locator_id: str | None = None,
) -> Iterator[tuple[str, LocatorNode]]:
    """Yield every id a registered tree declares, resolved with ``separator``."""
    if locator_id is None:
        locator_id = node.locator_id
    yield locator_id, node
    yield from _declared_child_ids(node, tree, separator, locator_id)


def _declared_child_ids(
    node: LocatorNode,
    tree: LocatorTree,
    separator: str,
    locator_id: str,
) -> Iterator[tuple[str, LocatorNode]]:
    for name, subtree in tree.items():
        child_tree = subtree if isinstance(subtree, Mapping) else {}
        if str(name) == ROOT_CHILD_NAME:
            # "root" is the node itself, so its children belong to this node.
            yield from _declared_child_ids(node, child_tree, separator, locator_id)
            continue
        child = node.child(name)
        yield from _declared_ids(child, child_tree, separator, f"{locator_id}{separator}{name}")

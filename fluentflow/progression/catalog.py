"""
ModuleCatalog - Immutable snapshot of module definitions for one session.

Provides:
- Lookup by ID (tolerant and strict variants)
- Unit grouping in catalog order
- Authoring diagnostics: dangling prerequisites and prerequisite cycles
"""

import logging
from typing import Iterable, Iterator, Optional

import networkx as nx

from fluentflow.schemas import LearningModule

from .errors import CatalogError, UnknownModuleError

logger = logging.getLogger(__name__)


class ModuleCatalog:
    """
    Ordered, read-only collection of learning modules.

    Catalog order is the order modules were supplied in; every query that
    returns several modules preserves it. If module definitions change,
    build a new catalog instead of mutating this one.
    """

    def __init__(self, modules: Iterable[LearningModule]):
        self._modules: tuple[LearningModule, ...] = tuple(modules)
        self._index: dict[str, LearningModule] = {}
        for module in self._modules:
            if module.id in self._index:
                raise CatalogError(f"Duplicate module id in catalog: {module.id!r}")
            self._index[module.id] = module

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "ModuleCatalog":
        """Build a catalog from plain mappings (validated as LearningModule)."""
        return cls(LearningModule.model_validate(record) for record in records)

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[LearningModule]:
        return iter(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._index

    @property
    def modules(self) -> tuple[LearningModule, ...]:
        return self._modules

    @property
    def ids(self) -> list[str]:
        return [module.id for module in self._modules]

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, module_id: str) -> Optional[LearningModule]:
        """Get a module by ID, or None if it is not in the catalog."""
        return self._index.get(module_id)

    def require(self, module_id: str) -> LearningModule:
        """Get a module by ID, raising UnknownModuleError if absent."""
        module = self._index.get(module_id)
        if module is None:
            raise UnknownModuleError(module_id)
        return module

    # -------------------------------------------------------------------------
    # Units
    # -------------------------------------------------------------------------

    def units(self) -> list[int]:
        """Distinct unit numbers, ascending."""
        return sorted({module.unit for module in self._modules})

    def modules_by_unit(self, unit: int) -> list[LearningModule]:
        """Modules belonging to a unit, in catalog order."""
        return [module for module in self._modules if module.unit == unit]

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def dangling_prerequisites(self) -> dict[str, list[str]]:
        """
        Find prerequisite references to modules missing from the catalog.

        Returns:
            Mapping of module ID -> list of unknown prerequisite IDs
        """
        dangling = {}
        for module in self._modules:
            missing = [
                prereq for prereq in module.distinct_prerequisites
                if prereq not in self._index
            ]
            if missing:
                dangling[module.id] = missing
        return dangling

    def prerequisite_graph(self) -> nx.DiGraph:
        """Directed graph with an edge prerequisite -> dependent for each known reference."""
        graph = nx.DiGraph()
        graph.add_nodes_from(self._index)
        for module in self._modules:
            for prereq in module.distinct_prerequisites:
                if prereq in self._index:
                    graph.add_edge(prereq, module.id)
        return graph

    def prerequisite_cycles(self) -> list[list[str]]:
        """List prerequisite cycles (each as a list of module IDs)."""
        return [list(cycle) for cycle in nx.simple_cycles(self.prerequisite_graph())]

    def log_diagnostics(self):
        """Log authoring problems in the prerequisite data at WARNING level."""
        for module_id, missing in self.dangling_prerequisites().items():
            logger.warning(f"Module {module_id} references unknown prerequisites: {missing}")
        for cycle in self.prerequisite_cycles():
            logger.warning(f"Prerequisite cycle detected: {' -> '.join(cycle)}")

"""
ProgressionEngine - Entry point for module progression queries.

Owns the catalog and completion snapshot for one session and answers:
- Unlock status and module status
- Prerequisite lookups and progression paths
- Unit and overall statistics
- Next recommended module

Every query derives its answer from (catalog, completion set) at call
time. Mutations swap in a new immutable snapshot under a lock, so readers
always see a consistent catalog and completion set.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from fluentflow.schemas import (
    LearningModule,
    ModuleStatus,
    ProgressionStats,
    UnitCompletionStatus,
)

from . import path, recommend, stats, unlock
from .catalog import ModuleCatalog
from .errors import NotInitializedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    """Catalog plus completion set; completed_ids keeps insertion order."""
    catalog: ModuleCatalog
    completed_ids: tuple[str, ...]
    completed: frozenset[str]

    @classmethod
    def build(cls, catalog: ModuleCatalog, module_ids: Iterable[str]) -> "_Snapshot":
        ids = tuple(dict.fromkeys(module_ids))
        return cls(catalog=catalog, completed_ids=ids, completed=frozenset(ids))

    def with_completed(self, module_id: str) -> "_Snapshot":
        return _Snapshot(
            catalog=self.catalog,
            completed_ids=self.completed_ids + (module_id,),
            completed=self.completed | {module_id},
        )

    def stale_ids(self) -> list[str]:
        return [mid for mid in self.completed_ids if mid not in self.catalog]


class ProgressionEngine:
    """
    Module progression engine for one learner session.

    Construct one instance per session and pass it to whoever needs it.
    Call initialize() before any query.
    """

    def __init__(self, development_mode: bool = False):
        """
        Initialize engine.

        Args:
            development_mode: Treat every module as accessible in
                can_access_module/module_status/unlocked_modules_by_unit.
                Unlock predicates and stats still reflect real progress.
        """
        self.development_mode = development_mode
        self._snapshot: Optional[_Snapshot] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._snapshot is not None

    @property
    def generation(self) -> int:
        """Counter bumped on every mutation, usable as a cache key."""
        return self._generation

    @property
    def catalog(self) -> ModuleCatalog:
        return self._current().catalog

    def _current(self) -> _Snapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise NotInitializedError()
        return snapshot

    def _state(self) -> tuple[ModuleCatalog, frozenset[str]]:
        snapshot = self._current()
        return snapshot.catalog, snapshot.completed

    # -------------------------------------------------------------------------
    # Lifecycle / mutation
    # -------------------------------------------------------------------------

    def initialize(
        self,
        modules: Union[ModuleCatalog, Iterable[LearningModule]],
        completed_ids: Iterable[str] = (),
    ):
        """
        Load a catalog and the persisted completion set.

        Args:
            modules: ModuleCatalog or iterable of LearningModule
            completed_ids: Previously completed module IDs
        """
        catalog = modules if isinstance(modules, ModuleCatalog) else ModuleCatalog(modules)
        snapshot = _Snapshot.build(catalog, completed_ids)
        with self._lock:
            self._snapshot = snapshot
            self._generation += 1

        stale = snapshot.stale_ids()
        if stale:
            logger.warning(f"Ignoring completed module IDs not in catalog: {stale}")
        logger.debug(
            f"ProgressionEngine initialized: {len(catalog)} modules, "
            f"{len(snapshot.completed_ids)} completed"
        )

    def complete_module(self, module_id: str) -> list[LearningModule]:
        """
        Mark a module as completed.

        Idempotent: completing an already completed module changes nothing
        and returns an empty list.

        Returns:
            Modules that flipped from locked to unlocked because of this
            completion, in catalog order

        Raises:
            UnknownModuleError: If module_id is not in the catalog
        """
        with self._lock:
            before = self._current()
            catalog = before.catalog
            catalog.require(module_id)

            if module_id in before.completed:
                logger.debug(f"Module already completed: {module_id}")
                return []

            previously_locked = unlock.locked_modules(catalog, before.completed)
            after = before.with_completed(module_id)
            self._snapshot = after
            self._generation += 1

        newly_unlocked = [
            m for m in previously_locked
            if unlock.prerequisites_met(catalog, m, after.completed)
        ]
        logger.debug(
            f"Module completed: {module_id}, newly unlocked: "
            f"{[m.id for m in newly_unlocked]}"
        )
        return newly_unlocked

    def set_completed_modules(self, module_ids: Iterable[str]):
        """Replace the completion set wholesale (not a union)."""
        with self._lock:
            snapshot = _Snapshot.build(self._current().catalog, module_ids)
            self._snapshot = snapshot
            self._generation += 1

        stale = snapshot.stale_ids()
        if stale:
            logger.warning(f"Ignoring completed module IDs not in catalog: {stale}")
        logger.debug(f"Completed modules updated: {len(snapshot.completed_ids)}")

    def reset(self):
        """Clear all completions. The catalog is kept."""
        with self._lock:
            self._snapshot = _Snapshot.build(self._current().catalog, ())
            self._generation += 1
        logger.debug("Progression reset")

    # -------------------------------------------------------------------------
    # Completion queries
    # -------------------------------------------------------------------------

    def completed_module_ids(self) -> list[str]:
        """Completed module IDs in the order they were recorded."""
        return list(self._current().completed_ids)

    def get_module(self, module_id: str) -> LearningModule:
        return self._current().catalog.require(module_id)

    def is_completed(self, module_id: str) -> bool:
        catalog, completed = self._state()
        catalog.require(module_id)
        return module_id in completed

    # -------------------------------------------------------------------------
    # Unlock queries
    # -------------------------------------------------------------------------

    def is_unlocked(self, module_id: str) -> bool:
        catalog, completed = self._state()
        return unlock.is_unlocked(catalog, module_id, completed)

    def unlocked_modules(self) -> list[LearningModule]:
        catalog, completed = self._state()
        return unlock.unlocked_modules(catalog, completed)

    def locked_modules(self) -> list[LearningModule]:
        catalog, completed = self._state()
        return unlock.locked_modules(catalog, completed)

    def next_available_modules(self) -> list[LearningModule]:
        """Unlocked modules not yet completed."""
        catalog, completed = self._state()
        return unlock.next_available_modules(catalog, completed)

    def can_access_module(self, module_id: str) -> bool:
        """Like is_unlocked, but always True for known modules in development mode."""
        catalog, completed = self._state()
        if self.development_mode:
            catalog.require(module_id)
            return True
        return unlock.is_unlocked(catalog, module_id, completed)

    def module_status(self, module_id: str) -> ModuleStatus:
        """Get status for UI display: completed, unlocked or locked."""
        catalog, completed = self._state()
        catalog.require(module_id)
        if module_id in completed:
            return ModuleStatus.COMPLETED
        if self.development_mode or unlock.is_unlocked(catalog, module_id, completed):
            return ModuleStatus.UNLOCKED
        return ModuleStatus.LOCKED

    # -------------------------------------------------------------------------
    # Prerequisites and paths
    # -------------------------------------------------------------------------

    def get_module_prerequisites(self, module_id: str) -> list[LearningModule]:
        return unlock.module_prerequisites(self._current().catalog, module_id)

    def get_missing_prerequisites(self, module_id: str) -> list[LearningModule]:
        catalog, completed = self._state()
        return unlock.missing_prerequisites(catalog, module_id, completed)

    def progression_path(self, module_id: str) -> list[LearningModule]:
        return path.progression_path(self._current().catalog, module_id)

    # -------------------------------------------------------------------------
    # Units and statistics
    # -------------------------------------------------------------------------

    def modules_by_unit(self, unit: int) -> list[LearningModule]:
        return self._current().catalog.modules_by_unit(unit)

    def unlocked_modules_by_unit(self, unit: int) -> list[LearningModule]:
        catalog, completed = self._state()
        unit_modules = catalog.modules_by_unit(unit)
        if self.development_mode:
            return unit_modules
        return [m for m in unit_modules if unlock.prerequisites_met(catalog, m, completed)]

    def unit_completion_status(self, unit: int) -> UnitCompletionStatus:
        catalog, completed = self._state()
        return stats.unit_completion_status(catalog, unit, completed)

    def progression_stats(self) -> ProgressionStats:
        catalog, completed = self._state()
        return stats.progression_stats(catalog, completed)

    # -------------------------------------------------------------------------
    # Recommendation
    # -------------------------------------------------------------------------

    def next_recommended_module(self) -> Optional[LearningModule]:
        catalog, completed = self._state()
        return recommend.next_recommended_module(catalog, completed)

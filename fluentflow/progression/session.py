"""
ProgressionSession - Wire the catalog, persisted progress and engine.

Combines a ModuleCatalog (content) with a ProgressStore (learner state)
and keeps the ProgressionEngine in sync with the store.
"""

import logging
from typing import Optional

from fluentflow.schemas import LearningModule

from .catalog import ModuleCatalog
from .engine import ProgressionEngine
from .store import ProgressStore

logger = logging.getLogger(__name__)


class ProgressionSession:
    """
    One learner's progression session.

    The engine is initialized from the store on construction. Completions
    go to the engine first, then get persisted.
    """

    def __init__(
        self,
        catalog: ModuleCatalog,
        store: ProgressStore,
        engine: Optional[ProgressionEngine] = None,
    ):
        """
        Initialize session.

        Args:
            catalog: ModuleCatalog with all module definitions
            store: ProgressStore for the learner's completions
            engine: Engine to initialize (a fresh one by default)
        """
        self.catalog = catalog
        self.store = store
        self.engine = engine or ProgressionEngine()
        self.engine.initialize(catalog, store.get_completed_module_ids())

    @classmethod
    def from_settings(cls, catalog: ModuleCatalog, settings) -> "ProgressionSession":
        """Build a session using the store and development mode from Settings."""
        store = ProgressStore(settings.progress_db, learner_id=settings.learner_id)
        engine = ProgressionEngine(development_mode=settings.development_mode)
        return cls(catalog, store, engine)

    def complete_module(self, module_id: str, score: Optional[float] = None) -> list[LearningModule]:
        """
        Complete a module and persist it.

        Repeated completions still update best score and attempts in the
        store, but unlock nothing new.

        Returns:
            Newly unlocked modules (for an "unlocked!" notification)
        """
        newly_unlocked = self.engine.complete_module(module_id)
        self.store.record_completion(module_id, score)
        if newly_unlocked:
            logger.info(f"Completing {module_id} unlocked {[m.id for m in newly_unlocked]}")
        return newly_unlocked

    def reload_progress(self):
        """Replace the engine's completion set with what the store holds."""
        self.engine.set_completed_modules(self.store.get_completed_module_ids())

    def reset(self):
        """Reset all progress in both store and engine."""
        self.store.reset_all_progress()
        self.engine.reset()
        logger.info(f"Progress reset for learner {self.store.learner_id}")

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        stats = self.engine.progression_stats()
        recommended = self.engine.next_recommended_module()

        return {
            **stats.model_dump(),
            "completed_module_ids": self.engine.completed_module_ids(),
            "recommended_module_id": recommended.id if recommended else None,
            "generation": self.engine.generation,
        }

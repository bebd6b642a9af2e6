"""
Next-module recommendation.

Picks one module among the unlocked, not yet completed modules:
1. Lowest unit first
2. Within a unit, fewest prerequisites first
3. Exact ties keep catalog order (stable sort)
"""

from typing import AbstractSet, Optional

from fluentflow.schemas import LearningModule

from .catalog import ModuleCatalog
from .unlock import next_available_modules


def recommendation_key(module: LearningModule) -> tuple[int, int]:
    return (module.unit, len(module.distinct_prerequisites))


def rank_candidates(catalog: ModuleCatalog, completed: AbstractSet[str]) -> list[LearningModule]:
    """All candidate modules in recommendation order."""
    return sorted(next_available_modules(catalog, completed), key=recommendation_key)


def next_recommended_module(catalog: ModuleCatalog, completed: AbstractSet[str]) -> Optional[LearningModule]:
    """Get the recommended next module, or None if nothing is available."""
    ranked = rank_candidates(catalog, completed)
    if not ranked:
        return None
    return ranked[0]

"""
Unlock evaluation - decide which modules are reachable.

All functions are pure over (catalog, completed IDs) and are re-evaluated
on every call; nothing is cached.
"""

from typing import AbstractSet

from fluentflow.schemas import LearningModule

from .catalog import ModuleCatalog


def prerequisites_met(catalog: ModuleCatalog, module: LearningModule, completed: AbstractSet[str]) -> bool:
    """
    Check a module's prerequisites against the completion set.

    A prerequisite that is not in the catalog is never satisfied, even if
    its ID happens to be in the completion set.
    """
    return all(
        prereq in catalog and prereq in completed
        for prereq in module.prerequisites
    )


def is_unlocked(catalog: ModuleCatalog, module_id: str, completed: AbstractSet[str]) -> bool:
    """Check if a module is unlocked. Raises UnknownModuleError for unknown IDs."""
    module = catalog.require(module_id)
    return prerequisites_met(catalog, module, completed)


def unlocked_modules(catalog: ModuleCatalog, completed: AbstractSet[str]) -> list[LearningModule]:
    return [m for m in catalog if prerequisites_met(catalog, m, completed)]


def locked_modules(catalog: ModuleCatalog, completed: AbstractSet[str]) -> list[LearningModule]:
    return [m for m in catalog if not prerequisites_met(catalog, m, completed)]


def next_available_modules(catalog: ModuleCatalog, completed: AbstractSet[str]) -> list[LearningModule]:
    """Unlocked modules that are not completed yet, in catalog order."""
    return [
        m for m in catalog
        if m.id not in completed and prerequisites_met(catalog, m, completed)
    ]


def module_prerequisites(catalog: ModuleCatalog, module_id: str) -> list[LearningModule]:
    """
    Get the prerequisite modules of a module.

    Unknown prerequisite IDs are skipped and duplicates collapsed; an
    unknown module_id raises UnknownModuleError.
    """
    module = catalog.require(module_id)
    result = []
    for prereq_id in module.distinct_prerequisites:
        prereq = catalog.get(prereq_id)
        if prereq is not None:
            result.append(prereq)
    return result


def missing_prerequisites(catalog: ModuleCatalog, module_id: str, completed: AbstractSet[str]) -> list[LearningModule]:
    """Known prerequisite modules that are not completed yet."""
    return [
        prereq for prereq in module_prerequisites(catalog, module_id)
        if prereq.id not in completed
    ]

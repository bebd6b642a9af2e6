"""
Progression path resolution.

Resolves the ordered chain of prerequisites leading to a module,
prerequisites first and the target last. Traversal is depth-first and
guarded by a visited set, so cyclic or diamond-shaped prerequisite graphs
yield each module at most once, at its first-encountered position.
"""

from fluentflow.schemas import LearningModule

from .catalog import ModuleCatalog


def progression_path(catalog: ModuleCatalog, module_id: str) -> list[LearningModule]:
    """
    Get the progression path for a module.

    Args:
        catalog: Module catalog to traverse
        module_id: Target module ID (must exist in the catalog)

    Returns:
        Modules in completion order, ending with the target module.
        Prerequisite IDs missing from the catalog are skipped.

    Raises:
        UnknownModuleError: If module_id is not in the catalog
    """
    root = catalog.require(module_id)

    path: list[LearningModule] = []
    visited = {root.id}
    # Explicit stack of (module, remaining prerequisite IDs) so long chains
    # do not hit the interpreter recursion limit.
    stack = [(root, iter(root.prerequisites))]

    while stack:
        module, pending = stack[-1]
        for prereq_id in pending:
            if prereq_id in visited:
                continue
            visited.add(prereq_id)
            prereq = catalog.get(prereq_id)
            if prereq is None:
                continue
            stack.append((prereq, iter(prereq.prerequisites)))
            break
        else:
            stack.pop()
            path.append(module)

    return path

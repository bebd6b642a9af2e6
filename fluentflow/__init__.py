"""
FluentFlow - Module progression engine for a language-learning platform.

Subpackages:
- schemas: Pydantic models for modules, statistics and progress
- progression: Prerequisite graph, unlocking, paths, stats, recommendations
- utils: Settings and logging setup
"""

__version__ = "0.1.0"

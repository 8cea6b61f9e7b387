"""Read-only exercise catalog."""

from trainlog.catalog.exercise_catalog import DEFAULT_CATALOG_PATH, ExerciseCatalog, ExerciseDefinition

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "ExerciseCatalog",
    "ExerciseDefinition",
]

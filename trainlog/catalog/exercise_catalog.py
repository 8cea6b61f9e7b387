"""
Read-only exercise catalog.

A lookup table of exercise definitions keyed by exercise id, loaded from a
JSON file (the bundled ``exercises.json`` unless another path is given).
Sets and favorites reference exercises by id only; the catalog is never
written to.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional

from pydantic import BaseModel, Field, TypeAdapter

DEFAULT_CATALOG_PATH = Path(__file__).with_name("exercises.json")


class ExerciseDefinition(BaseModel):
    """One catalog entry."""

    id: str = Field(..., min_length=1)
    name: str
    name_ja: Optional[str] = None
    muscle_group: str
    equipment: str
    pattern: Optional[str] = None

    class Config:
        frozen = True


_DEFINITIONS = TypeAdapter(list[ExerciseDefinition])


class ExerciseCatalog:
    """Exercise definitions by id."""

    def __init__(self, exercises: Iterable[ExerciseDefinition]):
        self._exercises = MappingProxyType({exercise.id: exercise for exercise in exercises})

    @classmethod
    def from_json(cls, path: Optional[Path] = None) -> ExerciseCatalog:
        """Load a catalog file; raises ``pydantic.ValidationError`` on malformed entries."""
        path = path or DEFAULT_CATALOG_PATH
        return cls(_DEFINITIONS.validate_json(path.read_bytes()))

    def get(self, exercise_id: str) -> ExerciseDefinition | None:
        """Look up an exercise by its ID.  Returns ``None`` if not found."""
        return self._exercises.get(exercise_id)

    def ids(self) -> set[str]:
        return set(self._exercises)

    def all(self) -> list[ExerciseDefinition]:
        """Every exercise, sorted by name."""
        return sorted(self._exercises.values(), key=lambda exercise: exercise.name)

    def display_name(self, exercise_id: str, japanese: bool = False) -> str:
        """Localized name, falling back to the id for unknown exercises."""
        exercise = self.get(exercise_id)
        if exercise is None:
            return exercise_id
        if japanese and exercise.name_ja:
            return exercise.name_ja
        return exercise.name

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._exercises

    def __len__(self) -> int:
        return len(self._exercises)

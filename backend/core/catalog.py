"""
Exercise catalog.

The catalog is static reference data loaded once from YAML. It is exposed
as an immutable ExerciseCatalog that engine components receive as an
argument; nothing mutates it after load.
"""
import logging
import pathlib
from functools import lru_cache
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from application.exceptions import CatalogIntegrityError
from domain.models import DifficultyTier, Exercise

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]
DEFAULT_CATALOG_PATH = ROOT / "shared" / "dictionaries" / "exercise_catalog.yaml"


class ExerciseCatalog:
    """
    Immutable, validated collection of catalog exercises.

    Integrity rules (checked at construction):
    - exercise names are unique
    - at least one bodyweight-only beginner exercise exists, so every
      equipment set and every tier has something eligible
    - every muscle group has at least one bodyweight-only entry
    """

    def __init__(self, exercises: Iterable[Exercise]):
        self._exercises: Tuple[Exercise, ...] = tuple(exercises)
        self._by_name: Dict[str, Exercise] = {}
        for exercise in self._exercises:
            if exercise.name in self._by_name:
                raise CatalogIntegrityError(f"Duplicate exercise name: '{exercise.name}'")
            self._by_name[exercise.name] = exercise
        self._validate()

    def _validate(self) -> None:
        if not any(
            ex.is_bodyweight_only and ex.difficulty == DifficultyTier.BEGINNER
            for ex in self._exercises
        ):
            raise CatalogIntegrityError(
                "Catalog has no bodyweight-only beginner exercise"
            )

        covered = {ex.muscle_group for ex in self._exercises if ex.is_bodyweight_only}
        missing = sorted(self.muscle_groups - covered)
        if missing:
            raise CatalogIntegrityError(
                f"Muscle groups without a bodyweight-only fallback: {', '.join(missing)}"
            )

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> "ExerciseCatalog":
        """
        Build a catalog from raw mapping records (e.g. parsed YAML).

        Raises:
            CatalogIntegrityError: If a record is malformed or an integrity rule fails
        """
        exercises = []
        for index, record in enumerate(records or []):
            try:
                exercises.append(Exercise.model_validate(record))
            except ValidationError as e:
                name = record.get("name", f"#{index}") if isinstance(record, dict) else f"#{index}"
                raise CatalogIntegrityError(f"Invalid catalog entry {name}: {e}") from e
        return cls(exercises)

    @property
    def exercises(self) -> Tuple[Exercise, ...]:
        return self._exercises

    @property
    def muscle_groups(self) -> frozenset:
        return frozenset(ex.muscle_group for ex in self._exercises)

    def bodyweight_only(self) -> Tuple[Exercise, ...]:
        return tuple(ex for ex in self._exercises if ex.is_bodyweight_only)

    def lookup(self, name: str) -> Optional[Exercise]:
        """Look up an exercise by its unique name."""
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._exercises)

    def __len__(self) -> int:
        return len(self._exercises)


def load_catalog(path: Union[str, pathlib.Path, None] = None) -> ExerciseCatalog:
    """
    Load and validate the catalog from a YAML file.

    Args:
        path: YAML file path (defaults to the shipped catalog)

    Returns:
        Validated ExerciseCatalog
    """
    catalog_path = pathlib.Path(path) if path else DEFAULT_CATALOG_PATH
    records = yaml.safe_load(catalog_path.read_text())
    catalog = ExerciseCatalog.from_records(records)
    logger.debug(f"Loaded {len(catalog)} exercises from {catalog_path}")
    return catalog


@lru_cache
def get_catalog() -> ExerciseCatalog:
    """
    Get the process-wide catalog, loaded once on first use.

    For testing, clear the cache with get_catalog.cache_clear().
    """
    from backend.settings import get_settings

    return load_catalog(get_settings().catalog_path)

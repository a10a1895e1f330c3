"""
Progression Repository Interface (Port).

Progression rows are keyed by (user id, exercise name) and are upserted
after every completed session. Rows are only removed on account deletion.
"""
from typing import List, Protocol

from domain.models import ExerciseProgression


class ProgressionRepository(Protocol):
    """
    Abstract interface for per-exercise progression state.

    Concurrent completions for the same user are not guarded; the last
    writer wins.
    """

    def list_for_user(self, user_id: str) -> List[ExerciseProgression]:
        """
        Get all progression rows for a user.

        Args:
            user_id: User ID

        Returns:
            List of rows, in no particular order
        """
        ...

    def upsert(self, user_id: str, progression: ExerciseProgression) -> ExerciseProgression:
        """
        Insert or replace the row for progression.exercise_name.

        Args:
            user_id: User ID
            progression: Row to store

        Returns:
            The stored row
        """
        ...

    def delete_all(self, user_id: str) -> int:
        """
        Delete every progression row for a user (account deletion cascade).

        Returns:
            Number of rows deleted
        """
        ...

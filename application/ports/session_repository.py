"""
Session Repository Interface (Port).

Session history is append-only. Reads return sessions newest first.
"""
from typing import List, Optional, Protocol

from domain.models import WorkoutSession


class SessionRepository(Protocol):
    """Abstract interface for workout session history."""

    def append(self, user_id: str, session: WorkoutSession) -> WorkoutSession:
        """
        Append a completed session (with its rounds) to a user's history.

        Args:
            user_id: User ID
            session: Session record; never modified after this call

        Returns:
            The stored session
        """
        ...

    def list_recent(
        self,
        user_id: str,
        *,
        limit: Optional[int] = None,
    ) -> List[WorkoutSession]:
        """
        Get a user's sessions, newest first.

        Args:
            user_id: User ID
            limit: Maximum sessions to return, or None for the full history

        Returns:
            Sessions ordered by created_at descending
        """
        ...

    def delete_all(self, user_id: str) -> int:
        """
        Delete a user's full history (account deletion).

        Returns:
            Number of sessions deleted
        """
        ...

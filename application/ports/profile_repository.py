"""
Profile Repository Interface (Port).

Profiles are keyed by user id. The write path is used by onboarding,
goal changes and skill-score updates.
"""
from typing import Optional, Protocol

from domain.models import Profile


class ProfileRepository(Protocol):
    """Abstract interface for profile persistence."""

    def get(self, user_id: str) -> Optional[Profile]:
        """
        Get a user's profile.

        Args:
            user_id: User ID

        Returns:
            Profile or None if the user has not onboarded
        """
        ...

    def save(self, profile: Profile) -> Profile:
        """
        Create or replace a profile.

        Args:
            profile: Profile to store

        Returns:
            The stored profile
        """
        ...

    def delete(self, user_id: str) -> bool:
        """
        Delete a profile (account deletion).

        Returns:
            True if a profile was deleted
        """
        ...

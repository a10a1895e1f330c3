"""
Repository Interfaces (Ports) for the workout engine.

This package defines abstract interfaces that decouple the engine from
storage and from the source of randomness. Implementations are provided by
the storage collaborator (and by in-memory fakes under tests/fakes).

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations elsewhere (how it's provided)

Usage:
    from application.ports import SessionRepository

    class InsightsReader:
        def __init__(self, session_repo: SessionRepository):
            self.session_repo = session_repo

        def recent(self, user_id):
            return self.session_repo.list_recent(user_id, limit=8)
"""

# Profile persistence
from application.ports.profile_repository import ProfileRepository

# Session history (append-only)
from application.ports.session_repository import SessionRepository

# Per-exercise progression rows
from application.ports.progression_repository import ProgressionRepository

# Injectable randomness
from application.ports.random_source import RandomSource

__all__ = [
    "ProfileRepository",
    "SessionRepository",
    "ProgressionRepository",
    "RandomSource",
]

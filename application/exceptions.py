"""
Application-layer exceptions.

These exceptions are raised by the engine services and surfaced to the
calling transport layer.
"""


class EngineError(Exception):
    """Base class for workout engine errors."""

    pass


class CatalogIntegrityError(EngineError):
    """The exercise catalog violates an invariant the generator relies on.

    Raised when the catalog is loaded (duplicate names, missing tier targets,
    muscle groups without a bodyweight-only fallback) and, as a last resort,
    when generation finds no eligible exercise at all.
    """

    pass


class ProfileNotFoundError(EngineError):
    """No profile exists for the requested user."""

    def __init__(self, user_id: str):
        super().__init__(f"No profile found for user '{user_id}'")
        self.user_id = user_id

from __future__ import annotations


class RepoError(Exception):
    """Base class for errors the persistence layer surfaces to routes."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConflictError(RepoError):
    """A uniqueness rule would be broken (email, one rating per user and store)."""


class NotFoundError(RepoError):
    pass


class OwnerRoleError(RepoError):
    """Store owner reference points at a user without the STORE_OWNER role."""

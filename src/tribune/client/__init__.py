"""Board client: identity, repository, mutations and feed view."""

from .board import CommunityBoard
from .errors import BoardError, OwnershipError, RepositoryError, ValidationError
from .feed import FeedPresenter, FeedView, relative_time
from .identity import AuthState, AuthUser, Identity, IdentityResolver, can_modify
from .mutations import MutationKind, MutationOrchestrator
from .repository import BoardRepository
from .storage import JsonFileStore, MemoryStore

__all__ = [
    "CommunityBoard",
    "BoardError", "OwnershipError", "RepositoryError", "ValidationError",
    "FeedPresenter", "FeedView", "relative_time",
    "AuthState", "AuthUser", "Identity", "IdentityResolver", "can_modify",
    "MutationKind", "MutationOrchestrator",
    "BoardRepository",
    "JsonFileStore", "MemoryStore",
]

"""Fire-and-forget user notifications."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

# User-facing messages, in the board's locale.
POST_PUBLISHED = "Post publié avec succès !"
POST_UPDATED = "Post modifié avec succès !"
POST_DELETED = "Post supprimé"
COMMENT_DELETED = "Commentaire supprimé"
IMAGE_TOO_LARGE = "Image trop grande (max 2MB)"
TITLE_AND_CONTENT_REQUIRED = "Le titre et le contenu sont obligatoires"
COMMENT_REQUIRED = "Le commentaire ne peut pas être vide"
NOT_ALLOWED = "Action non autorisée"
ERROR_PREFIX = "Erreur : "
SHARE_ERROR_FALLBACK = "Assurez-vous d'avoir exécuté le script SQL."


def error_message(detail: str | None, fallback: str = "") -> str:
    """Format a failure notification carrying the underlying message."""
    return ERROR_PREFIX + (detail or fallback)


class Notifier(Protocol):
    """Notification surface; return values are never consumed."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes messages to the log."""

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)

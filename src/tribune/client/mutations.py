"""Write-side orchestration for the board.

Each write goes through :meth:`MutationOrchestrator._run`, which tracks a
pending counter per mutation kind, reports failures through the notifier
and leaves the compose form untouched on error so the user can retry.
Cache invalidation happens inside the repository write itself.
"""

from __future__ import annotations

import base64
import logging
import mimetypes
from collections import Counter
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tribune.client.errors import OwnershipError, RepositoryError, ValidationError
from tribune.client.identity import Identity, can_modify
from tribune.client.notifications import (
    COMMENT_DELETED,
    COMMENT_REQUIRED,
    IMAGE_TOO_LARGE,
    NOT_ALLOWED,
    POST_DELETED,
    POST_PUBLISHED,
    POST_UPDATED,
    SHARE_ERROR_FALLBACK,
    TITLE_AND_CONTENT_REQUIRED,
    Notifier,
    error_message,
)
from tribune.client.repository import BoardRepository
from tribune.schemas.post import CommentRow, PostRow, ReactionKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 2 * 1024 * 1024


class MutationKind(str, Enum):
    """Mutation families, each with its own pending flag."""

    SHARE = "share"
    DELETE = "delete"
    REACT = "react"
    COMMENT = "comment"
    DELETE_COMMENT = "delete_comment"


class EditMode(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


@dataclass
class ComposeForm:
    """Transient state of the post compose form."""

    title: str = ""
    content: str = ""
    image: str | None = None
    is_open: bool = False

    def reset(self) -> None:
        self.title = ""
        self.content = ""
        self.image = None
        self.is_open = False

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip() and self.content.strip())


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Inline binary content as a self-contained ``data:`` URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


class MutationOrchestrator:
    """Create, update, delete and react operations with UI-facing state."""

    def __init__(
        self,
        repository: BoardRepository,
        identity: Identity,
        notifier: Notifier,
        *,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
        anonymous_content_editable: bool = True,
    ) -> None:
        self.repository = repository
        self.identity = identity
        self.notifier = notifier
        self.max_image_bytes = max_image_bytes
        self.anonymous_content_editable = anonymous_content_editable
        self.form = ComposeForm()
        self.editing_id: str | None = None
        self._pending: Counter[MutationKind] = Counter()

    # State

    @property
    def mode(self) -> EditMode:
        return EditMode.EDITING if self.editing_id is not None else EditMode.IDLE

    def is_pending(self, kind: MutationKind) -> bool:
        """Return True while at least one mutation of ``kind`` is in flight."""
        return self._pending[kind] > 0

    @property
    def can_submit(self) -> bool:
        return self.form.is_complete and not self.is_pending(MutationKind.SHARE)

    def may_modify(self, owner_id: str | None) -> bool:
        return can_modify(
            owner_id,
            self.identity.user_id,
            anonymous_editable=self.anonymous_content_editable,
        )

    def _require_ownership(self, owner_id: str | None) -> None:
        if not self.may_modify(owner_id):
            raise OwnershipError(NOT_ALLOWED)

    def toggle_compose(self) -> bool:
        """Open or close the compose form; closing it abandons any edit."""
        if self.form.is_open:
            self.cancel_edit()
        else:
            self.form.is_open = True
        return self.form.is_open

    def start_edit(self, post: PostRow) -> None:
        """Enter edit mode for ``post``, replacing any edit already underway."""
        self._require_ownership(post.user_id)
        self.editing_id = post.id
        self.form.title = post.title
        self.form.content = post.content
        self.form.image = post.image_url
        self.form.is_open = True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.form.reset()

    # Images

    def attach_image(self, data: bytes, mime_type: str) -> str:
        """Inline an image on the compose form.

        Raises:
            ValidationError: If the image exceeds the size limit; nothing is
                uploaded and the form keeps its previous image.
        """
        if len(data) > self.max_image_bytes:
            self.notifier.error(IMAGE_TOO_LARGE)
            raise ValidationError(IMAGE_TOO_LARGE)
        self.form.image = encode_data_uri(data, mime_type)
        return self.form.image

    def attach_image_file(self, path: str | Path) -> str:
        """Read an image file from disk and inline it on the compose form."""
        path = Path(path)
        if path.stat().st_size > self.max_image_bytes:
            self.notifier.error(IMAGE_TOO_LARGE)
            raise ValidationError(IMAGE_TOO_LARGE)
        mime_type, _ = mimetypes.guess_type(path.name)
        if not mime_type or not mime_type.startswith("image/"):
            message = f"Format d'image non pris en charge : {path.name}"
            self.notifier.error(message)
            raise ValidationError(message)
        return self.attach_image(path.read_bytes(), mime_type)

    def clear_image(self) -> None:
        self.form.image = None

    # Mutations

    async def _run(
        self,
        kind: MutationKind,
        operation: Callable[[], Awaitable[None]],
        *,
        success_message: str | None = None,
        on_success: Callable[[], None] | None = None,
        error_fallback: str = "",
    ) -> bool:
        self._pending[kind] += 1
        try:
            await operation()
        except RepositoryError as exc:
            logger.warning("%s mutation failed: %s", kind.value, exc)
            self.notifier.error(error_message(exc.message, error_fallback))
            return False
        finally:
            self._pending[kind] -= 1

        if on_success is not None:
            on_success()
        if success_message:
            self.notifier.success(success_message)
        return True

    async def submit(self) -> bool:
        """Publish the compose form, or save it over the post being edited.

        Raises:
            ValidationError: If the title or content is blank.
        """
        if not self.form.is_complete:
            self.notifier.error(TITLE_AND_CONTENT_REQUIRED)
            raise ValidationError(TITLE_AND_CONTENT_REQUIRED)

        editing_id = self.editing_id
        title, content, image = self.form.title, self.form.content, self.form.image

        async def operation() -> None:
            if editing_id is not None:
                await self.repository.update_post(
                    editing_id, title=title, content=content, image_url=image
                )
            else:
                await self.repository.create_post(
                    title=title,
                    content=content,
                    image_url=image,
                    author_name=self.identity.display_name,
                    author_id=self.identity.user_id,
                )

        def on_success() -> None:
            # A newer edit started while saving keeps its own form state.
            if self.editing_id == editing_id:
                self.cancel_edit()

        return await self._run(
            MutationKind.SHARE,
            operation,
            success_message=POST_UPDATED if editing_id is not None else POST_PUBLISHED,
            on_success=on_success,
            error_fallback=SHARE_ERROR_FALLBACK,
        )

    async def delete_post(self, post: PostRow) -> bool:
        self._require_ownership(post.user_id)

        def on_success() -> None:
            if self.editing_id == post.id:
                self.cancel_edit()

        return await self._run(
            MutationKind.DELETE,
            lambda: self.repository.delete_post(post.id),
            success_message=POST_DELETED,
            on_success=on_success,
        )

    async def react(self, post_id: str, kind: ReactionKind) -> bool:
        return await self._run(MutationKind.REACT, lambda: self.repository.react(post_id, kind))

    async def like(self, post_id: str) -> bool:
        return await self.react(post_id, "likes")

    async def dislike(self, post_id: str) -> bool:
        return await self.react(post_id, "dislikes")

    async def add_comment(self, post_id: str, text: str) -> bool:
        """Attach a comment to a post; the text is stored verbatim.

        Raises:
            ValidationError: If the text is blank.
        """
        if not text.strip():
            self.notifier.error(COMMENT_REQUIRED)
            raise ValidationError(COMMENT_REQUIRED)
        return await self._run(
            MutationKind.COMMENT,
            lambda: self.repository.create_comment(
                post_id=post_id,
                content=text,
                author_name=self.identity.display_name,
                author_id=self.identity.user_id,
            ),
        )

    async def delete_comment(self, comment: CommentRow) -> bool:
        self._require_ownership(comment.user_id)
        return await self._run(
            MutationKind.DELETE_COMMENT,
            lambda: self.repository.delete_comment(comment.id),
            success_message=COMMENT_DELETED,
        )

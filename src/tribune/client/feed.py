"""Derived view state for the board feed.

Everything here is a pure function of repository data, the acting identity
and the current time, apart from :class:`CommentToggles`, which holds the
per-post "show comments" switches for the lifetime of a view.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from babel.dates import format_date, format_timedelta

from tribune.client.identity import Identity, can_modify
from tribune.client.repository import sort_comments
from tribune.db.time import ensure_aware, utcnow
from tribune.schemas.post import CommentRow, PostRow

ABSOLUTE_DATE_FORMAT = "d MMMM yyyy"
COMMENT_PREVIEW_COUNT = 2
IMPACT_POINTS_PER_LIKE = 10


def relative_time(
    timestamp: datetime | str | None,
    now: datetime | None = None,
    *,
    locale: str = "fr",
    window: timedelta = timedelta(days=7),
) -> str:
    """Render a timestamp relative to ``now``.

    Timestamps within ``window`` render as a relative phrase ("il y a 3
    heures"); older ones render as an absolute date ("9 octobre 2026").
    """
    if timestamp is None or timestamp == "":
        return ""
    if isinstance(timestamp, str):
        timestamp = datetime.fromisoformat(timestamp)
    timestamp = ensure_aware(timestamp)
    now = ensure_aware(now) if now is not None else utcnow()

    if now - timestamp > window:
        return format_date(timestamp, ABSOLUTE_DATE_FORMAT, locale=locale)
    return format_timedelta(timestamp - now, add_direction=True, locale=locale)


class CommentToggles:
    """Per-post comment visibility; hidden until toggled."""

    def __init__(self) -> None:
        self._expanded: set[str] = set()

    def is_expanded(self, post_id: str) -> bool:
        return post_id in self._expanded

    def toggle(self, post_id: str) -> bool:
        """Flip visibility for ``post_id`` and return the new state."""
        if post_id in self._expanded:
            self._expanded.discard(post_id)
            return False
        self._expanded.add(post_id)
        return True


@dataclass(frozen=True)
class CommentView:
    comment: CommentRow
    time_label: str
    can_delete: bool

    @property
    def author_initial(self) -> str:
        return self.comment.user_name[:1].upper()


@dataclass(frozen=True)
class PostView:
    """Display-ready projection of a post for one actor at one instant."""

    post: PostRow
    time_label: str
    can_edit: bool
    can_delete: bool
    comment_count: int
    comments_visible: bool
    comments: tuple[CommentView, ...] = field(default_factory=tuple)
    preview: tuple[CommentView, ...] = field(default_factory=tuple)
    is_editing: bool = False

    @property
    def author_initial(self) -> str:
        return self.post.user_name[:1].upper()


@dataclass(frozen=True)
class SidebarSummary:
    display_name: str
    initial: str
    post_count: int
    impact_score: int


@dataclass(frozen=True)
class FeedView:
    posts: tuple[PostView, ...]
    sidebar: SidebarSummary

    @property
    def is_empty(self) -> bool:
        return not self.posts


class FeedPresenter:
    """Build :class:`FeedView` snapshots from repository data."""

    def __init__(
        self,
        *,
        locale: str = "fr",
        relative_window: timedelta = timedelta(days=7),
        anonymous_content_editable: bool = True,
        guest_label: str = "Invité",
    ) -> None:
        self.locale = locale
        self.relative_window = relative_window
        self.anonymous_content_editable = anonymous_content_editable
        self.guest_label = guest_label
        self.toggles = CommentToggles()

    def toggle_comments(self, post_id: str) -> bool:
        return self.toggles.toggle(post_id)

    def time_label(self, timestamp: datetime | str | None, now: datetime) -> str:
        return relative_time(timestamp, now, locale=self.locale, window=self.relative_window)

    def _gate(self, owner_id: str | None, identity: Identity) -> bool:
        return can_modify(
            owner_id,
            identity.user_id,
            anonymous_editable=self.anonymous_content_editable,
        )

    def comment_view(self, comment: CommentRow, identity: Identity, now: datetime) -> CommentView:
        return CommentView(
            comment=comment,
            time_label=self.time_label(comment.created_at, now),
            can_delete=self._gate(comment.user_id, identity),
        )

    def post_view(
        self,
        post: PostRow,
        identity: Identity,
        now: datetime,
        *,
        editing_id: str | None = None,
    ) -> PostView:
        ordered = sort_comments(post.chat_comments)
        comment_views = tuple(self.comment_view(comment, identity, now) for comment in ordered)
        visible = self.toggles.is_expanded(post.id)
        allowed = self._gate(post.user_id, identity)
        return PostView(
            post=post,
            time_label=self.time_label(post.created_at, now),
            can_edit=allowed,
            can_delete=allowed,
            comment_count=len(comment_views),
            comments_visible=visible,
            comments=comment_views if visible else (),
            preview=comment_views[:COMMENT_PREVIEW_COUNT],
            is_editing=editing_id == post.id,
        )

    def sidebar(self, posts: Iterable[PostRow], identity: Identity) -> SidebarSummary:
        """Summarise the actor's own contributions."""
        if identity.user_id is None:
            owned: list[PostRow] = []
        else:
            owned = [post for post in posts if post.user_id == identity.user_id]
        return SidebarSummary(
            display_name=identity.display_name or self.guest_label,
            initial=identity.initial,
            post_count=len(owned),
            impact_score=IMPACT_POINTS_PER_LIKE * sum(post.likes for post in owned),
        )

    def build(
        self,
        posts: Sequence[PostRow],
        identity: Identity,
        now: datetime | None = None,
        *,
        editing_id: str | None = None,
    ) -> FeedView:
        now = now or utcnow()
        return FeedView(
            posts=tuple(
                self.post_view(post, identity, now, editing_id=editing_id) for post in posts
            ),
            sidebar=self.sidebar(posts, identity),
        )

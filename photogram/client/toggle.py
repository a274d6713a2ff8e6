"""Optimistic toggles for likes, bookmarks and follows.

A toggle shows its new value immediately, then settles to whatever the server
confirms. The server treats repeated creates and deletes as successes and
returns the resulting state, so a response never needs special handling
beyond reading ``active``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Idle:
    active: bool
    count: int


@dataclass(frozen=True, slots=True)
class Settled:
    active: bool
    count: int


@dataclass(frozen=True, slots=True)
class Pending:
    active: bool
    count: int
    previous: Idle | Settled


ToggleState = Union[Idle, Pending, Settled]


@dataclass(frozen=True, slots=True)
class Requested:
    pass


@dataclass(frozen=True, slots=True)
class Confirmed:
    active: bool


@dataclass(frozen=True, slots=True)
class Failed:
    error: Exception


Outcome = Union[Requested, Confirmed, Failed]


def reconcile(state: ToggleState, outcome: Outcome) -> ToggleState:
    if isinstance(outcome, Requested):
        if isinstance(state, Pending):
            return state
        flipped = not state.active
        count = max(state.count + (1 if flipped else -1), 0)
        return Pending(active=flipped, count=count, previous=state)

    if not isinstance(state, Pending):
        return state

    previous = state.previous
    if isinstance(outcome, Failed):
        return Settled(active=previous.active, count=previous.count)

    count = max(previous.count + int(outcome.active) - int(previous.active), 0)
    return Settled(active=outcome.active, count=count)


class InteractionToggle:
    def __init__(
        self,
        *,
        active: bool,
        count: int = 0,
        activate: Callable[[], Awaitable[dict[str, Any]]],
        deactivate: Callable[[], Awaitable[dict[str, Any]]],
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self.state: ToggleState = Idle(active=active, count=count)
        self._activate = activate
        self._deactivate = deactivate
        self._on_error = on_error

    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def pending(self) -> bool:
        return isinstance(self.state, Pending)

    async def toggle(self) -> bool:
        """Flip the flag and sync it with the server. Returns False when a toggle is already in flight."""
        if self.pending:
            return False

        self.state = reconcile(self.state, Requested())
        call = self._activate if self.state.active else self._deactivate
        try:
            response = await call()
            confirmed = bool(response.get("active", self.state.active))
        except Exception as exc:
            # any failure must leave Pending, or later toggles are ignored
            self.state = reconcile(self.state, Failed(exc))
            if self._on_error is not None:
                self._on_error(exc)
            return True

        self.state = reconcile(self.state, Confirmed(confirmed))
        return True


def like_toggle(client, post_id, *, liked: bool, likes_count: int, on_error=None) -> InteractionToggle:
    return InteractionToggle(
        active=liked,
        count=likes_count,
        activate=lambda: client.like_post(post_id),
        deactivate=lambda: client.unlike_post(post_id),
        on_error=on_error,
    )


def bookmark_toggle(client, post_id, *, bookmarked: bool, on_error=None) -> InteractionToggle:
    return InteractionToggle(
        active=bookmarked,
        activate=lambda: client.bookmark_post(post_id),
        deactivate=lambda: client.unbookmark_post(post_id),
        on_error=on_error,
    )


def follow_toggle(client, user_id, *, following: bool, followers_count: int, on_error=None) -> InteractionToggle:
    return InteractionToggle(
        active=following,
        count=followers_count,
        activate=lambda: client.follow_user(user_id),
        deactivate=lambda: client.unfollow_user(user_id),
        on_error=on_error,
    )

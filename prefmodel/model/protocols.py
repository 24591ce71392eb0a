"""
Read contract shared by every data model backing.

Downstream correlation and recommendation code depends on these protocols
only, so file-backed or remote models can stand in for the in-memory one.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence, runtime_checkable

from .entities import Item, Preference, User


@runtime_checkable
class Refreshable(Protocol):
    def refresh(self) -> None:
        """Reload or recompute any derived state."""


@runtime_checkable
class DataModel(Refreshable, Protocol):
    """Lookup and iteration over users, items and preferences by item."""

    def get_users(self) -> Iterable[User]:
        ...

    def get_user(self, user_id: Any) -> User:
        ...

    def get_items(self) -> Iterable[Item]:
        ...

    def get_item(self, item_id: Any) -> Item:
        ...

    def get_preferences_for_item(self, item_id: Any) -> Iterable[Preference]:
        ...

    def get_preferences_for_item_as_array(self, item_id: Any) -> Sequence[Preference]:
        ...

    def get_num_users(self) -> int:
        ...

    def get_num_items(self) -> int:
        ...

    def set_preference(self, user_id: Any, item_id: Any, value: float) -> None:
        ...

    def remove_preference(self, user_id: Any, item_id: Any) -> None:
        ...

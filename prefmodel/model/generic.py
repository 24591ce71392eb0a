"""
Immutable in-memory data model.

`GenericDataModel` is built once from a collection of users and answers every
read from frozen indices. It is safe to share between threads without
locking once construction has returned.
"""

from __future__ import annotations

from typing import Any, Iterable, NoReturn

from ..errors import InvalidArgumentError, NotFoundError, UnsupportedOperationError
from .builder import DuplicatePolicy, ModelIndices, build_indices
from .entities import Item, Preference, User
from .protocols import DataModel
from .views import EMPTY_VIEW, ArrayView

NO_PREFERENCES: tuple[Preference, ...] = ()


class GenericDataModel:
    """
    Read-only snapshot of users, items and preferences.

    Parameters
    ----------
    users:
        Users (with their preferences) to index.
    on_duplicate:
        Policy for repeated user ids, see `build_indices`.
    """

    _indices: ModelIndices
    _users_view: ArrayView[User]
    _items_view: ArrayView[Item]

    def __init__(
        self,
        users: Iterable[User] | None,
        *,
        on_duplicate: DuplicatePolicy = "last",
    ) -> None:
        indices = build_indices(users, on_duplicate=on_duplicate)
        object.__setattr__(self, "_indices", indices)
        object.__setattr__(self, "_users_view", ArrayView(indices.users))
        object.__setattr__(self, "_items_view", ArrayView(indices.items))

    @classmethod
    def from_data_model(
        cls,
        data_model: DataModel | None,
        *,
        on_duplicate: DuplicatePolicy = "last",
    ) -> "GenericDataModel":
        """Snapshot another data model by re-indexing its user listing."""
        if data_model is None:
            raise InvalidArgumentError("data_model is None")
        return cls(data_model.get_users(), on_duplicate=on_duplicate)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise UnsupportedOperationError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> NoReturn:
        raise UnsupportedOperationError(f"{type(self).__name__} is read-only")

    def get_users(self) -> ArrayView[User]:
        return self._users_view

    def get_user(self, user_id: Any) -> User:
        try:
            return self._indices.user_by_id[user_id]
        except KeyError as exc:
            raise NotFoundError(f"No user with id {user_id!r}") from exc

    def get_items(self) -> ArrayView[Item]:
        return self._items_view

    def get_item(self, item_id: Any) -> Item:
        try:
            return self._indices.item_by_id[item_id]
        except KeyError as exc:
            raise NotFoundError(f"No item with id {item_id!r}") from exc

    def get_preferences_for_item(self, item_id: Any) -> ArrayView[Preference]:
        prefs = self._indices.preferences_by_item.get(item_id)
        return EMPTY_VIEW if prefs is None else ArrayView(prefs)

    def get_preferences_for_item_as_array(self, item_id: Any) -> tuple[Preference, ...]:
        return self._indices.preferences_by_item.get(item_id, NO_PREFERENCES)

    def get_num_users(self) -> int:
        return len(self._indices.users)

    def get_num_items(self) -> int:
        return len(self._indices.items)

    def set_preference(self, user_id: Any, item_id: Any, value: float) -> NoReturn:
        raise UnsupportedOperationError(f"{type(self).__name__} does not support set_preference")

    def remove_preference(self, user_id: Any, item_id: Any) -> NoReturn:
        raise UnsupportedOperationError(f"{type(self).__name__} does not support remove_preference")

    def refresh(self) -> None:
        # Fully materialised at construction; nothing to reload.
        pass

    def __repr__(self) -> str:
        return (
            f"GenericDataModel(users={self.get_num_users()}, "
            f"items={self.get_num_items()})"
        )

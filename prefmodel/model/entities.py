"""
User, item and preference value types.

Users own their preferences: constructing a `User` binds each preference's
`user` slot to that user, so a preference reached through an item index can
always be traced back to its owner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..errors import InvalidArgumentError


@dataclass(frozen=True, order=True)
class Item:
    """An item identified solely by its id."""

    id: Any


@dataclass(eq=False, repr=False)
class Preference:
    """
    A numeric preference of one user for one item.

    Preferences compare by identity: two users rating the same item with the
    same value still hold distinct preferences.
    """

    item: Item
    value: float
    user: Optional["User"] = None

    def __post_init__(self) -> None:
        self.value = float(self.value)

    def __repr__(self) -> str:
        user_id = self.user.id if self.user is not None else None
        return f"Preference(user={user_id!r}, item={self.item.id!r}, value={self.value!r})"


@dataclass(frozen=True, order=True)
class User:
    """
    A user and the preferences it owns.

    Preferences are stored sorted by item id. A user may hold at most one
    preference per item, and a preference may belong to only one user.

    Parameters
    ----------
    id:
        Opaque, hashable and mutually comparable identifier.
    preferences:
        Preferences to take ownership of. Their `user` slot must be unset or
        already point at this user.
    """

    id: Any
    preferences: tuple[Preference, ...] = field(default=(), compare=False, repr=False)
    _by_item: Mapping[Any, Preference] = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.preferences is None:
            raise InvalidArgumentError(f"preferences for user {self.id!r} is None")

        by_item: dict[Any, Preference] = {}
        for preference in self.preferences:
            item_id = preference.item.id
            if item_id in by_item:
                raise InvalidArgumentError(
                    f"User {self.id!r} holds more than one preference for item {item_id!r}"
                )
            if preference.user is not None and preference.user is not self:
                raise InvalidArgumentError(
                    f"Preference for item {item_id!r} already belongs to user {preference.user.id!r}"
                )
            by_item[item_id] = preference

        for preference in by_item.values():
            preference.user = self

        ordered = tuple(sorted(by_item.values(), key=lambda pref: pref.item))
        object.__setattr__(self, "preferences", ordered)
        object.__setattr__(self, "_by_item", MappingProxyType(by_item))

    def get_preferences_as_array(self) -> tuple[Preference, ...]:
        return self.preferences

    def get_preference_for(self, item_id: Any) -> Optional[Preference]:
        """Return this user's preference for `item_id`, or None."""
        return self._by_item.get(item_id)


def make_user(user_id: Any, ratings: Iterable[tuple[Item, float]]) -> User:
    """Build a user from `(item, value)` pairs."""
    return User(user_id, tuple(Preference(item, value) for item, value in ratings))

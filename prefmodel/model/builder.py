"""
One-shot construction of the frozen indices behind a data model.

Building happens in two explicit phases. The accumulation phase walks the
users once, indexing users and items by id and collecting each item's
preferences into a growable list. The freeze phase sorts the listings and
turns every per-item list into a tuple ordered by owning user.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Literal, Mapping

from loguru import logger

from ..errors import InvalidArgumentError
from .entities import Item, Preference, User
from .ordering import by_user_key

DuplicatePolicy = Literal["last", "error"]
DUPLICATE_POLICIES: frozenset[str] = frozenset({"last", "error"})


@dataclass(frozen=True)
class ModelIndices:
    """Frozen lookup structures produced by `build_indices`."""

    users: tuple[User, ...]
    items: tuple[Item, ...]
    user_by_id: Mapping[Any, User]
    item_by_id: Mapping[Any, Item]
    preferences_by_item: Mapping[Any, tuple[Preference, ...]]

    @property
    def num_preferences(self) -> int:
        return sum(len(prefs) for prefs in self.preferences_by_item.values())


def _index_users(users: Iterable[User], on_duplicate: DuplicatePolicy) -> dict[Any, User]:
    user_by_id: dict[Any, User] = {}
    replaced = 0
    for user in users:
        if user.id in user_by_id:
            if on_duplicate == "error":
                raise InvalidArgumentError(f"Duplicate user id {user.id!r} in input")
            replaced += 1
        user_by_id[user.id] = user

    if replaced:
        logger.warning(
            "Replaced {} users whose id appeared more than once; the last occurrence wins.",
            replaced,
        )
    return user_by_id


def _accumulate(
    users: Iterable[User],
) -> tuple[dict[Any, Item], dict[Any, list[Preference]]]:
    item_by_id: dict[Any, Item] = {}
    accumulated: defaultdict[Any, list[Preference]] = defaultdict(list)
    for user in users:
        for preference in user.get_preferences_as_array():
            if preference.user is not user:
                raise InvalidArgumentError(
                    f"Preference for item {preference.item.id!r} listed by user {user.id!r} "
                    "is not owned by that user"
                )
            item = preference.item
            item_by_id[item.id] = item
            accumulated[item.id].append(preference)
    return item_by_id, accumulated


def _freeze(
    accumulated: Mapping[Any, list[Preference]],
) -> dict[Any, tuple[Preference, ...]]:
    return {
        item_id: tuple(sorted(prefs, key=by_user_key))
        for item_id, prefs in accumulated.items()
    }


def build_indices(
    users: Iterable[User] | None,
    *,
    on_duplicate: DuplicatePolicy = "last",
) -> ModelIndices:
    """
    Index `users` by id, their items by id, and their preferences by item.

    Parameters
    ----------
    users:
        Users to index. Consumed exactly once, so generators are accepted.
    on_duplicate:
        ``"last"`` keeps the last user seen for a repeated id and drops the
        earlier one together with its preferences. ``"error"`` raises
        `InvalidArgumentError` on the first repeated id.

    Nothing is returned until every index is complete; an exception raised
    while reading a user propagates and leaves no partial result behind.
    """
    if users is None:
        raise InvalidArgumentError("users is None")
    if on_duplicate not in DUPLICATE_POLICIES:
        raise InvalidArgumentError(
            f"on_duplicate must be one of {sorted(DUPLICATE_POLICIES)}, got {on_duplicate!r}"
        )

    user_by_id = _index_users(users, on_duplicate)
    item_by_id, accumulated = _accumulate(user_by_id.values())
    preferences_by_item = _freeze(accumulated)

    indices = ModelIndices(
        users=tuple(sorted(user_by_id.values())),
        items=tuple(sorted(item_by_id.values())),
        user_by_id=MappingProxyType(user_by_id),
        item_by_id=MappingProxyType(item_by_id),
        preferences_by_item=MappingProxyType(preferences_by_item),
    )
    logger.debug(
        "Indexed {} users, {} items and {} preferences",
        len(indices.users),
        len(indices.items),
        indices.num_preferences,
    )
    return indices

"""
Ordering of preferences by owning user.

Every per-item preference list in a data model is sorted with this policy so
that two lists can be merge-joined on user without re-sorting at query time.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .entities import Preference, User


def by_user_key(preference: Preference) -> User:
    """
    Sort key for preferences.

    Users order by id, so sorting on the owning user is sorting on its id, with
    the user's own comparison as the tie-breaker.
    """
    return preference.user  # type: ignore[return-value]


def compare_by_user(first: Preference, second: Preference) -> int:
    """Three-way comparison of two preferences by owning user."""
    first_user, second_user = by_user_key(first), by_user_key(second)
    if first_user < second_user:
        return -1
    if second_user < first_user:
        return 1
    return 0


def iter_co_rated(
    first: Iterable[Preference],
    second: Iterable[Preference],
) -> Iterator[tuple[Preference, Preference]]:
    """
    Yield preference pairs from two user-ordered lists that share a user.

    Both inputs must already be sorted with `by_user_key`, as the lists
    returned by a data model are.
    """
    left_iter, right_iter = iter(first), iter(second)
    left = next(left_iter, None)
    right = next(right_iter, None)
    while left is not None and right is not None:
        order = compare_by_user(left, right)
        if order == 0:
            yield left, right
            left = next(left_iter, None)
            right = next(right_iter, None)
        elif order < 0:
            left = next(left_iter, None)
        else:
            right = next(right_iter, None)

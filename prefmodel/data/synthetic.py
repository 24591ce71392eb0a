"""Random preference data for exercising a data model under load."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..model import Item, Preference, User


def generate_users(
    num_users: int = 1600,
    num_items: int = 800,
    max_prefs: int = 20,
    *,
    seed: Optional[int] = None,
) -> list[User]:
    """
    Draw users with between one and `max_prefs` preferences each.

    Ids are the decimal strings ``"0" .. str(n - 1)``. Each user rates
    distinct items, with values uniform in ``[0, 1)``.
    """
    if num_users < 0:
        raise ValueError("num_users must not be negative.")
    if num_items <= 0:
        raise ValueError("num_items must be greater than zero.")
    if max_prefs <= 0:
        raise ValueError("max_prefs must be greater than zero.")

    rng = np.random.default_rng(seed)
    items = [Item(str(idx)) for idx in range(num_items)]
    users: list[User] = []
    for user_idx in range(num_users):
        num_prefs = min(int(rng.integers(1, max_prefs + 1)), num_items)
        chosen = rng.choice(num_items, size=num_prefs, replace=False)
        values = rng.random(num_prefs)
        prefs = tuple(
            Preference(items[int(item_idx)], float(value))
            for item_idx, value in zip(chosen, values)
        )
        users.append(User(str(user_idx), prefs))
    return users

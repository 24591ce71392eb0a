"""
Typed loading helpers that turn tabular preference data into users.

Rows are `(user, item, value)` triples. Ids are read as strings so that
`"007"` and `"7"` stay distinct users and every id in a model compares
against every other.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pandas as pd
from loguru import logger

from ..errors import InvalidArgumentError
from ..model import DuplicatePolicy, GenericDataModel, Item, Preference, User

DEFAULT_USER_COL = "user_id"
DEFAULT_ITEM_COL = "item_id"
DEFAULT_VALUE_COL = "value"


def _read_csv(
    path: Path, *, dtype: Optional[dict[str, str]] = None, nrows: Optional[int] = None
) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Expected CSV at {path} but file was not found.")
    return pd.read_csv(path, dtype=dtype, nrows=nrows)


def load_preferences(
    path: Path,
    *,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
    value_col: str = DEFAULT_VALUE_COL,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """
    Load preference rows from a CSV file.

    Parameters
    ----------
    path:
        CSV with at least the user, item and value columns.
    limit:
        Read at most this many rows.
    """
    dtype = {user_col: "string", item_col: "string", value_col: "float64"}
    return _read_csv(path, dtype=dtype, nrows=limit)


def users_from_frame(
    frame: pd.DataFrame,
    *,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
    value_col: str = DEFAULT_VALUE_COL,
) -> list[User]:
    """
    Group preference rows into users.

    Rows missing any of the three fields are dropped. When a user rates the
    same item more than once, the last row wins. All users share one `Item`
    instance per item id.
    """
    missing = [col for col in (user_col, item_col, value_col) if col not in frame.columns]
    if missing:
        raise InvalidArgumentError(f"Preferences must contain columns {missing}.")

    cleaned = frame.dropna(subset=[user_col, item_col, value_col])
    dropped = len(frame) - len(cleaned)
    if dropped > 0:
        logger.info("Dropped {} preference rows with missing fields.", dropped)

    deduplicated = cleaned.drop_duplicates(subset=[user_col, item_col], keep="last")
    repeated = len(cleaned) - len(deduplicated)
    if repeated > 0:
        logger.info("Collapsed {} repeated (user, item) rows, keeping the last value.", repeated)

    items: dict[Any, Item] = {}
    grouped: dict[Any, list[Preference]] = {}
    for user_id, item_id, value in zip(
        deduplicated[user_col].tolist(),
        deduplicated[item_col].tolist(),
        deduplicated[value_col].astype("float64").tolist(),
    ):
        item = items.get(item_id)
        if item is None:
            item = items[item_id] = Item(item_id)
        grouped.setdefault(user_id, []).append(Preference(item, value))

    return [User(user_id, tuple(prefs)) for user_id, prefs in grouped.items()]


def load_data_model(
    path: Path,
    *,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
    value_col: str = DEFAULT_VALUE_COL,
    limit: Optional[int] = None,
    on_duplicate: DuplicatePolicy = "last",
) -> GenericDataModel:
    """Convenience wrapper: read a CSV and index it into a data model."""
    frame = load_preferences(
        path, user_col=user_col, item_col=item_col, value_col=value_col, limit=limit
    )
    users = users_from_frame(frame, user_col=user_col, item_col=item_col, value_col=value_col)
    logger.info("Loaded {} preference rows for {} users from {}", len(frame), len(users), path)
    return GenericDataModel(users, on_duplicate=on_duplicate)

"""
In-memory preference data model.

The package is split into the read-only model itself (entities, ordering,
index construction), input helpers that turn files or synthetic draws into
users, and an evaluation harness that exercises the model under concurrent
read load.
"""

from .errors import (  # noqa: F401
    InvalidArgumentError,
    NotFoundError,
    TasteError,
    UnsupportedOperationError,
)
from .model import (  # noqa: F401
    DataModel,
    GenericDataModel,
    Item,
    Preference,
    User,
)

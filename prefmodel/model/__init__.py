"""Entities, ordering and the immutable in-memory data model."""

from .builder import DuplicatePolicy, ModelIndices, build_indices  # noqa: F401
from .entities import Item, Preference, User, make_user  # noqa: F401
from .generic import NO_PREFERENCES, GenericDataModel  # noqa: F401
from .ordering import by_user_key, compare_by_user, iter_co_rated  # noqa: F401
from .protocols import DataModel, Refreshable  # noqa: F401
from .views import EMPTY_VIEW, ArrayView  # noqa: F401

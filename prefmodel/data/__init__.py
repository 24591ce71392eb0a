"""Construction inputs: tabular loaders and synthetic generators."""

from .loaders import load_data_model, load_preferences, users_from_frame  # noqa: F401
from .synthetic import generate_users  # noqa: F401

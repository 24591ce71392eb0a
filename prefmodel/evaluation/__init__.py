"""Load harness for exercising data models under concurrent reads."""

from .load import LoadConfig, LoadReport, check_item_preferences, run_read_load  # noqa: F401

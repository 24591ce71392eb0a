"""
Config-driven orchestration for the command-line scripts.

Keeps the scripts thin: they parse arguments and load YAML, everything else
happens here where it can be tested.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from loguru import logger

from ..data import generate_users, load_data_model
from ..evaluation import LoadConfig, LoadReport, run_read_load
from ..model import GenericDataModel
from ..utils import get_by_dotted_path


def build_model_from_config(config: Mapping[str, Any]) -> GenericDataModel:
    """
    Build a data model from the ``data`` and ``synthetic`` config sections.

    A configured ``data.preferences_file`` is loaded from CSV; otherwise users
    are drawn with `generate_users`.
    """
    on_duplicate = get_by_dotted_path(config, "data.on_duplicate", "last")
    preferences_file = get_by_dotted_path(config, "data.preferences_file")

    if preferences_file:
        logger.info("Loading preferences from {}", preferences_file)
        model = load_data_model(
            Path(preferences_file),
            user_col=get_by_dotted_path(config, "data.user_col", "user_id"),
            item_col=get_by_dotted_path(config, "data.item_col", "item_id"),
            value_col=get_by_dotted_path(config, "data.value_col", "value"),
            limit=get_by_dotted_path(config, "data.limit"),
            on_duplicate=on_duplicate,
        )
    else:
        synthetic_cfg = get_by_dotted_path(config, "synthetic", {}) or {}
        logger.info("Generating synthetic preferences with {}", synthetic_cfg)
        users = generate_users(
            int(synthetic_cfg.get("num_users", 1600)),
            int(synthetic_cfg.get("num_items", 800)),
            int(synthetic_cfg.get("max_prefs", 20)),
            seed=synthetic_cfg.get("seed"),
        )
        model = GenericDataModel(users, on_duplicate=on_duplicate)

    logger.info("Built {}", model)
    return model


def run_load_from_config(config: Mapping[str, Any]) -> LoadReport:
    """Build the configured model and run the read load harness against it."""
    model = build_model_from_config(config)
    load_cfg = get_by_dotted_path(config, "load", {}) or {}
    load_config = LoadConfig(
        num_threads=int(load_cfg.get("num_threads", 4)),
        requests_per_thread=int(load_cfg.get("requests_per_thread", 800)),
        absent_id_fraction=float(load_cfg.get("absent_id_fraction", 0.1)),
        seed=load_cfg.get("seed"),
    )
    return run_read_load(model, load_config)

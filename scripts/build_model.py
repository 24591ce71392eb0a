"""Build a data model from configuration and log its shape."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from loguru import logger

from prefmodel.pipelines import build_model_from_config
from prefmodel.utils import apply_overrides, load_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/default.yaml"),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value, e.g. --set data.limit=1000.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = apply_overrides(load_config(args.config), args.overrides)
    model = build_model_from_config(config)

    num_prefs = sum(
        len(model.get_preferences_for_item_as_array(item.id)) for item in model.get_items()
    )
    logger.info(
        "Counts | users={} items={} preferences={}",
        model.get_num_users(),
        model.get_num_items(),
        num_prefs,
    )


if __name__ == "__main__":
    main()

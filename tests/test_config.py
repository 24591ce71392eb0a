from pathlib import Path

import pytest

from prefmodel.utils import (
    apply_overrides,
    clone_config,
    get_by_dotted_path,
    load_config,
    set_by_dotted_path,
)


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("load:\n  num_threads: 2\ndata:\n  limit: null\n", encoding="utf-8")

    config = load_config(config_file)

    assert config["load"]["num_threads"] == 2
    assert config["data"]["limit"] is None


def test_load_config_empty_file(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")

    assert load_config(config_file) == {}


def test_load_config_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        load_config(Path("does_not_exist.yaml"))


def test_shipped_default_config_loads() -> None:
    config = load_config(Path(__file__).resolve().parent.parent / "configs" / "default.yaml")

    assert get_by_dotted_path(config, "data.on_duplicate") == "last"
    assert get_by_dotted_path(config, "load.num_threads") == 4


def test_dotted_path_helpers() -> None:
    config: dict = {}
    set_by_dotted_path(config, "synthetic.seed", 3)

    assert config == {"synthetic": {"seed": 3}}
    assert get_by_dotted_path(config, "synthetic.seed") == 3
    assert get_by_dotted_path(config, "synthetic.missing", "fallback") == "fallback"


def test_apply_overrides_parses_values_and_copies() -> None:
    original = {"load": {"num_threads": 4}, "data": {"limit": 10}}

    updated = apply_overrides(
        original, ["load.num_threads=8", "data.limit=null", "data.on_duplicate=error"]
    )

    assert original["load"]["num_threads"] == 4  # original untouched
    assert updated["load"]["num_threads"] == 8
    assert updated["data"]["limit"] is None
    assert updated["data"]["on_duplicate"] == "error"


def test_apply_overrides_rejects_malformed_entries() -> None:
    with pytest.raises(ValueError):
        apply_overrides({}, ["load.num_threads"])


def test_clone_config_is_deep() -> None:
    original = {"synthetic": {"num_users": 10}, "load": {"seed": 1}}
    cloned = clone_config(original)

    set_by_dotted_path(cloned, "synthetic.num_users", 99)

    assert original["synthetic"]["num_users"] == 10
    assert cloned["synthetic"]["num_users"] == 99
    assert cloned["load"] is not original["load"]

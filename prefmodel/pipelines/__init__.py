from .runner import build_model_from_config, run_load_from_config  # noqa: F401

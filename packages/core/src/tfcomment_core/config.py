import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "init_max_lines": 50,
    "validate_max_lines": 50,
    "plan_max_lines": 500,
    # GitHub rejects comment bodies over 65536 characters; leave room for the rest of the report.
    "plan_max_chars": 60000,
    "plan_truncate_unit": "lines",  # "lines" for short-form comments, "chars" for long-form
    "cost_max_lines": 100,
}

_TRUNCATE_UNITS = ("lines", "chars")


def load_config(config_path: str = ".tfcomment.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .tfcomment.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    if config["plan_truncate_unit"] not in _TRUNCATE_UNITS:
        raise ValueError(
            f"Invalid plan_truncate_unit: {config['plan_truncate_unit']!r}. Choose 'lines' or 'chars'."
        )

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def plan_bound(config: dict) -> tuple[int, str]:
    """Return the (limit, unit) pair the plan section is truncated with."""
    unit = config.get("plan_truncate_unit", "lines")
    if unit == "chars":
        return config.get("plan_max_chars", DEFAULT_CONFIG["plan_max_chars"]), "chars"
    return config.get("plan_max_lines", DEFAULT_CONFIG["plan_max_lines"]), "lines"

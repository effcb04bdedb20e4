# payday_ledger/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "state_path": "budget_state.json",
    "payday": 1,
    "low_remaining_threshold": 200,
    "currency": "CHF",
    "output_dir": "data",
    "output_modules": {
        "csv": "payday_ledger.outputs.csv_output.CSVOutput",
        "html": "payday_ledger.outputs.html_output.HTMLOutput",
    },
}

CONFIG_PATH = Path("config.yaml")
STATE_PATH_ENV = "PAYDAY_LEDGER_STATE"


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: Path | str | None = None) -> Dict[str, object]:
    target = Path(path) if path else CONFIG_PATH
    data: Dict[str, object] = {}
    if target.exists():
        with target.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {target} must contain a mapping")
    config = _merge_defaults(data, DEFAULT_CONFIG)
    if os.getenv(STATE_PATH_ENV):
        config["state_path"] = os.environ[STATE_PATH_ENV]
    return config


def save_config(config: Dict[str, object], path: Path | str | None = None) -> None:
    target = Path(path) if path else CONFIG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)

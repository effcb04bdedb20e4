import yaml

from payday_ledger import config as config_module
from payday_ledger.config import DEFAULT_CONFIG, load_config, save_config


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(config_module.STATE_PATH_ENV, raising=False)
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg == DEFAULT_CONFIG


def test_user_values_are_merged_with_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(config_module.STATE_PATH_ENV, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        "payday: 25\n"
        "currency: EUR\n"
        "output_modules:\n"
        "  csv: my.module.Output\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg["payday"] == 25
    assert cfg["currency"] == "EUR"
    assert cfg["low_remaining_threshold"] == 200
    assert cfg["output_modules"]["csv"] == "my.module.Output"
    assert cfg["output_modules"]["html"] == DEFAULT_CONFIG["output_modules"]["html"]


def test_env_overrides_state_path(tmp_path, monkeypatch):
    monkeypatch.setenv(config_module.STATE_PATH_ENV, str(tmp_path / "elsewhere.json"))
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg["state_path"] == str(tmp_path / "elsewhere.json")


def test_save_config(tmp_path):
    path = tmp_path / "out" / "config.yaml"
    save_config({"payday": 3, "currency": "CHF"}, path)
    with open(path, encoding="utf-8") as f:
        assert yaml.safe_load(f) == {"payday": 3, "currency": "CHF"}

import json

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config


def write_config(tmp_path, overrides):
    overrides.setdefault("output_directory", str(tmp_path / "logs"))
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(overrides), encoding="utf-8")
    return str(path)


def test_defaults_are_valid():
    validate_config(DEFAULT_CONFIG)


def test_load_merges_overrides(tmp_path):
    config = load_config(write_config(tmp_path, {"max_steps": 42}), verbose=False)

    assert config["max_steps"] == 42
    assert config["blank_symbol"] == "_"
    assert (tmp_path / "logs").is_dir()


def test_load_prints_summary(tmp_path, capsys):
    load_config(write_config(tmp_path, {}))
    out = capsys.readouterr().out
    assert "Loaded config:" in out
    assert "max_steps: 1000000" in out


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_missing_key():
    config = DEFAULT_CONFIG.copy()
    del config["max_steps"]
    with pytest.raises(ValueError, match="max_steps"):
        validate_config(config)


@pytest.mark.parametrize("key,value", [
    ("max_steps", "100"),
    ("max_steps", True),
    ("trace", 1),
    ("blank_symbol", 0),
])
def test_wrong_type(key, value):
    with pytest.raises(TypeError):
        validate_config({**DEFAULT_CONFIG, key: value})


@pytest.mark.parametrize("key,value", [
    ("max_steps", -1),
    ("cpu_workers", 0),
    ("batch_size", 0),
    ("log_frequency", 0),
    ("blank_symbol", ""),
    ("blank_symbol", "__"),
])
def test_out_of_range(key, value):
    with pytest.raises(ValueError):
        validate_config({**DEFAULT_CONFIG, key: value})


def test_save_round_trip(tmp_path):
    path = str(tmp_path / "config" / "runtime_config.json")
    config = {**DEFAULT_CONFIG, "max_steps": 7, "output_directory": str(tmp_path / "logs")}

    save_config(config, path)

    assert load_config(path, verbose=False) == config


def test_save_rejects_invalid(tmp_path):
    with pytest.raises(ValueError):
        save_config({**DEFAULT_CONFIG, "max_steps": -5}, str(tmp_path / "c.json"))

import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "max_steps": 1_000_000,
    "blank_symbol": "_",
    "log_frequency": 10_000,
    "trace": False,
    "trace_window": 10,
    "cpu_workers": 1,
    "batch_size": 256,
    "output_directory": "logs/",
    "log_file_prefix": "tm_",
    "results_directory": "results/",
    "programs_directory": "programs/"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "blank_symbol": str,
    "log_frequency": int,
    "trace": bool,
    "trace_window": int,
    "cpu_workers": int,
    "batch_size": int,
    "output_directory": str,
    "log_file_prefix": str,
    "results_directory": str,
    "programs_directory": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; don't let True pass as a step count
        if expected_type is int and isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be non-negative.")
    if config["cpu_workers"] < 1:
        raise ValueError("cpu_workers must be at least 1.")
    if config["batch_size"] < 1:
        raise ValueError("batch_size must be at least 1.")
    if config["log_frequency"] < 1:
        raise ValueError("log_frequency must be at least 1.")
    if len(config["blank_symbol"]) != 1:
        raise ValueError("blank_symbol must be a single character.")

def load_config(path="config/runtime_config.json", verbose=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path="config/runtime_config.json"):
    validate_config(config)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)

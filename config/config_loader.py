import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "speed": 50,
    "max_steps": 10_000,
    "tape_window": 9,
    "log_steps": True,
    "output_directory": "logs/",
    "log_file_prefix": "turing_",
    "default_program": "programs/binary_increment.tm",
    "graph_start_state": "q0",
    "faq_counter_file": "logs/faq_counts.json"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "speed": int,
    "max_steps": int,
    "tape_window": int,
    "log_steps": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "default_program": str,
    "graph_start_state": str,
    "faq_counter_file": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; reject it for numeric keys
        if not isinstance(config[key], expected_type) or (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if not 1 <= config["speed"] <= 100:
        raise ValueError("Speed must be between 1 and 100.")
    if config["max_steps"] <= 0:
        raise ValueError("max_steps must be positive.")
    if config["tape_window"] <= 0:
        raise ValueError("tape_window must be positive.")

def load_config(path="config/runtime_config.json", verbose=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    if config["log_steps"]:
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

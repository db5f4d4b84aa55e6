"""
Configuration settings for the Gym Dashboard
"""

import copy
import json
import os
from typing import Any, Dict, Optional

import dotenv


DEFAULT_CONFIG = {
    "api": {
        "base_url": "http://localhost:9090/rockgymapp/api",
        "timeout": 10,
        "impersonate": None,
    },
    "ui": {
        "per_page": 10,
        "search_debounce": 0.5,
        "date_format": "%b %d, %Y",
        "datetime_format": "%b %d, %Y %H:%M",
        "currency_symbol": "₹",
    },
    "query": {
        "retry": 1,
        "stale_time": 30.0,
        "retry_delay": 1.0,
    },
    "downloads": {
        "directory": "~/Downloads",
    },
}

CONFIG_FILE = os.path.expanduser("~/.gym_dashboard_config.json")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge `override` into `base` section by section."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from defaults, the JSON config file and environment variables
    """
    dotenv.load_dotenv()
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = config_file or CONFIG_FILE
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                _merge(config, json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            print(f"Error loading config file: {e}")

    if os.environ.get("GYM_API_BASE_URL"):
        config["api"]["base_url"] = os.environ["GYM_API_BASE_URL"]

    if os.environ.get("GYM_API_TIMEOUT"):
        try:
            config["api"]["timeout"] = float(os.environ["GYM_API_TIMEOUT"])
        except ValueError:
            print(f"Ignoring invalid GYM_API_TIMEOUT: {os.environ['GYM_API_TIMEOUT']}")

    return config


def save_config(config: Dict[str, Any], config_file: Optional[str] = None) -> bool:
    """
    Save configuration to file
    """
    try:
        with open(config_file or CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        print(f"Error saving config file: {e}")
        return False

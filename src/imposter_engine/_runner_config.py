# Area: Shared
"""
imposter_engine._runner_config — Engine Configuration
=====================================================

Configuration defaults, loading and validation for the engine.

Precedence (lowest to highest):
    1. DEFAULT_CONFIG
    2. JSON config file (optional)
    3. Environment variables (a local .env file is read first)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger("imposter_engine.config")

DEFAULT_CONFIG: Dict[str, Any] = {
    "join_code_length": 6,
    "min_players": 3,
    "default_max_players": 10,
    "max_players_limit": 20,
    "tie_display_seconds": 5,
    "game_over_delay_seconds": 3,
    "empty_room_ttl_seconds": 300,
    "name_max_length": 24,
    "clue_max_length": 100,
    "custom_word_max": 200,
    "poll_interval_seconds": 0.25,
    "log_file": "imposter_engine.log",
    "log_level": "INFO",
}

# Environment variable -> (config key, converter)
ENV_MAPPINGS = {
    "JOIN_CODE_LENGTH": ("join_code_length", int),
    "MIN_PLAYERS": ("min_players", int),
    "MAX_PLAYERS": ("default_max_players", int),
    "TIE_DISPLAY_SECONDS": ("tie_display_seconds", float),
    "GAME_OVER_DELAY_SECONDS": ("game_over_delay_seconds", float),
    "EMPTY_ROOM_TTL_SECONDS": ("empty_room_ttl_seconds", float),
    "POLL_INTERVAL_SECONDS": ("poll_interval_seconds", float),
    "LOG_FILE": ("log_file", str),
    "LOG_LEVEL": ("log_level", str),
}

_INT_KEYS = (
    "join_code_length",
    "min_players",
    "default_max_players",
    "max_players_limit",
    "name_max_length",
    "clue_max_length",
    "custom_word_max",
)
_DELAY_KEYS = (
    "tie_display_seconds",
    "game_over_delay_seconds",
    "empty_room_ttl_seconds",
    "poll_interval_seconds",
)


def load_config(
    config_path: Optional[str] = None, use_dotenv: bool = True
) -> Dict[str, Any]:
    """
    Build a config dict from defaults, an optional JSON file and the environment.

    Args:
        config_path: Path to a JSON config file (ignored if missing)
        use_dotenv: Read a local .env file into the environment first

    Returns:
        The merged configuration dict
    """
    if use_dotenv:
        load_dotenv()

    config = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    for env_key, (config_key, convert) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            try:
                config[config_key] = convert(os.environ[env_key])
            except ValueError:
                raise ValueError(
                    f"Invalid value for {env_key}: {os.environ[env_key]!r}"
                )

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If a value is missing, has the wrong type, or is out of range
    """
    missing = [k for k in DEFAULT_CONFIG if k not in config]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    for key in _INT_KEYS:
        if not isinstance(config[key], int) or isinstance(config[key], bool):
            raise ValueError(f"Config key '{key}' must be an integer")
    for key in _DELAY_KEYS:
        if not isinstance(config[key], (int, float)) or config[key] < 0:
            raise ValueError(f"Config key '{key}' must be a non-negative number")

    if config["join_code_length"] < 4:
        raise ValueError("join_code_length must be at least 4")
    if config["min_players"] < 3:
        raise ValueError("min_players must be at least 3")
    if not config["min_players"] <= config["default_max_players"] <= config["max_players_limit"]:
        raise ValueError(
            "default_max_players must be between min_players and max_players_limit"
        )
    if config["name_max_length"] < 1 or config["clue_max_length"] < 1:
        raise ValueError("name_max_length and clue_max_length must be positive")
    if logging.getLevelName(str(config["log_level"]).upper()) == f"Level {str(config['log_level']).upper()}":
        raise ValueError(f"Unknown log_level: {config['log_level']}")


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Fill missing keys from DEFAULT_CONFIG and validate the result."""
    merged = dict(DEFAULT_CONFIG)
    if config:
        merged.update(config)
    validate_config(merged)
    return merged

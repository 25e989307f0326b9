# Area: Server
"""
rps_lobby._server_config — Server Configuration
===============================================

Defaults, loading and validation for the lobby server configuration.
Values come from (lowest to highest priority): built-in defaults, a
JSON config file, environment variables (a ``.env`` file is read by
the CLI before loading).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger("rps_lobby")

DEFAULT_CONFIG: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 8080,
    "log_file": "rps_lobby.log",
    "log_level": "INFO",
}

# Environment variable → config key
ENV_MAPPINGS = {
    "RPS_HOST": "host",
    "RPS_PORT": "port",
    "RPS_LOG_FILE": "log_file",
    "RPS_LOG_LEVEL": "log_level",
}

REQUIRED_CONFIG_KEYS = ["host", "port"]

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load config from defaults, an optional JSON file and the environment.

    Args:
        config_path: Path to a JSON config file (ignored if missing)

    Returns:
        Merged configuration dict
    """
    config = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    if "port" in config:
        try:
            config["port"] = int(config["port"])
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port: {config['port']!r}")

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate required configuration keys.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If required keys are missing or values are malformed
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if k not in config]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    port = config["port"]
    if not isinstance(port, int) or not 0 < port < 65536:
        raise ValueError(f"Invalid port: {port!r}")

    level = str(config.get("log_level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log_level: {config.get('log_level')!r}")

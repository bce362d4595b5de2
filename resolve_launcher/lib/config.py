"""Global configuration for the Resolve launcher"""

import json
import os
from pathlib import Path
from typing import Any, Dict

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG = {
    "venv_dir": "venv",
    "server_script": "resolve_mcp_server.py",
    "log_file": "logs/server.log",
    "default_client": "cursor",
    "packages": ["mcp[cli]", "pydantic"],
    "minimum_python": [3, 10],
}


def get_launcher_home() -> Path:
    """Get the launcher home directory.

    Honours RESOLVE_LAUNCHER_HOME, defaulting to ~/.resolve-launcher
    """
    launcher_home = os.environ.get("RESOLVE_LAUNCHER_HOME")
    if launcher_home:
        return Path(launcher_home)
    return Path.home() / ".resolve-launcher"


def get_config_file() -> Path:
    """Path to settings.json inside the launcher home"""
    return get_launcher_home() / "config" / "settings.json"


def load_config() -> Dict[str, Any]:
    """Load global configuration"""
    config_file = get_config_file()
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                config = json.load(f)
        except (json.JSONDecodeError, IOError):
            logger.warning(f"Ignoring unreadable config at {config_file}")
        else:
            if isinstance(config, dict):
                return {**DEFAULT_CONFIG, **config}
            logger.warning(f"Ignoring config at {config_file}: expected a JSON object")

    return DEFAULT_CONFIG.copy()


def save_config(config: Dict[str, Any]) -> None:
    """Save global configuration"""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w") as f:
        json.dump(config, f, indent=2)


def get_project_root(root: str | None = None) -> Path:
    """Resolve the project root holding the server script, venv and logs.

    Args:
        root: Explicit root from the command line (defaults to the current directory)

    Returns:
        Absolute path to the project root
    """
    if root:
        return Path(root).expanduser().resolve()
    return Path.cwd().resolve()

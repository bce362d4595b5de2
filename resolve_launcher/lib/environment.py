"""DaVinci Resolve scripting environment"""

import os
import platform
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Dict, List, MutableMapping, Tuple

from .logger import get_logger

logger = get_logger(__name__)

SCRIPT_API_VAR = "RESOLVE_SCRIPT_API"
SCRIPT_LIB_VAR = "RESOLVE_SCRIPT_LIB"

# (script api dir, fusionscript library) per platform.system()
RESOLVE_DEFAULT_PATHS: Dict[str, Tuple[str, str]] = {
    "Windows": (
        r"C:\ProgramData\Blackmagic Design\DaVinci Resolve\Support\Developer\Scripting",
        r"C:\Program Files\Blackmagic Design\DaVinci Resolve\fusionscript.dll",
    ),
    "Darwin": (
        "/Library/Application Support/Blackmagic Design/DaVinci Resolve/Developer/Scripting",
        "/Applications/DaVinci Resolve/DaVinci Resolve.app/Contents/Libraries/Fusion/fusionscript.so",
    ),
    "Linux": (
        "/opt/resolve/Developer/Scripting",
        "/opt/resolve/libs/Fusion/fusionscript.so",
    ),
}


def default_resolve_paths(system: str | None = None) -> Tuple[str, str]:
    """Return the default (RESOLVE_SCRIPT_API, RESOLVE_SCRIPT_LIB) for a platform.

    Unknown platforms get the Linux layout.
    """
    system = system or platform.system()
    return RESOLVE_DEFAULT_PATHS.get(system, RESOLVE_DEFAULT_PATHS["Linux"])


def _modules_dir(script_api: str, system: str) -> str:
    if system == "Windows":
        return str(PureWindowsPath(script_api) / "Modules")
    return str(PurePosixPath(script_api) / "Modules")


def apply_resolve_env(env: MutableMapping[str, str], system: str | None = None) -> MutableMapping[str, str]:
    """Default the Resolve scripting variables and prepare the interpreter variables.

    Existing RESOLVE_SCRIPT_API / RESOLVE_SCRIPT_LIB values are kept. The Modules
    directory is prepended to PYTHONPATH unless already present, and
    PYTHONUNBUFFERED is set so the server's output reaches the log as it happens.

    Args:
        env: Environment mapping to update in place (usually a copy of os.environ)
        system: platform.system() value, detected when omitted

    Returns:
        The same mapping, for chaining
    """
    system = system or platform.system()
    script_api, script_lib = default_resolve_paths(system)

    if not env.get(SCRIPT_API_VAR):
        env[SCRIPT_API_VAR] = script_api
        logger.info(f"Defaulted {SCRIPT_API_VAR} to {script_api}")
    if not env.get(SCRIPT_LIB_VAR):
        env[SCRIPT_LIB_VAR] = script_lib
        logger.info(f"Defaulted {SCRIPT_LIB_VAR} to {script_lib}")

    separator = ";" if system == "Windows" else ":"
    modules_dir = _modules_dir(env[SCRIPT_API_VAR], system)
    existing = [p for p in env.get("PYTHONPATH", "").split(separator) if p]
    if modules_dir not in existing:
        env["PYTHONPATH"] = separator.join([modules_dir, *existing])

    env["PYTHONUNBUFFERED"] = "1"
    return env


def check_resolve_paths(env: MutableMapping[str, str] | None = None) -> List[str]:
    """Return a message for each scripting path that does not exist.

    An empty list means both RESOLVE_SCRIPT_API and RESOLVE_SCRIPT_LIB are usable.
    """
    env = os.environ if env is None else env
    missing = []
    for var in (SCRIPT_API_VAR, SCRIPT_LIB_VAR):
        value = env.get(var)
        if not value:
            missing.append(f"{var} is not set")
        elif not Path(value).exists():
            missing.append(f"{var} path not found: {value}")
    return missing

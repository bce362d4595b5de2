"""Process list utilities"""

import platform
import subprocess
from typing import Sequence

from ..logger import get_logger

logger = get_logger(__name__)


RESOLVE_PROCESS_NAMES = {
    "Windows": ["Resolve.exe"],
    "Darwin": ["Resolve", "DaVinci Resolve"],
    "Linux": ["resolve"],
}


def resolve_process_names(system: str | None = None) -> list[str]:
    """Get the DaVinci Resolve process names for a platform"""
    system = system or platform.system()
    return list(RESOLVE_PROCESS_NAMES.get(system, RESOLVE_PROCESS_NAMES["Linux"]))


def _running_on_windows(name: str) -> bool:
    result = subprocess.run(
        ["tasklist", "/FI", f"IMAGENAME eq {name}", "/NH"],
        capture_output=True,
        text=True,
    )
    return name.lower() in result.stdout.lower()


def _running_on_posix(name: str) -> bool:
    result = subprocess.run(
        ["pgrep", "-x", name],
        capture_output=True,
        text=True,
    )
    return result.returncode == 0


def is_process_running(names: Sequence[str], system: str | None = None) -> bool:
    """Check whether any of the named processes is running

    Args:
        names: Executable names to look for (exact match)
        system: platform.system() value, detected when omitted

    Returns:
        True if at least one process matches, False otherwise or when the
        process listing tool is unavailable
    """
    system = system or platform.system()
    probe = _running_on_windows if system == "Windows" else _running_on_posix

    for name in names:
        try:
            if probe(name):
                logger.info(f"Found running process {name}")
                return True
        except FileNotFoundError as e:
            logger.warning(f"Process listing unavailable: {e}")
            return False

    logger.info(f"None of {list(names)} are running")
    return False


def is_resolve_running(system: str | None = None) -> bool:
    """Check whether DaVinci Resolve is running"""
    return is_process_running(resolve_process_names(system), system)

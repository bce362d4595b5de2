"""Interpreter and virtual environment utilities"""

import platform
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from ..logger import get_logger

logger = get_logger(__name__)


class SetupError(RuntimeError):
    """Raised when the server environment cannot be prepared."""


def find_interpreter(python: str | None = None) -> str:
    """Locate a Python interpreter on PATH

    Args:
        python: Explicit interpreter name or path (optional)

    Returns:
        Path to the interpreter executable

    Raises:
        SetupError: If no interpreter is found
    """
    candidates = [python] if python else ["python3", "python"]
    for candidate in candidates:
        found = shutil.which(candidate)
        if found:
            return found

    raise SetupError(
        f"Python interpreter not found (tried {', '.join(candidates)}). "
        "Install Python from python.org and make sure it is on PATH."
    )


def get_interpreter_version(python: str) -> tuple[int, int]:
    """Ask an interpreter for its (major, minor) version"""
    try:
        result = subprocess.run(
            [python, "-c", "import sys; print('%d.%d' % sys.version_info[:2])"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        raise SetupError(f"Failed to query interpreter {python}: {e}")

    major, minor = result.stdout.strip().split(".")
    return int(major), int(minor)


def check_interpreter(minimum: Sequence[int] = (3, 10), python: str | None = None) -> tuple[str, tuple[int, int]]:
    """Verify an interpreter is installed and new enough

    Returns:
        Tuple of (interpreter path, (major, minor))

    Raises:
        SetupError: If the interpreter is missing or older than minimum
    """
    exe = find_interpreter(python)
    version = get_interpreter_version(exe)
    minimum = tuple(minimum)

    if version < minimum:
        raise SetupError(
            f"Python {version[0]}.{version[1]} found at {exe}, "
            f"requires {minimum[0]}.{minimum[1]}+"
        )

    logger.info(f"Using Python {version[0]}.{version[1]} at {exe}")
    return exe, version


def venv_python_path(venv_dir: Path, system: str | None = None) -> Path:
    """Path where a venv keeps its interpreter"""
    system = system or platform.system()
    if system == "Windows":
        return Path(venv_dir) / "Scripts" / "python.exe"
    return Path(venv_dir) / "bin" / "python"


def find_venv_python(venv_dir: Path, system: str | None = None) -> Path:
    """Locate the interpreter inside an existing venv

    Raises:
        SetupError: If the venv or its interpreter does not exist
    """
    python = venv_python_path(venv_dir, system)
    if not python.exists():
        raise SetupError(f"Virtual environment not found at {venv_dir}. Run resolve-launcher-setup first.")
    return python


def create_venv(python: str, venv_dir: Path, system: str | None = None) -> bool:
    """Create a venv unless one already exists

    Returns:
        True if a new venv was created, False if an existing one was kept
    """
    if venv_python_path(venv_dir, system).exists():
        logger.info(f"Virtual environment already exists at {venv_dir}")
        return False

    logger.info(f"Creating virtual environment at {venv_dir}")
    try:
        subprocess.run(
            [python, "-m", "venv", str(venv_dir)],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise SetupError(f"Failed to create virtual environment: {e.stderr}")

    return True


def install_packages(venv_dir: Path, packages: Sequence[str], system: str | None = None) -> None:
    """Install packages into the venv with its own pip

    Raises:
        SetupError: If the venv is missing or pip fails
    """
    python = find_venv_python(venv_dir, system)

    logger.info(f"Installing {', '.join(packages)} into {venv_dir}")
    try:
        subprocess.run(
            [str(python), "-m", "pip", "install", *packages],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise SetupError(f"Failed to install {' '.join(packages)}: {e.stderr}")

#!/usr/bin/env python3
"""Entry point for resolve-launcher-setup: prepare the server's venv"""

import argparse
import sys
from typing import Sequence

from resolve_launcher.lib.config import get_project_root, load_config
from resolve_launcher.lib.helpers.venv import SetupError, check_interpreter, create_venv, install_packages
from resolve_launcher.lib.logger import get_logger

logger = get_logger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Create the venv in the project root and install the server's packages"""
    parser = argparse.ArgumentParser(
        prog="resolve-launcher-setup",
        description="Create the virtual environment for the DaVinci Resolve MCP server",
    )
    parser.add_argument("--root", help="Project root holding the server script (default: current directory)")
    parser.add_argument("--python", help="Interpreter used to create the venv (default: python3 on PATH)")
    args = parser.parse_args(argv)

    config = load_config()
    project_root = get_project_root(args.root)
    venv_dir = project_root / config["venv_dir"]
    packages = config["packages"]

    try:
        print("Checking for Python...")
        exe, version = check_interpreter(config["minimum_python"], args.python)
        print(f"Found Python {version[0]}.{version[1]} at {exe}")

        if create_venv(exe, venv_dir):
            print(f"Created virtual environment at {venv_dir}")
        else:
            print(f"Using existing virtual environment at {venv_dir}")

        print(f"Installing {', '.join(packages)}...")
        install_packages(venv_dir, packages)

    except SetupError as e:
        logger.error(f"Setup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Setup complete. Start DaVinci Resolve, then run resolve-launcher.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

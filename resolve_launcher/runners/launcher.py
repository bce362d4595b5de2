#!/usr/bin/env python3
"""Entry point for the resolve-launcher command.

Checks that DaVinci Resolve and its scripting API are available, writes the
MCP client configuration, then runs the server from the project's venv with
its output mirrored to the server log.
"""

from __future__ import annotations

import argparse
import os
import platform
import sys
from pathlib import Path
from typing import MutableMapping, Sequence

from resolve_launcher.lib.config import get_project_root, load_config
from resolve_launcher.lib.environment import apply_resolve_env, check_resolve_paths
from resolve_launcher.lib.helpers.process import is_resolve_running
from resolve_launcher.lib.helpers.venv import SetupError, find_venv_python
from resolve_launcher.lib.logger import get_logger
from resolve_launcher.lib.server import LaunchError, build_server_command, run_server
from resolve_launcher.lib.templates import TemplateError, load_client, materialize_config

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resolve-launcher",
        description="Launch the DaVinci Resolve MCP server. Arguments after -- go to the server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Launch against the running Resolve instance
  resolve-launcher

  # Open a specific Resolve project
  resolve-launcher --project "My Edit"

  # Skip the Resolve process check
  resolve-launcher --force

  # Pass extra arguments to the server
  resolve-launcher -- --debug
        """,
    )
    parser.add_argument("-p", "--project", help="Resolve project name passed to the server")
    parser.add_argument("-f", "--force", action="store_true", help="Skip the DaVinci Resolve process check")
    parser.add_argument("--client", help="MCP client config to write (default from settings)")
    parser.add_argument("--root", help="Project root holding the server script (default: current directory)")
    return parser


def ensure_resolve_running(system: str) -> None:
    """Abort unless DaVinci Resolve is running."""

    print("Checking if DaVinci Resolve is running...")
    if not is_resolve_running(system):
        raise LaunchError(
            "DaVinci Resolve is not running. Start it first, or pass --force to skip this check."
        )
    print("DaVinci Resolve is running")


def ensure_resolve_paths(env: MutableMapping[str, str]) -> None:
    """Abort unless both scripting paths exist."""

    missing = check_resolve_paths(env)
    if missing:
        raise LaunchError("; ".join(missing))
    print(f"Resolve scripting API: {env['RESOLVE_SCRIPT_API']}")
    print(f"Resolve scripting library: {env['RESOLVE_SCRIPT_LIB']}")


def write_client_config(client_name: str, project_root: Path, system: str) -> Path:
    """Materialize the MCP client config for project_root."""

    try:
        client = load_client(client_name, system)
    except ValueError as e:
        raise TemplateError(str(e))

    output = materialize_config(client.template, client.output_path(project_root), project_root)
    print(f"Wrote {client.name} MCP config to {output}")
    return output


def ensure_server_script(project_root: Path, script_name: str) -> Path:
    """Return the server script path, aborting if it does not exist."""

    script = project_root / script_name
    if not script.exists():
        raise LaunchError(f"Server script not found: {script}")
    return script


def split_server_args(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first "--" into (launcher args, server args)."""

    argv = list(argv)
    if "--" not in argv:
        return argv, []
    index = argv.index("--")
    return argv[:index], argv[index + 1:]


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for launching the Resolve MCP server."""

    launcher_args, server_args = split_server_args(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(launcher_args)

    try:
        system = platform.system()
        config = load_config()
        project_root = get_project_root(args.root)
        env = apply_resolve_env(dict(os.environ), system)

        if args.force:
            print("Skipping DaVinci Resolve check (--force)")
        else:
            ensure_resolve_running(system)

        ensure_resolve_paths(env)
        write_client_config(args.client or config["default_client"], project_root, system)

        python = find_venv_python(project_root / config["venv_dir"], system)
        script = ensure_server_script(project_root, config["server_script"])
        cmd = build_server_command(python, script, args.project, server_args)

        log_file = project_root / config["log_file"]
        print(f"Starting server, logging to {log_file}")
        return run_server(cmd, log_file, env=env, cwd=project_root)

    except (LaunchError, SetupError, TemplateError) as e:
        logger.error(f"Launch aborted: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

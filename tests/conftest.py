"""Shared pytest fixtures for resolve-launcher tests"""

import sys
from pathlib import Path

import pytest


STUB_SERVER = '''\
import json
import os
import sys
from pathlib import Path

Path(__file__).with_name("server_args.json").write_text(json.dumps(sys.argv[1:]))
print("stub server starting")
print("stub server warning", file=sys.stderr)
sys.exit(int(os.environ.get("STUB_EXIT_CODE", "0")))
'''


@pytest.fixture(autouse=True)
def isolated_launcher_home(tmp_path, monkeypatch):
    """Keep the launcher log and settings out of the real home directory"""
    monkeypatch.setenv("RESOLVE_LAUNCHER_HOME", str(tmp_path / "default-launcher-home"))


@pytest.fixture
def launcher_home(tmp_path, monkeypatch):
    """Point RESOLVE_LAUNCHER_HOME at an empty temporary directory

    Returns:
        Path: The launcher home; its config/ subdirectory already exists
    """
    home = tmp_path / "launcher-home"
    (home / "config").mkdir(parents=True)
    monkeypatch.setenv("RESOLVE_LAUNCHER_HOME", str(home))
    return home


@pytest.fixture
def resolve_install(tmp_path, monkeypatch):
    """Create a fake Resolve scripting install and export its paths

    Returns:
        tuple[Path, Path]: (script api dir, fusionscript library)
    """
    script_api = tmp_path / "Resolve" / "Developer" / "Scripting"
    (script_api / "Modules").mkdir(parents=True)
    script_lib = tmp_path / "Resolve" / "fusionscript.so"
    script_lib.write_text("")

    monkeypatch.setenv("RESOLVE_SCRIPT_API", str(script_api))
    monkeypatch.setenv("RESOLVE_SCRIPT_LIB", str(script_lib))
    return script_api, script_lib


@pytest.fixture
def project_root(tmp_path):
    """A project root holding a stub server script

    The stub records its arguments in server_args.json next to itself and
    prints one line to stdout and one to stderr.
    """
    root = tmp_path / "resolve-mcp"
    root.mkdir()
    (root / "resolve_mcp_server.py").write_text(STUB_SERVER)
    return root


@pytest.fixture
def launch_env(launcher_home, resolve_install, project_root, monkeypatch):
    """All-in-one fixture for launcher tests

    Resolve is reported as running, and the venv interpreter is replaced with
    the interpreter running the tests.
    """
    monkeypatch.setattr("resolve_launcher.runners.launcher.is_resolve_running", lambda system=None: True)
    monkeypatch.setattr(
        "resolve_launcher.runners.launcher.find_venv_python",
        lambda venv_dir, system=None: Path(sys.executable),
    )
    return project_root

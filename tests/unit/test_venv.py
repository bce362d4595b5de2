import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from resolve_launcher.lib.helpers import venv
from resolve_launcher.lib.helpers.venv import (
    SetupError,
    check_interpreter,
    create_venv,
    find_interpreter,
    find_venv_python,
    install_packages,
    venv_python_path,
)

RUN = "resolve_launcher.lib.helpers.venv.subprocess.run"


def make_venv(venv_dir: Path) -> Path:
    python = venv_python_path(venv_dir)
    python.parent.mkdir(parents=True)
    python.write_text("")
    return python


def test_venv_python_path_per_platform(tmp_path):
    assert venv_python_path(tmp_path, "Windows") == tmp_path / "Scripts" / "python.exe"
    assert venv_python_path(tmp_path, "Linux") == tmp_path / "bin" / "python"


def test_find_venv_python_missing(tmp_path):
    with pytest.raises(SetupError, match="Virtual environment not found"):
        find_venv_python(tmp_path / "venv")


def test_find_venv_python_present(tmp_path):
    python = make_venv(tmp_path / "venv")
    assert find_venv_python(tmp_path / "venv") == python


def test_find_interpreter_not_on_path(monkeypatch):
    monkeypatch.setattr(venv.shutil, "which", lambda name: None)

    with pytest.raises(SetupError, match="Python interpreter not found"):
        find_interpreter()


def test_check_interpreter_too_old(monkeypatch):
    monkeypatch.setattr(venv, "find_interpreter", lambda python=None: "/usr/bin/python3")
    monkeypatch.setattr(venv, "get_interpreter_version", lambda exe: (3, 8))

    with pytest.raises(SetupError, match="requires 3.10"):
        check_interpreter((3, 10))


def test_check_interpreter_accepts_newer(monkeypatch):
    monkeypatch.setattr(venv, "find_interpreter", lambda python=None: "/usr/bin/python3")
    monkeypatch.setattr(venv, "get_interpreter_version", lambda exe: (3, 12))

    assert check_interpreter([3, 10]) == ("/usr/bin/python3", (3, 12))


def test_get_interpreter_version_parses_output():
    result = subprocess.CompletedProcess([], 0, stdout="3.11\n", stderr="")
    with patch(RUN, return_value=result):
        assert venv.get_interpreter_version("python3") == (3, 11)


def test_create_venv_skips_existing(tmp_path):
    make_venv(tmp_path / "venv")

    with patch(RUN) as run:
        assert create_venv("python3", tmp_path / "venv") is False

    run.assert_not_called()


def test_create_venv_runs_venv_module(tmp_path):
    with patch(RUN) as run:
        assert create_venv("python3", tmp_path / "venv") is True

    assert run.call_args[0][0] == ["python3", "-m", "venv", str(tmp_path / "venv")]


def test_create_venv_failure(tmp_path):
    error = subprocess.CalledProcessError(1, ["python3"], stderr="ensurepip is not available")
    with patch(RUN, side_effect=error):
        with pytest.raises(SetupError, match="ensurepip is not available"):
            create_venv("python3", tmp_path / "venv")


def test_install_packages_uses_venv_pip(tmp_path):
    python = make_venv(tmp_path / "venv")

    with patch(RUN) as run:
        install_packages(tmp_path / "venv", ["mcp[cli]", "pydantic"])

    assert run.call_args[0][0] == [str(python), "-m", "pip", "install", "mcp[cli]", "pydantic"]


def test_install_packages_failure(tmp_path):
    make_venv(tmp_path / "venv")
    error = subprocess.CalledProcessError(1, ["pip"], stderr="No matching distribution")

    with patch(RUN, side_effect=error):
        with pytest.raises(SetupError, match="No matching distribution"):
            install_packages(tmp_path / "venv", ["mcp[cli]"])

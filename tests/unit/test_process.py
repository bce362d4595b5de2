import subprocess
from unittest.mock import patch

from resolve_launcher.lib.helpers.process import (
    is_process_running,
    is_resolve_running,
    resolve_process_names,
)

RUN = "resolve_launcher.lib.helpers.process.subprocess.run"


def completed(cmd, returncode=0, stdout=""):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")


def test_process_names_per_platform():
    assert resolve_process_names("Windows") == ["Resolve.exe"]
    assert "Resolve" in resolve_process_names("Darwin")
    assert resolve_process_names("Linux") == ["resolve"]


def test_pgrep_match():
    with patch(RUN, return_value=completed(["pgrep"], 0, "4242\n")) as run:
        assert is_process_running(["resolve"], "Linux")

    assert run.call_args[0][0] == ["pgrep", "-x", "resolve"]


def test_pgrep_no_match():
    with patch(RUN, return_value=completed(["pgrep"], 1)):
        assert not is_process_running(["resolve"], "Linux")


def test_checks_every_name_until_found():
    results = [completed(["pgrep"], 1), completed(["pgrep"], 0)]
    with patch(RUN, side_effect=results) as run:
        assert is_resolve_running("Darwin")

    assert run.call_count == 2


def test_tasklist_match():
    output = "Resolve.exe                  9120 Console                    1  2,512,344 K\n"
    with patch(RUN, return_value=completed(["tasklist"], 0, output)) as run:
        assert is_resolve_running("Windows")

    assert run.call_args[0][0][:3] == ["tasklist", "/FI", "IMAGENAME eq Resolve.exe"]


def test_tasklist_no_match():
    output = "INFO: No tasks are running which match the specified criteria.\n"
    with patch(RUN, return_value=completed(["tasklist"], 0, output)):
        assert not is_resolve_running("Windows")


def test_missing_listing_tool_means_not_running():
    with patch(RUN, side_effect=FileNotFoundError("pgrep")):
        assert not is_resolve_running("Linux")

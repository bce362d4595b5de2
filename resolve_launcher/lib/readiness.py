"""Readiness checks run before launching the server.

Each check returns a CheckResult with:
- id: unique identifier
- status: pass | fail
- message: factual explanation
- hint: optional remediation text
"""

import os
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional

from .config import load_config
from .environment import apply_resolve_env, check_resolve_paths
from .helpers.process import is_resolve_running
from .helpers.venv import SetupError, check_interpreter, venv_python_path
from .templates import load_client


class CheckStatus(str, Enum):
    """Check result status."""
    PASS = "pass"
    FAIL = "fail"


@dataclass
class CheckResult:
    """Result of a single readiness check."""

    id: str
    status: CheckStatus
    message: str
    hint: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        result = {
            "id": self.id,
            "status": self.status.value,
            "message": self.message,
        }
        if self.hint:
            result["hint"] = self.hint
        return result

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS


def _passed(check_id: str, message: str) -> CheckResult:
    return CheckResult(id=check_id, status=CheckStatus.PASS, message=message)


def _failed(check_id: str, message: str, hint: str | None = None) -> CheckResult:
    return CheckResult(id=check_id, status=CheckStatus.FAIL, message=message, hint=hint)


def check_python(config: Dict[str, Any]) -> CheckResult:
    try:
        exe, version = check_interpreter(config["minimum_python"])
    except SetupError as e:
        return _failed("python", str(e), "Install Python from python.org")
    return _passed("python", f"Python {version[0]}.{version[1]} at {exe}")


def check_venv(project_root: Path, config: Dict[str, Any], system: str) -> CheckResult:
    python = venv_python_path(project_root / config["venv_dir"], system)
    if python.exists():
        return _passed("venv", f"Virtual environment interpreter at {python}")
    return _failed("venv", f"No virtual environment interpreter at {python}", "Run resolve-launcher-setup")


def check_resolve_env(env: MutableMapping[str, str]) -> CheckResult:
    missing = check_resolve_paths(env)
    if missing:
        return _failed(
            "resolve_env",
            "; ".join(missing),
            "Install DaVinci Resolve or set RESOLVE_SCRIPT_API and RESOLVE_SCRIPT_LIB",
        )
    return _passed("resolve_env", "Resolve scripting API and library found")


def check_resolve_process(system: str) -> CheckResult:
    if is_resolve_running(system):
        return _passed("resolve_running", "DaVinci Resolve is running")
    return _failed("resolve_running", "DaVinci Resolve is not running", "Start DaVinci Resolve, or launch with --force")


def check_template(client_name: str, system: str) -> CheckResult:
    try:
        client = load_client(client_name, system)
    except ValueError as e:
        return _failed("template", str(e))
    if not client.template.exists():
        return _failed("template", f"Template not found: {client.template}")
    return _passed("template", f"Template for {client.name} at {client.template}")


def check_server_script(project_root: Path, config: Dict[str, Any]) -> CheckResult:
    script = project_root / config["server_script"]
    if script.exists():
        return _passed("server_script", f"Server script at {script}")
    return _failed("server_script", f"Server script not found: {script}", "Pass --root pointing at the server checkout")


def run_checks(
    project_root: Path,
    client_name: str | None = None,
    env: MutableMapping[str, str] | None = None,
    system: str | None = None,
) -> List[CheckResult]:
    """Run every readiness check and return all results"""
    system = system or platform.system()
    config = load_config()
    env = apply_resolve_env(dict(os.environ) if env is None else env, system)
    client_name = client_name or config["default_client"]

    return [
        check_python(config),
        check_venv(project_root, config, system),
        check_resolve_env(env),
        check_resolve_process(system),
        check_template(client_name, system),
        check_server_script(project_root, config),
    ]

"""MCP client configuration templates and targets"""

import json
import os
import platform
import importlib.resources as resources
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .config import get_launcher_home
from .logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER = "${PROJECT_ROOT}"


class TemplateError(RuntimeError):
    """Raised when a configuration template cannot be materialized."""


@dataclass
class ClientTarget:
    """Where an MCP client expects its configuration file

    Attributes:
        name: Client identifier used on the command line
        template: Template file to read
        output: Destination file; relative paths resolve against the project root
    """

    name: str
    template: Path
    output: Path

    def output_path(self, project_root: Path) -> Path:
        output = self.output.expanduser()
        if output.is_absolute():
            return output
        return project_root / output


def render_template(text: str, project_root: Path | str, placeholder: str = PLACEHOLDER) -> str:
    """Replace every placeholder occurrence with the project root path.

    The path is inserted JSON-string-escaped, so Windows backslashes keep
    the result valid JSON.

    Raises:
        TemplateError: If the placeholder is absent or the result is not valid JSON
    """
    if placeholder not in text:
        raise TemplateError(f"Template does not contain placeholder {placeholder}")

    escaped_root = json.dumps(str(project_root))[1:-1]
    rendered = text.replace(placeholder, escaped_root)

    try:
        json.loads(rendered)
    except json.JSONDecodeError as e:
        raise TemplateError(f"Rendered template is not valid JSON: {e}")

    return rendered


def materialize_config(template_path: Path, output_path: Path, project_root: Path) -> Path:
    """Copy a template to its destination with the project root substituted

    Args:
        template_path: Template to read
        output_path: File to write (overwritten if present)
        project_root: Absolute path substituted for the placeholder

    Returns:
        The written output path

    Raises:
        TemplateError: If the template is missing or cannot be rendered
    """
    template_path = Path(template_path)
    if not template_path.exists():
        raise TemplateError(f"Template not found: {template_path}")

    rendered = render_template(template_path.read_text(encoding="utf-8"), project_root)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")
    logger.info(f"Wrote {output_path} from {template_path}")
    return output_path


def _template_flavor(system: str) -> str:
    return "windows" if system == "Windows" else "posix"


def _bundled_template(stem: str, system: str) -> Path:
    filename = f"{stem}.{_template_flavor(system)}.template.json"
    try:
        return Path(resources.files("resolve_launcher") / "config_templates" / filename)
    except (ImportError, AttributeError):
        # Fallback for development checkouts
        return Path(__file__).parent.parent / "config_templates" / filename


def _claude_desktop_config_path(system: str) -> Path:
    if system == "Windows":
        appdata = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "Claude" / "claude_desktop_config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"
    return Path.home() / ".config" / "Claude" / "claude_desktop_config.json"


def _builtin_clients(system: str) -> Dict[str, ClientTarget]:
    return {
        "cursor": ClientTarget(
            name="cursor",
            template=_bundled_template("cursor-mcp", system),
            output=Path(".cursor") / "mcp.json",
        ),
        "claude-desktop": ClientTarget(
            name="claude-desktop",
            template=_bundled_template("claude-desktop", system),
            output=_claude_desktop_config_path(system),
        ),
    }


def _load_clients_yaml(config_dir: Path) -> Dict[str, Any]:
    clients_file = config_dir / "clients.yaml"
    if not clients_file.exists():
        return {}

    try:
        with open(clients_file) as f:
            config = yaml.safe_load(f) or {}
    except Exception as e:
        raise ValueError(f"Failed to load clients.yaml: {e}")

    if not isinstance(config, dict):
        raise ValueError("clients.yaml must be a mapping with a top-level 'clients' key")

    clients = config.get("clients") or {}
    if not isinstance(clients, dict):
        raise ValueError("clients.yaml 'clients' must be a mapping of client names")

    for name, entry in clients.items():
        if entry is not None and not isinstance(entry, dict):
            raise ValueError(f"clients.yaml entry for '{name}' must be a mapping")

    return clients


def _resolve_config_path(value: str, config_dir: Path) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return config_dir / path


def load_client(name: str, system: str | None = None) -> ClientTarget:
    """Load a client target by name, applying clients.yaml overrides

    Built-in clients may override ``template`` and/or ``output``. Clients not
    built in must define both.

    Raises:
        ValueError: If the client is unknown or its config is incomplete
    """
    system = system or platform.system()
    config_dir = get_launcher_home() / "config"
    builtins = _builtin_clients(system)
    overrides = _load_clients_yaml(config_dir).get(name) or {}

    if name in builtins:
        client = builtins[name]
        if "template" in overrides:
            client.template = _resolve_config_path(overrides["template"], config_dir)
        if "output" in overrides:
            client.output = Path(overrides["output"])
        return client

    if not overrides:
        raise ValueError(f"Unknown client '{name}'")

    missing = [key for key in ("template", "output") if key not in overrides]
    if missing:
        raise ValueError(f"Client '{name}' is missing {', '.join(missing)} in clients.yaml")

    return ClientTarget(
        name=name,
        template=_resolve_config_path(overrides["template"], config_dir),
        output=Path(overrides["output"]),
    )


def list_clients(system: str | None = None) -> List[str]:
    """Names of all built-in and configured clients"""
    system = system or platform.system()
    names = list(_builtin_clients(system))
    for name in _load_clients_yaml(get_launcher_home() / "config"):
        if name not in names:
            names.append(name)
    return names

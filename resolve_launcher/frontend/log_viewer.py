#!/usr/bin/env python3
"""Terminal viewer that follows the MCP server log"""
import argparse
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Label, RichLog
from rich.text import Text

from resolve_launcher.lib.config import get_project_root, load_config


def style_line(line: str) -> Text:
    """Colour a log line by severity"""
    upper = line.upper()
    if "ERROR" in upper or "TRACEBACK" in upper:
        return Text(line, style="red")
    if "WARNING" in upper:
        return Text(line, style="yellow")
    if "INFO" in upper:
        return Text(line, style="green")
    return Text(line)


class LogFollower:
    """Reads lines appended to a file since the last poll.

    Only newline-terminated lines are returned; an unfinished last line is
    held back until the rest of it arrives. A file that shrinks (the launcher
    truncates it on each run) is read again from the start.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.offset = 0
        self.pending = b""

    def read_new(self) -> tuple[list[str], bool]:
        """Return (new lines, restarted)"""
        if not self.path.exists():
            return [], False

        restarted = False
        size = self.path.stat().st_size
        if size < self.offset:
            self.offset = 0
            self.pending = b""
            restarted = True

        with open(self.path, "rb") as f:
            f.seek(self.offset)
            data = self.pending + f.read()
            self.offset = f.tell()

        complete, newline, self.pending = data.rpartition(b"\n")
        if not newline:
            self.pending = complete
            return [], restarted

        return (complete + newline).decode("utf-8", errors="replace").splitlines(), restarted


class LogViewerApp(App):
    """Follows the server log"""

    CSS = """
    Screen {
        background: #000000;
    }

    #header {
        height: 1;
        padding: 0 1;
        background: #000000;
        color: #C0FFFD;
    }

    RichLog {
        background: #000000;
        color: #ffffff;
        height: 1fr;
        scrollbar-background: #111111;
        scrollbar-color: #6C71C4;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("c", "clear", "Clear"),
    ]

    def __init__(self, log_file: Path):
        super().__init__()
        self.log_file = Path(log_file)
        self.follower = LogFollower(self.log_file)

    def compose(self) -> ComposeResult:
        yield Container(Label(str(self.log_file)), id="header")
        self.log_view = RichLog(highlight=False, markup=False)
        yield self.log_view

    def on_mount(self) -> None:
        if not self.log_file.exists():
            self.log_view.write(Text(f"Waiting for {self.log_file}", style="dim"))
        self.set_interval(1.0, self.refresh_log)
        self.refresh_log()

    def refresh_log(self) -> None:
        lines, restarted = self.follower.read_new()
        if restarted:
            self.log_view.clear()
            self.log_view.write(Text("--- server restarted ---", style="dim"))
        for line in lines:
            self.log_view.write(style_line(line))

    def action_clear(self) -> None:
        self.log_view.clear()


def main():
    """Entry point for resolve-launcher-logs command"""
    parser = argparse.ArgumentParser(description="Follow the DaVinci Resolve MCP server log")
    parser.add_argument("--root", help="Project root holding the server log (default: current directory)")
    parser.add_argument("--log-file", help="Log file to follow (overrides --root)")

    args = parser.parse_args()

    if args.log_file:
        log_file = Path(args.log_file)
    else:
        log_file = get_project_root(args.root) / load_config()["log_file"]

    app = LogViewerApp(log_file=log_file)
    app.run()


if __name__ == "__main__":
    main()

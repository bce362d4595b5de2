"""Spawning the MCP server and capturing its output"""

import subprocess
import sys
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from .logger import get_logger

logger = get_logger(__name__)


class LaunchError(RuntimeError):
    """Custom error for launch failures."""


def build_server_command(
    python: Path | str,
    script: Path | str,
    project: str | None = None,
    extra_args: Sequence[str] = (),
) -> list[str]:
    """Build the command line for the server process

    Args:
        python: Interpreter to run the server with
        script: Server script path
        project: Resolve project name to pass through (optional)
        extra_args: Further arguments appended verbatim

    Returns:
        Argument list suitable for subprocess
    """
    cmd = [str(python), str(script)]
    if project:
        cmd.extend(["--project", project])
    cmd.extend(extra_args)
    return cmd


def dump_log(log_file: Path, stream: TextIO | None = None) -> None:
    """Print the contents of a log file, if any"""
    stream = stream or sys.stderr
    log_file = Path(log_file)
    if not log_file.exists():
        print(f"Log file not found: {log_file}", file=stream)
        return

    print(f"----- {log_file} -----", file=stream)
    stream.write(log_file.read_text(encoding="utf-8", errors="replace"))
    print("----- end of log -----", file=stream)


def _stop(proc: subprocess.Popen) -> None:
    proc.terminate()
    try:
        proc.wait(timeout=5)
    except subprocess.TimeoutExpired:
        logger.warning(f"Server pid {proc.pid} ignored terminate, killing")
        proc.kill()
        proc.wait()


def run_server(
    cmd: Sequence[str],
    log_file: Path,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    stream: TextIO | None = None,
) -> int:
    """Run the server, teeing its combined output to stream and log_file

    The log file is truncated first. Blocks until the server exits.

    Returns:
        The server's exit code, or 130 when interrupted with Ctrl-C

    Raises:
        LaunchError: If the process cannot be spawned
    """
    stream = stream or sys.stdout
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Starting server: {' '.join(cmd)}")

    with open(log_file, "w", encoding="utf-8") as log:
        try:
            proc = subprocess.Popen(
                list(cmd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
                env=dict(env) if env is not None else None,
                cwd=cwd,
            )
        except OSError as e:
            message = f"Failed to start server: {e}"
            logger.error(message)
            log.write(message + "\n")
            log.close()
            dump_log(log_file)
            raise LaunchError(message)

        returncode = None
        try:
            for line in proc.stdout:
                stream.write(line)
                stream.flush()
                log.write(line)
                log.flush()
            returncode = proc.wait()
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping server")
            return 130
        finally:
            if returncode is None:
                _stop(proc)
            proc.stdout.close()

    logger.info(f"Server exited with code {returncode}")
    return returncode

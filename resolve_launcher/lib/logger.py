import logging
import os
from pathlib import Path


# Inlined rather than imported from config, which itself logs
def get_log_file() -> Path:
    """Launcher log path under the current RESOLVE_LAUNCHER_HOME"""
    launcher_home = os.environ.get("RESOLVE_LAUNCHER_HOME")
    home = Path(launcher_home) if launcher_home else Path.home() / ".resolve-launcher"
    return home / "launcher.log"


class LauncherFileHandler(logging.FileHandler):
    """FileHandler that writes wherever the launcher home currently points.

    The file is opened on first write and reopened when RESOLVE_LAUNCHER_HOME
    changes between records.
    """

    def __init__(self):
        super().__init__(get_log_file(), delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        log_file = os.path.abspath(get_log_file())
        if log_file != self.baseFilename:
            if self.stream is not None:
                self.stream.close()
                self.stream = None
            self.baseFilename = log_file
        if self.stream is None:
            Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        super().emit(record)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with proper configuration"""
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid adding duplicate handlers
        logger.setLevel(logging.DEBUG)

        file_handler = LauncherFileHandler()
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

        logger.addHandler(file_handler)

    return logger


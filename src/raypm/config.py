import configparser
import logging
from pathlib import Path
from typing import Optional, Union

from .logger import setup_logger

_logger = setup_logger()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    def __init__(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".config" / "raypm"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path = self.config_dir / "raypm.conf"

        # Default values
        self.executable: str = "winget"
        self.echo_commands: bool = True
        self.log_level: str = "INFO"

        self.load()

    def load(self) -> None:
        parser = configparser.ConfigParser()
        if not self.config_path.exists():
            _logger.warning(f"Config file {self.config_path} not found. Creating default config.")
            self._write_default_config()

        parser.read(self.config_path)

        # [general]
        exe = parser.get("general", "executable", fallback=self.executable).strip()
        self.executable = exe or self.executable
        self.echo_commands = parser.getboolean("general", "echo_commands", fallback=self.echo_commands)

        level = parser.get("general", "log_level", fallback=self.log_level).strip().upper()
        if level not in LOG_LEVELS:
            _logger.warning(f"Unknown log_level '{level}' in {self.config_path}; using INFO.")
            level = "INFO"
        self.log_level = level

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    def _write_default_config(self) -> None:
        parser = configparser.ConfigParser()
        parser["general"] = {
            "executable": self.executable,
            "echo_commands": str(self.echo_commands).lower(),
            "log_level": self.log_level,
        }
        with self.config_path.open("w") as f:
            parser.write(f)
        _logger.info(f"Default config written to {self.config_path}")

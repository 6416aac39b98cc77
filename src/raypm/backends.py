from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from .logger import setup_logger

_logger = setup_logger()

# Separates two sequential invocations inside one mapping; never passed to the tool.
CHAIN_SEPARATOR = "&&"

# Target subcommands that need a package name or search term after them.
REQUIRES_ARG = frozenset({"install", "search", "uninstall", "show"})

PACMAN_TO_WINGET: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "-Syu": ("upgrade", "--all"),
        "-Syyu": ("source", "update", CHAIN_SEPARATOR, "upgrade", "--all"),
        "-Sy": ("source", "update"),
        "-S": ("install",),
        "-Ss": ("search",),
        "-R": ("uninstall",),
        "-Rns": ("uninstall",),
        "-Q": ("list",),
        "-Qi": ("show",),
        "-Si": ("show",),
        "-Qs": ("list",),
    }
)

WINGET_HELP = """\
Usage: ray [options] [package]
Options:
  -Syu        Upgrade all packages
  -Syyu       Update sources and upgrade all packages
  -Sy         Update sources
  -S          Install package
  -Ss         Search for package
  -R          Uninstall package
  -Rns        Uninstall package and dependencies
  -Q          List installed packages
  -Qi         Show package details
  -Si         Show package details from remote
  -Qs         List installed packages matching search term
  -h, --help  Show this help message
"""


def split_chain(tokens: Sequence[str]) -> List[Tuple[str, ...]]:
    """Split mapped tokens on the chain separator into sub-invocations, skipping empty ones."""
    chain: List[Tuple[str, ...]] = []
    current: List[str] = []
    for token in tokens:
        if token == CHAIN_SEPARATOR:
            if current:
                chain.append(tuple(current))
            current = []
        else:
            current.append(token)
    if current:
        chain.append(tuple(current))
    return chain


class PackageManager(ABC):
    """
    A target package manager that pacman-style flags are translated to.
    """

    def __init__(self, executable: Optional[str] = None) -> None:
        self._executable = executable

    @property
    @abstractmethod
    def command_mapping(self) -> Mapping[str, Tuple[str, ...]]:
        """Flag token -> target tokens."""

    @property
    @abstractmethod
    def help_message(self) -> str:
        ...

    @property
    @abstractmethod
    def default_executable(self) -> str:
        ...

    @property
    def executable_name(self) -> str:
        return self._executable or self.default_executable

    def lookup(self, token: str) -> Optional[Tuple[str, ...]]:
        return self.command_mapping.get(token)

    def is_available(self) -> bool:
        """True when `<executable> --version` can be spawned and exits cleanly."""
        try:
            proc = subprocess.run(
                [self.executable_name, "--version"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            _logger.debug("Probe for %s failed: %s", self.executable_name, e)
            return False
        return proc.returncode == 0


class Winget(PackageManager):
    """Windows Package Manager."""

    @property
    def command_mapping(self) -> Mapping[str, Tuple[str, ...]]:
        return PACMAN_TO_WINGET

    @property
    def help_message(self) -> str:
        return WINGET_HELP

    @property
    def default_executable(self) -> str:
        return "winget"

"""
raypm - pacman-style front end for the Windows Package Manager.

Translates pacman flags (``-S``, ``-Syu``, ``-Qi``, ...) into the
equivalent winget invocation and forwards its exit code.

Modules:
- cli: Command-line interface entry point.
- dispatcher: Flag resolution and child process execution.
- backends: Command tables for target package managers.
- errors: Exception hierarchy and exit codes.
- config: Configuration management.
"""

from .cli import main

__all__ = ["main"]

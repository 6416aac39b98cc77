from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .backends import REQUIRES_ARG, PackageManager, split_chain
from .errors import (
    CommandNotFoundError,
    ExecutionFailedError,
    InvalidArgumentsError,
    ProcessIOError,
    UsageError,
)
from .logger import Colors, colorize, setup_logger

_logger = setup_logger()


@dataclass(frozen=True)
class DispatchPlan:
    """Ordered child invocations of a single executable."""

    executable: str
    invocations: Tuple[Tuple[str, ...], ...]
    passthrough: bool = False

    def command_lines(self) -> List[List[str]]:
        return [[self.executable, *inv] for inv in self.invocations]


def resolve(args: Sequence[str], backend: PackageManager) -> DispatchPlan:
    """
    Translate an argument vector into a DispatchPlan.
    Validates every sub-invocation before returning, so a bad request never spawns anything.
    """
    if not args:
        raise UsageError()

    flag, trailing = args[0], tuple(args[1:])
    mapped = backend.lookup(flag)
    if mapped is None:
        _logger.debug("No mapping for %s; passing through to %s", flag, backend.executable_name)
        return DispatchPlan(backend.executable_name, (tuple(args),), passthrough=True)

    invocations: List[Tuple[str, ...]] = []
    used_trailing = False
    for sub in split_chain(mapped):
        if sub[0] in REQUIRES_ARG:
            if not trailing:
                raise InvalidArgumentsError(f"The command '{sub[0]}' requires a package name or search term.")
            invocations.append(sub + trailing)
            used_trailing = True
        else:
            invocations.append(sub)

    if trailing and not used_trailing:
        _logger.warning("Ignoring extra arguments for %s: %s", flag, " ".join(trailing))

    return DispatchPlan(backend.executable_name, tuple(invocations))


def execute(
    plan: DispatchPlan,
    runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    echo: bool = True,
) -> int:
    """
    Run each invocation in order, stopping at the first non-zero exit.
    Returns the exit code of the last invocation (0) on success.
    """
    run = runner or subprocess.run
    code = 0
    for cmd in plan.command_lines():
        line = " ".join(cmd)
        _logger.debug("Executing command: %s", line)
        if echo:
            print(f"{colorize('Running:', Colors.CYAN)} {line}", flush=True)

        try:
            proc = run(cmd)
        except FileNotFoundError:
            raise CommandNotFoundError(plan.executable) from None
        except OSError as e:
            raise ProcessIOError(str(e)) from e

        code = proc.returncode
        if code != 0:
            raise ExecutionFailedError(code)
    return code

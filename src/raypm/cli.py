# cli.py
import sys
from typing import List, Optional, Sequence

from .backends import PackageManager, Winget
from .config import Config
from .dispatcher import DispatchPlan, execute, resolve
from .errors import RayError, UsageError
from .logger import setup_logger

HELP_FLAGS = ("-h", "--help")


def show_help(backend: PackageManager, echo: bool = False) -> int:
    """Print our usage block, then hand over to the target tool's own help."""
    print(backend.help_message)
    if not backend.is_available():
        setup_logger().error("%s is not available on this system.", backend.executable_name)
        return 1
    plan = DispatchPlan(backend.executable_name, (("--help",),))
    return execute(plan, echo=echo)


def run(argv: Sequence[str], config: Config) -> int:
    logger = setup_logger(level=config.logging_level)
    backend = Winget(config.executable)
    args: List[str] = list(argv)

    try:
        if args and args[0] in HELP_FLAGS:
            return show_help(backend)
        try:
            plan = resolve(args, backend)
        except UsageError:
            return show_help(backend)
        return execute(plan, echo=config.echo_commands)
    except RayError as e:
        logger.error("Error: %s", e)
        return e.exit_code


def main(argv: Optional[Sequence[str]] = None):
    # ------------------------
    # Initialize config, then translate and run
    # ------------------------
    config = Config()
    if argv is None:
        argv = sys.argv[1:]
    sys.exit(run(argv, config))


if __name__ == "__main__":
    main()

import logging
import sys


class Colors:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"


class ColorFormatter(logging.Formatter):
    COLOR_MAP = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.RED + Colors.BOLD,
    }

    def format(self, record):
        color = self.COLOR_MAP.get(record.levelno, Colors.RESET)
        message = super().format(record)
        return f"{color}{message}{Colors.RESET}"


def setup_logger(name="raypm", level=None):
    logger = logging.getLogger(name)
    # Prevent adding multiple handlers in case of repeated calls
    if not logger.handlers:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(ColorFormatter("%(message)s"))
        logger.addHandler(ch)
        if level is None:
            level = logging.INFO
    # Later calls without a level keep whatever the config chose
    if level is not None:
        logger.setLevel(level)
    return logger


def colorize(text: str, color: str) -> str:
    """Wrap text in an ANSI color, or return it unchanged when stdout is not a TTY."""
    if not sys.stdout.isatty():
        return text
    return f"{color}{text}{Colors.RESET}"

"""
Exception types raised while resolving and running a translated command.
"""


class RayError(Exception):
    """Base exception for all ray errors; carries the process exit code."""

    prefix = ""

    def __init__(self, message: str, exit_code: int = 1):
        self.exit_code = exit_code
        super().__init__(f"{self.prefix}{message}")


class UsageError(RayError):
    """No flag was given on the command line."""

    def __init__(self, message: str = "Usage: ray [options] [package]"):
        super().__init__(message)


class InvalidArgumentsError(RayError):
    prefix = "Invalid arguments: "


class CommandNotFoundError(RayError):
    prefix = "Command not found: "

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(executable)


class ProcessIOError(RayError):
    prefix = "IO error: "


class ExecutionFailedError(RayError):
    """A child process exited non-zero; its code becomes ours."""

    prefix = "Execution failed: "

    def __init__(self, return_code: int):
        self.return_code = return_code
        # Signal-terminated children report a negative code on POSIX
        exit_code = return_code if return_code > 0 else 1
        super().__init__(f"Command failed with exit code: {return_code}", exit_code)

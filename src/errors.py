"""Errors raised while translating and running a rustc invocation."""

from pathlib import Path
from typing import Optional


class GccrsError(Exception):
    """Base class for every failure cargo-gccrs reports to the user."""


class InvalidArgError(GccrsError):
    """Unparseable, unregistered or missing rustc argument."""
    def __init__(self, arg: str):
        self.arg = arg
        super().__init__(f"invalid argument given to `gccrs`: {arg}")


class InvalidCfgDumpError(GccrsError):
    """A line of the target options dump has more than one colon."""
    def __init__(self, line: str):
        self.line = line
        super().__init__(
            f"invalid configuration returned by `gccrs -frust-dump-*`: {line!r}")


class CompileError(GccrsError):
    """Raised when gccrs or the archiver exits with a non-zero status."""
    def __init__(self, tool: str, exit_code: int):
        self.tool = tool
        self.exit_code = exit_code
        super().__init__(f"{tool} failed with exit code {exit_code}")


class CommandIoError(GccrsError):
    """A child process could not be spawned or its files could not be read."""
    def __init__(self, tool: str, cause: OSError):
        self.tool = tool
        self.cause = cause
        super().__init__(f"IO error when executing `{tool}`: {cause}")


class Utf8Error(GccrsError):
    """A path cannot be passed on a command line as UTF-8 text."""
    def __init__(self, value: str):
        self.value = value
        shown = value.encode("utf-8", "backslashreplace").decode("utf-8")
        super().__init__(f"argument is not valid UTF-8: {shown}")


class ConfigError(GccrsError):
    """The configuration file cannot be parsed or holds a value of the wrong type."""
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"invalid configuration file {path}: {reason}")


class InvocationError(GccrsError):
    def __init__(self, command: Optional[str] = None):
        self.command = command
        if command is None:
            super().__init__("no command given to `cargo-gccrs`")
        else:
            super().__init__(f"unknown command '{command}' given to `cargo-gccrs`")


class InstallationError(GccrsError):
    def __init__(self, gccrs_path: str = "gccrs"):
        self.gccrs_path = gccrs_path
        super().__init__(f"`{gccrs_path}` must be installed")


class WrapperLaunchError(GccrsError):
    def __init__(self, cause: OSError):
        self.cause = cause
        super().__init__(f"error when launching `cargo` with `cargo-gccrs` as a `rustc` wrapper: {cause}")


class WrapperExitError(GccrsError):
    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(f"`cargo` did not complete successfully (exit code {exit_code})")

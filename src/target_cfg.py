"""Translate gccrs target options into rustc's `--print` output.

gccrs writes its target options to a dump file when invoked with
`-frust-dump-target_options`. Each line is either `key: value` (a target
specific option) or a bare `value` (OS information). rustc prints target
options as `key=value`, sorted, before the OS information.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from errors import CommandIoError, InvalidArgError, InvalidCfgDumpError


DUMP_FILENAME = "gccrs.target-options.dump"


@dataclass(frozen=True)
class TargetSpecific:
    """`target_<...>: <...>` line."""
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class OsInfo:
    """Single value line, printed as is."""
    value: str

    def __str__(self) -> str:
        return self.value


DumpedOption = Union[TargetSpecific, OsInfo]


def parse_dumped_option(line: str) -> DumpedOption:
    """Parse one line of the dump file."""
    parts = line.split(":")
    if len(parts) == 1:
        return OsInfo(line)
    if len(parts) == 2:
        key, value = parts
        return TargetSpecific(key, value.lstrip())
    raise InvalidCfgDumpError(line)


def sort_key(option: DumpedOption) -> tuple:
    """Target specific options first, each group in lexicographic order."""
    if isinstance(option, TargetSpecific):
        return (0, option.key, option.value)
    return (1, option.value, "")


class GccrsConfig:
    """Sorted target options parsed from a gccrs dump."""

    def __init__(self, options: list[DumpedOption]):
        self.options = sorted(options, key=sort_key)

    @classmethod
    def from_dump(cls, contents: str) -> "GccrsConfig":
        # Any invalid line rejects the whole dump
        return cls([parse_dumped_option(line) for line in contents.splitlines()])

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GccrsConfig":
        """Read the dump file left in the working directory by gccrs."""
        path = path or Path(DUMP_FILENAME)
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CommandIoError("gccrs", e) from e
        return cls.from_dump(contents)

    def __str__(self) -> str:
        # rustc's own output has no separator between entries
        return "".join(str(opt) for opt in self.options)


def render(contents: str) -> str:
    """Render dump file contents the way rustc prints its configuration."""
    return str(GccrsConfig.from_dump(contents))


# ======================================================================
# --print=file-names
# ======================================================================

# rustc's file name for each crate type, `{}` being the crate name
RUSTC_FILE_NAMES = {
    "bin": "{}",
    "lib": "lib{}.rlib",
    "rlib": "lib{}.rlib",
    "dylib": "lib{}.so",
    "cdylib": "lib{}.so",
    "staticlib": "lib{}.a",
    "proc-macro": "lib{}.so",
}


def file_names(crate_name: str, crate_types: list[str]) -> list[str]:
    """Return the file name rustc would produce for each crate type."""
    names = []
    for crate_type in crate_types:
        pattern = RUSTC_FILE_NAMES.get(crate_type)
        if pattern is None:
            raise InvalidArgError(f"unknown crate type '{crate_type}'")
        names.append(pattern.format(crate_name))
    return names

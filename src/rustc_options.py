"""rustc command line grammar.

Only the options cargo passes to rustc for a regular build are registered;
any other option is rejected with InvalidArgError.
"""

import argparse
from dataclasses import dataclass
from typing import Optional

from errors import InvalidArgError


# (flags, dest, help) for options that may appear at most once
SINGLE_OPTIONS = [
    (("--crate-name",), "crate_name", "Name of the crate to compile"),
    (("--edition",), "edition", "Rust edition to use"),
    (("--error-format",), "error_format", "Requested error format"),
    (("--out-dir",), "out_dir", "Directory in which to output generated files"),
    (("--emit",), "emit", "Requested output to emit"),
    (("--json",), "json", "JSON rendering type"),
]

# (flags, dest, help) for options that may be repeated
MULTI_OPTIONS = [
    (("-C", "--codegen"), "codegen", "Extra compiler options, OPTION[=VALUE]"),
    (("-L",), "library_paths", "Add a directory to the library search path"),
    (("--crate-type",), "crate_types", "Type of binary to output"),
    (("--cap-lints",), "cap_lints", "Set the most restrictive lint level"),
    (("--cfg",), "cfgs", "Configure the compilation environment"),
]

QUERY_OPTIONS = [
    (("--print",), "prints", "Compiler information to print on stdout"),
]


@dataclass(frozen=True)
class RustcOptions:
    """A parsed rustc invocation."""
    crate_name: Optional[str] = None
    edition: Optional[str] = None
    error_format: Optional[str] = None
    out_dir: Optional[str] = None
    emit: Optional[str] = None
    json: Optional[str] = None
    codegen: tuple[str, ...] = ()
    library_paths: tuple[str, ...] = ()
    crate_types: tuple[str, ...] = ()
    cap_lints: tuple[str, ...] = ()
    cfgs: tuple[str, ...] = ()
    prints: tuple[str, ...] = ()
    free: tuple[str, ...] = ()

    def codegen_value(self, key: str) -> Optional[str]:
        """Return the value of the last `-C key=value` option, if any."""
        value = None
        for opt in self.codegen:
            name, sep, rest = opt.partition("=")
            if name == key:
                value = rest if sep else ""
        return value


class _RustcArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message):
        raise InvalidArgError(message)


def _make_parser(query: bool) -> argparse.ArgumentParser:
    parser = _RustcArgumentParser(prog="rustc", add_help=False,
                                  allow_abbrev=False)
    options = SINGLE_OPTIONS + MULTI_OPTIONS
    if query:
        options = options + QUERY_OPTIONS
    for flags, dest, help_text in options:
        parser.add_argument(*flags, dest=dest, action="append", default=[],
                            help=help_text)
    return parser


def parse_rustc_args(args: list[str], query: bool = False) -> RustcOptions:
    """Parse rustc arguments, without the program name and sub-command.

    With `query`, `--print` is accepted as well (the `rustc -` form cargo
    uses to learn about the target).
    """
    # Everything after "--" is a free argument, as with getopts
    trailing = []
    if "--" in args:
        index = args.index("--")
        args, trailing = args[:index], args[index + 1:]

    parser = _make_parser(query)
    namespace, rest = parser.parse_known_args(args)

    free = []
    for arg in rest:
        # A lone "-" means stdin and is a source, not an option
        if arg.startswith("-") and arg != "-":
            raise InvalidArgError(f"unrecognized option '{arg}'")
        free.append(arg)
    free.extend(trailing)

    values = {}
    for flags, dest, _ in SINGLE_OPTIONS:
        given = getattr(namespace, dest)
        if len(given) > 1:
            raise InvalidArgError(f"option '{flags[0]}' given more than once")
        values[dest] = given[0] if given else None

    multi = MULTI_OPTIONS + (QUERY_OPTIONS if query else [])
    for _, dest, _ in multi:
        values[dest] = tuple(getattr(namespace, dest))

    return RustcOptions(free=tuple(free), **values)

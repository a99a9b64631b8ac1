#!/usr/bin/env python3
"""cargo-gccrs - build cargo projects with gccrs.

Stands in for rustc (through RUSTC_WRAPPER) and translates its arguments
into gccrs invocations.
"""

import importlib
import sys
from pathlib import Path
from typing import Optional

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from errors import GccrsError, InvocationError

USAGE = """\
cargo-gccrs - build cargo projects with gccrs

usage: cargo gccrs <cargo command> [options]

commands:
  gccrs       Run cargo with cargo-gccrs as the rustc wrapper
  rustc       Translate rustc arguments and compile with gccrs
              (invoked by cargo, not meant to be called directly)

environment:
  GCCRS_EXTRA_ARGS      Extra arguments given to every gccrs invocation
  AR_EXTRA_ARGS         Extra arguments given to every ar invocation
  CARGO_GCCRS_VERBOSE   Print every command before running it
  CARGO_GCCRS_CONFIG    Configuration file (default ~/.cargo-gccrs/config.toml)
"""

COMMANDS = {
    "rustc": "commands.rustc",
    "gccrs": "commands.wrapper",
}


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv[1:]

    try:
        if not args:
            raise InvocationError()

        cmd = args[0]
        cmd_args = args[1:]

        if cmd not in COMMANDS:
            raise InvocationError(cmd)

        module = importlib.import_module(COMMANDS[cmd])
        return module.run(cmd_args)
    except InvocationError as e:
        print(f"error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    except GccrsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""cargo-gccrs rustc - compile a crate with gccrs from rustc arguments."""

from config import load_global_config
from gccrs import GccrsRunner
from rustc_options import parse_rustc_args
from target_cfg import file_names
from targets import build_arg_sets

# Print kinds answered when rustc is asked about the target
PRINT_FILE_NAMES = "file-names"
PRINT_CFG = "cfg"


def _print_info(runner: GccrsRunner, args: list[str]) -> int:
    """Answer `rustc - --print=...`, which cargo uses to learn about the target."""
    options = parse_rustc_args(args, query=True)
    prints = options.prints or (PRINT_FILE_NAMES, PRINT_CFG)

    if PRINT_FILE_NAMES in prints:
        crate_name = options.crate_name or "___"
        for name in file_names(crate_name, list(options.crate_types)):
            print(name)

    if PRINT_CFG in prints:
        print(runner.dump_config())

    return 0


def run(args: list[str]) -> int:
    cfg = load_global_config()
    runner = GccrsRunner(cfg)
    runner.maybe_install()

    # rustc reading its crate from stdin is only ever a configuration query
    if args and args[0] == "-":
        return _print_info(runner, args[1:])

    options = parse_rustc_args(args)
    arg_sets = build_arg_sets(options)
    runner.dispatch(arg_sets)
    return 0

"""cargo-gccrs gccrs - run cargo with cargo-gccrs as the rustc wrapper."""

import os
import subprocess

from errors import WrapperExitError, WrapperLaunchError

WRAPPER_NAME = "cargo-gccrs"


def run(args: list[str]) -> int:
    # `cargo gccrs build` reaches us as `cargo-gccrs gccrs build`, so the
    # remaining arguments are a cargo command line
    env = os.environ.copy()
    env["RUSTC_WRAPPER"] = WRAPPER_NAME

    try:
        result = subprocess.run(["cargo"] + args, env=env)
    except OSError as e:
        raise WrapperLaunchError(e) from e

    if result.returncode != 0:
        raise WrapperExitError(result.returncode)
    return 0

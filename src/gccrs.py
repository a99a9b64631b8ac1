"""gccrs and ar subprocess runner."""

import os
import subprocess
import sys
from typing import Optional

from config import AR_EXTRA_ARGS, GlobalConfig, env_args
from errors import CommandIoError, CompileError, InstallationError
from target_cfg import DUMP_FILENAME, GccrsConfig
from targets import CrateType, PostAction, TranslatedArgSet, checked_text, gccrs_args


# Arguments making gccrs write its target options to the dump file
DUMP_CONFIG_ARGS = ["-x", "rs", "-frust-dump-target_options", "-"]


class GccrsRunner:
    """Runs gccrs, one translated argument set at a time."""

    def __init__(self, cfg: GlobalConfig, verbose: Optional[bool] = None):
        self.cfg = cfg
        self.verbose = cfg.verbose if verbose is None else verbose

    def run(self, program: str, args: list[str],
            **kwargs) -> subprocess.CompletedProcess:
        """Run a program, letting its output through. Returns CompletedProcess."""
        cmd = [program] + args

        if self.verbose:
            print(f"  > {' '.join(cmd)}", file=sys.stderr)

        try:
            return subprocess.run(cmd, **kwargs)
        except OSError as e:
            raise CommandIoError(program, e) from e

    def run_checked(self, program: str, args: list[str],
                    tool_name: Optional[str] = None,
                    **kwargs) -> subprocess.CompletedProcess:
        """Run a program and raise CompileError on failure."""
        result = self.run(program, args, **kwargs)
        if result.returncode != 0:
            raise CompileError(tool_name or program, result.returncode)
        return result

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------

    def is_installed(self) -> bool:
        """Check that gccrs can be spawned and answers `-v`."""
        try:
            result = subprocess.run([self.cfg.gccrs_path, "-v"],
                                    stdout=subprocess.DEVNULL,
                                    stderr=subprocess.DEVNULL)
        except OSError:
            return False
        return result.returncode == 0

    def maybe_install(self) -> None:
        """Make sure gccrs is available. It cannot be installed automatically yet."""
        if not self.is_installed():
            raise InstallationError(self.cfg.gccrs_path)

    # ------------------------------------------------------------------
    # Target options
    # ------------------------------------------------------------------

    def dump_config(self) -> GccrsConfig:
        """Have gccrs dump its target options, then parse the dump file."""
        # Remove any dump left by an earlier run
        try:
            if os.path.exists(DUMP_FILENAME):
                os.remove(DUMP_FILENAME)
        except OSError as e:
            raise CommandIoError(self.cfg.gccrs_path, e) from e

        # gccrs reads the crate from stdin here; give it an empty one
        self.run(self.cfg.gccrs_path, DUMP_CONFIG_ARGS, stdin=subprocess.DEVNULL)
        return GccrsConfig.load()

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self, arg_set: TranslatedArgSet) -> None:
        """Run gccrs for a single argument set."""
        self.run_checked(self.cfg.gccrs_path, gccrs_args(arg_set),
                         tool_name="gccrs")

    def archive(self, arg_set: TranslatedArgSet) -> None:
        """Bundle the object file of a static library set into its archive."""
        output = checked_text(arg_set.output_path)
        obj = checked_text(arg_set.object_path)

        # `ar r` adds to an existing archive; start from an empty one
        try:
            if os.path.exists(output):
                os.remove(output)
        except OSError as e:
            raise CommandIoError("ar", e) from e

        args = ["rcs", output, obj] + env_args(AR_EXTRA_ARGS)
        self.run_checked(self.cfg.ar_path, args, tool_name="ar")

        if not self.cfg.keep_objects:
            try:
                os.remove(obj)
            except OSError as e:
                raise CommandIoError("ar", e) from e

    def dispatch(self, arg_sets: list[TranslatedArgSet]) -> None:
        """Compile every set in order, stopping at the first failure."""
        for arg_set in arg_sets:
            if arg_set.crate_type is CrateType.UNKNOWN:
                print(f"warning: gccrs cannot produce crate type "
                      f"'{arg_set.requested}', skipping it", file=sys.stderr)
                continue

            self.compile(arg_set)

            if arg_set.post_action is PostAction.ARCHIVE_STATIC_LIB:
                self.archive(arg_set)

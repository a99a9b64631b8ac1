"""Crate type targets: translated argument sets and gccrs command lines."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from config import GCCRS_EXTRA_ARGS, env_args
from errors import InvalidArgError, Utf8Error
from rustc_options import RustcOptions


# ======================================================================
# Crate types and post-compilation actions
# ======================================================================

class CrateType(Enum):
    BIN = "bin"
    DYNAMIC_LIB = "dylib"
    STATIC_LIB = "staticlib"
    UNKNOWN = "unknown"

    @classmethod
    def from_rustc(cls, name: str) -> "CrateType":
        """Map a `--crate-type` value; types gccrs cannot produce are UNKNOWN."""
        return RUSTC_CRATE_TYPES.get(name, cls.UNKNOWN)


RUSTC_CRATE_TYPES = {
    "bin": CrateType.BIN,
    "dylib": CrateType.DYNAMIC_LIB,
    "cdylib": CrateType.DYNAMIC_LIB,
    "staticlib": CrateType.STATIC_LIB,
}


class PostAction(Enum):
    """Step run by the dispatcher after a successful gccrs invocation."""
    NONE = "none"
    ARCHIVE_STATIC_LIB = "archive"


OBJECT_SUFFIX = ".tmp.o"


@dataclass
class TranslatedArgSet:
    """One gccrs invocation, derived from one requested crate type."""
    source_files: list[str]
    crate_type: CrateType
    requested: str
    output_path: Optional[str] = None
    post_action: PostAction = PostAction.NONE

    @property
    def object_path(self) -> Optional[str]:
        """Intermediate object file used by the static library path."""
        if self.output_path is None:
            return None
        return self.output_path + OBJECT_SUFFIX


# ======================================================================
# Builder
# ======================================================================

def output_path(out_dir: str, crate_name: str, crate_type: CrateType,
                extra_filename: str = "") -> Optional[str]:
    """Return the artifact path for a crate type, or None for UNKNOWN."""
    stem = f"{crate_name}{extra_filename}"
    if crate_type is CrateType.BIN:
        name = stem
    elif crate_type is CrateType.DYNAMIC_LIB:
        name = f"lib{stem}.so"
    elif crate_type is CrateType.STATIC_LIB:
        name = f"lib{stem}.a"
    else:
        return None
    return str(Path(out_dir) / name)


def build_arg_sets(options: RustcOptions) -> list[TranslatedArgSet]:
    """Derive one gccrs invocation per `--crate-type`, in appearance order."""
    if options.crate_name is None:
        raise InvalidArgError("missing required option '--crate-name'")
    if options.out_dir is None:
        raise InvalidArgError("missing required option '--out-dir'")

    # Last `-C extra-filename=...` wins, like rustc
    extra_filename = options.codegen_value("extra-filename") or ""

    arg_sets = []
    for requested in options.crate_types:
        crate_type = CrateType.from_rustc(requested)
        post_action = PostAction.NONE
        if crate_type is CrateType.STATIC_LIB:
            post_action = PostAction.ARCHIVE_STATIC_LIB

        arg_sets.append(TranslatedArgSet(
            source_files=list(options.free),
            crate_type=crate_type,
            requested=requested,
            output_path=output_path(options.out_dir, options.crate_name,
                                    crate_type, extra_filename),
            post_action=post_action,
        ))

    return arg_sets


# ======================================================================
# Formatter
# ======================================================================

def checked_text(value: str) -> str:
    """Return value unchanged, or raise Utf8Error if it holds raw bytes.

    Undecodable bytes in argv come through as surrogate escapes, which
    cannot be encoded back to UTF-8.
    """
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise Utf8Error(value) from None
    return value


def _crate_type_flags(arg_set: TranslatedArgSet) -> list[str]:
    crate_type = arg_set.crate_type
    if crate_type is CrateType.BIN:
        return ["-o", arg_set.output_path, "-fPIE", "-pie"]
    if crate_type is CrateType.DYNAMIC_LIB:
        return ["-fPIC", "-shared", "-o", arg_set.output_path]
    if crate_type is CrateType.STATIC_LIB:
        return ["-c", "-o", arg_set.object_path]
    return []


def gccrs_args(arg_set: TranslatedArgSet,
               extra_args: Optional[list[str]] = None) -> list[str]:
    """Return the gccrs command line arguments (without the program) for a set.

    `extra_args` defaults to the contents of GCCRS_EXTRA_ARGS.
    """
    if extra_args is None:
        extra_args = env_args(GCCRS_EXTRA_ARGS)

    args = list(arg_set.source_files)
    args.extend(extra_args)
    args.extend(_crate_type_flags(arg_set))

    return [checked_text(arg) for arg in args]

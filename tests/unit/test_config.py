from __future__ import annotations

from pathlib import Path

import pytest

from config import AR_EXTRA_ARGS, GCCRS_EXTRA_ARGS, env_args, load_global_config
from errors import ConfigError


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_global_config(tmp_path / "config.toml")

    assert cfg.gccrs_path == "gccrs"
    assert cfg.ar_path == "ar"
    assert cfg.keep_objects is False
    assert cfg.verbose is False


def test_file_values_override_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[tools]",
                'gccrs = "/opt/gccrs/bin/gccrs"',
                'ar = "gcc-ar"',
                "",
                "[build]",
                "keep_objects = true",
                "verbose = true",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_global_config(path)

    assert cfg.gccrs_path == "/opt/gccrs/bin/gccrs"
    assert cfg.ar_path == "gcc-ar"
    assert cfg.keep_objects is True
    assert cfg.verbose is True


def test_config_path_comes_from_the_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "other.toml"
    path.write_text('[tools]\nar = "llvm-ar"\n', encoding="utf-8")
    monkeypatch.setenv("CARGO_GCCRS_CONFIG", str(path))

    assert load_global_config().ar_path == "llvm-ar"


@pytest.mark.parametrize("value, expected", [("1", True), ("0", False), ("", False)])
def test_verbose_environment_variable(
    value: str, expected: bool, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CARGO_GCCRS_VERBOSE", value)

    assert load_global_config(tmp_path / "config.toml").verbose is expected


def test_env_args_split_on_whitespace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(GCCRS_EXTRA_ARGS, " -O2\t-g  -Wall ")

    assert env_args(GCCRS_EXTRA_ARGS) == ["-O2", "-g", "-Wall"]


def test_unset_env_args_are_empty() -> None:
    assert env_args(AR_EXTRA_ARGS) == []


def test_malformed_file_is_a_config_error(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[tools\ngccrs = ", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid configuration file"):
        load_global_config(path)


@pytest.mark.parametrize(
    "text, key",
    [
        ('[build]\nkeep_objects = "no"\n', "build.keep_objects"),
        ("[build]\nverbose = 1\n", "build.verbose"),
        ("[tools]\ngccrs = 42\n", "tools.gccrs"),
        ("[tools]\nar = false\n", "tools.ar"),
        ('tools = "gccrs"\n', "tools"),
    ],
)
def test_wrongly_typed_values_are_config_errors(text: str, key: str, tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError, match=f"'{key}' must be a"):
        load_global_config(path)

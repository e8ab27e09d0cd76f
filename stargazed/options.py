"""
options.py

Responsibility: Turn a loosely-typed option mapping into a typed, immutable `Options`.

The mapping may come from CLI flags, a YAML config file, or both merged together.
Every recognized option has a long and a short alias (`username` / `u`, ...).
Unknown keys are ignored; values of the wrong type are rejected.

Downstream code should only ever see the validated `Options` record.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class OptionsError(ValueError):
    pass


@dataclass(frozen=True)
class Options:
    """Validated run configuration."""

    username: str | None = None
    token: str | None = None
    repo: str | None = None
    message: str | None = None
    sort: bool = False
    version: bool = False
    help: bool = False


# (field, short alias, expected type, label used in error messages)
_FIELDS: tuple[tuple[str, str, type, str], ...] = (
    ("username", "u", str, "Username"),
    ("token", "t", str, "Token"),
    ("repo", "r", str, "Repo name"),
    ("message", "m", str, "Commit message"),
    ("sort", "s", bool, "Sort option"),
    ("version", "v", bool, "Version option"),
    ("help", "h", bool, "Help option"),
)


def _pick(raw: Mapping[str, Any], long: str, short: str) -> tuple[bool, Any]:
    if long in raw:
        return True, raw[long]
    if short in raw:
        return True, raw[short]
    return False, None


def validate_options(raw: Any) -> Options:
    """
    Validate `raw` and return an `Options`.

    Raises OptionsError on the first option with a wrong type.
    """
    if not isinstance(raw, Mapping):
        raise OptionsError(f"invalid input argument. Options argument must be a mapping. Value: `{raw!r}`.")

    values: dict[str, Any] = {}
    for name, short, expected, label in _FIELDS:
        present, value = _pick(raw, name, short)
        if not present:
            continue
        # bool is checked exactly so that 0/1 are not accepted as flags.
        if expected is bool:
            ok = type(value) is bool
        else:
            ok = isinstance(value, expected)
        if not ok:
            kind = "boolean" if expected is bool else "string"
            raise OptionsError(f"invalid option. {label} must be a {kind}.")
        values[name] = value

    return Options(**values)


def check_required(options: Options) -> None:
    """
    Enforce cross-field requirements. Must run before any network access.
    """
    if not options.username:
        raise OptionsError("Error! username is a required field.")
    if options.repo and not options.token:
        raise OptionsError("Error: publishing to a repository needs a token. Set --token")


def load_config_file(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML config file whose top level is an option mapping, e.g.:

        username: octocat
        token: ghp_...
        sort: false
    """
    p = Path(path)
    if not p.exists():
        raise OptionsError(f"Config file does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise OptionsError(f"Config file is not valid YAML: {p}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OptionsError("Config file must be a mapping/object at the top level.")
    return data

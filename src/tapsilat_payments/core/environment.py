"""
Where client settings come from.

Settings are plain ``TAPSILAT_*`` strings. They are looked up in the process
environment, then in an optional ``.env`` file, and explicit overrides beat
both. :class:`ClientEnvironment` holds the merged result and hands the
``TAPSILAT_*`` subset to :class:`tapsilat_payments.core.config.ClientConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, MutableMapping, Optional, Tuple

ENV_PREFIX = "TAPSILAT_"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    # Unquoted values may carry a trailing " # comment".
    return value.split(" #", 1)[0].rstrip()


def _iter_assignments(text: str) -> Iterator[Tuple[str, str]]:
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        yield key, _unquote(value.strip())


def read_env_file(path: str | Path) -> Dict[str, str]:
    """Return the assignments in ``path``, or an empty dict if it does not exist."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    return dict(_iter_assignments(text))


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
    prefix: Optional[str] = None,
) -> Dict[str, str]:
    """
    Copy the assignments in ``path`` into ``environ`` (:data:`os.environ` by default).

    Every key in the file is copied unless ``prefix`` is given, in which case
    only keys starting with it are. Keys already present in ``environ`` keep
    their value and a missing file is not an error. Returns a snapshot of the
    updated mapping.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in read_env_file(path).items():
        if prefix is None or key.startswith(prefix):
            target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def settings(self, prefix: str = ENV_PREFIX) -> Dict[str, str]:
        return {
            key: value
            for key, value in self.variables.items()
            if key.startswith(prefix)
        }


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Layer ``overrides`` over ``base`` over ``env_file``.

    ``base`` defaults to :data:`os.environ`; an empty mapping means "no process
    environment". Pass ``env_file=None`` to skip the file.
    """
    merged: Dict[str, str] = {}
    if env_file is not None:
        merged.update(read_env_file(env_file))
    merged.update(os.environ if base is None else base)
    if overrides:
        merged.update(overrides)
    return ClientEnvironment(variables=merged)

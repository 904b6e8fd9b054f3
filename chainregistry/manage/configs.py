"""Reading and writing chain configs and superchain definitions as TOML."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import tomli_w

from chainregistry import paths
from chainregistry.tomlio import atomic_write, read_toml_file


def _dump(data: Mapping[str, Any]) -> str:
    try:
        return tomli_w.dumps(dict(data))
    except TypeError as exc:
        raise ValueError(f"failed to marshal toml: {exc}") from exc


def write_chain_config(
    root: str, superchain: str, short_name: str, chain: Mapping[str, Any]
) -> None:
    """Write a chain config into the registry, refusing to overwrite one."""
    fname = paths.chain_config(root, superchain, short_name)
    if os.path.exists(fname):
        raise FileExistsError(f"file already exists: {fname}")
    text = _dump(chain)
    paths.ensure_dir(os.path.dirname(fname))
    atomic_write(fname, text)


def read_chain_config(root: str, superchain: str, short_name: str) -> dict[str, Any]:
    """Read a chain config from the registry."""
    fname = paths.chain_config(root, superchain, short_name)
    if not os.path.exists(fname):
        raise FileNotFoundError(f"file does not exist: {fname}")
    try:
        return read_toml_file(fname)
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal toml: {exc}") from exc


def write_superchain_definition(fname: str, definition: Mapping[str, Any]) -> None:
    """Write a superchain definition to fname, creating its directory if needed."""
    if os.path.exists(fname):
        raise FileExistsError(f"file already exists: {fname}")
    os.makedirs(os.path.dirname(os.path.abspath(fname)), mode=0o755, exist_ok=True)
    atomic_write(fname, _dump(definition))
"""Genesis files stored as JSON compressed with zstd and a shared dictionary."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any

import zstandard

from chainregistry import paths
from chainregistry.tomlio import atomic_write

_DICTIONARY_NAME = "dictionary"
_CHUNK = 1 << 16


def _load_dictionary(root: str) -> zstandard.ZstdCompressionDict:
    dict_path = os.path.join(paths.extra_dir(root), _DICTIONARY_NAME)
    try:
        with open(dict_path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise type(exc)(f"failed to read dictionary: {exc}") from exc
    return zstandard.ZstdCompressionDict(data)


def write_superchain_genesis(
    root: str, superchain: str, short_name: str, genesis: Mapping[str, Any]
) -> None:
    """Write a chain's genesis into the registry, refusing to overwrite one."""
    gen_path = paths.genesis_file(root, superchain, short_name)
    if os.path.exists(gen_path):
        raise FileExistsError(f"genesis already exists: {gen_path}")
    os.makedirs(os.path.dirname(gen_path), mode=0o755, exist_ok=True)
    write_genesis(root, gen_path, genesis)


def write_genesis(root: str, gen_path: str, genesis: Mapping[str, Any]) -> None:
    """Compress genesis as JSON with the registry's dictionary and write it to gen_path."""
    dictionary = _load_dictionary(root)
    try:
        payload = (json.dumps(genesis) + "\n").encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise ValueError(f"failed to encode genesis: {exc}") from exc
    compressed = zstandard.ZstdCompressor(dict_data=dictionary).compress(payload)
    atomic_write(gen_path, compressed)


def read_superchain_genesis(root: str, superchain: str, short_name: str) -> Any:
    """Read a chain's genesis from the registry."""
    gen_path = paths.genesis_file(root, superchain, short_name)
    if not os.path.exists(gen_path):
        raise FileNotFoundError(f"genesis does not exist: {gen_path}")
    return read_genesis(root, gen_path)


def read_genesis(root: str, gen_path: str) -> Any:
    """Decompress and decode the genesis JSON at gen_path."""
    dictionary = _load_dictionary(root)
    try:
        fh = open(gen_path, "rb")
    except OSError as exc:
        raise type(exc)(f"failed to open genesis: {exc}") from exc
    with fh, zstandard.ZstdDecompressor(dict_data=dictionary).stream_reader(fh) as reader:
        try:
            data = b"".join(iter(lambda: reader.read(_CHUNK), b""))
        except zstandard.ZstdError as exc:
            raise ValueError(f"failed to decode genesis: {exc}") from exc
    try:
        return json.loads(data.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"failed to decode genesis: {exc}") from exc
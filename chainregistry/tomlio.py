"""Reading and writing TOML and JSON files, with atomic replacement on write."""

from __future__ import annotations

import gzip
import json
import os
import tempfile
import tomllib
from collections.abc import Mapping
from typing import Any

import tomli_w

_FILE_MODE = 0o644


def read_toml_file(p: str) -> dict[str, Any]:
    """Parse the TOML file at p."""
    with open(p, "rb") as fh:
        data = fh.read()
    try:
        return tomllib.loads(data.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"failed to unmarshal TOML: {exc}") from exc


def read_json_file(p: str) -> Any:
    """Parse the JSON file at p, decompressing it first if it ends in .gz."""
    opener = gzip.open if os.path.splitext(p)[1] == ".gz" else open
    with opener(p, "rb") as fh:
        try:
            return json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError, gzip.BadGzipFile) as exc:
            raise ValueError(f"failed to unmarshal JSON: {exc}") from exc


def atomic_write(p: str, data: bytes | str) -> None:
    """Write data to p by writing a temporary file beside it and renaming it into place."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    directory = os.path.dirname(os.path.abspath(p))
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=os.path.basename(p))
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, _FILE_MODE)
        os.replace(tmp_path, p)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def write_toml_file(p: str, data: Mapping[str, Any]) -> None:
    """Serialise data as TOML and write it atomically to p."""
    try:
        text = tomli_w.dumps(dict(data))
    except TypeError as exc:
        raise ValueError(f"failed to marshal TOML: {exc}") from exc
    atomic_write(p, text)
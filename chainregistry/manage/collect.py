"""Gathering the chain configuration files stored under a directory."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

from chainregistry.once import OnceValue
from chainregistry.tomlio import read_toml_file

COLLECTOR_CONCURRENCY = 8

_SUPERCHAIN_FILE = "superchain.toml"
_CHAIN_EXT = ".toml"


@dataclass
class DiskChainConfig:
    """A chain configuration together with where it was found on disk."""

    short_name: str
    filepath: str
    superchain: str
    config: dict[str, Any] = field(default_factory=dict)


def _chain_files(p: str) -> list[str]:
    if not os.path.exists(p):
        raise FileNotFoundError(f"failed to walk directory: no such file or directory: {p}")
    if not os.path.isdir(p):
        candidates = [p]
    else:
        candidates = []
        for dirpath, dirnames, filenames in os.walk(p):
            dirnames.sort()
            candidates.extend(os.path.join(dirpath, name) for name in sorted(filenames))
    return [
        fp
        for fp in candidates
        if os.path.basename(fp) != _SUPERCHAIN_FILE
        and os.path.splitext(os.path.basename(fp))[1] == _CHAIN_EXT
    ]


def _load(file: str) -> DiskChainConfig:
    basename = os.path.basename(file)
    try:
        chain = read_toml_file(file)
    except OSError as exc:
        raise type(exc)(f"failed to read file {file}: {exc}") from exc
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal toml {basename}: {exc}") from exc
    return DiskChainConfig(
        short_name=basename.removesuffix(_CHAIN_EXT),
        filepath=file,
        superchain=os.path.basename(os.path.dirname(file)),
        config=chain,
    )


def collect_chain_configs(p: str) -> list[DiskChainConfig]:
    """Load every chain config TOML file under p, ordered by chain name.

    Files named superchain.toml and files without a .toml extension are skipped.
    """
    files = _chain_files(p)
    first_error: OnceValue[BaseException] = OnceValue()
    out: list[DiskChainConfig] = []

    with ThreadPoolExecutor(max_workers=COLLECTOR_CONCURRENCY) as pool:
        futures = [pool.submit(_load, file) for file in files]
        for future in as_completed(futures):
            exc = future.exception()
            if exc is not None:
                first_error.set(exc)
            else:
                out.append(future.result())

    if first_error.value is not None:
        err = first_error.value
        if isinstance(err, OSError):
            raise type(err)(f"error collecting configs: {err}") from err
        raise ValueError(f"error collecting configs: {err}") from err

    out.sort(key=lambda cfg: str(cfg.config.get("name", "")))
    return out
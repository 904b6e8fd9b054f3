"""Chain artifacts in the staging directory and their derivation from deployment state."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping, MutableMapping
from typing import Any

from chainregistry import paths
from chainregistry.manage.collect import DiskChainConfig
from chainregistry.tomlio import read_toml_file

HARDFORK_NAMES = frozenset(
    {
        "canyon",
        "delta",
        "ecotone",
        "fjord",
        "granite",
        "holocene",
        "isthmus",
        "interop",
        "jovian",
    }
)

_OFFSET_FIELD = re.compile(r"^[lL]2Genesis(?P<name>[A-Za-z0-9]+)TimeOffset$")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_MAX_UINT64 = (1 << 64) - 1


def _snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _uint64(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key}: expected an unsigned integer, got {value!r}")
    if isinstance(value, str):
        if not value.startswith(("0x", "0X")):
            raise ValueError(f"{key}: hex string must have 0x prefix, got {value!r}")
        try:
            number = int(value[2:], 16)
        except ValueError as exc:
            raise ValueError(f"{key}: invalid hex number {value!r}") from exc
    elif isinstance(value, int):
        number = value
    else:
        raise ValueError(f"{key}: expected an unsigned integer, got {value!r}")
    if not 0 <= number <= _MAX_UINT64:
        raise ValueError(f"{key}: {number} does not fit in uint64")
    return number


def copy_deploy_config_hf_times(
    src: Mapping[str, Any] | None, dst: MutableMapping[str, Any] | None
) -> MutableMapping[str, Any]:
    """Copy the L2 genesis hardfork time offsets of a deploy config into hardfork times.

    Each key of the form ``l2Genesis<Fork>TimeOffset`` with a value becomes
    ``<fork>_time`` in dst; Regolith and unset offsets are skipped. dst is updated
    in place and returned.
    """
    if src is None or dst is None:
        raise ValueError("source and destination must not be nil")

    for key, value in src.items():
        match = _OFFSET_FIELD.match(key)
        if match is None or "Regolith" in key:
            continue
        if value is None:
            continue
        fork = _snake(match.group("name"))
        dst_field = f"{fork}_time"
        if fork not in HARDFORK_NAMES:
            raise ValueError(f"destination field {dst_field} doesn't exist")
        dst[dst_field] = _uint64(key, value)
    return dst


def extract_interop_dep_set(state: Mapping[str, Any]) -> dict[str, Any] | None:
    """Read the interop dependency set from deployment state.

    Returns None when the state has no dependency set or it is empty, otherwise
    ``{"dependencies": {chain_id: {}, ...}}``.
    """
    dep_set = state.get("interopDepSet")
    if dep_set is None:
        return None
    if not isinstance(dep_set, Mapping):
        raise ValueError(
            f"failed to read interop dep set: expected an object, got {dep_set!r}"
        )

    deps = dep_set.get("dependencies")
    if not isinstance(deps, Mapping):
        raise ValueError("dependencies field is not a map or is missing")
    if not deps:
        return None
    return {"dependencies": {chain_id: {} for chain_id in deps}}


def staged_chain_configs(root: str) -> list[DiskChainConfig]:
    """Load every chain config TOML file in the staging directory."""
    try:
        tomls = paths.collect_files(paths.staging_dir(root), paths.chain_config_matcher())
    except OSError as exc:
        raise type(exc)(f"failed to collect staged chain configs: {exc}") from exc
    if not tomls:
        raise FileNotFoundError("no staged chain config found")

    staged: list[DiskChainConfig] = []
    for filename in tomls:
        try:
            chain = read_toml_file(filename)
        except OSError as exc:
            raise type(exc)(f"failed to read {filename}: {exc}") from exc
        except ValueError as exc:
            raise ValueError(f"failed to read {filename}: {exc}") from exc
        superchain = chain.get("superchain", "")
        staged.append(
            DiskChainConfig(
                short_name=os.path.basename(filename).removesuffix(".toml"),
                filepath=filename,
                superchain=superchain if isinstance(superchain, str) else "",
                config=chain,
            )
        )
    return staged


def staged_superchain_definition(root: str) -> dict[str, Any]:
    """Load the superchain.toml found in the staging directory."""
    try:
        files = paths.collect_files(
            paths.staging_dir(root), paths.superchain_definition_matcher()
        )
    except OSError as exc:
        raise type(exc)(f"failed to collect staged superchain definition: {exc}") from exc
    if not files:
        raise FileNotFoundError("no staged superchain definition found")
    return read_toml_file(files[0])
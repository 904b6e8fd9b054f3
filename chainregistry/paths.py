"""Locations of the registry's files and directories, and helpers to find them."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Iterator

CollectorMatcher = Callable[[str], bool]

REPO_ROOT_MARKER = ".repo-root"
SUPERCHAIN_FILE = "superchain.toml"


def find_repo_root() -> str:
    """Find the repository root above the current working directory."""
    return find_repo_root_from_dir(os.getcwd())


def find_repo_root_from_dir(wd: str) -> str:
    """Walk upwards from wd until a directory holding the repo-root marker is found."""
    current = os.path.abspath(wd)
    while True:
        if os.path.exists(os.path.join(current, REPO_ROOT_MARKER)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            raise FileNotFoundError("not in repo")
        current = parent


def staging_dir(wd: str) -> str:
    return os.path.join(wd, ".staging")


def superchain_configs_dir(wd: str) -> str:
    return os.path.join(wd, "superchain", "configs")


def superchain_dir(wd: str, name: str) -> str:
    return os.path.join(superchain_configs_dir(wd), name)


def chain_config(wd: str, superchain: str, short_name: str) -> str:
    return os.path.join(superchain_dir(wd, superchain), short_name + ".toml")


def superchain_config(wd: str, superchain: str) -> str:
    return os.path.join(superchain_dir(wd, superchain), SUPERCHAIN_FILE)


def superchain_definition_path(wd: str, superchain: str) -> str:
    return os.path.join(superchain_configs_dir(wd), superchain, SUPERCHAIN_FILE)


def superchains(wd: str) -> list[str]:
    """Names of the directories under the configs directory that hold a superchain.toml."""
    configs_dir = superchain_configs_dir(wd)
    try:
        entries = sorted(os.scandir(configs_dir), key=lambda entry: entry.name)
    except OSError as exc:
        raise type(exc)(f"failed to read dir {configs_dir}: {exc}") from exc
    return [
        entry.name
        for entry in entries
        if entry.is_dir()
        and os.path.exists(os.path.join(configs_dir, entry.name, SUPERCHAIN_FILE))
    ]


def superchain_ids(wd: str) -> dict[str, int]:
    """Map each superchain to the chain ID of its L1."""
    ids: dict[str, int] = {}
    for superchain in superchains(wd):
        path = superchain_config(wd, superchain)
        with open(path, "rb") as fh:
            try:
                definition = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise ValueError(f"failed to unmarshal superchain config: {exc}") from exc
        l1 = definition.get("l1", {})
        chain_id = l1.get("chain_id", 0) if isinstance(l1, dict) else 0
        if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id < 0:
            raise ValueError(f"invalid L1 chain ID in {path}: {chain_id!r}")
        ids[superchain] = chain_id
    return ids


def extra_dir(wd: str) -> str:
    return os.path.join(wd, "superchain", "extra")


def genesis_file(wd: str, superchain: str, short_name: str) -> str:
    return os.path.join(extra_dir(wd), "genesis", superchain, short_name + ".json.zst")


def addresses_file(wd: str) -> str:
    return os.path.join(extra_dir(wd), "addresses", "addresses.json")


def chain_list_json_file(wd: str) -> str:
    return os.path.join(wd, "chainList.json")


def chain_list_toml_file(wd: str) -> str:
    return os.path.join(wd, "chainList.toml")


def chain_md_file(wd: str) -> str:
    return os.path.join(wd, "CHAINS.md")


def validations_dir(wd: str) -> str:
    return os.path.join(wd, "validation", "standard")


def validations_file(wd: str, superchain: str) -> str:
    return os.path.join(validations_dir(wd), f"standard-config-params-{superchain}.toml")


def require_dir(p: str) -> None:
    """Raise unless p exists and is a directory."""
    try:
        info = os.stat(p)
    except OSError as exc:
        raise type(exc)(f"failed to stat {p}: {exc}") from exc
    if not os.path.isdir(p) or not info:
        raise NotADirectoryError(f"{p} is not a directory")


def ensure_dir(p: str) -> None:
    """Create p and its parents if they do not exist."""
    os.makedirs(p, mode=0o755, exist_ok=True)


def require_root(wd: str) -> None:
    """Raise unless wd looks like the repository root (it has a staging directory)."""
    try:
        require_dir(staging_dir(wd))
    except OSError as exc:
        raise type(exc)(f"not at repo root or IO error: {exc}") from exc


def _walk(root: str) -> Iterator[str]:
    if not os.path.isdir(root):
        os.stat(root)
        yield root
        return
    for entry in sorted(os.scandir(root), key=lambda e: e.name):
        if entry.is_dir():
            yield from _walk(entry.path)
        else:
            yield entry.path


def collect_files(root: str, matcher: CollectorMatcher) -> list[str]:
    """List the files under root, in lexical walk order, that the matcher accepts."""
    try:
        return [path for path in _walk(root) if matcher(path)]
    except OSError as exc:
        raise type(exc)(f"failed to walk staging directory: {exc}") from exc


def _ext(path: str) -> str:
    base = os.path.basename(path)
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def chain_config_matcher() -> CollectorMatcher:
    return lambda s: _ext(s) == ".toml" and os.path.basename(s) != SUPERCHAIN_FILE


def file_ext_matcher(ext: str) -> CollectorMatcher:
    return lambda s: _ext(s) == ext


def file_name_matcher(name: str) -> CollectorMatcher:
    return lambda s: os.path.basename(s) == name


def superchain_definition_matcher() -> CollectorMatcher:
    return file_name_matcher(SUPERCHAIN_FILE)
# chainregistry

A library for working with a registry of chain configurations kept as TOML
files on disk, together with the standard parameters those chains are
validated against.

## Modules

### `chainregistry.validation`

- `types`: `Address` (20 bytes) and `Hash` (32 bytes). `Address.parse` takes a
  42-character `0x`-prefixed hex string; `Hash.parse` takes a `0x`-prefixed
  hex string of 32 bytes, and empty text gives the zero hash. Both raise
  `ValueError` on bad input, print as lower-case `0x` hex, and
  `marshal_text()` returns that text as bytes.
- `params`: `Range` (inclusive, with `within_range`), `ConfigParams` and its
  nested parameter groups, and `RolesConfig`. `load_config_params(text)` and
  `load_roles_config(text)` parse TOML text.
- `prestates`: `Prestate` and `Prestates`. `load_prestates(text)` parses TOML
  and raises `ValueError` if the latest candidate or latest stable release is
  missing; `Prestates.stable_prestate()` returns the first prestate of the
  latest stable release.
- `versions`: the `Semver` enum of known contract release tags,
  `is_valid_contract_semver`, `ContractData`, `VersionConfig`, and
  `load_versions(text)`, which maps each release tag to its `VersionConfig`.

### `chainregistry.paths`

The layout of a registry checkout: `staging_dir`, `superchain_configs_dir`,
`superchain_dir`, `chain_config`, `superchain_config`,
`superchain_definition_path`, `extra_dir`, `genesis_file`, `addresses_file`,
`chain_list_json_file`, `chain_list_toml_file`, `chain_md_file`,
`validations_dir` and `validations_file`. Also:

- `find_repo_root()` / `find_repo_root_from_dir(wd)`: walk upwards to the
  directory holding a `.repo-root` file, raising `FileNotFoundError("not in repo")`.
- `superchains(wd)`: the config directories that contain a `superchain.toml`;
  `superchain_ids(wd)` maps each to its L1 chain ID.
- `require_dir`, `ensure_dir`, `require_root`.
- `collect_files(root, matcher)` with `chain_config_matcher()`,
  `file_ext_matcher(ext)`, `file_name_matcher(name)` and
  `superchain_definition_matcher()`.

### `chainregistry.tomlio`

`read_toml_file`, `read_json_file` (decompresses `.gz` files),
`write_toml_file` and `atomic_write`, which writes a temporary file beside the
target and renames it into place.

### `chainregistry.manage`

- `collect`: `collect_chain_configs(p)` loads every chain `.toml` file under
  `p` (skipping `superchain.toml`) in parallel and returns `DiskChainConfig`
  records (`short_name`, `filepath`, `superchain`, `config`) sorted by the
  chain's `name`.
- `compress`: genesis documents stored as zstd-compressed JSON using the
  dictionary at `superchain/extra/dictionary`: `write_genesis`,
  `read_genesis`, and `write_superchain_genesis` / `read_superchain_genesis`,
  which use the registry's genesis path and refuse to overwrite or raise when
  the file is missing.
- `configs`: `write_chain_config`, `read_chain_config` and
  `write_superchain_definition`; writes refuse to overwrite existing files.
- `opaque`: `contains_all(a, b)`, true when every key and value of `b` is
  present in `a`, comparing nested mappings by containment.
- `staging`: `copy_deploy_config_hf_times(src, dst)` turns
  `l2Genesis<Fork>TimeOffset` entries into `<fork>_time` entries,
  `extract_interop_dep_set(state)` reads the interop dependency set from
  deployment state, and `staged_chain_configs(root)` /
  `staged_superchain_definition(root)` load what is in the staging directory.

### `chainregistry.output`

`write_stderr`, `write_ok`, `write_not_ok` and `write_warn` print
printf-style status lines to standard error with `[   OK]`, `[NOTOK]` and
`[ WARN]` prefixes.

### `chainregistry.once`

`OnceValue`: keeps the first value passed to `set`, safely across threads.

### `chainregistry.mockrpc`

`MockRPC`, an HTTP JSON-RPC server that answers a scripted sequence of
`RpcCall` expectations in order, for testing clients. Params are compared with
`json_params_matcher`, `null_matcher` or `any_params_matcher`. After the first
unexpected call it answers every request with that error, and
`assert_expectations()` raises `AssertionError`.

## Examples

```python
from chainregistry.manage.collect import collect_chain_configs
from chainregistry.paths import superchain_dir

for cfg in collect_chain_configs(superchain_dir(".", "sepolia")):
    print(cfg.short_name, cfg.config.get("chain_id"))
```

```python
from chainregistry.validation.types import Address

addr = Address.parse("0x1234567890123456789012345678901234567890")
print(addr.marshal_text())
```

```python
import json
import urllib.request

from chainregistry.mockrpc import MockRPC, RpcCall

with MockRPC([RpcCall("eth_chainId", result="0x1")]) as rpc:
    body = json.dumps({"jsonrpc": "2.0", "id": 1, "method": "eth_chainId"}).encode()
    with urllib.request.urlopen(rpc.endpoint(), data=body) as resp:
        print(json.load(resp)["result"])
    rpc.assert_expectations()
```

## What it does not do

- It has no command-line program; everything is used as a library.
- It ships no standard parameter, role, prestate or version files; the
  `load_*` functions parse TOML text you provide.
- It does not fetch data from a node, build chain configs or genesis files
  from deployment state, check genesis hashes, check dependency sets across
  chains, regenerate `chainList.json`, `chainList.toml` or `CHAINS.md`, or
  render review reports. The path helpers name those files but nothing here
  writes them.

## Tests

```
pip install ".[test]"
pytest
```
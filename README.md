# wasmpack

Helpers for turning a Rust crate compiled to WebAssembly into an npm
package. The library reads the crate's `Cargo.toml` and `Cargo.lock`,
writes a `package.json` for the chosen JavaScript target, copies the
crate's README and licence files into the output directory, and drives
`npm` to pack, publish or log in.

Reading crate metadata runs `cargo metadata` (or the program named by the
`CARGO` environment variable), and the npm helpers run `npm`, so both
tools need to be on your `PATH` for those parts. Failures are raised as
`wasmpack.errors.WasmPackError`.

## Reading a crate

```python
from pathlib import Path

from wasmpack.errors import WasmPackError
from wasmpack.manifest import CrateData

crate = CrateData(Path("my-crate"), None)
print(crate.crate_name())    # e.g. "my_crate"
print(crate.name_prefix())   # the out name if one was given, else the crate name

try:
    crate.check_crate_config()
except WasmPackError as err:
    print(err)               # explains how to set crate-type = ["cdylib", "rlib"]
```

Passing an out name as the second argument changes the prefix of every
generated file name (`index.js`, `index_bg.wasm`, `index.d.ts`, ...).
`crate_license()`, `crate_license_file()`, `target_directory()` and
`workspace_root()` give the matching crate details.

Keys under `package.metadata` that mention `wasm-pack` (or come within
one edit of `package.metadata.wasm-pack`) but are not understood are
collected by `wasmpack.manifest.parse_crate_data` and reported, in sorted
order, by `warn_for_unused_keys`. `CrateData` does both when it is created.

## Writing package.json

`CrateData.write_package_json(out_dir, scope, disable_dts, target)` writes
`package.json` into `out_dir`. The `Target` enumeration selects the
flavour:

- `Target.NODEJS`: a CommonJS package with `main`;
- `Target.NO_MODULES`: a package with `browser`;
- `Target.BUNDLER`, `Target.WEB`, `Target.WEB_BUNDLER`: an ES module
  package with `module` and `"sideEffects": false`. Only the bundler
  target also lists `<prefix>_bg.js` in `files`.

A scope turns the name into `@scope/name`; `disable_dts` leaves out the
`.d.ts` file and the `types` field. Any `LICENSE*` file already in
`out_dir`, other than one named exactly `LICENSE`, is added to `files`.
A missing description, repository or licence is reported as an
informational message. The package shapes themselves are the dataclasses
in `wasmpack.npm_package`, each with a `to_dict()` method.

## Profiles

`CrateData.configured_profile(profile)` returns the
`wasmpack.profile.WasmPackProfile` for a `BuildProfile` (`DEV`, `RELEASE`
or `PROFILING`), with the `[package.metadata.wasm-pack.profile.*]`
settings from `Cargo.toml` merged over the defaults.
`WasmPackProfile.wasm_opt_args()` gives the arguments for `wasm-opt`, or
`None` when optimisation is off: it is off in dev and on with `-O` in
release and profiling unless configured otherwise; a list of strings in
`wasm-opt` is used as the arguments.

## README and licences

```python
from wasmpack import license, readme

out_dir = Path("my-crate/pkg")
readme.copy_from_crate(Path("my-crate"), out_dir)
license.copy_from_crate(crate, Path("my-crate"), out_dir)
```

Both directories must exist. With `license` set in `Cargo.toml`, every
`LICENSE*` file in the crate directory is copied; with only
`license-file` set, that file is copied.

## Cargo.lock

```python
from wasmpack.lockfile import Lockfile

lock = Lockfile.from_crate(crate)
print(lock.wasm_bindgen_version())
print(lock.wasm_bindgen_test_version())
print(lock.require_wasm_bindgen())   # raises WasmPackError if absent
```

## npm

`npm_pack(path)`, `npm_publish(path, access, tag)` and
`npm_login(registry, scope, always_auth, auth_type)` in `wasmpack.npm`
run the matching `npm` commands and raise `WasmPackError` on failure.
`npm_login` is interactive and defaults to `DEFAULT_NPM_REGISTRY`.

## Messages, stamps and update checks

`wasmpack.progressbar.ProgressOutput` prints `[INFO]`, `[WARN]` and
`[ERR]` messages to standard error, honouring a quiet flag (which does
not silence errors) and a `LogLevel`; `parse_log_level("warn")` turns a
command-line value into a level. `PBAR` is the shared instance.

`wasmpack.stamps` keeps a small JSON key-value store in a `.stamps` file
next to the running program (`save_stamp_value`, `get_stamp_value`,
`read_stamps_file_to_json`).

`wasmpack.updates.latest_wasm_pack_version()` looks up the newest release
on crates.io at most once a day, remembering the answer in a `.stamp` file
next to the running program.

## Self-installation

`wasmpack.installer.install(argv)` copies the running program next to
`rustup` on the `PATH` as `wasm-pack`, asking before overwriting an
existing copy unless `-f` is among the arguments, and then exits with
status 0.

## What this package does not do

There is no command-line program and no build step: the package does not
compile crates, run `wasm-bindgen` or `wasm-opt`, download tools or
WebDriver binaries, or run tests. It covers the reading, writing, copying
and npm steps around such a build.
# mcplaunch

A small library of client-side helpers for MCP (Model Context Protocol)
server packages:

- parsing package references, including looking up a version from a hub URL;
- a JSON-lines audit log of package executions;
- human-readable formatting of byte sizes, ages and digests;
- SHA-256 digests of files;
- the lines of a boxed, coloured security summary for a terminal.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Package references (`mcplaunch.refs`)

`parse_package_ref(ref)` returns a frozen `PackageRef` with `org`, `name`,
`version` and `registry_url` (an empty string means the default registry),
plus a `package` property giving `org/name`. Three forms are accepted:

- `org/name@version`
- a registry reference `<host>/npm/<org>/<name>@<version>`, where the host
  contains a dot; `registry_url` becomes `https://<host>`
- a hub URL `http(s)://<hub>/mcp/<owner>/<name>`

```python
from mcplaunch.refs import parse_package_ref, PackageRefError

ref = parse_package_ref("acme/hello-world@1.2.3")
ref.package        # 'acme/hello-world'
ref.version        # '1.2.3'

ref = parse_package_ref("registry.example.com/npm/public/tool@1.0.0")
ref.registry_url   # 'https://registry.example.com'

try:
    parse_package_ref("acme/hello-world")
except PackageRefError as exc:
    print(exc)
```

A hub URL is resolved over the network by `resolve_hub_mcp`: it queries
`/api/v1/mcps/<owner>/<name>` and `/api/v1/mcps/<owner>/<name>/versions` on
the hub, picks the `PUBLISHED` version with the highest `global_score`
(using its `visible_version`, or `commit-<7 chars of hash>-<today>`), and
otherwise falls back to the commit hash of `latest_version`. A hub name
without an `org/` prefix is placed in the `community` org. Failures raise
`PackageRefError`, a subclass of `ValueError`.

## Audit log (`mcplaunch.audit`)

`AuditLogger` appends one JSON object per line to a file, creating the parent
directory (mode 0700) and the file (mode 0600) as needed. Each write is
flushed and synced. Events without a timestamp get the current UTC time.

```python
from datetime import timedelta
from mcplaunch.audit import AuditLogger, Event

with AuditLogger("/tmp/mcp/audit.log") as audit:
    audit.log_start("acme/hello-world", "1.2.3", "sha256:...", "./bin/server", "abc1234")
    audit.log_end("acme/hello-world", "1.2.3", 0, timedelta(seconds=2), "success")
    audit.log_error("acme/hello-world", "1.2.3", "connection failed")
    audit.log(Event(type="start", package="acme/other", version="0.1.0"))
```

`Event.to_dict()` leaves empty optional fields out. Durations are written by
`format_duration` as `PT<seconds>.<nanoseconds>S`, e.g. `PT2.000000000S`.
Writing after `close()` raises `AuditError`; closing twice is harmless.

## Formatting (`mcplaunch.formatting`, `mcplaunch.units`)

```python
from datetime import datetime, timedelta
from mcplaunch.formatting import format_size, format_time, abbreviate_digest
from mcplaunch.units import format_bytes, calculate_file_digest

format_bytes(1536)                   # '1.5 KB'
format_size(1536 * 1024)             # '1.50 MB'
abbreviate_digest("sha256:" + "a" * 64)   # first 19 characters

now = datetime(2024, 1, 10, 12, 0)
format_time(now - timedelta(hours=2), now)   # '2 hours ago'
format_time(now - timedelta(days=30), now)   # '2023-12-11'

calculate_file_digest("bundle.tar.gz")       # 'sha256:<hex>'
```

`format_size` shows values below 1024 × 1024 in plain bytes and uses two
decimals above that; `format_bytes` uses one decimal from 1024 upwards.

## Security summary lines (`mcplaunch.summary`)

Functions that render single lines of a 50-column box with ANSI colours:

```python
from mcplaunch.summary import cert_level_name, render_field, render_capability, render_warning

cert_level_name(2)                      # 'Security Certified'
print(render_field("Package", "acme/hello-world"))
print(render_capability("Network Isolation", False))
print(render_warning("Sandbox is disabled"))
```

Long field values and warnings are truncated with `...`.

## What this package does not do

There is no command-line program, no local store for downloaded manifests
and bundles, no file locking, no unpacking of bundle archives, and no
registry client for downloading or running packages. The helpers above are
building blocks only.

## Running the tests

```
pip install ".[test]"
pytest
```
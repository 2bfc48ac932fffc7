"""Parsing of package references and resolution of hub URLs to versions."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from urllib.parse import quote, unquote, urlsplit

CLIENT_VERSION = "dev"
HUB_TIMEOUT = 30.0
DEFAULT_ORG = "community"

_REGISTRY_MARKER = "/npm/"
_ERROR_BODY_LIMIT = 1024
_PATH_SAFE = "$&+:=@"


class PackageRefError(ValueError):
    """A package reference is malformed or cannot be resolved."""


@dataclass(frozen=True)
class PackageRef:
    """A resolved package reference; an empty registry URL means the default."""

    org: str
    name: str
    version: str
    registry_url: str = ""

    @property
    def package(self) -> str:
        return f"{self.org}/{self.name}"


def parse_package_ref(ref: str) -> PackageRef:
    """Parse ``org/name@version``, a hub URL, or ``{host}/npm/{org}/{name}@{version}``."""
    if ref.startswith(("https://", "http://")):
        return parse_hub_url(ref)

    idx = ref.find(_REGISTRY_MARKER)
    if idx > 0:
        host = ref[:idx]
        if "." in host:
            return parse_registry_ref(ref, host, ref[idx + len(_REGISTRY_MARKER):])

    org_name, sep, version = ref.partition("@")
    if not sep or not version:
        raise PackageRefError(
            "expected format org/name@version, hub URL, or registry reference"
        )
    org, sep, name = org_name.partition("/")
    if not sep:
        raise PackageRefError("expected format org/name@version")
    if not org or not name:
        raise PackageRefError("org, name, and version cannot be empty")
    return PackageRef(org, name, version)


def parse_registry_ref(full_ref: str, host: str, remainder: str) -> PackageRef:
    """Parse the ``{org}/{name}@{version}`` part of a registry reference on ``host``."""
    org_name, sep, version = remainder.partition("@")
    if not sep or not version:
        raise PackageRefError(f"registry reference must include @version: {full_ref}")
    org, sep, name = org_name.partition("/")
    if not sep:
        raise PackageRefError(
            "registry reference must have format "
            f"{{host}}/npm/{{org}}/{{name}}@{{version}}: {full_ref}"
        )
    if not org or not name:
        raise PackageRefError("org and name cannot be empty in registry reference")
    return PackageRef(org, name, version, f"https://{host}")


def parse_hub_url(raw_url: str) -> PackageRef:
    """Parse a hub URL ``{scheme}://{host}/mcp/{owner}/{name}`` and resolve its version."""
    try:
        parts = urlsplit(raw_url)
    except ValueError as exc:
        raise PackageRefError(f"parsing hub URL: {exc}") from exc

    path = unquote(parts.path)
    segments = path.strip("/").split("/")
    if len(segments) != 3 or segments[0] != "mcp":
        raise PackageRefError(f"hub URL must have path /mcp/{{owner}}/{{name}}, got {path}")
    owner, slug = segments[1], segments[2]
    if not owner or not slug:
        raise PackageRefError("owner and name cannot be empty in hub URL")

    host = parts.netloc.rpartition("@")[2]
    try:
        resolved = resolve_hub_mcp(f"{parts.scheme}://{host}", owner, slug)
    except PackageRefError as exc:
        raise PackageRefError(f"resolving hub URL {raw_url}: {exc}") from exc
    return PackageRef(resolved.org, resolved.name, resolved.version)


def _fetch(url: str) -> tuple[int, bytes]:
    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": f"mcp-client/{CLIENT_VERSION}",
            "Accept": "application/json",
        },
        method="GET",
    )
    try:
        with urllib.request.urlopen(request, timeout=HUB_TIMEOUT) as response:
            return response.status, response.read()
    except urllib.error.HTTPError as exc:
        with exc:
            try:
                body = exc.read(_ERROR_BODY_LIMIT)
            except OSError:
                body = b""
        return exc.code, body


def _commit_version(commit_hash: str) -> str:
    return f"commit-{commit_hash[:7]}-{datetime.now().strftime('%Y-%m-%d')}"


def _best_published(versions: list[Any]) -> dict[str, Any] | None:
    best: dict[str, Any] | None = None
    for entry in versions:
        if not isinstance(entry, dict) or entry.get("status") != "PUBLISHED":
            continue
        if best is None or (entry.get("global_score") or 0) > (best.get("global_score") or 0):
            best = entry
    return best


def _version_from_versions(url: str) -> str:
    try:
        status, body = _fetch(url)
    except OSError:
        return ""
    if status != 200:
        return ""
    try:
        data = json.loads(body)
        best = _best_published(data.get("versions") or [])
    except (ValueError, TypeError, AttributeError):
        return ""
    if best is None:
        return ""
    if best.get("visible_version"):
        return str(best["visible_version"])
    if best.get("commit_hash"):
        return _commit_version(str(best["commit_hash"]))
    return ""


def resolve_hub_mcp(hub_base_url: str, owner: str, slug: str) -> PackageRef:
    """Ask the hub API for the best published version of ``owner/slug``."""
    base = f"{hub_base_url}/api/v1/mcps/{quote(owner, safe=_PATH_SAFE)}/{quote(slug, safe=_PATH_SAFE)}"

    try:
        status, body = _fetch(base)
    except OSError as exc:
        raise PackageRefError(f"querying hub API at {base}: {exc}") from exc
    if status != 200:
        text = body[:_ERROR_BODY_LIMIT].decode("utf-8", errors="replace")
        raise PackageRefError(f"hub API returned status {status} for {owner}/{slug}: {text}")
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise PackageRefError(f"decoding hub API response: {exc}") from exc
    if not isinstance(data, dict):
        raise PackageRefError("decoding hub API response: expected a JSON object")

    version = _version_from_versions(f"{base}/versions")
    if not version:
        latest = data.get("latest_version")
        if not isinstance(latest, dict) or not latest.get("commit_hash"):
            raise PackageRefError(f"no certified version found for {owner}/{slug}")
        version = _commit_version(str(latest["commit_hash"]))

    mcp_name = data.get("name") or slug
    if "/" in mcp_name:
        org, _, name = mcp_name.partition("/")
    else:
        org, name = DEFAULT_ORG, mcp_name
    return PackageRef(org, name, version)
"""npm package-name rules for generated projects.

Follows the rules npm applies to *new* packages: lowercase only, URL-safe,
no reserved or core-module names, and at most 214 characters.
"""

from __future__ import annotations

import re
from urllib.parse import quote

MAX_NAME_LENGTH = 214

RESERVED_NAMES = frozenset({"node_modules", "favicon.ico"})

NODE_CORE_MODULES = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
    "worker_threads", "zlib",
})

_SCOPED = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARS = re.compile(r"[~'!()*]")


def _url_safe(part: str) -> bool:
    # Same character set encodeURIComponent leaves untouched
    return quote(part, safe="-_.!~*'()") == part


def validate_package_name(name: str) -> list[str]:
    """Return every rule *name* breaks; an empty list means it is valid."""
    if not isinstance(name, str):
        return ["name must be a string"]
    if not name:
        return ["name length must be greater than zero"]

    errors: list[str] = []
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")
    if name.lower() in RESERVED_NAMES:
        errors.append(f"{name} is not a valid package name")
    if name in NODE_CORE_MODULES:
        errors.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        errors.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        errors.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS.search(name.split("/")[-1]):
        errors.append('name can no longer contain special characters ("~\'!()*")')

    if not _url_safe(name):
        match = _SCOPED.match(name)
        scoped_ok = bool(
            match
            and match.group(1)
            and _url_safe(match.group(1))
            and _url_safe(match.group(2))
        )
        if not scoped_ok:
            errors.append("name can only contain URL-friendly characters")

    return errors


def is_valid_package_name(name: str) -> bool:
    return not validate_package_name(name)

"""Domain normalization and matching for gated sites."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

HELP_EXAMPLE = "youtube.com"

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_VALID_HOST = re.compile(r"^[a-z0-9.-]+$")


@dataclass(frozen=True)
class DomainResult:
    value: Optional[str] = None
    error: Optional[str] = None


def normalize_domain(raw: str) -> DomainResult:
    """Turn user input such as ``https://www.YouTube.com/watch`` into a bare hostname."""

    trimmed = (raw or "").strip()
    if not trimmed:
        return DomainResult(error="Enter a domain to add.")

    with_scheme = trimmed if _SCHEME.match(trimmed) else f"https://{trimmed}"
    invalid = DomainResult(error=f"Use a valid domain like {HELP_EXAMPLE}.")
    try:
        hostname = (urlsplit(with_scheme).hostname or "").lower()
    except ValueError:
        return invalid

    is_allowed_host = hostname == "localhost" or "." in hostname
    if not hostname or not is_allowed_host or not _VALID_HOST.match(hostname):
        return invalid
    return DomainResult(value=hostname)


def normalize_hostname(hostname: str) -> Optional[str]:
    return normalize_domain(hostname).value


def matches_target_domain(hostname: str, target_domains: Iterable[str]) -> bool:
    """True when ``hostname`` equals a target or is one of its subdomains."""

    host = normalize_hostname(hostname)
    if not host:
        return False

    for target in target_domains:
        normalized_target = normalize_hostname(target)
        if not normalized_target:
            continue
        if host == normalized_target or host.endswith(f".{normalized_target}"):
            return True
    return False

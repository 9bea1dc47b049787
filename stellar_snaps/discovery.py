"""Domain discovery files and the path-pattern matcher.

A domain opts in to snap rendering by hosting ``/.well-known/stellar-snap.json``
with a list of rules. Each rule maps a URL path pattern using ``*`` wildcards
to an API path using ``$1``..``$n`` for the captured segments::

    {"pathPattern": "/s/*", "apiPath": "/api/snap/$1"}

turns ``/s/abc123`` into ``/api/snap/abc123``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from .errors import InvalidDiscoveryFile
from .models import DiscoveryFile, DiscoveryRule

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


@lru_cache(maxsize=256)
def compile_path_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard path pattern into an anchored regex.

    Every character other than ``*`` is matched literally; each ``*`` becomes
    a greedy ``(.+)`` capture group.
    """
    body = "(.+)".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(f"^{body}$")


def _substitute(api_path: str, groups: tuple[str, ...]) -> str:
    def replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if 1 <= index <= len(groups):
            return groups[index - 1]
        return match.group(0)

    return _PLACEHOLDER_RE.sub(replace, api_path)


def match_url_to_rule(path: str, rules: Iterable[DiscoveryRule]) -> str | None:
    """Return the API path of the first rule whose pattern matches ``path``."""
    for rule in rules:
        match = compile_path_pattern(rule.path_pattern).match(path)
        if match:
            return _substitute(rule.api_path, match.groups())
    return None


def create_discovery_file(
    *,
    name: str,
    rules: list[DiscoveryRule] | list[dict[str, str]],
    description: str | None = None,
    icon: str | None = None,
) -> DiscoveryFile:
    """Build a discovery file, rejecting anything a renderer could not use."""
    if not name or not isinstance(name, str):
        raise InvalidDiscoveryFile("Discovery file requires a name")
    if not rules:
        raise InvalidDiscoveryFile("Discovery file requires at least one rule")

    parsed: list[DiscoveryRule] = []
    for rule in rules:
        if isinstance(rule, dict):
            pattern = rule.get("pathPattern") or rule.get("path_pattern")
            api_path = rule.get("apiPath") or rule.get("api_path")
        else:
            pattern, api_path = rule.path_pattern, rule.api_path
        if not pattern or not isinstance(pattern, str):
            raise InvalidDiscoveryFile("Each rule requires a pathPattern")
        if not api_path or not isinstance(api_path, str):
            raise InvalidDiscoveryFile("Each rule requires an apiPath")
        parsed.append(DiscoveryRule(path_pattern=pattern, api_path=api_path))

    return DiscoveryFile(name=name, description=description or None, icon=icon or None, rules=parsed)


def validate_discovery_file(data: Any) -> bool:
    """Check a JSON document fetched from another domain. Never raises."""
    if not isinstance(data, dict):
        return False
    if not isinstance(data.get("name"), str) or not data["name"]:
        return False

    rules = data.get("rules")
    if not isinstance(rules, list) or not rules:
        return False
    for rule in rules:
        if not isinstance(rule, dict):
            return False
        if not isinstance(rule.get("pathPattern"), str) or not rule["pathPattern"]:
            return False
        if not isinstance(rule.get("apiPath"), str) or not rule["apiPath"]:
            return False

    for key in ("description", "icon"):
        if key in data and data[key] is not None and not isinstance(data[key], str):
            return False
    return True


def parse_discovery_file(data: Any) -> DiscoveryFile:
    """Validate and load a fetched discovery document."""
    if not validate_discovery_file(data):
        raise InvalidDiscoveryFile("Invalid discovery file")
    try:
        return DiscoveryFile.model_validate(data)
    except ValidationError as e:
        raise InvalidDiscoveryFile(f"Invalid discovery file: {e}") from e

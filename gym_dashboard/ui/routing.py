# gym_dashboard/ui/routing.py
"""
Bookmarkable locations: a path plus query parameters, e.g.
`/attendance?tab=inactive&filter=30days`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit


def _clean(params: Mapping[str, Any]) -> Dict[str, str]:
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


@dataclass(frozen=True)
class Route:
    path: str = "/"
    params: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> "Route":
        parts = urlsplit(text.strip() or "/")
        path = parts.path or "/"
        if not path.startswith("/"):
            path = "/" + path
        if len(path) > 1:
            path = path.rstrip("/")
        return cls(path, _clean(dict(parse_qsl(parts.query))))

    def with_params(self, **params: Any) -> "Route":
        """Merge params; None/"" removes a key."""
        merged: Dict[str, Any] = dict(self.params)
        merged.update(params)
        return Route(self.path, _clean(merged))

    def replace_params(self, params: Mapping[str, Any]) -> "Route":
        return Route(self.path, _clean(params))

    def __str__(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(dict(self.params))}"


def _compile(pattern: str) -> re.Pattern:
    # /members/<id> → ^/members/(?P<id>[^/]+)$
    regex = re.sub(r"<(\w+)>", r"(?P<\1>[^/]+)", pattern)
    return re.compile(f"^{regex}$")


def match(route: Route, patterns: Iterable[str]) -> Optional[Tuple[str, Dict[str, str]]]:
    """First pattern matching `route.path` plus its captured segments."""
    for pattern in patterns:
        found = _compile(pattern).match(route.path)
        if found:
            return pattern, found.groupdict()
    return None

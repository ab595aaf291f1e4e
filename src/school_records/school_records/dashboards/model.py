from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NavLink:
    label: str
    endpoint: str
    fragment: str = ""


@dataclass(frozen=True)
class Dashboard:
    title: str
    welcome: str
    links: list[NavLink] = field(default_factory=list)
    sanction_count: int = 0

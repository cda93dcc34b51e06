"""
Parser and checker for robots.txt rules.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class RobotsTxtRules:
    """Parser and checker for robots.txt rules."""

    def __init__(self, text: str) -> None:
        self.groups: List[Dict[str, Any]] = []
        self._parse(text)

    def disallows_all(self, user_agent: str) -> bool:
        """True when a ``*`` group or a group naming *user_agent* carries ``Disallow: /``."""
        ua = user_agent.lower()
        for group in self.groups:
            agents = [a.lower() for a in group.get("agents", [])]
            if "*" not in agents and ua not in agents:
                continue
            if ("disallow", "/") in group.get("directives", []):
                return True
        return False

    def _parse(self, text: str) -> None:
        """Parse robots.txt content into user-agent groups and directives."""
        current: Optional[Dict[str, Any]] = None
        for line in text.splitlines():
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            key, _, val = line.partition(":")
            key = key.strip().lower()
            val = val.strip()
            if key == "user-agent":
                # consecutive User-agent lines share one group
                if current is None or current["directives"]:
                    current = {"agents": [], "directives": []}
                    self.groups.append(current)
                current["agents"].append(val)
            elif key in ("allow", "disallow") and current is not None:
                # skip empty disallow (means allow all)
                if key == "disallow" and not val:
                    continue
                current["directives"].append((key, val))


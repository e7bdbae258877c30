"""Best-effort gender inference from league and team names."""

from __future__ import annotations

import re
from typing import Literal

Gender = Literal["male", "female"]

WOMEN_HINTS: tuple[str, ...] = ("women", "woman", "womens", "female", "ladies", "femin")

# Bare "W" suffix as in "Canada W"
_WOMEN_TOKEN = re.compile(r"\b(w|women)\b")


def _has_hint(text: str) -> bool:
    return any(hint in text for hint in WOMEN_HINTS)


def classify_gender(
    league_name: str | None,
    home_name: str | None,
    away_name: str | None,
) -> Gender:
    league = (league_name or "").lower()
    home = (home_name or "").lower()
    away = (away_name or "").lower()

    if _has_hint(league) or _has_hint(home) or _has_hint(away):
        return "female"
    if _WOMEN_TOKEN.search(home) or _WOMEN_TOKEN.search(away):
        return "female"
    return "male"

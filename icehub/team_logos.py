"""National team name / country code to flag logo URL mapping."""

import re

# Flag CDN base URL for national team logos
_FLAG_BASE = "https://flagcdn.com"

# Mapping: provider display name -> (IOC code, ISO 3166 alpha-2)
_TEAM_MAP: dict[str, tuple[str, str]] = {
    # ── Top division ──────────────────────────────────────────
    "Canada": ("CAN", "ca"),
    "USA": ("USA", "us"),
    "United States": ("USA", "us"),
    "Sweden": ("SWE", "se"),
    "Finland": ("FIN", "fi"),
    "Czechia": ("CZE", "cz"),
    "Czech Republic": ("CZE", "cz"),
    "Switzerland": ("SUI", "ch"),
    "Slovakia": ("SVK", "sk"),
    "Germany": ("GER", "de"),
    "Latvia": ("LAT", "lv"),
    "Denmark": ("DEN", "dk"),
    "Norway": ("NOR", "no"),
    "Italy": ("ITA", "it"),
    "France": ("FRA", "fr"),
    "Austria": ("AUT", "at"),
    # ── Women's field and qualifiers ─────────────────────────
    "Japan": ("JPN", "jp"),
    "China": ("CHN", "cn"),
    "Hungary": ("HUN", "hu"),
    "Slovenia": ("SLO", "si"),
    "Kazakhstan": ("KAZ", "kz"),
    "Poland": ("POL", "pl"),
    "Great Britain": ("GBR", "gb"),
    "South Korea": ("KOR", "kr"),
    "Korea": ("KOR", "kr"),
    "Ukraine": ("UKR", "ua"),
    "Netherlands": ("NED", "nl"),
    "Belarus": ("BLR", "by"),
    "Russia": ("RUS", "ru"),
    # ── Portuguese display names ─────────────────────────────
    "Canadá": ("CAN", "ca"),
    "Estados Unidos": ("USA", "us"),
    "Suécia": ("SWE", "se"),
    "Finlândia": ("FIN", "fi"),
    "República Tcheca": ("CZE", "cz"),
    "Tchéquia": ("CZE", "cz"),
    "Suíça": ("SUI", "ch"),
    "Eslováquia": ("SVK", "sk"),
    "Alemanha": ("GER", "de"),
    "Letônia": ("LAT", "lv"),
    "Dinamarca": ("DEN", "dk"),
    "Noruega": ("NOR", "no"),
    "Itália": ("ITA", "it"),
    "França": ("FRA", "fr"),
    "Japão": ("JPN", "jp"),
}

_BY_CASEFOLD: dict[str, tuple[str, str]] = {
    name.casefold(): entry for name, entry in _TEAM_MAP.items()
}
_ISO_BY_IOC: dict[str, str] = {ioc: iso for ioc, iso in _TEAM_MAP.values()}
_ISO_CODES: set[str] = set(_ISO_BY_IOC.values())

# "Canada W", "Canada Women", "USA (W)" all resolve to the national flag
_GENDER_SUFFIX = re.compile(r"\s*(\(w\)|\bw\b|\bwomen\b|\bmen\b)\s*$", re.IGNORECASE)


def _iso_code(team: str) -> str | None:
    cleaned = _GENDER_SUFFIX.sub("", team.strip()).strip()
    if not cleaned:
        return None
    entry = _TEAM_MAP.get(cleaned) or _BY_CASEFOLD.get(cleaned.casefold())
    if entry:
        return entry[1]
    upper = cleaned.upper()
    if upper in _ISO_BY_IOC:
        return _ISO_BY_IOC[upper]
    if cleaned.lower() in _ISO_CODES:
        return cleaned.lower()
    return None


def team_logo_url(team: str | None, width: int = 160) -> str:
    """Return a flag URL for a national team name or IOC/ISO country code.

    Returns an empty string when the team isn't recognized.
    """
    if not team:
        return ""
    iso = _iso_code(team)
    if iso is None:
        return ""
    return f"{_FLAG_BASE}/w{width}/{iso}.png"
"""Tournament phase classification for Olympic hockey rounds."""

from __future__ import annotations

from typing import Literal

PhaseKey = Literal["group", "quarterfinal", "semifinal", "bronze", "final", "other"]

# Bracket order used for grouped display
PHASE_ORDER: tuple[PhaseKey, ...] = (
    "group",
    "quarterfinal",
    "semifinal",
    "bronze",
    "final",
    "other",
)

PHASE_TITLES: dict[PhaseKey, str] = {
    "group": "Fase de Grupos",
    "quarterfinal": "Quartas de Final",
    "semifinal": "Semifinais",
    "bronze": "Disputa de Bronze",
    "final": "Final",
    "other": "Outras fases",
}

DEFAULT_PHASE_LABEL = "Fase do torneio"


def map_phase(raw_phase: str | None) -> PhaseKey:
    """Map free-text round/stage names to a bracket phase key."""

    text = (raw_phase or "").lower()
    if "quarter" in text:
        return "quarterfinal"
    if "semi" in text:
        return "semifinal"
    if "bronze" in text:
        return "bronze"
    if "gold" in text or "final" in text:
        return "final"
    if "group" in text or "preliminary" in text or "qualif" in text:
        return "group"
    return "other"


def phase_label(raw_phase: str | None) -> str:
    """Return the display label for a round name.

    Finer grained than map_phase: qualification rounds get their own label
    while still grouping under "group".
    """

    if not raw_phase:
        return DEFAULT_PHASE_LABEL
    text = raw_phase.lower()
    if "preliminary" in text or "group" in text:
        return "Fase preliminar"
    if "qualification" in text or "qualifying" in text:
        return "Eliminatórias"
    if "quarter" in text:
        return "Quartas de final"
    if "semi" in text:
        return "Semifinal"
    if "bronze" in text:
        return "Disputa de bronze"
    if "gold" in text or "final" in text:
        return "Final"
    return raw_phase

"""Quick probe of the fixture fallback chain."""

from __future__ import annotations

import argparse
import logging

from icehub.olympics.phases import PHASE_TITLES
from icehub.olympics.service import FixtureQueryService, group_by_phase
from icehub.settings import get_settings


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the fixture fallback chain for a season and print what came back.",
    )
    parser.add_argument(
        "--season",
        type=str,
        default=None,
        help="Season / tournament year (default: DEFAULT_SEASON or 2026).",
    )
    parser.add_argument(
        "--game",
        type=int,
        default=None,
        help="Also fetch the match sheet for this game ID.",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args()
    settings = get_settings()
    season = args.season or settings.default_season
    service = FixtureQueryService.from_settings(settings)

    result = service.fetch_games(season)
    logging.info(
        "Fetched %s games for season=%s source=%s",
        len(result.games),
        season,
        result.source,
    )
    for key, games in group_by_phase(result.games).items():
        if not games:
            continue
        logging.info("%s (%s)", PHASE_TITLES[key], len(games))
        for game in games:
            logging.info(
                "  %s %s  %s x %s  [%s]",
                game.date_label or "--",
                game.time_label or "--:--",
                game.home.name,
                game.away.name,
                game.status,
            )

    if args.game is not None:
        detail = service.get_game_detail(args.game)
        if detail is None:
            logging.error("Invalid game id: %s", args.game)
            raise SystemExit(1)
        logging.info(
            "Game %s at %s: %s-%s (source=%s, %s events)",
            detail.match_id,
            detail.arena or "?",
            detail.scores.home,
            detail.scores.away,
            detail.source,
            len(detail.events),
        )


if __name__ == "__main__":
    main()

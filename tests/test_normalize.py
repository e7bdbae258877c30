from __future__ import annotations

import unittest
from datetime import datetime, timezone

from icehub.ingestion.schema import RawFixtureRecord, RawTeam
from icehub.olympics.normalize import map_status, normalize, normalize_all


def _epoch(*args: int) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


class TimestampDerivationTests(unittest.TestCase):
    def test_seconds_timestamp_is_upscaled_to_milliseconds(self) -> None:
        seconds = _epoch(2026, 2, 11, 16, 40)

        game = normalize(RawFixtureRecord(timestamp=seconds), tz=timezone.utc)

        self.assertEqual(seconds * 1000, game.timestamp)
        self.assertEqual("11 de fev.", game.date_label)
        self.assertEqual("16:40", game.time_label)

    def test_millisecond_timestamp_is_kept_verbatim(self) -> None:
        millis = _epoch(2026, 2, 11, 16, 40) * 1000

        game = normalize(RawFixtureRecord(timestamp=millis), tz=timezone.utc)

        self.assertEqual(millis, game.timestamp)

    def test_magnitude_threshold_boundary(self) -> None:
        below = normalize(RawFixtureRecord(timestamp=1_999_999_999), tz=timezone.utc)
        at = normalize(RawFixtureRecord(timestamp=2_000_000_000), tz=timezone.utc)

        self.assertEqual(1_999_999_999_000, below.timestamp)
        self.assertEqual(2_000_000_000, at.timestamp)

    def test_timestamp_wins_over_date_strings(self) -> None:
        seconds = _epoch(2026, 2, 11, 16, 40)
        raw = RawFixtureRecord(timestamp=seconds, date="2020-01-01", time="09:00")

        game = normalize(raw, tz=timezone.utc)

        self.assertEqual(seconds * 1000, game.timestamp)
        self.assertEqual("16:40", game.time_label)

    def test_labels_follow_display_timezone(self) -> None:
        seconds = _epoch(2026, 2, 11, 16, 40)

        game = normalize(RawFixtureRecord(timestamp=seconds))

        # America/Sao_Paulo is UTC-3 with no daylight saving time
        self.assertEqual("13:40", game.time_label)
        self.assertEqual(seconds * 1000, game.timestamp)

    def test_date_and_time_fields_build_local_datetime(self) -> None:
        raw = RawFixtureRecord(date="2026-02-11", time="16:40")

        game = normalize(raw, tz=timezone.utc)

        self.assertEqual(_epoch(2026, 2, 11, 16, 40) * 1000, game.timestamp)
        self.assertEqual("11 de fev.", game.date_label)
        self.assertEqual("16:40", game.time_label)

    def test_iso_date_string_supplies_time_of_day(self) -> None:
        raw = RawFixtureRecord(date="2026-02-22T14:10:00+00:00")

        game = normalize(raw, tz=timezone.utc)

        self.assertEqual(_epoch(2026, 2, 22, 14, 10) * 1000, game.timestamp)
        self.assertEqual("22 de fev.", game.date_label)
        self.assertEqual("14:10", game.time_label)

    def test_date_without_time_is_local_midnight(self) -> None:
        game = normalize(RawFixtureRecord(date="2026-02-11"), tz=timezone.utc)

        self.assertEqual(_epoch(2026, 2, 11) * 1000, game.timestamp)
        self.assertEqual("", game.time_label)

    def test_missing_timestamp_and_date_leaves_labels_empty(self) -> None:
        game = normalize(RawFixtureRecord(time="16:40"), tz=timezone.utc)

        self.assertIsNone(game.timestamp)
        self.assertEqual("", game.date_label)
        self.assertEqual("", game.time_label)

    def test_non_finite_timestamp_is_treated_as_missing(self) -> None:
        for value in (float("nan"), float("inf"), float("-inf")):
            game = normalize(RawFixtureRecord(timestamp=value), tz=timezone.utc)

            self.assertIsNone(game.timestamp, value)
            self.assertEqual("", game.date_label, value)

    def test_non_finite_timestamp_falls_back_to_date(self) -> None:
        raw = RawFixtureRecord(timestamp=float("nan"), date="2026-02-11", time="16:40")

        game = normalize(raw, tz=timezone.utc)

        self.assertEqual(_epoch(2026, 2, 11, 16, 40) * 1000, game.timestamp)
        self.assertEqual("16:40", game.time_label)

    def test_unparseable_date_degrades_to_no_timestamp(self) -> None:
        game = normalize(RawFixtureRecord(date="soon"), tz=timezone.utc)

        self.assertIsNone(game.timestamp)
        self.assertEqual("", game.date_label)


class NormalizeTests(unittest.TestCase):
    def test_none_is_the_only_rejected_input(self) -> None:
        self.assertIsNone(normalize(None))
        self.assertIsNotNone(normalize(RawFixtureRecord()))

    def test_empty_record_uses_defaults(self) -> None:
        game = normalize(RawFixtureRecord())

        self.assertEqual(0, game.id)
        self.assertEqual("TBD", game.home.name)
        self.assertEqual("TBD", game.away.name)
        self.assertIsNone(game.home.logo)
        self.assertEqual("scheduled", game.status)
        self.assertEqual("other", game.phase_key)
        self.assertEqual("Fase do torneio", game.phase)
        self.assertEqual("male", game.gender)
        self.assertIsNone(game.scores.home)

    def test_normalizing_twice_gives_equal_games(self) -> None:
        raw = RawFixtureRecord(
            id=42,
            date="2026-02-18",
            time="18:10",
            status="NS",
            round="Quarterfinals - Men",
            home=RawTeam(id=1, name="Finland"),
            away=RawTeam(id=2, name="Switzerland"),
        )

        self.assertEqual(normalize(raw), normalize(raw))

    def test_provider_logo_wins_and_flag_is_fallback(self) -> None:
        raw = RawFixtureRecord(
            home=RawTeam(name="Canada", logo="https://cdn.example/can.png"),
            away=RawTeam(name="Sweden"),
        )

        game = normalize(raw)

        self.assertEqual("https://cdn.example/can.png", game.home.logo)
        self.assertEqual("https://flagcdn.com/w160/se.png", game.away.logo)

    def test_unknown_team_has_no_logo(self) -> None:
        game = normalize(RawFixtureRecord(home=RawTeam(name="Atlantis")))

        self.assertIsNone(game.home.logo)

    def test_women_league_and_phase_are_classified(self) -> None:
        raw = RawFixtureRecord(
            league_name="Olympic Games Women",
            round="Gold Medal Game - Women",
            home=RawTeam(name="Canada W"),
            away=RawTeam(name="USA W"),
        )

        game = normalize(raw)

        self.assertEqual("female", game.gender)
        self.assertEqual("final", game.phase_key)
        self.assertEqual("Final", game.phase)
        self.assertEqual("Gold Medal Game - Women", game.raw_phase)

    def test_serializes_with_camel_case_keys(self) -> None:
        game = normalize(RawFixtureRecord(round="Semifinals"))

        payload = game.model_dump(by_alias=True)

        self.assertIn("dateLabel", payload)
        self.assertIn("phaseKey", payload)
        self.assertIn("rawPhase", payload)
        self.assertEqual("semifinal", payload["phaseKey"])

    def test_normalize_all_sorts_missing_timestamps_first(self) -> None:
        records = [
            RawFixtureRecord(id=3, date="2026-02-20", time="16:40"),
            None,
            RawFixtureRecord(id=1),
            RawFixtureRecord(id=2, date="2026-02-11", time="16:40"),
        ]

        games = normalize_all(records, tz=timezone.utc)

        self.assertEqual([1, 2, 3], [game.id for game in games])


class StatusMappingTests(unittest.TestCase):
    def test_live_tokens(self) -> None:
        for token in ("LIVE", "1H", "2H", "3H", "2h"):
            self.assertEqual("live", map_status(token), token)

    def test_finished_tokens(self) -> None:
        for token in ("FT", "AOT", "AWD", "WO", "FIN"):
            self.assertEqual("finished", map_status(token), token)

    def test_unknown_tokens_are_scheduled(self) -> None:
        for token in ("NS", "POST", "", None, "canceled"):
            self.assertEqual("scheduled", map_status(token), token)


if __name__ == "__main__":
    unittest.main()

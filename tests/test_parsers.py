import unittest
from datetime import datetime, timezone

from icehub.ingestion.parsers import (
    parse_api_sports_game,
    parse_curated_entry,
    parse_game_detail,
    parse_payload,
    parse_payloads,
    parse_sportsdb_event,
)
from icehub.ingestion.schema import ApiSportsPayload, CuratedPayload, SportsDbPayload
from icehub.olympics.normalize import normalize


class SportsDbParserTests(unittest.TestCase):
    def test_finished_event(self) -> None:
        event = {
            "idEvent": "2094567",
            "strLeague": "Olympics Ice Hockey",
            "strHomeTeam": "Canada",
            "strAwayTeam": "Sweden",
            "idHomeTeam": "134",
            "idAwayTeam": "135",
            "strHomeTeamBadge": "https://r2.thesportsdb.com/badge/can.png",
            "intHomeScore": "3",
            "intAwayScore": "2",
            "dateEvent": "2026-02-20",
            "strTime": "15:40:00",
            "strTimestamp": "2026-02-20T15:40:00",
            "strStatus": "Match Finished",
            "intRound": "150",
        }

        record = parse_sportsdb_event(event)

        self.assertEqual("thesportsdb", record.provider)
        self.assertEqual(2094567, record.id)
        self.assertEqual("Canada", record.home.name)
        self.assertEqual(134, record.home.id)
        self.assertEqual("https://r2.thesportsdb.com/badge/can.png", record.home.logo)
        self.assertIsNone(record.away.logo)
        self.assertEqual(3, record.home_score)
        self.assertEqual(2, record.away_score)
        self.assertEqual("FT", record.status)
        self.assertEqual("Semi-Final", record.round)
        expected = datetime(2026, 2, 20, 15, 40, tzinfo=timezone.utc).timestamp()
        self.assertEqual(expected, record.timestamp)

        game = normalize(record, tz=timezone.utc)
        self.assertEqual("finished", game.status)
        self.assertEqual("semifinal", game.phase_key)
        self.assertEqual(int(expected) * 1000, game.timestamp)
        self.assertEqual("15:40", game.time_label)

    def test_upcoming_event_without_scores(self) -> None:
        record = parse_sportsdb_event(
            {
                "idEvent": "2094600",
                "strHomeTeam": "Finland",
                "strAwayTeam": "Slovakia",
                "intHomeScore": None,
                "intAwayScore": None,
                "strStatus": "Not Started",
                "strGroup": "B",
            }
        )

        self.assertIsNone(record.home_score)
        self.assertIsNone(record.away_score)
        self.assertEqual("NS", record.status)
        self.assertEqual("Group B", record.round)
        self.assertIsNone(record.timestamp)

    def test_stage_wins_over_round_number(self) -> None:
        record = parse_sportsdb_event({"strStage": "Playoffs", "intRound": "200"})

        self.assertEqual("Playoffs", record.round)

    def test_period_status_tokens(self) -> None:
        self.assertEqual("2H", parse_sportsdb_event({"strStatus": "P2"}).status)
        self.assertEqual("LIVE", parse_sportsdb_event({"strStatus": "OT"}).status)


class ApiSportsParserTests(unittest.TestCase):
    def test_nested_game_layout(self) -> None:
        item = {
            "game": {
                "id": 1234,
                "date": "2026-02-18T17:10:00+00:00",
                "timestamp": 1771434600,
                "status": {"long": "Finished", "short": "FT"},
                "league": {"id": 76, "name": "Olympic Games Women"},
                "round": {"name": "Quarterfinals"},
            },
            "teams": {
                "home": {"id": 10, "name": "Canada", "logo": "https://media.api-sports.io/hockey/teams/10.png"},
                "away": {"id": 11, "name": "Germany", "logo": None},
            },
            "scores": {"home": 5, "away": 1},
        }

        record = parse_api_sports_game(item)

        self.assertEqual("api-sports", record.provider)
        self.assertEqual(1234, record.id)
        self.assertEqual(1771434600, record.timestamp)
        self.assertEqual("FT", record.status)
        self.assertEqual("Quarterfinals", record.round)
        self.assertEqual("Olympic Games Women", record.league_name)
        self.assertEqual(10, record.home.id)
        self.assertEqual("https://media.api-sports.io/hockey/teams/10.png", record.home.logo)
        self.assertIsNone(record.away.logo)
        self.assertEqual(5, record.home_score)
        self.assertEqual(1, record.away_score)

    def test_flat_layout_with_string_status_and_week(self) -> None:
        item = {
            "id": 77,
            "date": "2026-02-12",
            "time": "21:10",
            "status": "NS",
            "week": "Group A",
            "league": {"name": "Olympic Games"},
            "teams": {"home": {"name": "Canada"}, "away": {"name": "Czechia"}},
            "scores": {"home": None, "away": None},
        }

        record = parse_api_sports_game(item)

        self.assertEqual(77, record.id)
        self.assertEqual("NS", record.status)
        self.assertEqual("Group A", record.round)
        self.assertEqual("21:10", record.time)
        self.assertIsNone(record.home_score)


class CuratedParserTests(unittest.TestCase):
    def test_plain_team_names_with_logos(self) -> None:
        entry = {
            "id": 7,
            "date": "2026-02-11",
            "time": "16:40",
            "home": "Slovakia",
            "away": "Finland",
            "homeLogo": "https://cdn.example/svk.png",
            "phase": "Preliminary Round - Group B",
            "status": "finished",
            "score": {"home": 4, "away": 1},
        }

        record = parse_curated_entry(entry)

        self.assertEqual("curated", record.provider)
        self.assertEqual(7, record.id)
        self.assertEqual("FT", record.status)
        self.assertEqual("Slovakia", record.home.name)
        self.assertEqual("https://cdn.example/svk.png", record.home.logo)
        self.assertIsNone(record.away.logo)
        self.assertEqual("Preliminary Round - Group B", record.round)
        self.assertEqual(4, record.home_score)

    def test_team_objects_and_unknown_status(self) -> None:
        record = parse_curated_entry(
            {
                "home": {"id": 3, "name": "USA"},
                "away": {"name": "Latvia", "logo": "https://cdn.example/lat.png"},
                "status": "ns",
            }
        )

        self.assertEqual(3, record.home.id)
        self.assertEqual("https://cdn.example/lat.png", record.away.logo)
        self.assertEqual("NS", record.status)
        self.assertIsNone(record.id)

    def test_non_finite_numbers_degrade_field_by_field(self) -> None:
        record = parse_curated_entry(
            {
                "id": 8,
                "timestamp": float("nan"),
                "date": "2026-02-12",
                "home": "Canada",
                "away": "Czechia",
                "score": {"home": float("inf"), "away": 2},
            }
        )

        self.assertEqual(8, record.id)
        self.assertIsNone(record.timestamp)
        self.assertEqual("2026-02-12", record.date)
        self.assertIsNone(record.home_score)
        self.assertEqual(2, record.away_score)

    def test_out_of_range_integer_timestamp_is_dropped(self) -> None:
        record = parse_api_sports_game({"id": 1, "timestamp": 10**400})

        self.assertIsNone(record.timestamp)


class PayloadDispatchTests(unittest.TestCase):
    def test_provider_tag_selects_the_parser(self) -> None:
        data = {"id": 5, "idEvent": "9"}

        self.assertEqual(5, parse_payload(CuratedPayload(data=data)).id)
        self.assertEqual(5, parse_payload(ApiSportsPayload(data=data)).id)
        self.assertEqual(9, parse_payload(SportsDbPayload(data=data)).id)

    def test_parse_payloads_skips_non_objects(self) -> None:
        payloads = [
            CuratedPayload(data={"id": 1}),
            CuratedPayload(data=["not", "a", "dict"]),
            SportsDbPayload(data={"idEvent": "2"}),
        ]

        records = parse_payloads(payloads)

        self.assertEqual([1, 2], [record.id for record in records])


class GameDetailParserTests(unittest.TestCase):
    def test_periods_stats_and_events(self) -> None:
        item = {
            "game": {"id": 1234, "venue": {"name": "Santagiulia", "city": "Milan"}},
            "periods": {"first": "1-0", "second": "2-1", "third": None},
            "statistics": {
                "shots": {"home": 31, "away": 24},
                "penalties": {"home": 3, "away": 5},
                "powerPlay": {"home": "2/5", "away": "0/3"},
                "faceoffs": "33-27",
            },
            "events": [
                {"period": "P2", "time": "04:12", "team": "away", "type": "Goal", "player": {"name": "Kempe"}},
                {"period": 1, "time": "15:30", "team": "home", "type": "Goal", "player": "McDavid"},
                {"period": 1, "time": "02:05", "team": "home", "type": "Penalty", "detail": "Tripping"},
                {"period": 2, "time": "09:00", "team": "nobody", "type": "Goal"},
            ],
            "stars": ["McDavid", 17, "Kempe"],
        }

        detail = parse_game_detail(item, 1234)

        self.assertEqual(1234, detail.match_id)
        self.assertEqual("Santagiulia", detail.arena)
        self.assertEqual("Milan", detail.city)
        self.assertEqual([(1, 0), (2, 1), (0, 0)], [(p.home, p.away) for p in detail.periods])
        self.assertEqual(3, detail.scores.home)
        self.assertEqual(1, detail.scores.away)
        self.assertEqual(31, detail.stats.shots.home)
        self.assertEqual("2/5", detail.stats.power_play.home)
        self.assertEqual(27, detail.stats.faceoffs.away)
        self.assertEqual(
            [(1, "02:05"), (1, "15:30"), (2, "04:12")],
            [(event.period, event.time) for event in detail.events],
        )
        self.assertEqual("penalty", detail.events[0].type)
        self.assertEqual("Kempe", detail.events[2].player)
        self.assertEqual(["McDavid", "Kempe"], detail.stars)
        self.assertEqual("provider", detail.source)

    def test_short_period_list_is_zero_filled(self) -> None:
        detail = parse_game_detail({"periods": ["2-2"], "scores": {"home": 3, "away": 2}}, 55)

        self.assertEqual(55, detail.match_id)
        self.assertEqual(3, len(detail.periods))
        self.assertEqual(0, detail.periods[2].home)
        self.assertEqual(3, detail.scores.home)
        self.assertEqual("0/0", detail.stats.power_play.away)

    def test_non_object_is_rejected(self) -> None:
        self.assertIsNone(parse_game_detail(None, 1))
        self.assertIsNone(parse_game_detail("oops", 1))


if __name__ == "__main__":
    unittest.main()

import datetime as dt
import unittest

from fetcher.datasource.ny_open_data import (
    extract_jackpot,
    extract_white_balls,
    extract_winning_numbers,
    get_extractor,
    parse_currency,
    parse_draw_date,
    parse_draw_numbers,
    parse_multiplier,
)
from fetcher.types import JackpotInfo


class JackpotExtractionTests(unittest.TestCase):
    def test_strips_currency_punctuation(self) -> None:
        jackpot = extract_jackpot({"jackpot": "$1,200,000,000"})
        self.assertEqual(jackpot, JackpotInfo(amount=1200000000, cash_value=720000000))

    def test_rejects_amount_below_band(self) -> None:
        self.assertIsNone(extract_jackpot({"jackpot": "$500"}))

    def test_rejects_amount_above_band(self) -> None:
        self.assertIsNone(extract_jackpot({"jackpot": "5000000001"}))

    def test_accepts_band_edges(self) -> None:
        self.assertEqual(extract_jackpot({"jackpot": 20_000_000}).amount, 20_000_000)
        self.assertEqual(extract_jackpot({"jackpot": "5,000,000,000"}).amount, 5_000_000_000)

    def test_uses_reported_cash_value(self) -> None:
        jackpot = extract_jackpot({"jackpot": "$250,000,000", "cash_value": "$112,400,000"})
        self.assertEqual(jackpot.cash_value, 112_400_000)

    def test_derives_cash_value_when_unusable(self) -> None:
        jackpot = extract_jackpot({"jackpot": "$100,000,001", "cash_value": "n/a"})
        self.assertEqual(jackpot.cash_value, 60_000_001)

    def test_missing_or_garbage_jackpot(self) -> None:
        self.assertIsNone(extract_jackpot({}))
        self.assertIsNone(extract_jackpot({"jackpot": "TBD"}))
        self.assertIsNone(extract_jackpot({"jackpot": True}))
        self.assertIsNone(parse_currency("$NaN"))


class DrawNumberTests(unittest.TestCase):
    def test_parses_and_sorts_numbers(self) -> None:
        self.assertEqual(
            parse_draw_numbers("03 17 29 44 61 08".split()), ((3, 17, 29, 44, 61), 8)
        )
        self.assertEqual(
            parse_draw_numbers("61 03 44 17 29 08".split()), ((3, 17, 29, 44, 61), 8)
        )

    def test_too_few_tokens(self) -> None:
        self.assertIsNone(parse_draw_numbers([]))
        self.assertIsNone(parse_draw_numbers("03 17 29 44 61".split()))

    def test_duplicate_main_numbers(self) -> None:
        self.assertIsNone(parse_draw_numbers("1 1 3 4 5 9".split()))

    def test_out_of_range_numbers(self) -> None:
        self.assertIsNone(parse_draw_numbers("0 17 29 44 61 08".split()))
        self.assertIsNone(parse_draw_numbers("03 17 29 44 70 08".split()))
        self.assertIsNone(parse_draw_numbers("03 17 29 44 61 27".split()))
        self.assertIsNone(parse_draw_numbers("03 17 29 44 61 0".split()))

    def test_non_integer_tokens(self) -> None:
        self.assertIsNone(parse_draw_numbers("03 17 2x 44 61 08".split()))
        self.assertIsNone(parse_draw_numbers("03 17 29 44 61 8.5".split()))

    def test_extra_tokens_are_ignored(self) -> None:
        self.assertEqual(
            parse_draw_numbers("03 17 29 44 61 08 02".split()), ((3, 17, 29, 44, 61), 8)
        )


class FieldParsingTests(unittest.TestCase):
    def test_draw_date_drops_time_of_day(self) -> None:
        self.assertEqual(parse_draw_date("2025-07-05T00:00:00.000"), dt.date(2025, 7, 5))
        self.assertEqual(parse_draw_date("2025-07-05"), dt.date(2025, 7, 5))

    def test_invalid_draw_date(self) -> None:
        self.assertIsNone(parse_draw_date(None))
        self.assertIsNone(parse_draw_date("07/05/2025"))
        self.assertIsNone(parse_draw_date(20250705))

    def test_multiplier(self) -> None:
        self.assertEqual(parse_multiplier("2"), 2)
        self.assertEqual(parse_multiplier(10), 10)
        self.assertIsNone(parse_multiplier(None))
        self.assertIsNone(parse_multiplier("0"))
        self.assertIsNone(parse_multiplier("x"))


class RecordExtractorTests(unittest.TestCase):
    def test_winning_numbers_record(self) -> None:
        record = {
            "draw_date": "2025-07-05T00:00:00.000",
            "winning_numbers": "61 03 29 44 17 08",
            "multiplier": "3",
            "jackpot": "$310,000,000",
        }
        extracted = extract_winning_numbers(record)

        self.assertEqual(extracted.latest.numbers, (3, 17, 29, 44, 61))
        self.assertEqual(extracted.latest.special_number, 8)
        self.assertEqual(extracted.latest.draw_date, dt.date(2025, 7, 5))
        self.assertEqual(extracted.latest.multiplier, 3)
        self.assertEqual(extracted.jackpot.amount, 310_000_000)
        self.assertEqual(extracted.jackpot.cash_value, 186_000_000)

    def test_bad_jackpot_keeps_valid_draw(self) -> None:
        record = {
            "draw_date": "2025-07-05T00:00:00.000",
            "winning_numbers": "03 17 29 44 61 08",
            "jackpot": "$500",
        }
        extracted = extract_winning_numbers(record)

        self.assertIsNone(extracted.jackpot)
        self.assertIsNotNone(extracted.latest)
        self.assertIsNone(extracted.latest.multiplier)
        self.assertFalse(extracted.empty)

    def test_bad_draw_keeps_valid_jackpot(self) -> None:
        record = {"winning_numbers": "1 1 3 4 5 9", "draw_date": "2025-07-05", "jackpot": "90000000"}
        extracted = extract_winning_numbers(record)

        self.assertIsNone(extracted.latest)
        self.assertEqual(extracted.jackpot.amount, 90_000_000)

    def test_draw_without_date_is_rejected(self) -> None:
        extracted = extract_winning_numbers({"winning_numbers": "03 17 29 44 61 08"})
        self.assertTrue(extracted.empty)

    def test_tolerates_unexpected_field_types(self) -> None:
        extracted = extract_winning_numbers({"winning_numbers": [3, 17], "draw_date": 7})
        self.assertTrue(extracted.empty)

    def test_white_balls_list_record(self) -> None:
        record = {"date": "2025-07-02T00:00:00", "white_balls": [9, 2, 40, 33, 12], "powerball": "21"}
        latest = extract_white_balls(record).latest

        self.assertEqual(latest.numbers, (2, 9, 12, 33, 40))
        self.assertEqual(latest.special_number, 21)
        self.assertEqual(latest.draw_date, dt.date(2025, 7, 2))

    def test_white_balls_string_record(self) -> None:
        record = {"date": "2025-07-02", "white_balls": "9, 2, 40 33,12", "powerball": 21}
        self.assertEqual(extract_white_balls(record).latest.numbers, (2, 9, 12, 33, 40))

    def test_white_balls_wrong_count(self) -> None:
        record = {"date": "2025-07-02", "white_balls": [9, 2, 40, 33, 12, 5], "powerball": 21}
        self.assertIsNone(extract_white_balls(record).latest)

    def test_unknown_extractor(self) -> None:
        with self.assertRaises(ValueError):
            get_extractor("csv")


if __name__ == "__main__":
    unittest.main()

"""
Tests for the quota and validation policy.

Pure functions: normalization, daily counting, and the ordered
accept/reject decision.
"""

import pytest
from datetime import datetime

from noospace.models.entry import Entry
from noospace.policy import (
    DAILY_LIMIT,
    MESSAGES,
    REASON_DAILY_LIMIT,
    REASON_EMPTY,
    REASON_TOO_LONG,
    PolicyDecision,
    ValidationError,
    count_today,
    evaluate,
    normalize_symbol,
    normalize_tags,
    rituals_left,
    today_key,
)
from tests.test_config import CONFIG, EXPECTED, TEST_DATA, MESSAGES as TEST_MESSAGES, today_row


pytestmark = pytest.mark.policy

TODAY = CONFIG["today_key"]


def entries_today(count: int):
    return [Entry.from_row(today_row(f"entry {i}", hour=i)) for i in range(count)]


class TestNormalizeTags:

    @pytest.mark.parametrize("raw,expected", TEST_DATA["tag_cases"])
    def test_cases(self, raw, expected):
        assert normalize_tags(raw) == expected

    def test_none(self):
        assert normalize_tags(None) == [EXPECTED["policy"]["untagged"]]

    def test_duplicates_kept(self):
        assert normalize_tags("a,A,a") == ["a", "a", "a"]


class TestNormalizeSymbol:

    @pytest.mark.parametrize("raw,expected", TEST_DATA["symbol_cases"])
    def test_cases(self, raw, expected):
        assert normalize_symbol(raw) == expected


class TestQuota:

    def test_today_key_format(self):
        assert today_key(datetime(2026, 1, 5, 23, 59)) == "2026-01-05"

    def test_today_key_defaults_to_now(self):
        assert today_key() == datetime.now().strftime("%Y-%m-%d")

    def test_count_today_uses_date_prefix(self):
        entries = entries_today(2) + [Entry(text="old", date=f"{CONFIG['yesterday_key']}T23:59:59.999Z")]
        assert count_today(entries, TODAY) == 2

    def test_count_ignores_empty_dates(self):
        assert count_today([Entry(text="a", date="")], TODAY) == 0

    @pytest.mark.parametrize("existing,left", [(0, 3), (1, 2), (3, 0), (5, 0)])
    def test_rituals_left_never_negative(self, existing, left):
        assert rituals_left(entries_today(existing), TODAY) == left

    def test_limit_constant(self):
        assert DAILY_LIMIT == EXPECTED["policy"]["daily_limit"]


class TestEvaluate:

    def test_accepts(self):
        decision = evaluate([], "a brief impulse", TODAY)
        assert decision == PolicyDecision.accept()
        assert decision.reason is None

    @pytest.mark.parametrize("text", ["", "   \n\t", None])
    def test_empty(self, text):
        decision = evaluate([], text, TODAY)
        assert not decision.accepted
        assert decision.reason == REASON_EMPTY
        assert decision.message == TEST_MESSAGES["validation"]["empty"]

    def test_too_long(self):
        decision = evaluate([], "x" * 241, TODAY)
        assert decision.reason == REASON_TOO_LONG
        assert decision.message == TEST_MESSAGES["validation"]["too_long"]

    def test_length_counted_after_trim(self):
        assert evaluate([], "  " + "x" * 240 + "  ", TODAY).accepted

    def test_daily_limit(self):
        decision = evaluate(entries_today(3), "one more", TODAY)
        assert decision.reason == REASON_DAILY_LIMIT
        assert decision.message == TEST_MESSAGES["validation"]["daily_limit"]

    def test_limit_resets_next_day(self):
        assert evaluate(entries_today(3), "tomorrow", "2026-10-20").accepted

    def test_empty_checked_before_limit(self):
        assert evaluate(entries_today(3), "  ", TODAY).reason == REASON_EMPTY

    def test_too_long_checked_before_limit(self):
        assert evaluate(entries_today(3), "x" * 300, TODAY).reason == REASON_TOO_LONG

    def test_does_not_mutate_input(self):
        entries = entries_today(2)
        snapshot = list(entries)
        evaluate(entries, "hello", TODAY)
        assert entries == snapshot


class TestValidationError:

    def test_from_decision(self):
        error = ValidationError.from_decision(PolicyDecision.reject(REASON_TOO_LONG))
        assert error.reason == REASON_TOO_LONG
        assert str(error) == MESSAGES[REASON_TOO_LONG]

    def test_message_defaults_from_reason(self):
        assert ValidationError(REASON_EMPTY).message == "Write a short impulse."

"""Tests for series rules and the series index."""

from datetime import date, datetime, time

from calendar_engine.engine.series_index import SeriesIndex
from calendar_engine.models.series import SeriesRule, Weekday, format_weekdays

MWF = frozenset({Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY})


class TestWeekday:
    def test_codes(self):
        assert [day.code for day in Weekday] == list("MTWRFSU")

    def test_of_matches_date_weekday(self):
        assert Weekday.of(date(2025, 3, 3)) is Weekday.MONDAY
        assert Weekday.of(date(2025, 3, 9)) is Weekday.SUNDAY

    def test_from_code(self):
        assert Weekday.from_code("r") is Weekday.THURSDAY

    def test_format_weekdays_in_week_order(self):
        assert format_weekdays(frozenset({Weekday.FRIDAY, Weekday.MONDAY})) == "MF"


class TestSeriesRule:
    def test_dates_by_count(self):
        rule = SeriesRule(weekdays=MWF, occurrences=4)
        assert list(rule.dates(date(2025, 3, 3))) == [
            date(2025, 3, 3),
            date(2025, 3, 5),
            date(2025, 3, 7),
            date(2025, 3, 10),
        ]

    def test_dates_until_is_inclusive(self):
        rule = SeriesRule(weekdays=MWF, until=date(2025, 3, 7))
        assert list(rule.dates(date(2025, 3, 3))) == [
            date(2025, 3, 3),
            date(2025, 3, 5),
            date(2025, 3, 7),
        ]

    def test_anchor_off_pattern_starts_at_next_match(self):
        rule = SeriesRule(weekdays=frozenset({Weekday.MONDAY}), occurrences=2)
        assert list(rule.dates(date(2025, 3, 4))) == [date(2025, 3, 10), date(2025, 3, 17)]

    def test_expand(self):
        rule = SeriesRule(weekdays=MWF, occurrences=2)
        events = rule.expand("Gym", datetime(2025, 3, 3, 7, 0), time(8, 0))
        assert [e.start for e in events] == [
            datetime(2025, 3, 3, 7, 0),
            datetime(2025, 3, 5, 7, 0),
        ]
        assert all(e.end.time() == time(8, 0) for e in events)
        assert {e.series_id for e in events} == {rule.series_id}

    def test_ids_are_unique(self):
        assert SeriesRule(weekdays=MWF, occurrences=1).series_id != SeriesRule(
            weekdays=MWF, occurrences=1
        ).series_id

    def test_renewed_gets_new_id(self):
        rule = SeriesRule(weekdays=MWF, occurrences=3)
        renewed = rule.renewed(occurrences=1)
        assert renewed.series_id != rule.series_id
        assert renewed.occurrences == 1
        assert renewed.weekdays == rule.weekdays


def _keys(*days):
    return [("Gym", datetime(2025, 3, day, 7, 0)) for day in days]


class TestSeriesIndex:
    def _index(self, rule):
        index = SeriesIndex()
        index.add(rule, _keys(7, 3, 5, 10))
        return index

    def test_members_sorted(self):
        rule = SeriesRule(weekdays=MWF, occurrences=4)
        index = self._index(rule)
        assert index.members(rule.series_id) == _keys(3, 5, 7, 10)
        assert index.members_from(rule.series_id, datetime(2025, 3, 6)) == _keys(7, 10)
        assert rule.series_id in index
        assert len(index) == 1

    def test_rule_of_none(self):
        assert SeriesIndex().rule(None) is None

    def test_rekey_swaps_all_keys_at_once(self):
        rule = SeriesRule(weekdays=MWF, occurrences=4)
        index = self._index(rule)
        a, b = _keys(3, 5)
        index.rekey(rule.series_id, {a: b, b: a})
        assert index.members(rule.series_id) == _keys(3, 5, 7, 10)

    def test_detach_decrements_count(self):
        rule = SeriesRule(weekdays=MWF, occurrences=4)
        index = self._index(rule)
        index.detach(rule.series_id, _keys(5)[0])
        assert index.members(rule.series_id) == _keys(3, 7, 10)
        assert index.rule(rule.series_id).occurrences == 3

    def test_detach_last_member_drops_series(self):
        rule = SeriesRule(weekdays=MWF, occurrences=1)
        index = SeriesIndex()
        index.add(rule, _keys(3))
        index.detach(rule.series_id, _keys(3)[0])
        assert rule.series_id not in index

    def test_split_count_rule(self):
        rule = SeriesRule(weekdays=MWF, occurrences=4)
        index = self._index(rule)
        tail = index.split(rule.series_id, datetime(2025, 3, 7, 7, 0))
        assert tail is not None
        assert index.rule(rule.series_id).occurrences == 2
        assert tail.occurrences == 2
        assert index.members(rule.series_id) == _keys(3, 5)
        assert index.members(tail.series_id) == _keys(7, 10)

    def test_split_until_rule(self):
        rule = SeriesRule(weekdays=MWF, until=date(2025, 3, 10))
        index = self._index(rule)
        tail = index.split(rule.series_id, datetime(2025, 3, 7, 7, 0))
        assert index.rule(rule.series_id).until == date(2025, 3, 6)
        assert tail.until == date(2025, 3, 10)

    def test_split_at_first_member_is_a_no_op(self):
        rule = SeriesRule(weekdays=MWF, occurrences=4)
        index = self._index(rule)
        assert index.split(rule.series_id, datetime(2025, 3, 3, 7, 0)) is None
        assert len(index) == 1

"""Tests for slot generation."""
from datetime import date, datetime, time, timedelta, timezone

from slotkeeper.scheduling.availability import AvailabilityConfig, Weekday
from slotkeeper.scheduling.slots import covered_window, generate_slots, slots_for_day


def test_single_monday_yields_thirty_slots(config):
    slots = list(generate_slots(datetime(2024, 6, 3, 0, 0), datetime(2024, 6, 3, 23, 59), config))

    assert len(slots) == 30
    assert (slots[0].start.time(), slots[0].end.time()) == (time(8, 0), time(8, 20))
    assert (slots[-1].start.time(), slots[-1].end.time()) == (time(17, 40), time(18, 0))


def test_generation_is_deterministic(config):
    start = datetime(2024, 6, 1, tzinfo=timezone.utc)
    end = datetime(2024, 6, 30, tzinfo=timezone.utc)

    assert list(generate_slots(start, end, config)) == list(generate_slots(start, end, config))


def test_slots_stay_inside_template(config):
    slots = list(generate_slots(datetime(2024, 6, 1), datetime(2024, 7, 31), config))

    assert slots
    for slot in slots:
        assert slot.start.weekday() in config.available_weekdays
        assert config.business_start_hour <= slot.start.hour < config.business_end_hour
        assert slot.end - slot.start == timedelta(minutes=20)
        assert slot.end.hour < 18 or slot.end.time() == time(18, 0)


def test_slots_are_ascending(config):
    slots = list(generate_slots(datetime(2024, 6, 1), datetime(2024, 6, 14), config))

    starts = [slot.start for slot in slots]
    assert starts == sorted(starts)
    assert len(set(starts)) == len(starts)


def test_reversed_range_is_empty(config):
    assert list(generate_slots(datetime(2024, 6, 4), datetime(2024, 6, 3), config)) == []


def test_reversed_range_on_same_day_is_empty(config):
    assert list(generate_slots(datetime(2024, 6, 3, 12), datetime(2024, 6, 3, 9), config)) == []


def test_weekend_yields_nothing(config):
    # 2024-06-08/09 are Saturday and Sunday
    assert list(generate_slots(datetime(2024, 6, 8), datetime(2024, 6, 9, 23, 59), config)) == []


def test_partial_final_day_is_enumerated_in_full(config):
    slots = list(generate_slots(datetime(2024, 6, 3, 15, 0), datetime(2024, 6, 4, 9, 0), config))

    assert len(slots) == 60
    assert slots[0].start.time() == time(8, 0)
    assert slots[-1].start == datetime(2024, 6, 4, 17, 40, tzinfo=config.zone)


def test_full_work_week(config):
    slots = list(generate_slots(datetime(2024, 6, 3), datetime(2024, 6, 9, 23, 59), config))

    assert len(slots) == 5 * 30


def test_generator_is_restartable(config):
    first = generate_slots(datetime(2024, 6, 3), datetime(2024, 6, 3, 23, 59), config)
    assert len(list(first)) == 30
    assert list(first) == []

    again = generate_slots(datetime(2024, 6, 3), datetime(2024, 6, 3, 23, 59), config)
    assert len(list(again)) == 30


def test_uneven_duration_stops_before_closing(config):
    config = AvailabilityConfig(frozenset({Weekday.MONDAY}), 8, 9, 25, "UTC")

    slots = slots_for_day(date(2024, 6, 3), config)

    assert [slot.start.time() for slot in slots] == [time(8, 0), time(8, 25), time(8, 50)]


def test_range_bounds_are_read_in_configured_zone():
    config = AvailabilityConfig(frozenset({Weekday.MONDAY}), 8, 18, 60, "America/New_York")

    # 02:00 UTC Tuesday is still Monday evening in New York
    slots = list(generate_slots(
        datetime(2024, 6, 4, 2, 0, tzinfo=timezone.utc),
        datetime(2024, 6, 4, 3, 0, tzinfo=timezone.utc),
        config,
    ))

    assert len(slots) == 10
    assert slots[0].start.date() == date(2024, 6, 3)
    assert slots[0].start.utcoffset() == timedelta(hours=-4)


def test_wall_clock_grid_survives_dst_change():
    config = AvailabilityConfig(frozenset({Weekday.MONDAY}), 8, 18, 30, "America/New_York")

    before = slots_for_day(date(2024, 3, 4), config)
    after = slots_for_day(date(2024, 3, 11), config)

    assert [s.start.time() for s in before] == [s.start.time() for s in after]
    assert before[0].start.utcoffset() == timedelta(hours=-5)
    assert after[0].start.utcoffset() == timedelta(hours=-4)


def test_covered_window_spans_whole_days(config):
    start, end = covered_window(datetime(2024, 6, 3, 15, 0), datetime(2024, 6, 4, 9, 0), config)

    assert start == datetime(2024, 6, 3, 0, 0, tzinfo=config.zone)
    assert end.date() == date(2024, 6, 4)
    assert end.time() == time.max

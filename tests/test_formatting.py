from netrum_monitor.formatting import (
    format_average,
    format_datetime,
    format_duration,
    format_metric,
    format_mining_speed,
    format_timestamp,
    short_wallet,
)

from tests.factories import WALLET


def test_format_duration():
    assert format_duration(0) == "0h 0m"
    assert format_duration(3661) == "1h 1m"
    assert format_duration(86400 * 2 + 59) == "48h 0m"
    assert format_duration(-5) == "0h 0m"


def test_missing_values_show_na():
    assert format_metric(None) == "N/A"
    assert format_metric(0) == "0"
    assert format_metric(42.5) == "42.5"
    assert format_average(None) == "N/A"
    assert format_average(12.345) == "12.3"
    assert format_timestamp(None) == "N/A"


def test_unrepresentable_times_show_na():
    assert format_timestamp(float("inf")) == "N/A"
    assert format_timestamp(1e20) == "N/A"
    assert format_datetime(float("nan")) == "N/A"
    assert format_datetime(-1e20) == "N/A"


def test_short_wallet():
    assert short_wallet(WALLET) == "0xabab…abab"
    assert short_wallet("") == "-"
    assert short_wallet("0x12") == "0x12"


def test_mining_speed_is_truncated_not_rounded():
    assert format_mining_speed("1999999999999999999") == "1.99999999 NPT/s"
    assert format_mining_speed("42930000000000") == "0.00004293 NPT/s"
    assert format_mining_speed(None) == "-"
    assert format_mining_speed("0") == "-"
    assert format_mining_speed("abc") == "-"

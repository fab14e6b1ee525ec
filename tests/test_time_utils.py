from datetime import UTC, datetime, timedelta, timezone

import pytest

from backend.app.core.time import InvalidConfiguration, as_utc, is_aware, resolve_timezone, utc_now


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_as_utc_attaches_utc_to_naive_values():
    assert as_utc(datetime(2030, 1, 1, 10, 0)) == datetime(2030, 1, 1, 10, 0, tzinfo=UTC)
    assert as_utc(None) is None


def test_as_utc_converts_offsets():
    value = datetime(2030, 1, 1, 7, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert as_utc(value) == datetime(2030, 1, 1, 10, 0, tzinfo=UTC)


def test_resolve_timezone():
    assert str(resolve_timezone("America/Sao_Paulo")) == "America/Sao_Paulo"
    assert str(resolve_timezone(" UTC ")) == "UTC"


@pytest.mark.parametrize("name", [None, "", "   ", "Not/AZone", "America", "Etc", "a" * 300, "../zoneinfo"])
def test_resolve_timezone_rejects_missing_or_unknown(name):
    with pytest.raises(InvalidConfiguration):
        resolve_timezone(name)


def test_is_aware():
    assert is_aware(utc_now())
    assert not is_aware(datetime(2030, 1, 1))
    assert not is_aware(None)

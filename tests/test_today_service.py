# tests/test_today_service.py
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from errors import ConfigurationError, UpstreamError  # noqa: E402
from neows_client import NeoWsClient  # noqa: E402
from today_cache import TodayCache  # noqa: E402
from today_service import NeoTodayService  # noqa: E402

TORONTO = ZoneInfo("America/Toronto")
FIXED_INSTANT = datetime(2026, 2, 26, 12, 0, tzinfo=timezone.utc)


def _feed_for(day):
    return {
        "element_count": 1,
        "near_earth_objects": {
            day.isoformat(): [
                {
                    "id": "123",
                    "name": "Cached Asteroid",
                    "is_potentially_hazardous_asteroid": False,
                    "estimated_diameter": {
                        "meters": {"estimated_diameter_min": 1.0, "estimated_diameter_max": 2.0},
                    },
                    "close_approach_data": [
                        {
                            "close_approach_date": day.isoformat(),
                            "epoch_date_close_approach": 1000,
                            "relative_velocity": {"kilometers_per_second": "12.5"},
                            "miss_distance": {"lunar": "0.5", "kilometers": "192200"},
                            "orbiting_body": "Earth",
                        }
                    ],
                }
            ]
        },
    }


class _FakeFetcher:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def fetch(self, start_date, end_date):
        self.calls.append((start_date, end_date))
        if self.error is not None:
            raise self.error
        return _feed_for(start_date)


def _service(fetcher, clock=lambda: FIXED_INSTANT, cache=None):
    return NeoTodayService(
        fetcher=fetcher,
        cache=cache if cache is not None else TodayCache(ttl_seconds=3600, max_size=10),
        zone=TORONTO,
        clock=clock,
    )


def test_today_uses_configured_zone():
    # 03:00 UTC is still the previous evening in Toronto
    service = _service(_FakeFetcher(), clock=lambda: datetime(2026, 2, 27, 3, 0, tzinfo=timezone.utc))

    assert service.today() == date(2026, 2, 26)
    assert service.cache_key_today() == "2026-02-26|America/Toronto"


def test_get_today_summaries_uses_cache_and_calls_nasa_once():
    fetcher = _FakeFetcher()
    service = _service(fetcher)

    first = service.get_today_summaries()
    second = service.get_today_summaries()

    assert fetcher.calls == [(date(2026, 2, 26), date(2026, 2, 26))]
    assert first == second
    assert len(first) == 1
    assert first[0].id == "123"
    assert first[0].miss_distance_km == 192200.0


def test_expired_cache_calls_nasa_again():
    now = {"t": 0.0}
    cache = TodayCache(ttl_seconds=10, max_size=10, timer=lambda: now["t"])
    fetcher = _FakeFetcher()
    service = _service(fetcher, cache=cache)

    service.get_today_summaries()
    now["t"] = 11.0
    service.get_today_summaries()

    assert len(fetcher.calls) == 2


def test_new_day_uses_new_cache_key():
    current = {"now": FIXED_INSTANT}
    fetcher = _FakeFetcher()
    service = _service(fetcher, clock=lambda: current["now"])

    service.get_today_summaries()
    current["now"] = datetime(2026, 2, 27, 12, 0, tzinfo=timezone.utc)
    result = service.get_today_summaries()

    assert [call[0] for call in fetcher.calls] == [date(2026, 2, 26), date(2026, 2, 27)]
    assert len(result) == 1


def test_empty_day_is_cached_too():
    class _EmptyFetcher(_FakeFetcher):
        def fetch(self, start_date, end_date):
            self.calls.append((start_date, end_date))
            return {"near_earth_objects": {}}

    fetcher = _EmptyFetcher()
    service = _service(fetcher)

    assert service.get_today_summaries() == []
    assert service.get_today_summaries() == []
    assert len(fetcher.calls) == 1


def test_upstream_error_propagates_and_is_not_cached():
    fetcher = _FakeFetcher(error=UpstreamError(429, "rate limited"))
    service = _service(fetcher)

    with pytest.raises(UpstreamError) as excinfo:
        service.get_today_summaries()
    assert excinfo.value.status_code == 429

    with pytest.raises(UpstreamError):
        service.get_today_summaries()
    assert len(fetcher.calls) == 2


def test_missing_api_key_fails_before_network(monkeypatch):
    import neows_client

    def _no_network(*args, **kwargs):
        raise AssertionError("network should not be touched without an API key")

    monkeypatch.setattr(neows_client.requests, "get", _no_network)
    service = _service(NeoWsClient(base_url="https://api.nasa.gov", api_key="  "))

    with pytest.raises(ConfigurationError):
        service.get_today_summaries()

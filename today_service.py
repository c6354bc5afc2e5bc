from datetime import date, datetime
from typing import Callable, List
from zoneinfo import ZoneInfo

from logging_config import get_logger
from models import NeoSummary
from normalize import normalize_feed_for_date
from today_cache import TodayCache, cache_key

logger = get_logger(__name__)


class NeoTodayService:
    """
    Serves today's normalized NEO list, going to NASA only on a cache miss.

    fetcher is anything with fetch(start_date, end_date) -> payload
    (NeoWsClient in production). clock returns the current aware datetime.
    Concurrent misses are not de-duplicated; each may call NASA once.
    """

    def __init__(
        self,
        fetcher,
        cache: TodayCache,
        zone: ZoneInfo,
        clock: Callable[[], datetime],
    ):
        self.fetcher = fetcher
        self.cache = cache
        self.zone = zone
        self.clock = clock

    def today(self) -> date:
        return self.clock().astimezone(self.zone).date()

    def cache_key_today(self) -> str:
        return cache_key(self.today(), self.zone.key)

    def get_today_summaries(self) -> List[NeoSummary]:
        today = self.today()
        key = cache_key(today, self.zone.key)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Fetching NEOs from cache for %s (%s)", today, self.zone.key)
            return list(cached)

        logger.debug("Fetching NEOs from NASA for %s (%s)", today, self.zone.key)
        feed = self.fetcher.fetch(today, today)
        summaries = normalize_feed_for_date(feed, today, self.zone)

        self.cache.put(key, tuple(summaries))
        logger.info("Cached %d NEOs under %s", len(summaries), key)
        return summaries

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Union

from headlines.feeds import BaseFeed, NewsApiFeed, NewsDataFeed
from headlines.storage import repository as repo
from headlines.storage.models import (
    BreakingNewsResult,
    BreakingNewsSettings,
    HeadlineSource,
    SettingsUpdate,
)
from headlines.storage.store import KeyValueStore
from headlines.utils.tz_utils import DEFAULT_TIMEZONE, day_key, utc_now

logger = logging.getLogger(__name__)

MAX_REQUESTS_PER_DAY = 100
QUOTA_REACHED_MESSAGE = "Daily request limit reached"

FALLBACK_NEWS = [
    "Trump promised 200 trade deals. He's made 3",
    "Trump threatens 50% tariffs on Brazil if it doesn't stop the Bolsonaro 'witch hunt' trial",
    "Bessent outlines final tariff warning as trade deadline nears",
    "Trump wants to talk business with Africa in hopes of countering China. But a US summit excluded big players",
    "Moscow ramps up attacks with fiery explosions seen in Kyiv. At least two are dead and more than a dozen wounded.",
]


def fallback_headlines() -> List[str]:
    return list(FALLBACK_NEWS)


class BreakingNewsResolver:
    """
    Resolve the breaking-news strip through a fixed priority chain:

    1. manual headlines (admin override, when enabled and non-empty)
    2. primary cache (1h)
    3. daily NewsAPI quota gate -> 1-day fallback cache or the static list
    4. NewsAPI (counts against the quota)
    5. NewsData.io
    6. static fallback list

    Every automated result (steps 4-6) is written to both cache tiers.
    """

    def __init__(
        self,
        store: KeyValueStore,
        newsapi: Optional[NewsApiFeed] = None,
        newsdata: Optional[NewsDataFeed] = None,
        settings_store: Optional[KeyValueStore] = None,
        clock: Callable[[], datetime] = utc_now,
        tz_name: str = DEFAULT_TIMEZONE,
        max_requests_per_day: int = MAX_REQUESTS_PER_DAY,
    ):
        self.cache = store
        self.settings_store = settings_store or store
        self.newsapi = newsapi or NewsApiFeed(api_key=None)
        self.newsdata = newsdata or NewsDataFeed(api_key=None)
        self.clock = clock
        self.tz_name = tz_name
        self.max_requests_per_day = max_requests_per_day

    def today(self) -> str:
        return day_key(self.clock(), self.tz_name)

    def request_count(self, day: Optional[str] = None) -> int:
        return repo.get_request_count(self.cache, day or self.today())

    def get_breaking_news(self) -> BreakingNewsResult:
        settings = self.get_settings()

        if settings.use_manual_news and settings.manual_news:
            return BreakingNewsResult(headlines=settings.manual_news, source=HeadlineSource.manual)

        cached = repo.get_cached_headlines(self.cache)
        if cached:
            return BreakingNewsResult(headlines=cached, source=HeadlineSource.cache)

        today = self.today()
        if repo.get_request_count(self.cache, today) >= self.max_requests_per_day:
            logger.warning("NewsAPI daily limit (%s) reached for %s", self.max_requests_per_day, today)
            headlines = repo.get_fallback_headlines(self.cache) or fallback_headlines()
            return BreakingNewsResult(
                headlines=headlines,
                source=HeadlineSource.fallback,
                message=QUOTA_REACHED_MESSAGE,
            )

        if settings.use_newsapi and self.newsapi.enabled:
            headlines = self.newsapi.fetch()
            if headlines:
                repo.increment_request_count(self.cache, today)
                repo.cache_headlines(self.cache, headlines)
                return BreakingNewsResult(headlines=headlines, source=HeadlineSource.newsapi)

        if settings.use_newsdata and self.newsdata.enabled:
            headlines = self.newsdata.fetch()
            if headlines:
                repo.cache_headlines(self.cache, headlines)
                return BreakingNewsResult(headlines=headlines, source=HeadlineSource.newsdata)

        headlines = fallback_headlines()
        repo.cache_headlines(self.cache, headlines)
        return BreakingNewsResult(headlines=headlines, source=HeadlineSource.fallback)

    def get_settings(self) -> BreakingNewsSettings:
        return repo.load_settings(self.settings_store)

    def update_settings(self, update: Union[SettingsUpdate, Dict]) -> BreakingNewsSettings:
        """Persist the admin settings and drop the primary cache so the chain re-runs."""
        if not isinstance(update, SettingsUpdate):
            update = SettingsUpdate.model_validate(update)
        settings = update.to_settings()
        repo.save_settings(self.settings_store, settings)
        repo.forget_cached_headlines(self.cache)
        logger.info(
            "Breaking news settings updated (manual=%s, %d headlines, newsapi=%s, newsdata=%s)",
            settings.use_manual_news, len(settings.manual_news), settings.use_newsapi, settings.use_newsdata,
        )
        return settings

    @property
    def feeds(self) -> List[BaseFeed]:
        return [self.newsapi, self.newsdata]

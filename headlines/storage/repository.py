"""Persisted key layout for breaking news (settings, cache tiers, quota counter)."""
from typing import List, Optional

from headlines.storage.models import BreakingNewsSettings
from headlines.storage.store import KeyValueStore

CACHE_KEY = "breaking_news"
FALLBACK_CACHE_KEY = "breaking_news_fallback"
CACHE_TTL_SEC = 3600           # 1h
FALLBACK_CACHE_TTL_SEC = 86400  # 1 dia
COUNTER_TTL_SEC = 86400

MANUAL_MODE_KEY = "breaking_news_manual_mode"
MANUAL_NEWS_KEY = "breaking_news_manual"
USE_NEWSAPI_KEY = "breaking_news_use_newsapi"
USE_NEWSDATA_KEY = "breaking_news_use_newsdata"


def request_counter_key(day: str) -> str:
    return f"news_api_requests_{day}"


def load_settings(store: KeyValueStore) -> BreakingNewsSettings:
    return BreakingNewsSettings(
        use_manual_news=bool(store.get(MANUAL_MODE_KEY, False)),
        manual_news=list(store.get(MANUAL_NEWS_KEY, [])),
        use_newsapi=bool(store.get(USE_NEWSAPI_KEY, True)),
        use_newsdata=bool(store.get(USE_NEWSDATA_KEY, True)),
    )


def save_settings(store: KeyValueStore, settings: BreakingNewsSettings):
    # sem expiração: vale até o próximo update
    store.put(MANUAL_MODE_KEY, settings.use_manual_news)
    store.put(MANUAL_NEWS_KEY, list(settings.manual_news))
    store.put(USE_NEWSAPI_KEY, settings.use_newsapi)
    store.put(USE_NEWSDATA_KEY, settings.use_newsdata)


def get_cached_headlines(store: KeyValueStore) -> Optional[List[str]]:
    return store.get(CACHE_KEY) or None


def get_fallback_headlines(store: KeyValueStore) -> Optional[List[str]]:
    return store.get(FALLBACK_CACHE_KEY) or None


def cache_headlines(store: KeyValueStore, headlines: List[str]):
    store.put(CACHE_KEY, list(headlines), ttl=CACHE_TTL_SEC)
    store.put(FALLBACK_CACHE_KEY, list(headlines), ttl=FALLBACK_CACHE_TTL_SEC)


def forget_cached_headlines(store: KeyValueStore) -> bool:
    return store.forget(CACHE_KEY)


def get_request_count(store: KeyValueStore, day: str) -> int:
    return int(store.get(request_counter_key(day), 0) or 0)


def increment_request_count(store: KeyValueStore, day: str) -> int:
    return store.increment(request_counter_key(day), ttl=COUNTER_TTL_SEC)

from .newsapi import NewsApiFeed
from .newsdata import NewsDataFeed

# Se quiser, exporte também a base:
from .base import BaseFeed, EAST_AFRICA_QUERY
from .http import HttpConfig

__all__ = ["NewsApiFeed", "NewsDataFeed", "BaseFeed", "EAST_AFRICA_QUERY", "HttpConfig"]

from typing import Any, Dict, List, Optional

from headlines.feeds.base import BaseFeed
from headlines.storage.models import NewsDataResponse


class NewsDataFeed(BaseFeed):
    NAME = "NewsData"
    BASE_URL = "https://newsdata.io/api/1/news"
    response_model = NewsDataResponse

    def params(self) -> Dict[str, Any]:
        # newsdata.io usa "apikey" minúsculo
        return {
            "language": "en",
            "category": "top",
            "q": self.query,
            "apikey": self.api_key,
        }

    def titles(self, payload: NewsDataResponse) -> List[Optional[str]]:
        return [r.title for r in payload.results]

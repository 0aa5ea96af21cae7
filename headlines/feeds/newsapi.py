from typing import Any, Dict, List, Optional

from headlines.feeds.base import BaseFeed
from headlines.storage.models import NewsApiResponse


class NewsApiFeed(BaseFeed):
    NAME = "NewsAPI"
    BASE_URL = "https://newsapi.org/v2/top-headlines"
    PAGE_SIZE = 5
    response_model = NewsApiResponse

    def params(self) -> Dict[str, Any]:
        return {
            "language": "en",
            "pageSize": self.PAGE_SIZE,
            "q": self.query,
            "apiKey": self.api_key,
        }

    def titles(self, payload: NewsApiResponse) -> List[Optional[str]]:
        return [a.title for a in payload.articles]

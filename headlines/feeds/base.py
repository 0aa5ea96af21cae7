import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

import requests
from pydantic import BaseModel, ValidationError

from headlines.errors import ProviderError
from headlines.feeds.http import HttpConfig, default_session
from headlines.utils.text_utils import clean_headline

logger = logging.getLogger(__name__)

EAST_AFRICA_QUERY = (
    "east africa OR kenya OR uganda OR tanzania OR ethiopia OR rwanda OR burundi "
    "OR south sudan OR somalia OR eritrea OR djibouti"
)


class BaseFeed(ABC):
    """
    Headline provider backed by a JSON search API.

    ``fetch()`` never raises: any upstream problem is logged and reported as
    ``None`` so the resolver can move on to the next source.
    """
    NAME: str = ""
    BASE_URL: str = ""
    response_model: Type[BaseModel]

    def __init__(self, api_key: Optional[str], http: Optional[HttpConfig] = None,
                 session: Optional[requests.Session] = None, query: str = EAST_AFRICA_QUERY):
        self.api_key = api_key
        self.http = http or HttpConfig()
        self.session = session or default_session()
        self.query = query

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def params(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def titles(self, payload: BaseModel) -> List[Optional[str]]:
        pass

    def _request(self) -> BaseModel:
        try:
            response = self.session.get(self.BASE_URL, params=self.params(), timeout=self.http.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ProviderError(f"request failed: {e}")
        except ValueError as e:
            raise ProviderError(f"invalid JSON body: {e}")
        try:
            return self.response_model.model_validate(data)
        except ValidationError as e:
            raise ProviderError("unexpected response shape", {"errors": e.errors()})

    def fetch(self) -> Optional[List[str]]:
        if not self.enabled:
            return None
        try:
            payload = self._request()
        except ProviderError as e:
            logger.error("%s error: %s", self.NAME, e.message)
            return None

        headlines = [clean_headline(t) for t in self.titles(payload) if t]
        headlines = [h for h in headlines if h]
        if not headlines:
            logger.warning("%s returned no usable headlines", self.NAME)
            return None
        return headlines

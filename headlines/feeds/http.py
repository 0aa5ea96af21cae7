from dataclasses import dataclass

import requests
from requests.adapters import HTTPAdapter


@dataclass(frozen=True)
class HttpConfig:
    timeout_seconds: float = 10


def build_session() -> requests.Session:
    # pool de conexões sem retry: a cadeia de fallback substitui o retry
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=4, pool_maxsize=10, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({
        "User-Agent": "Headlines/1.0 (+https://localhost)",
        "Accept": "application/json",
    })
    return session


_SESSION = build_session()


def default_session() -> requests.Session:
    return _SESSION

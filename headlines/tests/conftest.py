# headlines/tests/conftest.py
import os
from datetime import datetime, timezone

import pytest
import requests

# Nada de arquivo em disco nos testes de API
os.environ.setdefault("HEADLINES_STORE_PATH", ":memory:")


class FakeClock:
    def __init__(self, now: float = 1_760_000_000.0):
        self.now = now

    def time(self) -> float:
        return self.now

    def datetime(self) -> datetime:
        return datetime.fromtimestamp(self.now, tz=timezone.utc)

    def advance(self, seconds: float):
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)

    def json(self):
        if self.text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Devolve respostas enfileiradas e registra cada chamada."""

    def __init__(self, *responses, name=None, log=None):
        self.responses = list(responses)
        self.calls = []
        self.name = name
        self.log = log if log is not None else []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        self.log.append(self.name)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


def articles(*titles):
    return FakeResponse(payload={"status": "ok", "articles": [{"title": t} for t in titles]})


def results(*titles):
    return FakeResponse(payload={"status": "success", "results": [{"title": t} for t in titles]})


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    from headlines.storage.store import MemoryStore
    return MemoryStore(time_fn=clock.time)


@pytest.fixture()
def newsapi_session():
    return FakeSession(articles("Kenya passes budget - Reuters", "Rwanda hosts summit [live]"))


@pytest.fixture()
def newsdata_session():
    return FakeSession(results("Uganda floods displace thousands | BBC"))


@pytest.fixture()
def make_resolver(store, clock, newsapi_session, newsdata_session):
    from headlines.feeds import NewsApiFeed, NewsDataFeed
    from headlines.resolver.breaking_news import BreakingNewsResolver

    def _make(newsapi_key="na-key", newsdata_key="nd-key", kv=None, **kwargs):
        return BreakingNewsResolver(
            store=kv or store,
            newsapi=NewsApiFeed(newsapi_key, session=newsapi_session),
            newsdata=NewsDataFeed(newsdata_key, session=newsdata_session),
            clock=clock.datetime,
            **kwargs,
        )
    return _make


@pytest.fixture()
def resolver(make_resolver):
    return make_resolver()


@pytest.fixture()
def app(monkeypatch, resolver):
    # Troca o resolver global por um com store em memória e sessões falsas
    from headlines.api import main as api_main
    monkeypatch.setattr(api_main, "resolver", resolver, raising=True)
    return api_main.app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c

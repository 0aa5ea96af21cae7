import time
import logging
from collections import defaultdict
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from headlines.errors import StoreError
from headlines.feeds import HttpConfig, NewsApiFeed, NewsDataFeed
from headlines.resolver.breaking_news import BreakingNewsResolver, fallback_headlines
from headlines.storage.models import SettingsUpdate
from headlines.storage.store import JsonFileStore, KeyValueStore, MemoryStore
from headlines.utils.config import MEMORY_STORE, AppConfig, load_config
from headlines.utils.log_utils import configure_logging

# Carrega variáveis do .env
config: AppConfig = load_config()
configure_logging(getattr(logging, config.log_level, logging.INFO))
logger = logging.getLogger(__name__)


def build_store(cfg: AppConfig) -> KeyValueStore:
    if cfg.store_path == MEMORY_STORE:
        return MemoryStore()
    return JsonFileStore(cfg.store_path)


def build_resolver(cfg: AppConfig) -> BreakingNewsResolver:
    http = HttpConfig(timeout_seconds=cfg.http_timeout)
    return BreakingNewsResolver(
        store=build_store(cfg),
        newsapi=NewsApiFeed(cfg.newsapi_key, http=http),
        newsdata=NewsDataFeed(cfg.newsdata_key, http=http),
        tz_name=cfg.timezone,
        max_requests_per_day=cfg.max_requests_per_day,
    )


resolver = build_resolver(config)

#%% APP

app = FastAPI(title="Headlines")

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=512)


def _validation_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    # formato campo -> mensagens (ex.: "manual_news.3": [...])
    errors: Dict[str, List[str]] = defaultdict(list)
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        errors[".".join(loc) or "body"].append(err.get("msg", "Invalid value"))
    return dict(errors)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "The given data was invalid.",
            "errors": _validation_errors(exc),
        },
    )


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    logger.error("Store failure on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"success": False, "message": "Storage unavailable"})


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "ts": int(time.time()),
        "environment": config.app_env,
        "providers": {feed.NAME: feed.enabled for feed in resolver.feeds},
    }


@app.get("/breaking-news")
def get_breaking_news():
    try:
        result = resolver.get_breaking_news()
    except Exception as e:
        logger.exception("Breaking news fetch error: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Failed to fetch breaking news",
                "data": fallback_headlines(),
            },
        )
    resp = {"success": True, "data": result.headlines, "source": result.source.value}
    if result.message:
        resp["message"] = result.message
    return resp


@app.get("/breaking-news/settings")
def get_settings():
    return {"success": True, "data": resolver.get_settings().model_dump()}


# POST
@app.post("/breaking-news/settings")
def update_settings(payload: SettingsUpdate):
    resolver.update_settings(payload)
    return {"success": True, "message": "Breaking news settings updated successfully"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("headlines.api.main:app", host="0.0.0.0", port=8000, reload=True)

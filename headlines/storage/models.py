from enum import Enum
from typing import Annotated, List, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictStr

MAX_HEADLINE_LENGTH = 500


def _coerce_flag(value):
    # mesmo conjunto da regra "boolean" do admin: true/false/0/1/"0"/"1"
    if isinstance(value, bool):
        return value
    if type(value) is int and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value in ("0", "1"):
        return value == "1"
    return value


Flag = Annotated[StrictBool, BeforeValidator(_coerce_flag)]
ManualHeadline = Annotated[StrictStr, Field(max_length=MAX_HEADLINE_LENGTH)]


class HeadlineSource(str, Enum):
    manual = "manual"
    cache = "cache"
    fallback = "fallback"
    newsapi = "newsapi"
    newsdata = "newsdata"


class BreakingNewsSettings(BaseModel):
    use_manual_news: bool = False
    manual_news: List[str] = Field(default_factory=list)
    use_newsapi: bool = True
    use_newsdata: bool = True


class SettingsUpdate(BaseModel):
    """Payload do admin; campos ausentes assumem o default de leitura."""
    use_manual_news: Flag = False
    manual_news: List[ManualHeadline] = Field(default_factory=list)
    use_newsapi: Flag = True
    use_newsdata: Flag = True

    def to_settings(self) -> BreakingNewsSettings:
        return BreakingNewsSettings(**self.model_dump())


class BreakingNewsResult(BaseModel):
    headlines: List[str]
    source: HeadlineSource
    message: Optional[str] = None


# ---------- Upstream payloads (validated at the feed boundary) ----------

class _Article(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: Optional[str] = None


class NewsApiResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")
    articles: List[_Article]


class NewsDataResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")
    results: List[_Article]

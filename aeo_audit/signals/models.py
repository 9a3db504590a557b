"""Collected-signal input types.

Fetching, rendering and performance measurement happen outside the
engine. Their results arrive here as plain pydantic models so callers
can build them straight from JSON.
"""

from pydantic import BaseModel, ConfigDict, Field


class FetchResult(BaseModel):
    """Outcome of one HTTP fetch (page, robots.txt, sitemap or llms.txt)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool = False
    data: str | None = None
    status_code: int | None = Field(default=None, alias="statusCode")
    error: str | None = None


class CoreWebVitals(BaseModel):
    """Core Web Vitals reported by a performance API."""

    model_config = ConfigDict(frozen=True)

    lcp: float | None = None  # seconds
    fid: float | None = None  # milliseconds
    cls: float | None = None
    summary: str | None = None


class PageSpeedResult(BaseModel):
    """Externally supplied performance measurement."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    performance_score: float | None = Field(default=None, ge=0, le=100, alias="performanceScore")
    accessibility_score: float | None = Field(
        default=None, ge=0, le=100, alias="accessibilityScore"
    )
    core_web_vitals: CoreWebVitals = Field(default_factory=CoreWebVitals, alias="coreWebVitals")
    opportunities: list[str] = Field(default_factory=list)


class CollectedSignals(BaseModel):
    """Everything gathered about a page before analysis.

    Every field is optional; analyzers degrade gracefully when one is
    missing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    html_fetch: FetchResult | None = Field(default=None, alias="html")
    robots_txt: FetchResult | None = Field(default=None, alias="robotsTxt")
    sitemap: FetchResult | None = None
    rendered_html: str | None = Field(default=None, alias="renderedHtml")
    page_speed: PageSpeedResult | None = Field(default=None, alias="pageSpeed")
    llms_txt: FetchResult | None = Field(default=None, alias="llmsTxt")

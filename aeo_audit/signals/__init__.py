"""Pre-fetched signals consumed by the analyzers."""

from aeo_audit.signals.models import CollectedSignals, CoreWebVitals, FetchResult, PageSpeedResult

__all__ = ["CollectedSignals", "CoreWebVitals", "FetchResult", "PageSpeedResult"]

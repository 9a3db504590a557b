"""AEO audit engine: scores how well a web page serves AI answer engines."""

from typing import Any

__version__ = "0.1.0"

__all__ = [
    "AEOReport",
    "CollectedSignals",
    "ScoreAggregator",
    "run_audit",
    "run_audit_sync",
]


def __getattr__(name: str) -> Any:
    """Lazy import of the public entry points."""
    if name in ("run_audit", "run_audit_sync"):
        from aeo_audit.tasks.audit import run_audit, run_audit_sync

        return locals()[name]
    elif name == "ScoreAggregator":
        from aeo_audit.scoring.aggregator import ScoreAggregator

        return ScoreAggregator
    elif name == "AEOReport":
        from aeo_audit.scoring.models import AEOReport

        return AEOReport
    elif name == "CollectedSignals":
        from aeo_audit.signals.models import CollectedSignals

        return CollectedSignals
    raise AttributeError(f"module 'aeo_audit' has no attribute '{name}'")

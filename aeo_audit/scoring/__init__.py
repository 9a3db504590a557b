"""Category analyzers, report model and score aggregation.

Import analyzers from their modules, e.g.:
    from aeo_audit.scoring.discoverability import DiscoverabilityAnalyzer
    from aeo_audit.scoring.aggregator import ScoreAggregator
"""

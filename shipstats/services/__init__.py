# Services package

from shipstats.services.stats import CommitFetcher, DayCacheResolver

__all__ = [
    "CommitFetcher",
    "DayCacheResolver",
]

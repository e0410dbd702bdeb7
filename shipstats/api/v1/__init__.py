from shipstats.api.v1 import languages, stats

__all__ = [
    "languages",
    "stats",
]

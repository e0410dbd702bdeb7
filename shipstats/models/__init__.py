from shipstats.models.daily_commit_stats import DailyCommitStats

__all__ = [
    "DailyCommitStats",
]

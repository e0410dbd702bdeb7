from shipstats.domain.daily_commit_stats_operations import daily_commit_stats_ops

__all__ = [
    "daily_commit_stats_ops",
]

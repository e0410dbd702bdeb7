"""Background and one-off maintenance tasks."""

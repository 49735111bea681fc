"""SubWorth — monthly keep/pause/cancel verdicts for streaming subscriptions."""

__version__ = "0.1.0"

"""DevFeed: cached developer feeds and a notes store."""

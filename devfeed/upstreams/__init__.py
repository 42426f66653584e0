"""
Upstream adapters, one per cached resource.
"""
from .base import HttpFetcher, UpstreamAdapter
from .hackathons import HackathonAdapter, project_hackathon
from .news import NewsAdapter, extract_developer_tech_articles
from .contests import ContestAdapter

__all__ = [
    "UpstreamAdapter",
    "HttpFetcher",
    "HackathonAdapter",
    "project_hackathon",
    "NewsAdapter",
    "extract_developer_tech_articles",
    "ContestAdapter",
]

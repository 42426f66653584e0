"""
Tech news scraped from developer-tech.com.

The page structure is handled by an extraction function so the selectors can
change without touching the fetch or cache logic. A page that no longer
matches the selectors yields no articles rather than an error.
"""
import logging
from typing import Callable, Dict, List, Optional

from bs4 import BeautifulSoup

from .base import HttpFetcher

logger = logging.getLogger("upstreams.news")

DEFAULT_NEWS_URL = "https://www.developer-tech.com/"

ARTICLE_SELECTOR = "div.content.home > div.inner-content > main > article"
TITLE_LINK_SELECTOR = "header.article-header h3 a"
DESCRIPTION_SELECTOR = "div.cell.medium-8.large-6 p"

ArticleExtractor = Callable[[str], List[Dict[str, str]]]


def extract_developer_tech_articles(html: str) -> List[Dict[str, str]]:
    """
    Pull `{title, desc, link}` records out of the home page.

    Blocks missing a title link or description produce empty strings for
    those fields (and None for a missing href), matching what the page holds.
    """
    soup = BeautifulSoup(html, "html.parser")
    articles = []

    for block in soup.select(ARTICLE_SELECTOR):
        anchor = block.select_one(TITLE_LINK_SELECTOR)
        paragraph = block.select_one(DESCRIPTION_SELECTOR)

        articles.append({
            "title": anchor.get_text().strip() if anchor else "",
            "desc": paragraph.get_text().strip() if paragraph else "",
            "link": anchor.get("href") if anchor else None,
        })

    return articles


class NewsAdapter:
    """Scrapes the latest tech news articles."""

    name = "news"

    def __init__(
        self,
        http: Optional[HttpFetcher] = None,
        url: str = DEFAULT_NEWS_URL,
        extract: ArticleExtractor = extract_developer_tech_articles,
    ):
        self.http = http or HttpFetcher(self.name)
        self.url = url
        self.extract = extract

    def fetch(self) -> List[Dict[str, str]]:
        response = self.http.get(self.url)
        articles = self.extract(response.text)

        if not articles:
            logger.warning(f"No articles matched on {self.url}; page layout may have changed")
        else:
            logger.info(f"Scraped {len(articles)} articles")
        return articles

"""RSS ingestion."""

from .models import FeedDocument, FeedDocumentItem
from .rss_fetcher import FeedFetcher, decode_html_entities, parse_feed, print_feed

__all__ = [
    "FeedDocument",
    "FeedDocumentItem",
    "FeedFetcher",
    "decode_html_entities",
    "parse_feed",
    "print_feed",
]

"""RSS feed fetcher."""

import html
import logging
import xml.etree.ElementTree as ET
from typing import Optional, Union

import feedparser
import httpx
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..exceptions import FeedParseError, FeedStatusError, FeedTransportError
from .models import FeedDocument, FeedDocumentItem

logger = logging.getLogger(__name__)

USER_AGENT = "gator"
MAX_REDIRECTS = 10

TimeoutTypes = Union[float, httpx.Timeout, None]


def decode_html_entities(text: str) -> str:
    """Reverse HTML character references; no other change is made."""
    return html.unescape(text)


class FeedFetcher:
    """Fetch and parse a single RSS feed."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        user_agent: str = USER_AGENT,
    ) -> None:
        """Initialize RSS fetcher.

        Args:
            client: HTTP client to send requests with. A private client is
                created per fetch when omitted.
            user_agent: Value of the User-Agent header.
        """
        self.client = client
        self.user_agent = user_agent

    def fetch(self, url: str, timeout: TimeoutTypes = None) -> FeedDocument:
        """Fetch and parse a single RSS feed.

        Args:
            url: Feed URL.
            timeout: Optional deadline for the request. When omitted the
                client's default applies.

        Raises:
            FeedTransportError: The request never produced a response.
            FeedStatusError: The response status was not 200.
            FeedParseError: The body is not a well-formed feed.
        """
        if self.client is not None:
            return self._fetch_with(self.client, url, timeout)

        with httpx.Client(follow_redirects=True, max_redirects=MAX_REDIRECTS) as client:
            return self._fetch_with(client, url, timeout)

    def _fetch_with(
        self,
        client: httpx.Client,
        url: str,
        timeout: TimeoutTypes,
    ) -> FeedDocument:
        """Send the request on ``client`` and parse the response."""
        headers = {"User-Agent": self.user_agent}
        extra = {} if timeout is None else {"timeout": timeout}
        logger.debug("GET %s", url)

        try:
            # The stream context closes the body on every exit path.
            with client.stream(
                "GET", url, headers=headers, follow_redirects=True, **extra
            ) as response:
                logger.debug("GET %s -> %d", url, response.status_code)
                if response.status_code != 200:
                    raise FeedStatusError(url, response.status_code)
                body = response.read()
        except httpx.HTTPError as e:
            raise FeedTransportError(url, str(e)) from e

        return parse_feed(url, body)


def parse_feed(url: str, body: bytes) -> FeedDocument:
    """Parse an RSS document and decode entities in titles and descriptions.

    feedparser decides whether the document is well formed. Field values
    are then read from the element text as written, since feedparser
    strips surrounding whitespace.
    """
    parsed = feedparser.parse(body, sanitize_html=False, resolve_relative_uris=False)

    if parsed.bozo:
        raise FeedParseError(url, f"invalid RSS feed: {parsed.bozo_exception}")

    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise FeedParseError(url, f"invalid RSS feed: {e}") from e

    channel = root.find("channel")
    if channel is None:
        return FeedDocument()

    items = [
        FeedDocumentItem(
            title=decode_html_entities(item.findtext("title", "")),
            link=item.findtext("link", ""),
            description=decode_html_entities(item.findtext("description", "")),
            pub_date=item.findtext("pubDate", ""),
        )
        for item in channel.findall("item")
    ]

    return FeedDocument(
        channel_title=decode_html_entities(channel.findtext("title", "")),
        channel_link=channel.findtext("link", ""),
        channel_description=decode_html_entities(channel.findtext("description", "")),
        items=items,
    )


def print_feed(document: FeedDocument, console: Optional[Console] = None) -> None:
    """Print a parsed feed document."""
    console = console or Console()

    console.print(
        Panel.fit(
            f"[bold]{escape(document.channel_title)}[/bold]\n"
            f"{escape(document.channel_link)}\n\n"
            f"{escape(document.channel_description)}",
            title="Channel",
            style="blue",
        )
    )

    for item in document.items:
        console.print(f"\n[bold cyan]{escape(item.title)}[/bold cyan]", highlight=False)
        console.print(f"  Link: {item.link}", highlight=False, markup=False)
        if item.pub_date:
            console.print(f"  Published: {item.pub_date}", highlight=False, markup=False)
        if item.description:
            console.print(f"  {item.description}", highlight=False, markup=False)

    console.print(f"\n[dim]{len(document.items)} items[/dim]")

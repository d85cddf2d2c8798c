"""Event listings scraped from Tix.Africa and Luma.

Every call re-fetches the live discover page; nothing is cached. The CSS
selectors below follow each site's current markup and break when it
changes.
"""

import asyncio
import re
from typing import List, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag

from afrisight.errors import ScrapeError
from afrisight.events.models import ScrapedEvent, ScrapeResult
from afrisight.utils.logger import LoggerManager

TIX_BASE_URL = "https://tix.africa"
TIX_DISCOVER_URL = "https://tix.africa/discover?category=art%20%26%20culture"
LUMA_BASE_URL = "https://luma.com"
LUMA_DISCOVER_URL = "https://luma.com/discover"

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}

LUMA_PRICE = "Check Event Page"

_NAIRA_PRICE = re.compile(r"₦([\d,]+)")

logger = LoggerManager.get_logger("event_scraper")


def _text(element: Optional[Tag]) -> str:
    return element.get_text(strip=True) if element is not None else ""


def _joined_text(elements: List[Tag]) -> str:
    return " ".join(filter(None, (_text(e) for e in elements)))


def _absolute(href: str, base_url: str) -> str:
    return urljoin(base_url, href) if href.startswith("/") else href


def parse_tix_html(html: str) -> List[ScrapedEvent]:
    """Parse ``.discover-events_card`` anchors from a Tix discover page."""
    soup = BeautifulSoup(html, "lxml")
    events = []

    for card in soup.select(".discover-events_card"):
        name = _text(card.select_one(".discover-events_card-details-info p"))
        price = _joined_text(card.select(".discover-events_card-details-price")) or "Free"

        info_blocks = card.select(".info")
        location = _joined_text(info_blocks[-1].find_all("p")) if info_blocks else ""
        date = _joined_text(info_blocks[0].find_all("p")) if info_blocks else ""

        image = card.find("img")
        image_url = image.get("src", "") if image is not None else ""

        if name and location:
            events.append(
                ScrapedEvent(
                    name=name,
                    price=price,
                    location=location,
                    image_url=image_url,
                    event_url=_absolute(card.get("href", ""), TIX_BASE_URL),
                    date=date,
                    source="tix",
                )
            )

    logger.info(f"Scraped {len(events)} events from Tix.Africa")
    return events


def parse_luma_html(html: str) -> List[ScrapedEvent]:
    """Parse ``.event-row`` entries from a Luma discover page."""
    soup = BeautifulSoup(html, "lxml")
    events = []

    for row in soup.select(".event-row"):
        name = _joined_text(row.select(".event-title h3 .lux-line-clamp"))

        meta = row.select(".meta-row .text-ellipses")
        location = _text(meta[-1]) if meta else ""

        image = row.select_one(".cover-image img")
        image_url = image.get("src", "") if image is not None else ""

        link = row.select_one(".event-link")
        href = link.get("href", "") if link is not None else ""

        if name and location:
            events.append(
                ScrapedEvent(
                    name=name,
                    price=LUMA_PRICE,
                    location=location,
                    image_url=image_url,
                    event_url=_absolute(href, LUMA_BASE_URL),
                    date=_joined_text(row.select(".event-time span")),
                    source="luma",
                )
            )

    logger.info(f"Scraped {len(events)} events from Luma")
    return events


class EventScraper:
    """Fetches and parses the two discover pages.

    Attributes:
        client: Shared async HTTP client (owned by the caller)
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _fetch(self, source: str, url: str) -> str:
        try:
            response = await self.client.get(url, headers=HEADERS)
        except httpx.HTTPError as e:
            logger.error(
                f"Error scraping {source} events",
                extra={"extra_data": {"url": url, "error": str(e)}},
            )
            raise ScrapeError.from_transport_error(source, e) from e

        if response.status_code >= 400:
            logger.error(
                f"Error scraping {source} events",
                extra={"extra_data": {"url": url, "status_code": response.status_code}},
            )
            raise ScrapeError.from_status(source, response.status_code)
        return response.text

    async def scrape_tix(self) -> List[ScrapedEvent]:
        """Events from Tix.Africa.

        Raises:
            ScrapeError: If the page cannot be fetched
        """
        logger.info("Scraping events from Tix.Africa")
        return parse_tix_html(await self._fetch("Tix", TIX_DISCOVER_URL))

    async def scrape_luma(self) -> List[ScrapedEvent]:
        """Events from Luma.

        Raises:
            ScrapeError: If the page cannot be fetched
        """
        logger.info("Scraping events from Luma")
        return parse_luma_html(await self._fetch("Luma", LUMA_DISCOVER_URL))

    async def scrape_all(self) -> ScrapeResult:
        """Scrape both sites concurrently; a failing site yields no events."""
        tix, luma = await asyncio.gather(
            self.scrape_tix(), self.scrape_luma(), return_exceptions=True
        )

        if isinstance(tix, Exception):
            logger.warning(f"Tix.Africa scrape failed: {tix}")
            tix = []
        if isinstance(luma, Exception):
            logger.warning(f"Luma scrape failed: {luma}")
            luma = []

        result = ScrapeResult(tix_events=tix, luma_events=luma)
        logger.info(
            "Scraping summary",
            extra={
                "extra_data": {
                    "tix": len(result.tix_events),
                    "luma": len(result.luma_events),
                    "total": result.total_events,
                }
            },
        )
        return result


def filter_by_location(events: List[ScrapedEvent], keyword: str = "Lagos") -> List[ScrapedEvent]:
    needle = keyword.lower()
    return [e for e in events if needle in e.location.lower()]


def is_free(event: ScrapedEvent) -> bool:
    return "free" in event.price.lower() or event.price in ("₦0", "")


def filter_free(events: List[ScrapedEvent]) -> List[ScrapedEvent]:
    return [e for e in events if is_free(e)]


def parse_naira_price(price: str) -> Optional[int]:
    """Numeric amount of a "₦12,000"-style price, or None."""
    match = _NAIRA_PRICE.search(price)
    if not match:
        return None
    return int(match.group(1).replace(",", ""))


def filter_by_price_range(
    events: List[ScrapedEvent], min_price: int = 0, max_price: int = 100000
) -> List[ScrapedEvent]:
    """Events priced in naira within [min_price, max_price].

    Free events (no naira amount) are included only when ``min_price`` is 0.
    """
    matches = []
    for event in events:
        amount = parse_naira_price(event.price)
        if amount is not None:
            if min_price <= amount <= max_price:
                matches.append(event)
        elif min_price == 0 and ("free" in event.price.lower() or event.price == ""):
            matches.append(event)
    return matches


def search_events(events: List[ScrapedEvent], keyword: str) -> List[ScrapedEvent]:
    needle = keyword.lower()
    return [e for e in events if needle in e.name.lower()]

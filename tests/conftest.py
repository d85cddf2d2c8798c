"""Shared fixtures: bundled datasets, a recording AI gateway and canned event pages."""

import asyncio
from typing import List

import httpx
import pytest

from afrisight.datasets import DatasetProvider
from afrisight.errors import GatewayError
from afrisight.events import EventScraper
from afrisight.utils.config import DEFAULT_DATA_DIR

TREND_RESPONSE = """
## TOP GENRES PREDICTION
1. Afrobeats with amapiano log drums
2. Alté fusion with R&B textures

## EMERGING ARTISTS ANALYSIS
- Victony, rising on streaming playlists
- Oxlade, strong engagement per view

## POPULAR EVENTS & CONCERT TRENDS
1. Rooftop listening sessions in Lagos

## MARKET TRENDS & INSIGHTS
1. Short-video platforms drive discovery

## MARKETING SUGGESTIONS
1. Release dance challenges with every single

## COLLABORATION IDEAS
1. Cross-border features with South African producers

## VENUE RECOMMENDATIONS
1. Mid-size open-air venues on the island
"""


class FakeGateway:
    """Records prompts and returns a canned completion."""

    def __init__(self, response: str = TREND_RESPONSE):
        self.response = response
        self.prompts: List[str] = []
        self.error: Exception = None

    async def generate(self, prompt: str, model_name: str = None) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    def fail_with(self, message: str = "quota exceeded") -> None:
        self.error = GatewayError.from_api_error(RuntimeError(message))


@pytest.fixture(scope="session")
def datasets():
    return DatasetProvider(DEFAULT_DATA_DIR)


@pytest.fixture
def fake_gateway():
    return FakeGateway()


TIX_HTML = """
<html><body>
<a class="discover-events_card" href="/e/lagos-art-fair">
  <img src="https://cdn.tix.africa/art-fair.jpg">
  <div class="discover-events_card-details-info"><p>Lagos Art Fair</p><p>Gallery tour</p></div>
  <div class="discover-events_card-details-price">₦5,000</div>
  <div class="info"><p>Sat, Nov 15</p><p>6:00 PM</p></div>
  <div class="info"><p>Victoria Island,</p><p>Lagos</p></div>
</a>
<a class="discover-events_card" href="https://tix.africa/e/abuja-poetry">
  <div class="discover-events_card-details-info"><p>Abuja Poetry Night</p></div>
  <div class="info"><p>Fri, Nov 21</p></div>
  <div class="info"><p>Wuse 2, Abuja</p></div>
</a>
<a class="discover-events_card" href="/e/craft-market">
  <img src="https://cdn.tix.africa/craft.jpg">
  <div class="discover-events_card-details-info"><p>Craft Market Lagos</p></div>
  <div class="discover-events_card-details-price">₦25,000</div>
  <div class="info"><p>Sun, Nov 30</p></div>
  <div class="info"><p>Lekki, Lagos</p></div>
</a>
<a class="discover-events_card" href="/e/untitled">
  <div class="discover-events_card-details-info"><p>Untitled Gathering</p></div>
</a>
</body></html>
"""

LUMA_HTML = """
<html><body>
<div class="event-row">
  <a class="event-link" href="/afrobeats-night"></a>
  <div class="event-time"><span>Today</span><span>8:00 PM</span></div>
  <div class="event-title"><h3><span class="lux-line-clamp">Afrobeats Night Lagos</span></h3></div>
  <div class="meta-row">
    <div class="text-ellipses">By Vibe Collective</div>
    <div class="text-ellipses">Landmark Centre, Lagos</div>
  </div>
  <div class="cover-image"><img src="https://images.lumacdn.com/afro.jpg"></div>
</div>
<div class="event-row">
  <a class="event-link" href="https://luma.com/builders"></a>
  <div class="event-time"><span>Tomorrow</span></div>
  <div class="event-title"><h3><span class="lux-line-clamp">Builders Meetup</span></h3></div>
  <div class="meta-row"><div class="text-ellipses">Nairobi, Kenya</div></div>
</div>
<div class="event-row">
  <div class="event-title"><h3><span class="lux-line-clamp">No Venue Yet</span></h3></div>
</div>
</body></html>
"""

PAGES = {"tix.africa": TIX_HTML, "luma.com": LUMA_HTML}


@pytest.fixture
def scraper_factory():
    """Build EventScrapers whose HTTP client serves the pages above.

    Hosts listed in ``failing`` answer 503.
    """
    clients = []

    def make(failing=()):
        def handler(request: httpx.Request) -> httpx.Response:
            host = request.url.host
            if host in failing:
                return httpx.Response(503, text="Service Unavailable")
            return httpx.Response(200, text=PAGES[host])

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return EventScraper(client)

    yield make
    for client in clients:
        asyncio.run(client.aclose())


@pytest.fixture
def tix_html():
    return TIX_HTML


@pytest.fixture
def luma_html():
    return LUMA_HTML

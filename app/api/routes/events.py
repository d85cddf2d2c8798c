"""Scraped event listing endpoints under /events.

Every request scrapes the live sites again; nothing is cached.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from afrisight.errors import ValidationError
from afrisight.events import EventScraper
from afrisight.events.scraper import (
    filter_by_location,
    filter_by_price_range,
    filter_free,
    search_events,
)
from app.api.dependencies import get_scraper
from app.api.errors import upstream_failure
from app.api.models import (
    EventList,
    EventListResponse,
    ScrapeAllResponse,
    ScrapeData,
    ScrapeSummary,
)

router = APIRouter(prefix="/events", tags=["events"])

LAGOS = "Lagos"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/scrape", response_model=ScrapeAllResponse)
async def scrape_all(scraper: EventScraper = Depends(get_scraper)):
    """Events from both sites; a failing site contributes no events."""
    result = await scraper.scrape_all()
    return ScrapeAllResponse(
        data=ScrapeData(
            tix_events=result.tix_events,
            luma_events=result.luma_events,
            total_events=result.total_events,
            combined_events=result.combined_events,
        ),
        summary=ScrapeSummary(
            tix_events_count=len(result.tix_events),
            luma_events_count=len(result.luma_events),
            total_events_count=result.total_events,
            scraped_at=_now(),
        ),
    )


@router.get("/tix", response_model=EventListResponse, response_model_exclude_none=True)
async def tix_events(scraper: EventScraper = Depends(get_scraper)):
    with upstream_failure("Failed to scrape Tix events"):
        events = await scraper.scrape_tix()
    return EventListResponse(
        data=EventList(events=events, count=len(events), source="tix.africa", scraped_at=_now())
    )


@router.get("/luma", response_model=EventListResponse, response_model_exclude_none=True)
async def luma_events(scraper: EventScraper = Depends(get_scraper)):
    with upstream_failure("Failed to scrape Luma events"):
        events = await scraper.scrape_luma()
    return EventListResponse(
        data=EventList(events=events, count=len(events), source="luma.com", scraped_at=_now())
    )


@router.get("/lagos", response_model=EventListResponse, response_model_exclude_none=True)
async def lagos_events(scraper: EventScraper = Depends(get_scraper)):
    result = await scraper.scrape_all()
    events = filter_by_location(result.combined_events, LAGOS)
    return EventListResponse(
        data=EventList(
            events=events,
            count=len(events),
            total_scraped=result.total_events,
            location=LAGOS,
            scraped_at=_now(),
        )
    )


@router.get("/free", response_model=EventListResponse, response_model_exclude_none=True)
async def free_events(scraper: EventScraper = Depends(get_scraper)):
    result = await scraper.scrape_all()
    events = filter_free(result.combined_events)
    return EventListResponse(
        data=EventList(
            events=events,
            count=len(events),
            total_scraped=result.total_events,
            filter="free",
            scraped_at=_now(),
        )
    )


@router.get("/search", response_model=EventListResponse, response_model_exclude_none=True)
async def search(
    q: Optional[str] = Query(None),
    scraper: EventScraper = Depends(get_scraper),
):
    """Events whose name contains ``q`` (case-insensitive)."""
    if not q:
        raise ValidationError("Search keyword (q) is required")

    result = await scraper.scrape_all()
    events = search_events(result.combined_events, q)
    return EventListResponse(
        data=EventList(
            events=events,
            count=len(events),
            total_scraped=result.total_events,
            search_keyword=q,
            scraped_at=_now(),
        )
    )


@router.get("/price-range", response_model=EventListResponse, response_model_exclude_none=True)
async def price_range(
    min_price: int = Query(0, alias="min", ge=0),
    max_price: int = Query(100000, alias="max", ge=0),
    scraper: EventScraper = Depends(get_scraper),
):
    """Events priced in naira within [min, max]; free events only when min is 0."""
    if min_price > max_price:
        raise ValidationError("min must not exceed max")

    result = await scraper.scrape_all()
    events = filter_by_price_range(result.combined_events, min_price, max_price)
    return EventListResponse(
        data=EventList(
            events=events,
            count=len(events),
            total_scraped=result.total_events,
            min_price=min_price,
            max_price=max_price,
            scraped_at=_now(),
        )
    )

"""Event listings scraped from Tix.Africa and Luma."""

from afrisight.events.models import ScrapedEvent, ScrapeResult
from afrisight.events.scraper import EventScraper

__all__ = ["ScrapedEvent", "ScrapeResult", "EventScraper"]

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScrapedEvent(BaseModel):
    """Event card normalized from a Tix.Africa or Luma listing page.

    Attributes:
        name: Event title
        price: Price text as displayed ("₦5,000", "Free", "Check Event Page")
        location: Venue or city text
        image_url: Cover image URL ("" when absent)
        event_url: Absolute event page URL
        date: Date text as displayed
        source: Listing site the event came from
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    price: str
    location: str
    image_url: str = ""
    event_url: Optional[str] = None
    date: Optional[str] = None
    source: Literal["tix", "luma"]


class ScrapeResult(BaseModel):
    """Events from both sites; a failed site contributes an empty list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tix_events: List[ScrapedEvent] = Field(default_factory=list)
    luma_events: List[ScrapedEvent] = Field(default_factory=list)

    @property
    def combined_events(self) -> List[ScrapedEvent]:
        return self.tix_events + self.luma_events

    @property
    def total_events(self) -> int:
        return len(self.tix_events) + len(self.luma_events)

"""Creator directory search under /explore."""

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query

from afrisight.users import UserDirectory, validate_creator_type
from app.api.dependencies import get_user_directory
from app.api.errors import upstream_failure
from app.api.models import (
    CreatorFilters,
    CreatorOut,
    CreatorsPage,
    CreatorsResponse,
    CreatorStats,
    CreatorStatsResponse,
    Pagination,
)

router = APIRouter(prefix="/explore", tags=["explore"])

MAX_PAGE_SIZE = 100


@router.get("/creators", response_model=CreatorsResponse)
def search_creators(
    limit: int = Query(50, ge=1),
    page: int = Query(1),
    creator_type: Optional[str] = Query(None, alias="creatorType"),
    name: Optional[str] = Query(None),
    directory: UserDirectory = Depends(get_user_directory),
):
    """Page through creators sorted by name, optionally filtered by type and name."""
    limit = min(limit, MAX_PAGE_SIZE)
    page = max(page, 1)
    if creator_type:
        validate_creator_type(creator_type)

    with upstream_failure("Failed to fetch creators"):
        records, total = directory.search(
            creator_type=creator_type, name=name, page=page, limit=limit
        )

    total_pages = math.ceil(total / limit)
    return CreatorsResponse(
        data=CreatorsPage(
            creators=[CreatorOut(**record.model_dump()) for record in records],
            pagination=Pagination(
                current_page=page,
                total_pages=total_pages,
                total_count=total,
                limit=limit,
                has_next_page=page < total_pages,
                has_previous_page=page > 1,
            ),
            filters=CreatorFilters(creator_type=creator_type or None, name=name or None),
        )
    )


@router.get("/creator-stats", response_model=CreatorStatsResponse)
def creator_stats(directory: UserDirectory = Depends(get_user_directory)):
    with upstream_failure("Failed to fetch creator statistics"):
        total, by_type = directory.creator_stats()
    return CreatorStatsResponse(data=CreatorStats(total_creators=total, by_type=by_type))

"""
limit/offset query parameters shared by the list endpoints
(menu, admin order list, promo codes).
"""

from dataclasses import dataclass

from fastapi import Query

from shared.config.constants import Limits


@dataclass(frozen=True)
class Pagination:
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0


def get_pagination(
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items to return",
    ),
    offset: int = Query(default=0, ge=0, description="Number of items to skip"),
) -> Pagination:
    """FastAPI dependency; out-of-range values are rejected with 400."""
    return Pagination(limit=limit, offset=offset)

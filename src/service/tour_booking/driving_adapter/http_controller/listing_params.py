from datetime import date
from typing import Optional

import attrs
from fastapi import Query

from src.service.tour_booking.app.dto.booking_listing import (
    BookingSortField,
    PageRequest,
    SortOrder,
)
from src.service.tour_booking.domain.business_config import ListingDefaults


@attrs.frozen
class ListingParams:
    page: PageRequest
    status: Optional[str] = None
    start_date_from: Optional[date] = None
    start_date_to: Optional[date] = None


def listing_params(
    page: int = Query(ListingDefaults.PAGE, ge=1),
    limit: int = Query(ListingDefaults.LIMIT, ge=1),
    status: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None, alias='startDate'),
    end_date: Optional[date] = Query(None, alias='endDate'),
    sort_by: BookingSortField = Query(BookingSortField.CREATED_AT, alias='sortBy'),
    sort_order: SortOrder = Query(SortOrder.DESC, alias='sortOrder'),
) -> ListingParams:
    """Shared query string of the paginated booking listings; limit is capped, not rejected."""
    return ListingParams(
        page=PageRequest(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order),
        status=status,
        start_date_from=start_date,
        start_date_to=end_date,
    )

from fastapi import APIRouter, Depends, Query

from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.tour_booking.app.command.add_payment_use_case import AddPaymentUseCase
from src.service.tour_booking.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.tour_booking.app.query.get_booking_statistics_use_case import (
    GetBookingStatisticsUseCase,
)
from src.service.tour_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.tour_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.driving_adapter.http_controller.auth.role_auth import (
    require_update,
    require_view,
)
from src.service.tour_booking.driving_adapter.http_controller.listing_params import (
    ListingParams,
    listing_params,
)
from src.service.tour_booking.driving_adapter.http_controller.schema.base_schema import (
    ApiResponse,
    PaginatedResponse,
)
from src.service.tour_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailResponse,
    BookingResponse,
    BookingStatisticsResponse,
    BookingStatusUpdateRequest,
    PaymentRequest,
    pagination_of,
)


router = APIRouter()


@router.get('/all')
@Logger.io
async def list_all_bookings(
    params: ListingParams = Depends(listing_params),
    user_id: str | None = Query(None, alias='userId'),
    tour_id: str | None = Query(None, alias='tourId'),
    current_user: UserEntity = Depends(require_view),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> PaginatedResponse[BookingResponse]:
    page = await use_case.list_all_bookings(
        page=params.page,
        status=params.status,
        user_id=user_id,
        tour_id=tour_id,
        start_date_from=params.start_date_from,
        start_date_to=params.start_date_to,
    )
    return PaginatedResponse(
        message='Bookings retrieved successfully',
        data=[BookingResponse.from_entity(b) for b in page.items],
        pagination=pagination_of(page),
    )


@router.get('/statistics')
@Logger.io
async def get_booking_statistics(
    current_user: UserEntity = Depends(require_view),
    use_case: GetBookingStatisticsUseCase = Depends(GetBookingStatisticsUseCase.depends),
) -> ApiResponse[BookingStatisticsResponse]:
    stats = await use_case.execute()
    return ApiResponse(
        message='Statistics retrieved successfully',
        data=BookingStatisticsResponse.from_dto(stats),
    )


@router.get('/tour/{tour_id}')
@Logger.io
async def list_tour_bookings(
    tour_id: str,
    params: ListingParams = Depends(listing_params),
    current_user: UserEntity = Depends(require_view),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> PaginatedResponse[BookingResponse]:
    page = await use_case.list_tour_bookings(
        tour_id=tour_id,
        page=params.page,
        status=params.status,
        start_date_from=params.start_date_from,
        start_date_to=params.start_date_to,
    )
    return PaginatedResponse(
        message='Tour bookings retrieved successfully',
        data=[BookingResponse.from_entity(b) for b in page.items],
        pagination=pagination_of(page),
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_view),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> ApiResponse[BookingDetailResponse]:
    details = await use_case.get_by_id(
        booking_id=booking_id, actor=current_user, check_ownership=False
    )
    return ApiResponse(
        message='Booking retrieved successfully',
        data=BookingDetailResponse.from_details(details),
    )


@router.patch('/{booking_id}/status')
@Logger.io
async def update_booking_status(
    booking_id: UtilsUUID7,
    request: BookingStatusUpdateRequest,
    current_user: UserEntity = Depends(require_update),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> ApiResponse[BookingResponse]:
    booking = await use_case.execute(
        booking_id=booking_id, actor=current_user, status=request.status, note=request.note
    )
    return ApiResponse(
        message='Booking status updated successfully',
        data=BookingResponse.from_entity(booking),
    )


@router.post('/{booking_id}/payment')
@Logger.io
async def add_payment(
    booking_id: UtilsUUID7,
    request: PaymentRequest,
    current_user: UserEntity = Depends(require_update),
    use_case: AddPaymentUseCase = Depends(AddPaymentUseCase.depends),
) -> ApiResponse[BookingResponse]:
    if not request.amount:
        raise InvalidInputError('Payment amount is required')
    booking = await use_case.execute(
        booking_id=booking_id,
        actor=current_user,
        amount=request.amount,
        method=request.method,
        transaction_id=request.transaction_id,
        note=request.note,
        check_ownership=False,
    )
    return ApiResponse(
        message='Payment added successfully', data=BookingResponse.from_entity(booking)
    )

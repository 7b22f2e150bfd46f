from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.tour_booking.app.command.add_payment_use_case import AddPaymentUseCase
from src.service.tour_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.tour_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.tour_booking.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.tour_booking.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.tour_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.tour_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.driving_adapter.http_controller.auth.role_auth import (
    require_create,
    require_view_own,
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
    BookingCreateRequest,
    BookingDetailResponse,
    BookingResponse,
    BookingUpdateRequest,
    CancelBookingRequest,
    CancelBookingResponse,
    PaymentRequest,
    pagination_of,
)

router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(require_create),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('tour.id', request.tour_id)
        span.set_attribute('user.id', current_user.id)

        booking = await use_case.execute(
            user_id=current_user.id,
            tour_id=request.tour_id,
            start_date=request.selected_date.start_date,
            end_date=request.selected_date.end_date,
            number_of_adults=request.number_of_adults,
            number_of_children=request.number_of_children,
            number_of_infants=request.number_of_infants,
            customer_info=request.customer_info.to_domain() if request.customer_info else None,
            participants=[p.to_domain() for p in request.participants],
            add_ons=[a.to_domain() for a in request.add_ons],
            emergency_contact=(
                request.emergency_contact.to_domain() if request.emergency_contact else None
            ),
            special_requests=request.special_requests,
            payment_method=_payment_method(request.payment_method),
        )
        span.set_attribute('booking.id', str(booking.id))

        return ApiResponse(
            message='Booking created successfully', data=BookingResponse.from_entity(booking)
        )


@router.get('/my-bookings')
@Logger.io
async def list_my_bookings(
    params: ListingParams = Depends(listing_params),
    current_user: UserEntity = Depends(require_view_own),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> PaginatedResponse[BookingResponse]:
    page = await use_case.list_user_bookings(
        user_id=current_user.id,
        page=params.page,
        status=params.status,
        start_date_from=params.start_date_from,
        start_date_to=params.start_date_to,
    )
    return PaginatedResponse(
        message='Bookings retrieved successfully',
        data=[BookingResponse.from_entity(b) for b in page.items],
        pagination=pagination_of(page),
    )


@router.get('/code/{code}')
@Logger.io
async def get_booking_by_code(
    code: str,
    current_user: UserEntity = Depends(require_view_own),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> ApiResponse[BookingDetailResponse]:
    details = await use_case.get_by_code(booking_code=code, actor=current_user)
    return ApiResponse(
        message='Booking retrieved successfully',
        data=BookingDetailResponse.from_details(details),
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_view_own),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> ApiResponse[BookingDetailResponse]:
    details = await use_case.get_by_id(booking_id=booking_id, actor=current_user)
    return ApiResponse(
        message='Booking retrieved successfully',
        data=BookingDetailResponse.from_details(details),
    )


@router.put('/{booking_id}')
@Logger.io
async def update_booking(
    booking_id: UtilsUUID7,
    request: BookingUpdateRequest,
    current_user: UserEntity = Depends(require_view_own),
    use_case: UpdateBookingUseCase = Depends(UpdateBookingUseCase.depends),
) -> ApiResponse[BookingResponse]:
    booking = await use_case.execute(
        booking_id=booking_id, actor=current_user, changes=request.to_changes()
    )
    return ApiResponse(
        message='Booking updated successfully', data=BookingResponse.from_entity(booking)
    )


@router.delete('/{booking_id}')
@Logger.io
async def delete_booking(
    booking_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_view_own),
    use_case: DeleteBookingUseCase = Depends(DeleteBookingUseCase.depends),
) -> ApiResponse[None]:
    await use_case.execute(booking_id=booking_id, actor=current_user)
    return ApiResponse(message='Booking deleted successfully')


@router.post('/{booking_id}/payment')
@Logger.io
async def add_payment(
    booking_id: UtilsUUID7,
    request: PaymentRequest,
    current_user: UserEntity = Depends(require_view_own),
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
    )
    return ApiResponse(
        message='Payment added successfully', data=BookingResponse.from_entity(booking)
    )


@router.post('/{booking_id}/cancel')
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    request: CancelBookingRequest | None = None,
    current_user: UserEntity = Depends(require_view_own),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> ApiResponse[CancelBookingResponse]:
    result = await use_case.execute(
        booking_id=booking_id,
        actor=current_user,
        reason=request.reason if request else '',
    )
    return ApiResponse(
        message='Booking cancelled successfully',
        data=CancelBookingResponse.from_result(result),
    )


def _payment_method(value: str | None) -> PaymentMethod:
    if not value:
        return PaymentMethod.BANK_TRANSFER
    try:
        return PaymentMethod(value)
    except ValueError:
        raise InvalidInputError('Invalid payment method') from None

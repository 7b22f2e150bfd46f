from datetime import date, datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    BookingConflictError,
    InvalidInputError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_notification_gateway import INotificationGateway
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.user_entity import UserEntity
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.pricing_calculator import PricingCalculator
from src.service.tour_booking.domain.value_object.booking_contact import (
    AddOn,
    CustomerInfo,
    EmergencyContact,
    Participant,
)
from src.service.tour_booking.domain.value_object.selected_date import SelectedDate


class CreateBookingUseCase:
    """
    Create a pending booking and reserve its slots.

    Flow:
    1. Tour and user must exist
    2. Requested departure must be one of the tour's available dates
    3. Fail fast on capacity and group-size bounds
    4. Price from the tour's price table and persist the booking
    5. Atomically reserve the slots; if capacity vanished since step 3 the
       booking is deleted again and the request fails with a conflict
    6. Send the confirmation email (best-effort)
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        tour_catalog: ITourCatalog,
        user_query_repo: IUserQueryRepo,
        notification_gateway: INotificationGateway,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.tour_catalog = tour_catalog
        self.user_query_repo = user_query_repo
        self.notification_gateway = notification_gateway
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        tour_catalog: ITourCatalog = Depends(Provide[Container.tour_catalog]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        notification_gateway: INotificationGateway = Depends(
            Provide[Container.notification_gateway]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            tour_catalog=tour_catalog,
            user_query_repo=user_query_repo,
            notification_gateway=notification_gateway,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: str,
        tour_id: str,
        start_date: Optional[date],
        end_date: Optional[date] = None,
        number_of_adults: int = 0,
        number_of_children: int = 0,
        number_of_infants: int = 0,
        customer_info: Optional[CustomerInfo] = None,
        participants: Optional[List[Participant]] = None,
        add_ons: Optional[List[AddOn]] = None,
        emergency_contact: Optional[EmergencyContact] = None,
        special_requests: str = '',
        payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'tour.id': tour_id, 'user.id': user_id},
        ):
            tour = await self.tour_catalog.get_tour_by_id(tour_id=tour_id)
            if not tour:
                raise NotFoundError('Tour not found')

            user = await self.user_query_repo.get_by_id(user_id=user_id)
            if not user:
                raise NotFoundError('User not found')

            if start_date is None:
                raise InvalidInputError('Selected date is required')

            departure = tour.find_departure(start_date=start_date, end_date=end_date)
            if departure is None:
                raise InvalidInputError('Selected date is not available for this tour')
            selected_date = SelectedDate(
                start_date=departure.start_date, end_date=departure.end_date
            )

            requested_slots = number_of_adults + number_of_children + number_of_infants
            available_slots = await self.tour_catalog.get_available_slots(
                tour_id=tour.id,
                start_date=selected_date.start_date,
                end_date=selected_date.end_date,
            )
            if requested_slots > available_slots:
                metrics.record_slot_conflict(tour_id=tour.id, stage='precheck')
                raise BookingConflictError(
                    f'Not enough slots available. Only {available_slots} slots remaining'
                )
            if requested_slots < tour.min_group_size:
                raise BookingConflictError(
                    f'Minimum group size is {tour.min_group_size} participants'
                )
            if tour.max_group_size and requested_slots > tour.max_group_size:
                raise BookingConflictError(
                    f'Maximum group size is {tour.max_group_size} participants'
                )

            quote = PricingCalculator.calculate(
                adults=number_of_adults,
                children=number_of_children,
                infants=number_of_infants,
                adult_price=tour.price.adult,
                child_price=tour.price.child,
                infant_price=tour.price.infant,
                discount=tour.price.discount,
                tax=tour.price.tax,
            )

            booking = Booking.create(
                tour_id=tour.id,
                user_id=user_id,
                selected_date=selected_date,
                number_of_adults=number_of_adults,
                number_of_children=number_of_children,
                number_of_infants=number_of_infants,
                quote=quote,
                customer_info=customer_info or self._customer_info_from(user),
                participants=participants,
                add_ons=add_ons,
                emergency_contact=emergency_contact,
                special_requests=special_requests,
                payment_method=payment_method,
                now=datetime.now(timezone.utc),
            )
            booking = await self.booking_command_repo.create(booking=booking)
            Logger.base.info(
                f'📝 [CREATE-BOOKING] {booking.booking_code} persisted for user {user_id}, '
                f'tour {tour.id} on {selected_date.start_date} ({requested_slots} slots)'
            )

            await self._reserve_slots_or_compensate(booking=booking)
            metrics.record_booking_created(tour_id=tour.id, slots=requested_slots)

            try:
                await self.notification_gateway.send_booking_confirmation(
                    booking=booking, tour=tour
                )
            except Exception as e:
                metrics.record_side_effect_failure(kind='notification')
                Logger.base.error(
                    f'[CREATE-BOOKING] Confirmation email failed for {booking.booking_code}: {e}'
                )

            return booking

    async def _reserve_slots_or_compensate(self, *, booking: Booking) -> None:
        try:
            reserved = await self.tour_catalog.reserve_slots(
                tour_id=booking.tour_id,
                start_date=booking.selected_date.start_date,
                end_date=booking.selected_date.end_date,
                slots=booking.total_participants,
            )
        except Exception as e:
            # the booking stays the source of truth; inventory gets reconciled out-of-band
            metrics.record_side_effect_failure(kind='slot_reserve')
            Logger.base.error(
                f'[CREATE-BOOKING] Slot reservation failed for {booking.booking_code}, '
                f'booking kept: {e}'
            )
            return

        if not reserved:
            metrics.record_slot_conflict(tour_id=booking.tour_id, stage='reserve')
            await self.booking_command_repo.delete(booking_id=booking.id)
            Logger.base.warning(
                f'⚠️ [CREATE-BOOKING] Capacity taken concurrently, '
                f'rolled back {booking.booking_code}'
            )
            raise BookingConflictError('Not enough slots available for the selected date')

    @staticmethod
    def _customer_info_from(user: UserEntity) -> CustomerInfo:
        return CustomerInfo(
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            address=user.address,
        )

"""Application layer interfaces (Ports)"""

from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.app.interface.i_notification_gateway import INotificationGateway
from src.service.tour_booking.app.interface.i_tour_catalog import ITourCatalog
from src.service.tour_booking.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'INotificationGateway',
    'ITourCatalog',
    'IUserQueryRepo',
]

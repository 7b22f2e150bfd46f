"""
Database Models

Import all models here so they are registered on Base.metadata before create_all
"""

from src.service.tour_booking.driven_adapter.model.booking_model import BookingModel
from src.service.tour_booking.driven_adapter.model.tour_model import TourModel
from src.service.tour_booking.driven_adapter.model.user_model import UserModel

__all__ = ['BookingModel', 'TourModel', 'UserModel']

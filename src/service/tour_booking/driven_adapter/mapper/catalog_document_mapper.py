"""Tour and user documents shared by the seed loader and the SQL catalog."""

from datetime import date
from typing import Any

from src.service.tour_booking.domain.entity.tour_entity import Tour, TourDateSlot, TourPrice
from src.service.tour_booking.domain.entity.user_entity import UserEntity, UserRole


def slot_to_document(slot: TourDateSlot) -> dict[str, Any]:
    return {
        'start_date': slot.start_date.isoformat(),
        'end_date': slot.end_date.isoformat(),
        'max_slots': slot.max_slots,
        'booked_slots': slot.booked_slots,
    }


def document_to_slot(doc: dict[str, Any]) -> TourDateSlot:
    return TourDateSlot(
        start_date=date.fromisoformat(doc['start_date'][:10]),
        end_date=date.fromisoformat(doc['end_date'][:10]),
        max_slots=doc.get('max_slots'),
        booked_slots=doc.get('booked_slots', 0),
    )


def document_to_tour(doc: dict[str, Any]) -> Tour:
    price = doc.get('price') or {}
    return Tour(
        id=str(doc['id']),
        title=doc.get('title', ''),
        price=TourPrice(
            adult=price.get('adult', 0),
            child=price.get('child', 0),
            infant=price.get('infant', 0),
            discount=price.get('discount', 0),
            tax=price.get('tax', 0),
        ),
        min_group_size=doc.get('min_group_size', 1),
        max_group_size=doc.get('max_group_size', 0),
        available_dates=[document_to_slot(slot) for slot in doc.get('available_dates', [])],
        is_active=doc.get('is_active', True),
    )


def document_to_user(doc: dict[str, Any]) -> UserEntity:
    return UserEntity(
        id=str(doc['id']),
        email=doc.get('email', ''),
        full_name=doc.get('full_name', ''),
        phone=doc.get('phone', ''),
        address=doc.get('address', ''),
        role=UserRole(doc.get('role', UserRole.USER)),
        is_active=doc.get('is_active', True),
    )

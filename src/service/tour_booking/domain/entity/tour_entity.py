from datetime import date
from typing import List, Optional

import attrs


@attrs.define
class TourPrice:
    adult: int = 0
    child: int = 0
    infant: int = 0
    # flat per-booking adjustments applied after the subtotal
    discount: int = 0
    tax: int = 0


@attrs.define
class TourDateSlot:
    """
    One departure of a tour and its seat counter.

    available = max(max_slots - booked_slots, 0). A slot without its own
    max_slots falls back to the tour's max group size.
    """

    start_date: date
    end_date: date
    max_slots: Optional[int] = None
    booked_slots: int = 0

    def matches(self, *, start_date: date, end_date: date) -> bool:
        return self.start_date == start_date and self.end_date == end_date

    def capacity(self, *, fallback_max: int) -> int:
        return self.max_slots or fallback_max or 0

    def available_slots(self, *, fallback_max: int) -> int:
        return max(self.capacity(fallback_max=fallback_max) - self.booked_slots, 0)

    def incremented(self, slots: int) -> 'TourDateSlot':
        return attrs.evolve(self, booked_slots=self.booked_slots + slots)

    def decremented(self, slots: int) -> 'TourDateSlot':
        # floor at zero so a retried release cannot drive the counter negative
        return attrs.evolve(self, booked_slots=max(self.booked_slots - slots, 0))


@attrs.define
class Tour:
    id: str
    title: str
    price: TourPrice = attrs.field(factory=TourPrice)
    min_group_size: int = 1
    max_group_size: int = 0
    available_dates: List[TourDateSlot] = attrs.field(factory=list)
    is_active: bool = True

    def find_slot(self, *, start_date: date, end_date: date) -> Optional[TourDateSlot]:
        return next(
            (
                slot
                for slot in self.available_dates
                if slot.matches(start_date=start_date, end_date=end_date)
            ),
            None,
        )

    def find_departure(
        self, *, start_date: date, end_date: Optional[date] = None
    ) -> Optional[TourDateSlot]:
        """Match a requested departure; end_date is optional and must agree when given."""
        for slot in self.available_dates:
            if slot.start_date != start_date:
                continue
            if end_date is None or slot.end_date == end_date:
                return slot
        return None

    def available_slots(self, *, start_date: date, end_date: date) -> int:
        slot = self.find_slot(start_date=start_date, end_date=end_date)
        if slot is None:
            return 0
        return slot.available_slots(fallback_max=self.max_group_size)

    def with_booked_delta(self, *, start_date: date, end_date: date, delta: int) -> 'Tour':
        """Shift booked_slots of the matching slot; unknown slots are left alone."""
        dates = [
            (slot.incremented(delta) if delta >= 0 else slot.decremented(-delta))
            if slot.matches(start_date=start_date, end_date=end_date)
            else slot
            for slot in self.available_dates
        ]
        return attrs.evolve(self, available_dates=dates)

from datetime import date, datetime, time, timezone

import attrs


@attrs.frozen
class SelectedDate:
    """The departure instance a booking holds slots on."""

    start_date: date
    end_date: date

    def starts_at(self) -> datetime:
        return datetime.combine(self.start_date, time.min, tzinfo=timezone.utc)

    def has_started(self, *, now: datetime) -> bool:
        return self.start_date <= now.astimezone(timezone.utc).date()

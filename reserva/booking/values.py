"""Value types shared by the booking components"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from reserva.booking.errors import InvalidInterval, InvalidReservation


MAX_AMOUNT_CENTS = 99_999_999_900


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware timestamp to naive UTC; naive values are taken as UTC"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open range [start, end) during which a resource is held"""

    start: datetime
    end: datetime

    def __post_init__(self):
        if not self.start < self.end:
            raise InvalidInterval(
                "Start must be before end",
                start=self.start.isoformat(),
                end=self.end.isoformat(),
            )

    @classmethod
    def from_dates(cls, start_date: date, end_date: date) -> "Interval":
        """Hotel stays: calendar dates, check-in day to check-out day"""
        return cls(
            datetime.combine(start_date, time.min),
            datetime.combine(end_date, time.min),
        )

    @classmethod
    def from_timestamps(cls, start: datetime, end: datetime) -> "Interval":
        """Restaurant slots: timestamps, normalized to naive UTC"""
        return cls(to_naive_utc(start), to_naive_utc(end))

    def overlaps(self, other: "Interval") -> bool:
        # Touching boundaries (self.end == other.start) do not overlap
        return self.start < other.end and other.start < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def nights(self) -> int:
        return self.duration.days

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()})"


@dataclass(frozen=True)
class Money:
    """Stored total of a reservation in minor units"""

    amount_cents: int
    currency: str

    @classmethod
    def from_decimal(cls, amount: Decimal, currency: str) -> "Money":
        cents = (Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(cents), currency.upper())

    @property
    def amount(self) -> Decimal:
        return (Decimal(self.amount_cents) / 100).quantize(Decimal("0.01"))

    def validate(self, supported: Optional[Iterable[str]] = None) -> None:
        if self.amount_cents < 0:
            raise InvalidReservation("Amount cannot be negative", amount_cents=self.amount_cents)
        if self.amount_cents > MAX_AMOUNT_CENTS:
            raise InvalidReservation("Amount is too large", amount_cents=self.amount_cents)
        if len(self.currency) != 3 or (supported is not None and self.currency not in supported):
            raise InvalidReservation("Unsupported currency", currency=self.currency)

"""Domain entity — pure Python business object for a customer record."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4


@dataclass
class Customer:
    """Core domain entity representing a registered customer.

    ``member_number`` is unique across all customers. ``created_at`` is fixed
    at construction; ``updated_at`` starts equal to it and only moves forward.
    """

    name: str
    date_of_birth: date
    member_number: int
    interests: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    def update(
        self,
        *,
        name: str,
        date_of_birth: date,
        member_number: int,
        interests: str,
    ) -> None:
        """Replace all editable fields and refresh the updated_at timestamp."""
        self.name = name
        self.date_of_birth = date_of_birth
        self.member_number = member_number
        self.interests = interests
        self.touch()

    def touch(self) -> None:
        now = datetime.now(timezone.utc)
        # Clock resolution can repeat a timestamp; updated_at must still advance.
        floor = (self.updated_at or self.created_at) + timedelta(microseconds=1)
        self.updated_at = max(now, floor)

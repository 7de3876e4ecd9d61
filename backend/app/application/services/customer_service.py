"""Application service (use case) for Customer operations."""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from app.application.interfaces import CustomerRepository
from app.application.schemas.customer import CustomerPayload
from app.domain.entities import Customer
from app.domain.exceptions import (
    MEMBER_NUMBER_EXISTS,
    CustomerValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

# Bounds of the BIGINT member_number column
MEMBER_NUMBER_MIN = -(2**63)
MEMBER_NUMBER_MAX = 2**63 - 1

_REQUIRED_FIELDS = ("name", "date_of_birth", "member_number", "interests")


def _is_missing(value: Any) -> bool:
    """True for absent, null, blank-string and falsy scalar values (0, False)."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def _coerce_date(value: Any) -> date:
    """Accept a ``date``/``datetime`` or an ISO date / datetime string."""
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).date() if value.tzinfo else value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return _coerce_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            pass
    raise CustomerValidationError("Date of birth must be a valid ISO date")


def _coerce_member_number(value: Any) -> int:
    """Accept an int, or a float / numeric string with an integral value.

    The result must fit the signed 64-bit ``member_number`` column.
    """
    if isinstance(value, bool):
        raise CustomerValidationError("Member number must be a whole number")
    if isinstance(value, int):
        number = value
    elif isinstance(value, (float, str)):
        try:
            parsed = Decimal(value.strip() if isinstance(value, str) else value)
        except InvalidOperation:
            raise CustomerValidationError("Member number must be a whole number") from None
        if not parsed.is_finite() or parsed != parsed.to_integral_value():
            raise CustomerValidationError("Member number must be a whole number")
        if not MEMBER_NUMBER_MIN <= parsed <= MEMBER_NUMBER_MAX:
            raise CustomerValidationError("Member number is out of range")
        number = int(parsed)
    else:
        raise CustomerValidationError("Member number must be a whole number")
    if not MEMBER_NUMBER_MIN <= number <= MEMBER_NUMBER_MAX:
        raise CustomerValidationError("Member number is out of range")
    return number


class CustomerService:
    """Orchestrates the customer lifecycle. Depends on the repository port (DI).

    Member-number uniqueness is checked here before every write so callers get
    a readable message. The repository enforces the same rule in the store and
    raises the same error when two writers race past this check.
    """

    def __init__(self, repository: CustomerRepository):
        self._repository = repository

    async def list_customers(self) -> list[Customer]:
        return await self._repository.get_all()

    async def get_customer(self, customer_id: str) -> Customer:
        customer = await self._repository.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)
        return customer

    async def create_customer(self, data: CustomerPayload) -> Customer:
        fields = self._validate(data)
        await self._ensure_member_number_free(fields["member_number"])

        created = await self._repository.create(Customer(**fields))
        logger.info(
            "Created customer %s (member #%d)", created.id, created.member_number
        )
        return created

    async def update_customer(self, customer_id: str, data: CustomerPayload) -> Customer:
        fields = self._validate(data)
        customer = await self.get_customer(customer_id)
        await self._ensure_member_number_free(
            fields["member_number"], exclude_id=customer.id
        )

        customer.update(**fields)
        updated = await self._repository.update(customer)
        logger.info("Updated customer %s", updated.id)
        return updated

    async def delete_customer(self, customer_id: str) -> bool:
        deleted = await self._repository.delete(customer_id)
        if not deleted:
            raise EntityNotFoundError("Customer", customer_id)
        logger.info("Deleted customer %s", customer_id)
        return deleted

    async def delete_all_customers(self) -> int:
        removed = await self._repository.delete_all()
        logger.info("Deleted all customers (%d removed)", removed)
        return removed

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _validate(data: CustomerPayload) -> dict[str, Any]:
        """Presence check first, then coercion of date and member number."""
        if any(_is_missing(getattr(data, name)) for name in _REQUIRED_FIELDS):
            logger.warning("Rejected customer payload: missing required fields")
            raise CustomerValidationError()
        return {
            "name": data.name,
            "date_of_birth": _coerce_date(data.date_of_birth),
            "member_number": _coerce_member_number(data.member_number),
            "interests": data.interests,
        }

    async def _ensure_member_number_free(
        self, member_number: int, *, exclude_id: str | None = None
    ) -> None:
        holder = await self._repository.get_by_member_number(
            member_number, exclude_id=exclude_id
        )
        if holder is not None:
            logger.warning(
                "Rejected member number %d: already held by %s", member_number, holder.id
            )
            raise DuplicateEntityError(
                "Customer", "member_number", member_number, MEMBER_NUMBER_EXISTS
            )

"""Concrete repository implementation for Customer backed by SQLAlchemy."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import CustomerRepository
from app.domain.entities import Customer
from app.domain.exceptions import MEMBER_NUMBER_EXISTS, DuplicateEntityError, StoreError
from app.infrastructure.database.models import CustomerModel

logger = logging.getLogger(__name__)


def _is_valid_id(value: str) -> bool:
    try:
        UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyCustomerRepository(CustomerRepository):
    """Implements the CustomerRepository port using SQLAlchemy async sessions.

    The ``uq_customers_member_number`` constraint is the authoritative
    uniqueness guard; a violation surfaces as ``DuplicateEntityError``.
    Any other SQLAlchemy failure surfaces as ``StoreError``.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CustomerModel) -> Customer:
        """Map ORM model → domain entity."""
        return Customer(
            id=model.id,
            name=model.name,
            date_of_birth=model.date_of_birth,
            member_number=model.member_number,
            interests=model.interests,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_model(self, entity: Customer) -> CustomerModel:
        """Map domain entity → ORM model (for creation)."""
        return CustomerModel(
            id=entity.id,
            name=entity.name,
            date_of_birth=entity.date_of_birth,
            member_number=entity.member_number,
            interests=entity.interests,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @asynccontextmanager
    async def _store_errors(self, member_number: int | None = None) -> AsyncIterator[None]:
        """Translate driver errors into domain errors."""
        try:
            yield
        except IntegrityError as exc:
            await self._session.rollback()
            if "member_number" in str(exc.orig):
                logger.warning(
                    "Store rejected duplicate member number %s", member_number
                )
                raise DuplicateEntityError(
                    "Customer", "member_number", member_number, MEMBER_NUMBER_EXISTS
                ) from exc
            raise StoreError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error("Customer store failure: %s", exc)
            raise StoreError(str(exc)) from exc

    async def get_by_id(self, customer_id: str) -> Customer | None:
        if not _is_valid_id(customer_id):
            return None
        async with self._store_errors():
            result = await self._session.get(CustomerModel, customer_id)
        return self._to_entity(result) if result else None

    async def get_by_member_number(
        self, member_number: int, *, exclude_id: str | None = None
    ) -> Customer | None:
        stmt = select(CustomerModel).where(CustomerModel.member_number == member_number)
        if exclude_id is not None:
            stmt = stmt.where(CustomerModel.id != exclude_id)
        async with self._store_errors():
            result = await self._session.execute(stmt.limit(1))
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Customer]:
        stmt = select(CustomerModel).order_by(
            CustomerModel.created_at.desc(), CustomerModel.id
        )
        async with self._store_errors():
            result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, customer: Customer) -> Customer:
        model = self._to_model(customer)
        async with self._store_errors(customer.member_number):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, customer: Customer) -> Customer:
        async with self._store_errors(customer.member_number):
            model = await self._session.get(CustomerModel, customer.id)
            if model is None:
                raise ValueError(f"Customer {customer.id} not found in database")
            model.name = customer.name
            model.date_of_birth = customer.date_of_birth
            model.member_number = customer.member_number
            model.interests = customer.interests
            model.updated_at = customer.updated_at
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, customer_id: str) -> bool:
        if not _is_valid_id(customer_id):
            return False
        async with self._store_errors():
            model = await self._session.get(CustomerModel, customer_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True

    async def delete_all(self) -> int:
        async with self._store_errors():
            result = await self._session.execute(delete(CustomerModel))
        return result.rowcount or 0

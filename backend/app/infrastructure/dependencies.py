"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services import CustomerService
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.repositories import SQLAlchemyCustomerRepository


async def get_customer_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CustomerService, None]:
    """Provides a CustomerService instance with its repository wired up."""
    repository = SQLAlchemyCustomerRepository(session)
    yield CustomerService(repository)

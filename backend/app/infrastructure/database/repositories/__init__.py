from .customer_repository import SQLAlchemyCustomerRepository

__all__ = [
    "SQLAlchemyCustomerRepository",
]

"""Abstract repository interface (port) for Customer persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import Customer


class CustomerRepository(ABC):
    """Port for customer persistence — implemented in the infrastructure layer.

    Implementations must enforce ``member_number`` uniqueness themselves and
    raise ``DuplicateEntityError`` on violation, independently of any check
    done by the caller beforehand.
    """

    @abstractmethod
    async def get_by_id(self, customer_id: str) -> Customer | None:
        """Retrieve a single customer; ``None`` if unknown or malformed."""
        ...

    @abstractmethod
    async def get_by_member_number(
        self, member_number: int, *, exclude_id: str | None = None
    ) -> Customer | None:
        """Find the customer holding ``member_number``, optionally ignoring one record."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Customer]:
        """Retrieve every customer, newest ``created_at`` first."""
        ...

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """Persist a new customer and return it."""
        ...

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        """Write all editable fields of an existing customer."""
        ...

    @abstractmethod
    async def delete(self, customer_id: str) -> bool:
        """Delete a customer. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every customer and return how many were removed."""
        ...

from .customer import CustomerModel

__all__ = [
    "CustomerModel",
]

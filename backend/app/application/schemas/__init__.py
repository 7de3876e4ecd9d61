from .customer import ApiResponse, CustomerPayload, CustomerResponse, StatusResponse

__all__ = [
    "ApiResponse",
    "CustomerPayload",
    "CustomerResponse",
    "StatusResponse",
]

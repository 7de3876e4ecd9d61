"""Customer CRUD endpoints.

Every response uses the ``{success, data?, error?, message?}`` envelope.
Failures are raised as domain exceptions and rendered by the handlers in
``app.presentation.api.error_handlers``.
"""

from fastapi import APIRouter, Depends, status

from app.application.schemas import (
    ApiResponse,
    CustomerPayload,
    CustomerResponse,
    StatusResponse,
)
from app.application.services import CustomerService
from app.domain.entities import Customer
from app.infrastructure.dependencies import get_customer_service

router = APIRouter(prefix="/customer", tags=["Customers"])


def _to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse.model_validate(customer, from_attributes=True)


@router.get(
    "",
    response_model=ApiResponse[list[CustomerResponse]],
    response_model_exclude_none=True,
)
async def list_customers(
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[list[CustomerResponse]]:
    """List every customer, newest first."""
    customers = await service.list_customers()
    return ApiResponse[list[CustomerResponse]](
        success=True, data=[_to_response(c) for c in customers]
    )


@router.post(
    "",
    response_model=ApiResponse[CustomerResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    data: CustomerPayload,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[CustomerResponse]:
    """Create a customer; the member number must not be taken."""
    customer = await service.create_customer(data)
    return ApiResponse[CustomerResponse](success=True, data=_to_response(customer))


@router.delete("", response_model=StatusResponse)
async def delete_all_customers(
    service: CustomerService = Depends(get_customer_service),
) -> StatusResponse:
    """Delete every customer. Intended for test and reset use."""
    await service.delete_all_customers()
    return StatusResponse(message="All customers deleted")


@router.get(
    "/{customer_id}",
    response_model=ApiResponse[CustomerResponse],
    response_model_exclude_none=True,
)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[CustomerResponse]:
    """Retrieve a single customer by ID."""
    customer = await service.get_customer(customer_id)
    return ApiResponse[CustomerResponse](success=True, data=_to_response(customer))


@router.put(
    "/{customer_id}",
    response_model=ApiResponse[CustomerResponse],
    response_model_exclude_none=True,
)
async def update_customer(
    customer_id: str,
    data: CustomerPayload,
    service: CustomerService = Depends(get_customer_service),
) -> ApiResponse[CustomerResponse]:
    """Replace all editable fields of an existing customer."""
    customer = await service.update_customer(customer_id, data)
    return ApiResponse[CustomerResponse](success=True, data=_to_response(customer))


@router.delete("/{customer_id}", response_model=StatusResponse)
async def delete_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> StatusResponse:
    """Delete a customer by ID."""
    await service.delete_customer(customer_id)
    return StatusResponse(message="Customer deleted successfully")

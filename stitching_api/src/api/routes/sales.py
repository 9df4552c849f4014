from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.core.deps import require_auth_if_enabled
from src.db.session import WorkbookSession, get_session
from src.repositories.sales import CustomerRepository, OrderRepository
from src.schemas.sales import (
    CustomerCreate,
    CustomerRead,
    CustomerUpdate,
    OrderCreate,
    OrderRead,
    OrderStatus,
    OrderUpdate,
)
from src.services.exceptions import NotFoundError
from src.services.sales import SalesService

customers_router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(require_auth_if_enabled)],
)
orders_router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    dependencies=[Depends(require_auth_if_enabled)],
)


# PUBLIC_INTERFACE
@customers_router.get(
    "",
    response_model=List[CustomerRead],
    summary="List customers",
    description="List customers; `search` matches name (case-insensitive) or phone.",
)
async def list_customers(
    session: WorkbookSession = Depends(get_session),
    search: Optional[str] = Query(None, description="Name or phone fragment"),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
) -> List[CustomerRead]:
    repo = CustomerRepository(session)
    records = await repo.list_customers(search=search, limit=limit, offset=offset)
    return [CustomerRead.model_validate(c) for c in records]


# PUBLIC_INTERFACE
@customers_router.get("/{customer_id}", response_model=CustomerRead, summary="Get customer")
async def get_customer(
    customer_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> CustomerRead:
    customer = await CustomerRepository(session).get(customer_id)
    if not customer:
        raise NotFoundError(f"Customer {customer_id} not found")
    return CustomerRead.model_validate(customer)


# PUBLIC_INTERFACE
@customers_router.post(
    "",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create customer",
)
async def create_customer(
    payload: CustomerCreate,
    session: WorkbookSession = Depends(get_session),
) -> CustomerRead:
    customer = await SalesService(session).create_customer(payload.model_dump())
    return CustomerRead.model_validate(customer)


# PUBLIC_INTERFACE
@customers_router.put("/{customer_id}", response_model=CustomerRead, summary="Update customer")
async def update_customer(
    payload: CustomerUpdate,
    customer_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> CustomerRead:
    customer = await SalesService(session).update_customer(customer_id, payload.model_dump(exclude_unset=True))
    return CustomerRead.model_validate(customer)


# PUBLIC_INTERFACE
@customers_router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer",
    description="Delete a customer. Fails with 409 while the customer still has orders.",
)
async def delete_customer(
    customer_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await SalesService(session).delete_customer(customer_id)


# PUBLIC_INTERFACE
@customers_router.get(
    "/{customer_id}/orders",
    response_model=List[OrderRead],
    summary="List a customer's orders",
)
async def list_customer_orders(
    customer_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> List[OrderRead]:
    if not await CustomerRepository(session).get(customer_id):
        raise NotFoundError(f"Customer {customer_id} not found")
    orders = await OrderRepository(session).list_orders(customer_id=customer_id)
    return [OrderRead.model_validate(o) for o in orders]


# PUBLIC_INTERFACE
@orders_router.get(
    "",
    response_model=List[OrderRead],
    summary="List orders",
    description="List orders with optional customer, production unit and status filters.",
)
async def list_orders(
    session: WorkbookSession = Depends(get_session),
    customer_id: Optional[int] = Query(None, ge=1),
    production_unit_id: Optional[int] = Query(None, ge=1),
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    limit: int = Query(1000, ge=1, le=10000),
    offset: int = Query(0, ge=0),
) -> List[OrderRead]:
    repo = OrderRepository(session)
    orders = await repo.list_orders(
        customer_id=customer_id,
        production_unit_id=production_unit_id,
        status=status_filter,
        limit=limit,
        offset=offset,
    )
    return [OrderRead.model_validate(o) for o in orders]


# PUBLIC_INTERFACE
@orders_router.get("/{order_id}", response_model=OrderRead, summary="Get order")
async def get_order(
    order_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> OrderRead:
    order = await OrderRepository(session).get(order_id)
    if not order:
        raise NotFoundError(f"Order {order_id} not found")
    return OrderRead.model_validate(order)


# PUBLIC_INTERFACE
@orders_router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Create an order. order_number must be unique (409); customer and unit must exist (400).",
)
async def create_order(
    payload: OrderCreate,
    session: WorkbookSession = Depends(get_session),
) -> OrderRead:
    order = await SalesService(session).create_order(payload.model_dump())
    return OrderRead.model_validate(order)


# PUBLIC_INTERFACE
@orders_router.put("/{order_id}", response_model=OrderRead, summary="Update order")
async def update_order(
    payload: OrderUpdate,
    order_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> OrderRead:
    order = await SalesService(session).update_order(order_id, payload.model_dump(exclude_unset=True))
    return OrderRead.model_validate(order)


# PUBLIC_INTERFACE
@orders_router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete order")
async def delete_order(
    order_id: int = Path(..., ge=1),
    session: WorkbookSession = Depends(get_session),
) -> None:
    await SalesService(session).delete_order(order_id)

"""
Order router - API endpoints for carpet orders.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.dependencies import get_current_user, get_order_service, require_role
from app.core.permissions import Roles
from app.schemas.order import CarpetOrderCreate, CarpetOrderUpdate, OrderRead, OrderSummary
from app.schemas.user import CurrentUser
from app.services.order_service import OrderService
from app.utils.stages import OrderStage

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderRead])
async def list_orders(
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    stage: Optional[OrderStage] = None,
    client_code: Optional[str] = None,
):
    """
    List orders with their timelines.

    Clients only see their own orders; admins see all and may narrow by
    client_code. Filters: search (order number, design, client code), stage.
    """
    return await service.list_orders(
        current_user,
        client_code=client_code,
        search=search,
        stage=stage,
        limit=limit,
        offset=offset,
    )


@router.get("/summary", response_model=OrderSummary)
async def order_summary(
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
    client_code: Optional[str] = None,
):
    """Order counts per stage plus the number of delayed orders."""
    return await service.summarize(current_user, client_code=client_code)


@router.get("/{order_number}", response_model=OrderRead)
async def get_order(
    order_number: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Get an order by order number."""
    return await service.get_order(current_user, order_number)


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: CarpetOrderCreate,
    service: OrderService = Depends(get_order_service),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
):
    """Create a new order record."""
    return await service.create_order(data)


@router.put("/{order_number}", response_model=OrderRead)
async def update_order(
    order_number: str,
    data: CarpetOrderUpdate,
    service: OrderService = Depends(get_order_service),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
):
    """Update an order record."""
    return await service.update_order(order_number, data)


@router.delete("/{order_number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_number: str,
    service: OrderService = Depends(get_order_service),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
):
    """Delete an order record."""
    await service.delete_order(order_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

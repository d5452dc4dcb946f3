from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from .. import database, schemas
from ..exceptions import NotFoundError
from ..services import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])

NOT_FOUND = {404: {"description": "Not Found", "content": {"application/json": {"example": {"error": "not_found", "message": "Order 'o1' not found"}}}}}
BAD_REQUEST = {400: {"description": "Bad Request", "content": {"application/json": {"example": {"error": "validation_error", "message": "Invalid OrderUpdate payload: status", "details": []}}}}}


def get_order_service(db: Session = Depends(database.get_db)) -> OrderService:
    return OrderService(db)


@router.get("", response_model=List[schemas.Order], responses=BAD_REQUEST)
def list_orders(
    response: Response,
    offset: int = Query(0, ge=0, le=schemas.MAX_INT64),
    limit: int = Query(25, ge=1, le=schemas.MAX_INT64),
    product_id: Optional[str] = Query(None, alias="productId"),
    status: Optional[str] = None,
    service: OrderService = Depends(get_order_service),
):
    """List orders ordered by id, optionally only those containing `productId` and/or in `status`."""
    criteria = schemas.validate_payload(
        schemas.OrderFilter,
        {"offset": offset, "limit": limit, "product_id": product_id or None, "status": status or None},
    )
    response.headers["X-Total-Count"] = str(service.count(criteria))
    return service.list(criteria)


@router.get("/{order_id}", response_model=schemas.OrderDetail, responses=NOT_FOUND)
def get_order(order_id: str, service: OrderService = Depends(get_order_service)):
    """Return the order with its product ids expanded into products (null for deleted products)."""
    order = service.get(order_id)
    if order is None:
        raise NotFoundError("Order", order_id)
    return order


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.OrderDetail, responses=BAD_REQUEST)
def create_order(
    response: Response,
    payload: Dict[str, Any] = Body(...),
    service: OrderService = Depends(get_order_service),
):
    """Create an order; `status` defaults to CREATED. Returns 201 and a Location header."""
    order = service.create(payload)
    response.headers["Location"] = f"/orders/{order.id}"
    return order


@router.put("/{order_id}", response_model=schemas.OrderDetail, responses={**NOT_FOUND, **BAD_REQUEST})
def edit_order(
    order_id: str,
    payload: Dict[str, Any] = Body(...),
    service: OrderService = Depends(get_order_service),
):
    return service.edit(order_id, payload)


@router.delete("/{order_id}", response_model=schemas.DeleteResult)
def delete_order(order_id: str, service: OrderService = Depends(get_order_service)):
    service.destroy(order_id)
    return schemas.DeleteResult()

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from .. import database, schemas
from ..exceptions import NotFoundError
from ..services import ProductService

router = APIRouter(prefix="/products", tags=["products"])

NOT_FOUND = {404: {"description": "Not Found", "content": {"application/json": {"example": {"error": "not_found", "message": "Product 'p1' not found"}}}}}
BAD_REQUEST = {400: {"description": "Bad Request", "content": {"application/json": {"example": {"error": "validation_error", "message": "Invalid ProductCreate payload: likes", "details": []}}}}}


def get_product_service(db: Session = Depends(database.get_db)) -> ProductService:
    return ProductService(db)


@router.get("", response_model=List[schemas.Product])
def list_products(
    response: Response,
    offset: int = Query(0, ge=0, le=schemas.MAX_INT64),
    limit: int = Query(25, ge=1, le=schemas.MAX_INT64),
    tag: Optional[str] = None,
    service: ProductService = Depends(get_product_service),
):
    """List products ordered by id. `tag` keeps products carrying a tag with exactly that title.

    The total number of matching products is returned in `X-Total-Count`.
    """
    criteria = schemas.ProductFilter(offset=offset, limit=limit, tag=tag or None)
    response.headers["X-Total-Count"] = str(service.count(criteria))
    return service.list(criteria)


@router.get("/{product_id}", response_model=schemas.Product, responses=NOT_FOUND)
def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    product = service.get(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.Product, responses=BAD_REQUEST)
def create_product(
    response: Response,
    payload: Dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service),
):
    """Create a product. Returns 201 and a Location header on success."""
    product = service.create(payload)
    response.headers["Location"] = f"/products/{product.id}"
    return product


@router.put("/{product_id}", response_model=schemas.Product, responses={**NOT_FOUND, **BAD_REQUEST})
def edit_product(
    product_id: str,
    payload: Dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service),
):
    """Overwrite only the fields present in the body; other fields keep their values."""
    return service.edit(product_id, payload)


@router.delete("/{product_id}", response_model=schemas.DeleteResult)
def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    """Delete a product. Deleting a product that does not exist also succeeds."""
    service.destroy(product_id)
    return schemas.DeleteResult()

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError
from typing import Annotated, List, Optional

from ..exceptions import ValidationError
from ..models import OrderStatus  # Import from models, not define locally


def validate_payload(schema, data):
    """Parse `data` into `schema`, raising the catalog ValidationError on failure.

    Instances of `schema` are returned unchanged, so services accept either
    a plain mapping (e.g. a JSON body) or an already-typed payload.
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in errors if err["loc"]})
        message = f"Invalid {schema.__name__} payload"
        if fields:
            message += ": " + ", ".join(fields)
        raise ValidationError(message, errors=errors) from exc


# A required string must also be non-empty
RequiredStr = Annotated[str, Field(min_length=1)]

# Integers must fit a signed 64-bit database column
MAX_INT64 = 2**63 - 1
Int64 = Annotated[int, Field(ge=-MAX_INT64 - 1, le=MAX_INT64)]


class ProductUrls(BaseModel):
    regular: RequiredStr
    small: RequiredStr
    thumb: RequiredStr


class ProductLinks(BaseModel):
    self: RequiredStr
    html: RequiredStr


class ProductUser(BaseModel):
    id: RequiredStr
    first_name: RequiredStr
    last_name: Optional[str] = None
    portfolio_url: Optional[str] = None
    username: RequiredStr


class Tag(BaseModel):
    title: RequiredStr


class ProductBase(BaseModel):
    description: Optional[str] = None
    alt_description: Optional[str] = None
    likes: Int64
    urls: ProductUrls
    links: ProductLinks
    user: ProductUser
    tags: List[Tag] = Field(default_factory=list)


class ProductCreate(ProductBase):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "description": "Paper lanterns over a night market",
                "alt_description": "red lanterns",
                "likes": 42,
                "urls": {
                    "regular": "https://images.example.com/p1?w=1080",
                    "small": "https://images.example.com/p1?w=400",
                    "thumb": "https://images.example.com/p1?w=200",
                },
                "links": {
                    "self": "https://api.example.com/photos/p1",
                    "html": "https://example.com/photos/p1",
                },
                "user": {"id": "u1", "first_name": "Ada", "username": "ada"},
                "tags": [{"title": "studio"}, {"title": "night"}],
            }
        }
    )


class ProductUpdate(BaseModel):
    """Partial product change set: only fields present in the payload are applied."""

    description: Optional[str] = None
    alt_description: Optional[str] = None
    likes: Optional[Int64] = None
    urls: Optional[ProductUrls] = None
    links: Optional[ProductLinks] = None
    user: Optional[ProductUser] = None
    tags: Optional[List[Tag]] = None

    model_config = ConfigDict(json_schema_extra={"example": {"likes": 5}})


class Product(ProductBase):
    id: str

    model_config = ConfigDict(from_attributes=True)


class ProductFilter(BaseModel):
    offset: int = Field(0, ge=0, le=MAX_INT64)
    limit: int = Field(25, ge=1, le=MAX_INT64)
    tag: Optional[str] = None


class OrderBase(BaseModel):
    buyerEmail: RequiredStr
    status: OrderStatus = OrderStatus.CREATED


class OrderCreate(OrderBase):
    products: List[RequiredStr] = Field(..., min_length=1)

    model_config = ConfigDict(json_schema_extra={"example": {"buyerEmail": "a@b.com", "products": ["p1"]}})


class OrderUpdate(BaseModel):
    """Partial order change set. Any status value may be written at any time."""

    buyerEmail: Optional[str] = Field(None, min_length=1)
    products: Optional[List[RequiredStr]] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None

    model_config = ConfigDict(json_schema_extra={"example": {"status": "PENDING"}})


class Order(OrderBase):
    id: str
    products: List[str]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": "18c0f1a2b3c4d5e6a1b2c3d4", "buyerEmail": "a@b.com", "products": ["p1"], "status": "CREATED"}
        }
    )


class OrderDetail(OrderBase):
    """Order with each product id replaced by the product it references (null if gone)."""

    id: str
    products: List[Optional[Product]]


class OrderFilter(BaseModel):
    offset: int = Field(0, ge=0, le=MAX_INT64)
    limit: int = Field(25, ge=1, le=MAX_INT64)
    product_id: Optional[str] = None
    status: Optional[OrderStatus] = None


class DeleteResult(BaseModel):
    success: bool = True

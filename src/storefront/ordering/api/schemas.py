"""Pydantic request schemas for the cart and order API.

Customer fields are optional here so that missing values reach the domain
and come back as its validation errors.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ColorSnapshot(BaseModel):
    name: str | None = None
    hex: str | None = None


class OrderLineSchema(BaseModel):
    product_id: str
    size: str | None = None
    color: ColorSnapshot | None = None
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)


class CustomerInfoSchema(BaseModel):
    full_name: str | None = None
    phone_number: str | None = None
    address: str | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    size: str
    color: ColorSnapshot | None = None
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "<product id>",
                    "size": "M",
                    "color": {"name": "Sand", "hex": "#d8c8a8"},
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    item_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    items: list[OrderLineSchema] = Field(default_factory=list)
    total: float = Field(ge=0, default=0.0)
    customer_info: CustomerInfoSchema = Field(default_factory=CustomerInfoSchema)
    payment_method: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str

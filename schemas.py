"""
Database Schemas for the Campus Ordering App

Each Pydantic model maps to a MongoDB collection; documents are stored with
camelCase field names (the model aliases):
- Outlet -> outlets
- MenuItem -> menuitems
- Order -> orders (items are snapshots, not live references)
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_IMAGE = "/img/373.png"

OrderStatus = Literal['pending', 'preparing', 'ready', 'completed', 'cancelled']
ORDER_STATUSES = ('pending', 'preparing', 'ready', 'completed', 'cancelled')


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


def _split_categories(value):
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(',')
    elif not isinstance(value, (list, tuple)):
        raise ValueError('categories must be a list or a comma-separated string')
    return [str(cat).strip() for cat in value if str(cat).strip()]


# ---------------------- Outlets ----------------------
class Outlet(CamelModel):
    """A food vendor/stall with its own menu. `name` is unique."""
    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    timings: str = Field(..., min_length=1)
    description: str = ''
    image: str = DEFAULT_IMAGE
    categories: List[str] = Field(default_factory=list)

    normalize_categories = field_validator('categories', mode='before')(_split_categories)


class OutletUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    timings: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    categories: Optional[List[str]] = None

    normalize_categories = field_validator('categories', mode='before')(_split_categories)


# ---------------------- Menu items ----------------------
class MenuItem(CamelModel):
    """A dish belonging to exactly one outlet; (name, outlet) is unique."""
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    description: str = ''
    image: str = DEFAULT_IMAGE
    outlet: str = Field(..., description="Links to outlets._id")
    is_available: bool = True


class MenuItemUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    outlet: Optional[str] = None
    is_available: Optional[bool] = None


# ---------------------- Orders ----------------------
class Customer(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class OrderItemRequest(CamelModel):
    """What the client sends per cart line; any client name/price is ignored."""
    menu_item: str
    quantity: int = Field(1, ge=1)


class OrderCreate(CamelModel):
    customer: Customer
    outlet: str
    items: List[OrderItemRequest] = Field(default_factory=list)
    notes: str = ''


class OrderItem(CamelModel):
    menu_item: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1)


class Order(CamelModel):
    customer: Customer
    outlet: str
    items: List[OrderItem] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    status: OrderStatus = 'pending'
    notes: str = ''


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderUpdate(CamelModel):
    customer: Optional[Customer] = None
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None

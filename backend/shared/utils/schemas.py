"""
Shared Pydantic schemas used across the application.

Wire format is camelCase (customerName, finalAmount, ...). Every schema
also accepts snake_case field names on input.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared.config.constants import Limits
from shared.utils.validators import validate_image_url


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["customer", "admin"]
OrderStatusValue = Literal["received", "preparing", "out_for_delivery", "delivered", "cancelled"]
PaymentMethodValue = Literal["cash", "card"]
PaymentStatusValue = Literal["pending"]
DiscountTypeValue = Literal["percentage", "fixed"]


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, populated from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Authentication Schemas
# =============================================================================


class RegisterRequest(CamelModel):
    """Customer self-registration."""

    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=30)


class LoginRequest(CamelModel):
    """Login request body."""

    email: EmailStr
    password: str


class UserOutput(CamelModel):
    """Public user information."""

    id: int
    email: str
    name: str
    phone: str | None = None
    role: Role
    created_at: datetime


class LoginResponse(CamelModel):
    """Login/register response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserOutput


# =============================================================================
# Menu Schemas
# =============================================================================


class MenuItemCreate(CamelModel):
    """Admin request to add a menu item."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str = Field(default="", max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: int = Field(ge=Limits.MIN_PRICE_CENTS, le=Limits.MAX_PRICE_CENTS)
    image_url: str | None = Field(default=None, max_length=500)
    category: str = Field(min_length=1, max_length=100)
    is_available: bool = True

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class MenuItemUpdate(CamelModel):
    """Admin partial update of a menu item. Omitted fields are left as is."""

    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: int | None = Field(default=None, ge=Limits.MIN_PRICE_CENTS, le=Limits.MAX_PRICE_CENTS)
    image_url: str | None = Field(default=None, max_length=500)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    is_available: bool | None = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)


class MenuItemOutput(CamelModel):
    """Menu item as shown in the catalog."""

    id: int
    name: str
    description: str
    price: int
    image_url: str | None = None
    category: str
    is_available: bool
    average_rating: float
    total_reviews: int
    order_count: int


class MenuItemSnapshot(CamelModel):
    """Current catalog fields of the menu item behind an order line."""

    id: int
    name: str
    description: str
    price: int
    image_url: str | None = None
    category: str
    is_available: bool


# =============================================================================
# Order Schemas
# =============================================================================


class OrderItemInput(CamelModel):
    """Input for a single line of an order."""

    menu_item_id: int = Field(ge=1)
    quantity: int = Field(ge=Limits.MIN_QUANTITY, le=Limits.MAX_QUANTITY)


class CreateOrderRequest(CamelModel):
    """Request to place a new order."""

    customer_name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1, max_length=300)
    phone: str = Field(min_length=1, max_length=30)
    email: EmailStr | None = None
    promo_code: str | None = Field(default=None, max_length=Limits.MAX_PROMO_CODE_LENGTH)
    payment_method: PaymentMethodValue
    notes: str | None = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)
    items: list[OrderItemInput] = Field(min_length=1)


class OrderItemOutput(CamelModel):
    """
    One order line. `price` is the unit price paid; `menu_item` carries the
    current catalog fields (name, image) for display.
    """

    id: int
    menu_item_id: int
    quantity: int
    price: int
    menu_item: MenuItemSnapshot | None = None


class OrderOutput(CamelModel):
    """Order with its line items."""

    id: int
    user_id: int | None = None
    customer_name: str
    address: str
    phone: str
    email: str | None = None
    status: OrderStatusValue
    total_amount: int
    discount_amount: int
    final_amount: int
    promo_code: str | None = None
    payment_method: PaymentMethodValue
    payment_status: PaymentStatusValue
    notes: str | None = None
    can_cancel: bool
    created_at: datetime
    updated_at: datetime | None = None
    items: list[OrderItemOutput] = Field(default_factory=list)


class OrderSummaryOutput(CamelModel):
    """Compact order row for dashboards."""

    id: int
    customer_name: str
    status: OrderStatusValue
    final_amount: int
    created_at: datetime


class UpdateOrderStatusRequest(CamelModel):
    """Admin request to move an order to another status."""

    status: OrderStatusValue


class CancelOrderResponse(CamelModel):
    """Response after a successful cancellation."""

    message: str = "Order cancelled successfully"
    order: OrderOutput


# =============================================================================
# Promo Code Schemas
# =============================================================================


class ValidatePromoRequest(CamelModel):
    """Preview a promo code against an order total without redeeming it."""

    code: str = Field(min_length=1, max_length=Limits.MAX_PROMO_CODE_LENGTH)
    order_total: int = Field(ge=0)


class PromoValidationOutput(CamelModel):
    """Result of a promo code check. Invalid codes are a normal 200 result."""

    valid: bool
    discount: int | None = None
    message: str


class PromoCodeCreate(CamelModel):
    """Admin request to create a promo code."""

    code: str = Field(min_length=1, max_length=Limits.MAX_PROMO_CODE_LENGTH)
    discount_type: DiscountTypeValue
    discount_value: int = Field(ge=0)
    minimum_order: int = Field(default=0, ge=0)
    max_uses: int | None = Field(default=None, ge=1)
    expires_at: datetime | None = None
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def canonical_code(cls, v: str) -> str:
        code = v.strip().upper()
        if not code:
            raise ValueError("Promo code cannot be blank")
        return code

    @model_validator(mode="after")
    def check_percentage_range(self) -> "PromoCodeCreate":
        if self.discount_type == "percentage" and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return self


class PromoCodeOutput(CamelModel):
    """Promo code as seen by administrators."""

    id: int
    code: str
    discount_type: DiscountTypeValue
    discount_value: int
    minimum_order: int
    max_uses: int | None = None
    used_count: int
    expires_at: datetime | None = None
    is_active: bool
    created_at: datetime


# =============================================================================
# Review Schemas
# =============================================================================


class ReviewCreate(CamelModel):
    """Request to review a menu item."""

    menu_item_id: int = Field(ge=1)
    order_id: int | None = Field(default=None, ge=1)
    rating: int = Field(ge=Limits.MIN_RATING, le=Limits.MAX_RATING)
    comment: str | None = Field(default=None, max_length=Limits.MAX_COMMENT_LENGTH)


class ReviewOutput(CamelModel):
    """A stored review."""

    id: int
    menu_item_id: int
    user_id: int | None = None
    order_id: int | None = None
    rating: int
    comment: str | None = None
    created_at: datetime


# =============================================================================
# Analytics Schemas
# =============================================================================


class PopularItemOutput(CamelModel):
    """Menu item ranked by units ordered."""

    id: int
    name: str
    category: str
    order_count: int
    average_rating: float


class DashboardOutput(CamelModel):
    """Admin dashboard summary."""

    total_revenue: int
    total_orders: int
    orders_by_status: dict[str, int]
    popular_items: list[PopularItemOutput]
    recent_orders: list[OrderSummaryOutput]

"""
HTTP exceptions raised by services and routers.

Each one logs itself on construction (warning level) with whatever
keyword context was passed, then surfaces to the client as
{"message": detail} through the HTTPException handler.

    raise NotFoundError("Menu item", item_id)
    raise PromoCodeError("Promo code has expired", code="SAVE10")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        logger.warning(detail, status_code=status_code, **log_context)
        super().__init__(status_code=status_code, detail=detail, headers=headers)


# 404


class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        super().__init__(
            status.HTTP_404_NOT_FOUND,
            f"{entity} not found",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int | None = None, **log_context: Any):
        super().__init__("Order", order_id, **log_context)


# 403


class ForbiddenError(AppException):
    """Authenticated, but the role is not allowed to do this."""

    def __init__(self, action: str | None = None, **log_context: Any):
        detail = f"Forbidden: not allowed to {action}" if action else "Forbidden: Admin access required"
        super().__init__(status.HTTP_403_FORBIDDEN, detail, action=action, **log_context)


# 400


class ValidationError(AppException):
    """Input that parsed fine but breaks a business rule."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, **log_context)


class MenuItemNotFoundError(ValidationError):
    """
    An order line references an unknown or deleted menu item.
    400 rather than 404: the order request itself is what is invalid.
    """

    def __init__(self, menu_item_id: int, **log_context: Any):
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item {menu_item_id} not found", menu_item_id=menu_item_id, **log_context)


class PromoCodeError(ValidationError):
    def __init__(self, message: str, code: str | None = None, **log_context: Any):
        super().__init__(message, promo_code=code, **log_context)


class InvalidTransitionError(ValidationError):
    def __init__(self, entity: str, from_status: str, to_status: str, **log_context: Any):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid transition from '{from_status}' to '{to_status}' for {entity}",
            entity=entity,
            from_status=from_status,
            to_status=to_status,
            **log_context,
        )


class OrderNotCancellableError(ValidationError):
    """The order has already left 'received'."""

    def __init__(self, order_id: int, current_status: str, **log_context: Any):
        self.current_status = current_status
        super().__init__(
            "Order cannot be cancelled",
            order_id=order_id,
            current_status=current_status,
            **log_context,
        )


# 409


class ConflictError(AppException):
    def __init__(self, detail: str, **log_context: Any):
        super().__init__(status.HTTP_409_CONFLICT, detail, **log_context)


class DuplicateEntityError(ConflictError):
    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        detail = f"{entity} '{identifier}' already exists" if identifier else f"{entity} already exists"
        super().__init__(detail, entity=entity, identifier=identifier, **log_context)

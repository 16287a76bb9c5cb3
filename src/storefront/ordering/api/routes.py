"""FastAPI endpoints for the cart, the shopper's orders and order administration."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.api.deps import admin_user, current_user, optional_user
from storefront.identity.user.user import User
from storefront.ordering.api.schemas import (
    AddOrderItemRequest,
    AddToCartRequest,
    CartResponse,
    CheckoutForm,
    ClearedResponse,
    OrderResponse,
    RemovedResponse,
    UpdateCartItemRequest,
    UpdateOrderDetailsRequest,
    UpdateOrderItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItemQuantity
from storefront.ordering.cart.view import cart_view
from storefront.ordering.order.administration import (
    AddOrderItem,
    RemoveOrderItem,
    UpdateOrderDetails,
    UpdateOrderItem,
    UpdateOrderStatus,
)
from storefront.ordering.order.log_export import export_filename, render_order_log
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder

cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"])


def _order_detail(order_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order, include_logs=True)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def get_cart(user: User | None = Depends(optional_user)) -> CartResponse:
    return CartResponse.from_view(cart_view(user.id if user else None))


@cart_router.post("/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)) -> CartResponse:
    current_domain.process(
        AddToCart(user_id=str(user.id), product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return CartResponse.from_view(cart_view(user.id))


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)
) -> CartResponse:
    current_domain.process(
        UpdateCartItemQuantity(user_id=str(user.id), product_id=product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return CartResponse.from_view(cart_view(user.id))


@cart_router.delete("/items/{product_id}", response_model=RemovedResponse)
async def remove_from_cart(product_id: str, user: User = Depends(current_user)) -> RemovedResponse:
    removed = current_domain.process(
        RemoveFromCart(user_id=str(user.id), product_id=product_id),
        asynchronous=False,
    )
    return RemovedResponse(removed=removed)


@cart_router.delete("", response_model=ClearedResponse)
async def clear_cart(user: User = Depends(current_user)) -> ClearedResponse:
    cleared = current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return ClearedResponse(cleared=cleared)


# ---------------------------------------------------------------------------
# Shopper orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: CheckoutForm, user: User = Depends(current_user)) -> OrderResponse:
    command = PlaceOrder(
        user_id=str(user.id),
        email=body.email,
        phone=body.phone,
        first_name=body.first_name,
        last_name=body.last_name,
        address=body.address,
        city=body.city,
        postal_code=body.postal_code,
        country=body.country,
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_detail(order_id)


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(user: User = Depends(current_user)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_user(user.id)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def my_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != str(user.id):
        raise ObjectNotFoundError(f"Order {order_id} not found")
    return OrderResponse.from_order(order, include_logs=True)


# ---------------------------------------------------------------------------
# Order administration
# ---------------------------------------------------------------------------
@admin_order_router.get("", response_model=list[OrderResponse])
async def all_orders(_: User = Depends(admin_user)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).newest_first()
    return [OrderResponse.from_order(order) for order in orders]


@admin_order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, _: User = Depends(admin_user)) -> OrderResponse:
    return _order_detail(order_id)


@admin_order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, admin: User = Depends(admin_user)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        payment_status=body.payment_status,
        performed_by=admin.email,
    )
    current_domain.process(command, asynchronous=False)
    return _order_detail(order_id)


@admin_order_router.put("/{order_id}/details", response_model=OrderResponse)
async def update_order_details(
    order_id: str, body: UpdateOrderDetailsRequest, admin: User = Depends(admin_user)
) -> OrderResponse:
    command = UpdateOrderDetails(
        order_id=order_id,
        performed_by=admin.email,
        **body.model_dump(exclude_none=True),
    )
    current_domain.process(command, asynchronous=False)
    return _order_detail(order_id)


@admin_order_router.put("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def update_order_item(
    order_id: str, item_id: str, body: UpdateOrderItemRequest, admin: User = Depends(admin_user)
) -> OrderResponse:
    command = UpdateOrderItem(
        order_id=order_id,
        item_id=item_id,
        quantity=body.quantity,
        price=body.price,
        performed_by=admin.email,
    )
    current_domain.process(command, asynchronous=False)
    return _order_detail(order_id)


@admin_order_router.delete("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def remove_order_item(order_id: str, item_id: str, admin: User = Depends(admin_user)) -> OrderResponse:
    current_domain.process(
        RemoveOrderItem(order_id=order_id, item_id=item_id, performed_by=admin.email),
        asynchronous=False,
    )
    return _order_detail(order_id)


@admin_order_router.post("/{order_id}/items", status_code=201, response_model=OrderResponse)
async def add_order_item(
    order_id: str, body: AddOrderItemRequest, admin: User = Depends(admin_user)
) -> OrderResponse:
    command = AddOrderItem(
        order_id=order_id,
        product_id=body.product_id,
        quantity=body.quantity,
        price=body.price,
        performed_by=admin.email,
    )
    current_domain.process(command, asynchronous=False)
    return _order_detail(order_id)


@admin_order_router.get("/{order_id}/log", response_class=PlainTextResponse)
async def export_order_log(order_id: str, _: User = Depends(admin_user)) -> PlainTextResponse:
    """Download the order's audit trail as a text attachment."""
    order = current_domain.repository_for(Order).get(order_id)
    customer = None
    if order.user_id:
        owner = current_domain.repository_for(User)._dao.query.filter(id=order.user_id).all().first
        customer = owner.name if owner else None

    return PlainTextResponse(
        render_order_log(order, customer_name=customer),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(order)}"'},
    )

from fastapi import APIRouter, Depends

from eventhub.api.deps import get_cart, get_current_identity
from eventhub.schemas.auth import Identity
from eventhub.schemas.cart import CartItemCreate
from eventhub.services.cart import CartService

router = APIRouter()

@router.get("")
def list_cart(identity: Identity = Depends(get_current_identity), cart: CartService = Depends(get_cart)):
    return {"success": True, "cartItems": cart.list_items(identity.user_id)}

@router.post("")
def add_to_cart(payload: CartItemCreate, identity: Identity = Depends(get_current_identity), cart: CartService = Depends(get_cart)):
    item = cart.add_item(identity.user_id, payload.event_id, payload.quantity, payload.price_per_ticket)
    return {"success": True, "cartItem": item.to_json()}

@router.delete("/{item_id}")
def remove_from_cart(item_id: str, identity: Identity = Depends(get_current_identity), cart: CartService = Depends(get_cart)):
    cart.remove_item(identity.user_id, item_id)
    return {"success": True, "message": "Item removed from cart"}

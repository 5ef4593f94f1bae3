from eventhub.models.base import Base
from eventhub.models.user import UserModel
from eventhub.models.event import EventModel
from eventhub.models.booking import BookingModel
from eventhub.models.user_session import UserSessionModel
from eventhub.models.activity import ActivityModel
from eventhub.models.cart_item import CartItemModel

__all__ = [
    "Base",
    "UserModel",
    "EventModel",
    "BookingModel",
    "UserSessionModel",
    "ActivityModel",
    "CartItemModel",
]

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from food_ordering.extensions import mongo
from food_ordering.utils.mongo_utils import to_object_id


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls):
        return [s.value for s in cls]


ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.OUT_FOR_DELIVERY},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """Re-applying the current status counts as a valid no-op"""
    return current == new or new in ALLOWED_TRANSITIONS[current]


class Order:
    def __init__(self, *, user: Any, restaurant: Any, deliveryDetails: dict, cartItems: list, totalAmount: float):
        self.user = user
        self.restaurant = restaurant
        self.deliveryDetails = deliveryDetails
        self.cartItems = cartItems
        self.totalAmount = totalAmount
        self.status = OrderStatus.PENDING.value
        self.created_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()

    def save(self):
        """Save Order to database"""
        order_data = {
            "user": self.user,
            "restaurant": self.restaurant,
            "deliveryDetails": self.deliveryDetails,
            "cartItems": self.cartItems,
            "totalAmount": self.totalAmount,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        result = mongo.db.orders.insert_one(order_data)
        order_data["_id"] = result.inserted_id
        return order_data

    @staticmethod
    def find_order_by_id(orderId: str) -> Optional[dict]:
        """Find order by order id"""
        oid = to_object_id(orderId)
        if oid is None:
            return None
        return mongo.db.orders.find_one({"_id": oid})

    @staticmethod
    def find_orders_by_restaurant(restaurantId: Any) -> list:
        """Find orders of a restaurant, newest first"""
        cursor = mongo.db.orders.find({"restaurant": to_object_id(restaurantId)}).sort("created_at", -1)
        return list(cursor)

    @staticmethod
    def find_orders_by_user(userId: Any) -> list:
        """Find orders placed by a user, newest first"""
        cursor = mongo.db.orders.find({"user": to_object_id(userId)}).sort("created_at", -1)
        return list(cursor)

    @staticmethod
    def update_status(orderId: Any, status: str) -> bool:
        result = mongo.db.orders.update_one(
            {"_id": to_object_id(orderId)},
            {"$set": {"status": status, "updated_at": datetime.utcnow()}}
        )
        return result.matched_count > 0

from food_ordering.core.exceptions import BadRequest, NotFound
from food_ordering.models.menu import Menu
from food_ordering.models.order import Order
from food_ordering.models.restaurant import Restaurant
from food_ordering.utils.mongo_utils import to_object_id
from food_ordering.utils.serializers import serialize_doc

DELIVERY_FIELDS = ['name', 'email', 'address', 'city']


class OrderService:

    @staticmethod
    def checkout(user_id, data):
        """Create a pending order, pricing every cart line from the stored menu"""
        restaurant_id = data.get('restaurantId')
        if not restaurant_id:
            raise BadRequest(code="FIELD_REQUIRED", message="restaurantId is required")

        delivery = data.get('deliveryDetails') or {}
        if not isinstance(delivery, dict):
            raise BadRequest(code="INVALID_DELIVERY_DETAILS", message="deliveryDetails must be an object")
        for field in DELIVERY_FIELDS:
            if not delivery.get(field):
                raise BadRequest(code="FIELD_REQUIRED", message=f"deliveryDetails.{field} is required")

        cart_items = data.get('cartItems')
        if not isinstance(cart_items, list) or not cart_items:
            raise BadRequest(code="CART_EMPTY", message="Cart is empty")

        restaurant = Restaurant.find_by_id(restaurant_id)
        if not restaurant:
            raise NotFound(code="RESTAURANT_NOT_FOUND", message="Restaurant not found")

        lines = []
        total = 0.0
        for item in cart_items:
            quantity = item.get('quantity') if isinstance(item, dict) else None
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
                raise BadRequest(code="INVALID_QUANTITY", message="quantity must be a positive integer")

            menu = Menu.find_by_id(item.get('menuId'))
            if not menu or menu["restaurant"] != restaurant["_id"]:
                raise BadRequest(
                    code="INVALID_MENU_ITEM",
                    message=f"Menu item {item.get('menuId')} is not offered by this restaurant"
                )
            lines.append({
                "menuId": menu["_id"],
                "name": menu["name"],
                "image": menu.get("image"),
                "price": menu["price"],
                "quantity": quantity,
            })
            total += menu["price"] * quantity

        order = Order(
            user=to_object_id(user_id),
            restaurant=restaurant["_id"],
            deliveryDetails={field: str(delivery[field]).strip() for field in DELIVERY_FIELDS},
            cartItems=lines,
            totalAmount=round(total, 2),
        )
        return serialize_doc(order.save())

    @staticmethod
    def get_user_orders(user_id):
        orders = Order.find_orders_by_user(user_id)
        restaurant_ids = {order["restaurant"] for order in orders}
        restaurants = {rid: Restaurant.find_by_id(rid) for rid in restaurant_ids}

        result = []
        for order in orders:
            data = serialize_doc(order)
            data["restaurant"] = serialize_doc(restaurants.get(order["restaurant"]))
            result.append(data)
        return result

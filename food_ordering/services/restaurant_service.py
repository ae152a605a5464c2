import json

from flask import current_app
from pymongo.errors import DuplicateKeyError

from food_ordering.core.constants import S3_FOLDER_RESTAURANTS
from food_ordering.core.exceptions import BadRequest, Conflict, Forbidden, NotFound
from food_ordering.models.menu import Menu
from food_ordering.models.order import Order, OrderStatus, can_transition
from food_ordering.models.restaurant import Restaurant
from food_ordering.models.user import User
from food_ordering.utils.aws_utils import delete_images_from_s3, upload_image, validate_image
from food_ordering.utils.serializers import serialize_doc, serialize_user
from food_ordering.utils.validators import clean_str

REQUIRED_FIELDS = ['restaurantName', 'city', 'country', 'deliveryTime']
SCALAR_FIELDS = ['restaurantName', 'city', 'country']


def parse_cuisines(raw):
    """Cuisines arrive as a JSON encoded list of strings in the multipart form"""
    if isinstance(raw, list):
        cuisines = raw
    else:
        try:
            cuisines = json.loads(raw)
        except (TypeError, ValueError):
            raise BadRequest(code="INVALID_CUISINES", message="Invalid cuisines format")
    if not isinstance(cuisines, list) or not all(isinstance(c, str) for c in cuisines):
        raise BadRequest(code="INVALID_CUISINES", message="Invalid cuisines format")
    return [c.strip() for c in cuisines if c.strip()]


def parse_delivery_time(raw):
    try:
        delivery_time = int(raw)
    except (TypeError, ValueError):
        raise BadRequest(code="INVALID_DELIVERY_TIME", message="deliveryTime must be a positive integer")
    if delivery_time <= 0:
        raise BadRequest(code="INVALID_DELIVERY_TIME", message="deliveryTime must be a positive integer")
    return delivery_time


def expand_restaurant(restaurant):
    """Serialize a restaurant with its menu collection populated"""
    data = serialize_doc(restaurant)
    data["menus"] = serialize_doc(Menu.find_by_ids(restaurant.get("menus", [])))
    return data


class RestaurantService:

    @staticmethod
    def create_restaurant(owner_id, form, image):
        if Restaurant.find_by_owner(owner_id):
            raise Conflict(
                code="RESTAURANT_ALREADY_EXISTS",
                message="Restaurant already exists for this user"
            )

        validate_image(image)
        for field in REQUIRED_FIELDS:
            if not form.get(field):
                raise BadRequest(code="FIELD_REQUIRED", message=f"{field} is required")
        if form.get('cuisines') is None:
            raise BadRequest(code="FIELD_REQUIRED", message="cuisines is required")

        names = {field: clean_str(form, field) for field in SCALAR_FIELDS}
        cuisines = parse_cuisines(form.get('cuisines'))
        delivery_time = parse_delivery_time(form.get('deliveryTime'))

        image_url = upload_image(image, S3_FOLDER_RESTAURANTS, owner_id)

        restaurant = Restaurant(
            user=owner_id,
            restaurantName=names["restaurantName"],
            city=names["city"],
            country=names["country"],
            deliveryTime=delivery_time,
            cuisines=cuisines,
            imageUrl=image_url,
        )
        try:
            saved = restaurant.save()
        except DuplicateKeyError:
            # Lost a concurrent create for the same owner
            delete_images_from_s3([image_url])
            raise Conflict(
                code="RESTAURANT_ALREADY_EXISTS",
                message="Restaurant already exists for this user"
            )
        return expand_restaurant(saved)

    @staticmethod
    def get_restaurant(owner_id):
        restaurant = Restaurant.find_by_owner(owner_id)
        if not restaurant:
            raise NotFound(code="RESTAURANT_NOT_FOUND", message="Restaurant not found")
        return expand_restaurant(restaurant)

    @staticmethod
    def update_restaurant(owner_id, form, image=None):
        """Merge update: only supplied fields are overwritten"""
        restaurant = Restaurant.find_by_owner(owner_id)
        if not restaurant:
            raise NotFound(code="RESTAURANT_NOT_FOUND", message="Restaurant not found")

        update_data = {}
        for field in SCALAR_FIELDS:
            value = clean_str(form, field)
            if value:
                update_data[field] = value
        if form.get('deliveryTime'):
            update_data['deliveryTime'] = parse_delivery_time(form['deliveryTime'])
        if 'cuisines' in form:
            update_data['cuisines'] = parse_cuisines(form['cuisines'])

        if image is not None and image.filename:
            validate_image(image)
            update_data['imageUrl'] = upload_image(image, S3_FOLDER_RESTAURANTS, owner_id)

        try:
            Restaurant.update_restaurant(restaurant["_id"], update_data)
        except Exception:
            if 'imageUrl' in update_data:
                delete_images_from_s3([update_data['imageUrl']])
            raise

        old_image = restaurant.get("imageUrl")
        if 'imageUrl' in update_data and old_image:
            result = delete_images_from_s3([old_image])
            if result["errors"]:
                current_app.logger.warning(
                    "DeleteOldRestaurantImageFailed | restaurantId=%s | errors=%s",
                    restaurant["_id"], result["errors"]
                )

        return expand_restaurant(Restaurant.find_by_id(restaurant["_id"]))

    @staticmethod
    def get_restaurant_orders(owner_id):
        restaurant = Restaurant.find_by_owner(owner_id)
        if not restaurant:
            raise NotFound(code="RESTAURANT_NOT_FOUND", message="Restaurant not found")

        orders = Order.find_orders_by_restaurant(restaurant["_id"])
        users = User.find_by_ids({order["user"] for order in orders})
        restaurant_data = serialize_doc(restaurant)

        result = []
        for order in orders:
            data = serialize_doc(order)
            data["restaurant"] = restaurant_data
            data["user"] = serialize_user(users.get(order["user"]))
            result.append(data)
        return result

    @staticmethod
    def update_order_status(owner_id, order_id, status):
        order = Order.find_order_by_id(order_id)
        if not order:
            raise NotFound(code="ORDER_NOT_FOUND", message="Order not found")

        restaurant = Restaurant.find_by_owner(owner_id)
        if not restaurant or order["restaurant"] != restaurant["_id"]:
            raise Forbidden(code="ORDER_NOT_OWNED", message="Order does not belong to your restaurant")

        if not status:
            raise BadRequest(code="STATUS_REQUIRED", message="status is required")
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise BadRequest(
                code="INVALID_STATUS",
                message=f"Invalid status. Allowed statuses: {', '.join(OrderStatus.values())}"
            )

        try:
            current_status = OrderStatus(order["status"])
        except ValueError:
            # Stored status outside the lifecycle, nothing can follow it
            current_status = None
        if current_status is None or not can_transition(current_status, new_status):
            raise Conflict(
                code="INVALID_STATUS_TRANSITION",
                message=f"Cannot change status from {order['status']} to {new_status.value}"
            )

        Order.update_status(order["_id"], new_status.value)
        return new_status.value

    @staticmethod
    def search_restaurants(search_text, search_query, selected_cuisines):
        restaurants = Restaurant.search(search_text, search_query, selected_cuisines)
        return serialize_doc(restaurants)

    @staticmethod
    def get_single_restaurant(restaurant_id):
        restaurant = Restaurant.find_by_id(restaurant_id)
        if not restaurant:
            raise NotFound(code="RESTAURANT_NOT_FOUND", message="Restaurant not found")
        return expand_restaurant(restaurant)

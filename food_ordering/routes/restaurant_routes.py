from flask import Blueprint, current_app, g, jsonify, request

from food_ordering.routes import request_payload
from food_ordering.services.restaurant_service import RestaurantService
from food_ordering.utils.decorators import login_required

restaurant_bp = Blueprint('restaurant', __name__)


@restaurant_bp.route('', methods=['POST'])
@login_required
def create_restaurant():
    """Create the caller's restaurant (multipart, field `image`)"""
    restaurant = RestaurantService.create_restaurant(g.user_id, request_payload(), request.files.get('image'))
    current_app.logger.info(
        "RestaurantCreated | restaurantId=%s | userId=%s",
        restaurant["id"], g.user_id
    )
    return jsonify({
        "success": True,
        "message": "Restaurant created",
        "restaurant": restaurant
    }), 201


@restaurant_bp.route('', methods=['GET'])
@login_required
def get_restaurant():
    restaurant = RestaurantService.get_restaurant(g.user_id)
    return jsonify({"success": True, "restaurant": restaurant}), 200


@restaurant_bp.route('', methods=['PUT'])
@login_required
def update_restaurant():
    """Update the caller's restaurant, replacing the image only when a new one is sent"""
    restaurant = RestaurantService.update_restaurant(g.user_id, request_payload(), request.files.get('image'))
    current_app.logger.info(
        "RestaurantUpdated | restaurantId=%s | userId=%s",
        restaurant["id"], g.user_id
    )
    return jsonify({
        "success": True,
        "message": "Restaurant updated",
        "restaurant": restaurant
    }), 200


@restaurant_bp.route('/order', methods=['GET'])
@login_required
def get_restaurant_orders():
    orders = RestaurantService.get_restaurant_orders(g.user_id)
    return jsonify({"success": True, "orders": orders}), 200


@restaurant_bp.route('/order/<order_id>/status', methods=['PATCH'])
@login_required
def update_order_status(order_id):
    data = request.get_json(silent=True) or {}
    status = RestaurantService.update_order_status(g.user_id, order_id, data.get('status'))
    current_app.logger.info(
        "UpdateOrderStatusSuccess | orderId=%s | status=%s",
        order_id, status
    )
    return jsonify({
        "success": True,
        "status": status,
        "message": "Status updated"
    }), 200


@restaurant_bp.route('/search/', defaults={'search_text': ''}, methods=['GET'])
@restaurant_bp.route('/search/<search_text>', methods=['GET'])
@login_required
def search_restaurant(search_text):
    search_query = request.args.get('searchQuery', '')
    selected_cuisines = [c for c in request.args.get('selectedCuisines', '').split(',') if c]
    restaurants = RestaurantService.search_restaurants(search_text, search_query, selected_cuisines)
    return jsonify({"success": True, "data": restaurants}), 200


@restaurant_bp.route('/<restaurant_id>', methods=['GET'])
def get_single_restaurant(restaurant_id):
    restaurant = RestaurantService.get_single_restaurant(restaurant_id)
    return jsonify({"success": True, "restaurant": restaurant}), 200

from flask import Blueprint, current_app, g, jsonify, request

from food_ordering.services.order_service import OrderService
from food_ordering.utils.decorators import login_required

order_bp = Blueprint('order', __name__)


@order_bp.route('', methods=['GET'])
@login_required
def get_orders():
    orders = OrderService.get_user_orders(g.user_id)
    return jsonify({"success": True, "orders": orders}), 200


@order_bp.route('/checkout', methods=['POST'])
@login_required
def checkout():
    """Place an order for the cart; it starts out pending"""
    data = request.get_json(silent=True) or {}
    order = OrderService.checkout(g.user_id, data)
    current_app.logger.info(
        "PlaceOrderSuccess | userId=%s | orderId=%s | amount=%s",
        g.user_id, order["id"], order["totalAmount"]
    )
    return jsonify({
        "success": True,
        "message": "Order placed",
        "order": order
    }), 201

from flask import Blueprint, current_app, g, jsonify, request

from food_ordering.routes import request_payload
from food_ordering.services.menu_service import MenuService
from food_ordering.utils.decorators import login_required

menu_bp = Blueprint('menu', __name__)


@menu_bp.route('', methods=['POST'])
@login_required
def add_menu():
    """Add a menu item to the caller's restaurant (multipart, field `image`)"""
    menu = MenuService.add_menu(g.user_id, request_payload(), request.files.get('image'))
    current_app.logger.info(
        "MenuAdded | menuId=%s | restaurantId=%s | name=%s",
        menu["id"], menu["restaurant"], menu["name"]
    )
    return jsonify({
        "success": True,
        "message": "Menu added successfully",
        "menu": menu
    }), 201


@menu_bp.route('/<menu_id>', methods=['PUT'])
@login_required
def edit_menu(menu_id):
    menu = MenuService.edit_menu(g.user_id, menu_id, request_payload(), request.files.get('image'))
    current_app.logger.info("MenuUpdated | menuId=%s", menu_id)
    return jsonify({
        "success": True,
        "message": "Menu updated",
        "menu": menu
    }), 200

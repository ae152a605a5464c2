from flask import request


def request_payload():
    """Multipart form for uploads, JSON body otherwise"""
    if request.form:
        return request.form
    return request.get_json(silent=True) or {}


def register_blueprints(app):
    # Import inside function to avoid circular imports
    from food_ordering.routes.user_routes import user_bp
    app.register_blueprint(user_bp, url_prefix="/api/v1/user")

    from food_ordering.routes.restaurant_routes import restaurant_bp
    app.register_blueprint(restaurant_bp, url_prefix="/api/v1/restaurant")

    from food_ordering.routes.menu_routes import menu_bp
    app.register_blueprint(menu_bp, url_prefix="/api/v1/menu")

    from food_ordering.routes.order_routes import order_bp
    app.register_blueprint(order_bp, url_prefix="/api/v1/order")

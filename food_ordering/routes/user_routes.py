from flask import Blueprint, current_app, g, jsonify, request, session

from food_ordering.routes import request_payload
from food_ordering.services.user_service import UserService
from food_ordering.utils.decorators import login_required
from food_ordering.utils.serializers import serialize_user

user_bp = Blueprint('user', __name__)


def start_session(user):
    session.clear()
    session['user_id'] = str(user["_id"])
    session.permanent = True


@user_bp.route('/signup', methods=['POST'])
def signup():
    """User registration endpoint"""
    data = request.get_json(silent=True) or {}
    user = UserService.signup(data)
    start_session(user)
    current_app.logger.info("UserRegistrationSuccess | userId=%s", user["_id"])
    return jsonify({
        "success": True,
        "message": "Account created successfully",
        "user": serialize_user(user)
    }), 201


@user_bp.route('/login', methods=['POST'])
def login():
    """User login endpoint"""
    data = request.get_json(silent=True) or {}
    user = UserService.login(data)
    start_session(user)
    current_app.logger.info("UserLoginSuccess | userId=%s", user["_id"])
    return jsonify({
        "success": True,
        "message": f"Welcome back {user['fullname']}",
        "user": serialize_user(user)
    }), 200


@user_bp.route('/logout', methods=['POST'])
def logout():
    user_id = session.get('user_id')
    session.clear()
    current_app.logger.info("UserLogoutSuccess | userId=%s", user_id)
    return jsonify({"success": True, "message": "Logged out successfully"}), 200


@user_bp.route('/check-auth', methods=['GET'])
@login_required
def check_auth():
    return jsonify({"success": True, "user": serialize_user(g.user)}), 200


@user_bp.route('/verify-email', methods=['POST'])
def verify_email():
    data = request.get_json(silent=True) or {}
    user = UserService.verify_email(data.get('verificationCode'))
    current_app.logger.info("VerifyEmailSuccess | userId=%s", user["_id"])
    return jsonify({
        "success": True,
        "message": "Email verified successfully",
        "user": serialize_user(user)
    }), 200


@user_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    data = request.get_json(silent=True) or {}
    UserService.forgot_password(data.get('email'))
    current_app.logger.info("ForgotPasswordSuccess")
    return jsonify({
        "success": True,
        "message": "Password reset link sent to your email"
    }), 200


@user_bp.route('/reset-password/<token>', methods=['POST'])
def reset_password(token):
    data = request.get_json(silent=True) or {}
    UserService.reset_password(token, data.get('newPassword'))
    current_app.logger.info("ResetPasswordSuccess")
    return jsonify({"success": True, "message": "Password reset successfully"}), 200


@user_bp.route('/profile/update', methods=['PUT'])
@login_required
def update_profile():
    """Update the caller's profile (JSON, or multipart with `profilePicture`)"""
    user = UserService.update_profile(g.user_id, request_payload(), request.files.get('profilePicture'))
    current_app.logger.info("UpdateProfileSuccess | userId=%s", g.user_id)
    return jsonify({
        "success": True,
        "message": "Profile updated successfully",
        "user": serialize_user(user)
    }), 200

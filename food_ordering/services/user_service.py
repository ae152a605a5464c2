from flask import current_app
from itsdangerous import BadSignature, URLSafeTimedSerializer
from pymongo.errors import DuplicateKeyError

from food_ordering.core.constants import (
    RESET_TOKEN_MAX_AGE_SECONDS,
    RESET_TOKEN_SALT,
    S3_FOLDER_PROFILE_PICS,
)
from food_ordering.core.exceptions import BadRequest, Conflict, NotFound, Unauthorized
from food_ordering.models.user import User
from food_ordering.utils import mailer
from food_ordering.utils.aws_utils import upload_image, validate_image
from food_ordering.utils.validators import clean_str

PROFILE_FIELDS = ['fullname', 'contact', 'address', 'city', 'country']


def _reset_serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=RESET_TOKEN_SALT)


def _password_fingerprint(user):
    # Ties a reset token to the current hash so it stops working once used
    return user["password"][-16:]


def _require_valid_password(password, field="password"):
    if not isinstance(password, str):
        raise BadRequest(code="INVALID_FIELD", message=f"{field} must be a string")
    is_valid, message = User.validate_password(password)
    if not is_valid:
        raise BadRequest(code="WEAK_PASSWORD", message=message)


class UserService:

    @staticmethod
    def signup(data):
        for field in ['fullname', 'email', 'password', 'contact']:
            if not data.get(field):
                raise BadRequest(code="FIELD_REQUIRED", message=f"{field} is required")

        email = clean_str(data, 'email').lower()
        if not User.validate_email(email):
            raise BadRequest(code="INVALID_EMAIL", message="Invalid email format")
        _require_valid_password(data['password'])

        if User.find_by_email(email):
            raise Conflict(code="USER_ALREADY_EXISTS", message="User already exists with this email")

        user = User(clean_str(data, 'fullname'), email, data['password'], str(data['contact']).strip())
        try:
            user_id = user.save()
        except DuplicateKeyError:
            raise Conflict(code="USER_ALREADY_EXISTS", message="User already exists with this email")

        mailer.send_verification_email(email, user.verificationToken)
        return User.find_by_id(user_id)

    @staticmethod
    def login(data):
        email = (clean_str(data, 'email') or '').lower()
        password = data.get('password') or ''
        if not email or not password:
            raise BadRequest(code="FIELD_REQUIRED", message="email and password are required")
        if not isinstance(password, str):
            raise BadRequest(code="INVALID_FIELD", message="password must be a string")

        user = User.find_by_email(email)
        if not user or not User.check_password(user['password'], password):
            raise Unauthorized(code="INVALID_CREDENTIALS", message="Incorrect email or password")

        User.update_last_login(user["_id"])
        return User.find_by_id(user["_id"])

    @staticmethod
    def verify_email(code):
        if not code:
            raise BadRequest(code="FIELD_REQUIRED", message="verificationCode is required")
        user = User.find_by_verification_code(str(code).strip())
        if not user:
            raise BadRequest(code="INVALID_VERIFICATION_CODE", message="Invalid or expired verification code")

        User.update_user(
            user["_id"],
            {"isVerified": True},
            unset_fields=("verificationToken", "verificationTokenExpiresAt")
        )
        mailer.send_welcome_email(user["email"], user["fullname"])
        return User.find_by_id(user["_id"])

    @staticmethod
    def forgot_password(email):
        email = str(email or '').lower().strip()
        if not email:
            raise BadRequest(code="FIELD_REQUIRED", message="email is required")
        user = User.find_by_email(email)
        if not user:
            raise NotFound(code="USER_NOT_FOUND", message="User doesn't exist")

        token = _reset_serializer().dumps({"uid": str(user["_id"]), "pw": _password_fingerprint(user)})
        reset_url = f"{current_app.config['CLIENT_URL'].rstrip('/')}/resetpassword/{token}"
        mailer.send_password_reset_email(email, reset_url)
        return token

    @staticmethod
    def reset_password(token, new_password):
        try:
            payload = _reset_serializer().loads(token, max_age=RESET_TOKEN_MAX_AGE_SECONDS)
        except BadSignature:
            raise BadRequest(code="INVALID_RESET_TOKEN", message="Invalid or expired reset token")

        user = User.find_by_id(payload.get("uid"))
        if not user or payload.get("pw") != _password_fingerprint(user):
            raise BadRequest(code="INVALID_RESET_TOKEN", message="Invalid or expired reset token")

        if not new_password:
            raise BadRequest(code="FIELD_REQUIRED", message="newPassword is required")
        _require_valid_password(new_password, field="newPassword")

        User.update_user(user["_id"], {"password": User.hash_password(new_password)})
        mailer.send_reset_success_email(user["email"])

    @staticmethod
    def update_profile(user_id, data, profile_picture=None):
        """Merge update of the profile fields present in the payload"""
        update_data = {}
        for field in PROFILE_FIELDS:
            if field in data and data[field]:
                update_data[field] = str(data[field]).strip()

        if data.get('email'):
            email = str(data['email']).lower().strip()
            if not User.validate_email(email):
                raise BadRequest(code="INVALID_EMAIL", message="Invalid email format")
            existing = User.find_by_email(email)
            if existing and existing["_id"] != user_id:
                raise Conflict(code="EMAIL_TAKEN", message="Email is already in use")
            update_data['email'] = email

        if profile_picture is not None and profile_picture.filename:
            validate_image(profile_picture, field="profilePicture")
            update_data['profilePicture'] = upload_image(profile_picture, S3_FOLDER_PROFILE_PICS, user_id)

        try:
            User.update_user(user_id, update_data)
        except DuplicateKeyError:
            raise Conflict(code="EMAIL_TAKEN", message="Email is already in use")
        return User.find_by_id(user_id)

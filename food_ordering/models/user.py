from datetime import datetime, timedelta
import re
import secrets

from food_ordering.core.constants import VERIFICATION_CODE_TTL_HOURS
from food_ordering.extensions import mongo, bcrypt
from food_ordering.utils.mongo_utils import to_object_id


class User:
    def __init__(self, fullname, email, password, contact):
        self.fullname = fullname
        self.email = email
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")
        self.contact = contact
        self.address = "Update your address"
        self.city = "Update your city"
        self.country = "Update your country"
        self.profilePicture = ""
        self.admin = False
        self.isVerified = False
        self.verificationToken = User.generate_verification_code()
        self.verificationTokenExpiresAt = datetime.utcnow() + timedelta(hours=VERIFICATION_CODE_TTL_HOURS)
        self.lastLogin = datetime.utcnow()
        self.created_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()

    def save(self):
        """Save user to database"""
        user_data = {
            "fullname": self.fullname,
            "email": self.email,
            "password": self.password,
            "contact": self.contact,
            "address": self.address,
            "city": self.city,
            "country": self.country,
            "profilePicture": self.profilePicture,
            "admin": self.admin,
            "isVerified": self.isVerified,
            "verificationToken": self.verificationToken,
            "verificationTokenExpiresAt": self.verificationTokenExpiresAt,
            "lastLogin": self.lastLogin,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        result = mongo.db.users.insert_one(user_data)
        return result.inserted_id

    @staticmethod
    def find_by_email(email):
        """Find user by email"""
        return mongo.db.users.find_one({"email": email})

    @staticmethod
    def find_by_id(user_id):
        """Find user by ID"""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return mongo.db.users.find_one({"_id": oid})

    @staticmethod
    def find_by_ids(user_ids):
        """Find users by ids, keyed by _id"""
        users = mongo.db.users.find({"_id": {"$in": list(user_ids)}})
        return {user["_id"]: user for user in users}

    @staticmethod
    def find_by_verification_code(code):
        """Find user holding an unexpired verification code"""
        return mongo.db.users.find_one({
            "verificationToken": code,
            "verificationTokenExpiresAt": {"$gt": datetime.utcnow()},
        })

    @staticmethod
    def generate_verification_code():
        return f"{secrets.randbelow(1_000_000):06d}"

    @staticmethod
    def validate_email(email):
        """Validate email format"""
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return re.match(pattern, email) is not None

    @staticmethod
    def validate_password(password):
        """Validate password strength"""
        if len(password) < 8:
            return False, "Password must be at least 8 characters long"
        if not re.search(r'[A-Z]', password):
            return False, "Password must contain at least one uppercase letter"
        if not re.search(r'[a-z]', password):
            return False, "Password must contain at least one lowercase letter"
        if not re.search(r'\d', password):
            return False, "Password must contain at least one number"
        return True, "Password is valid"

    @staticmethod
    def hash_password(password):
        return bcrypt.generate_password_hash(password).decode("utf-8")

    @staticmethod
    def check_password(hashed_password, password):
        """Check if password matches hash"""
        return bcrypt.check_password_hash(hashed_password, password)

    @staticmethod
    def update_user(user_id, update_data, unset_fields=()):
        """Update user data"""
        update_data['updated_at'] = datetime.utcnow()
        update = {"$set": update_data}
        if unset_fields:
            update["$unset"] = {field: "" for field in unset_fields}
        result = mongo.db.users.update_one({"_id": to_object_id(user_id)}, update)
        return result.matched_count > 0

    @staticmethod
    def update_last_login(user_id):
        """Update lastLogin for user"""
        result = mongo.db.users.update_one(
            {"_id": to_object_id(user_id)},
            {"$set": {"lastLogin": datetime.utcnow()}}
        )
        return result.modified_count > 0

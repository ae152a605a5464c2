import boto3
from botocore.config import Config
from flask import current_app
from flask_pymongo import PyMongo
from flask_bcrypt import Bcrypt

mongo = PyMongo()
bcrypt = Bcrypt()


def init_s3(app):
    """Initialize AWS S3 client with Flask app context."""
    try:
        s3_client = boto3.client(
            "s3",
            aws_access_key_id=app.config.get("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=app.config.get("AWS_SECRET_ACCESS_KEY"),
            region_name=app.config.get("AWS_REGION"),
            config=Config(
                connect_timeout=app.config["IMAGE_UPLOAD_CONNECT_TIMEOUT"],
                read_timeout=app.config["IMAGE_UPLOAD_READ_TIMEOUT"],
                retries={"max_attempts": 2},
            ),
        )
        app.logger.info("AWS S3 client initialized successfully")
    except Exception as e:
        app.logger.error(f"Failed to initialize S3 client: {e}")
        s3_client = None
    app.extensions["s3"] = s3_client


def get_s3_client():
    return current_app.extensions.get("s3")


def ensure_indexes(db):
    """Unique indexes backing the one-restaurant-per-owner and email invariants"""
    db.users.create_index("email", unique=True)
    db.restaurants.create_index("user", unique=True)
    db.menus.create_index("restaurant")
    db.orders.create_index([("restaurant", 1), ("created_at", -1)])
    db.orders.create_index("user")

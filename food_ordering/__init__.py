from datetime import timedelta
from io import StringIO
import os

from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

# Extensions
from food_ordering.extensions import mongo, bcrypt, init_s3, ensure_indexes


def load_config(app):
    # Load .env (DOTENV_FILE may hold the file content, e.g. from a hosting secret)
    dotenv_content = os.environ.get("DOTENV_FILE")
    if dotenv_content:
        load_dotenv(stream=StringIO(dotenv_content))
    else:
        load_dotenv()

    app.config["MONGO_URI"] = os.getenv("MONGODB_URI", "mongodb://localhost:27017/food_ordering")
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "your-secret-key-change-in-production")
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=1)
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["CLIENT_URL"] = os.getenv("CLIENT_URL", "http://localhost:5173")
    app.config["CLIENT_DIST_DIR"] = os.getenv("CLIENT_DIST_DIR", os.path.join(os.getcwd(), "client", "dist"))
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024

    app.config["AWS_ACCESS_KEY_ID"] = os.getenv("AWS_ACCESS_KEY_ID")
    app.config["AWS_SECRET_ACCESS_KEY"] = os.getenv("AWS_SECRET_ACCESS_KEY")
    app.config["AWS_REGION"] = os.getenv("AWS_REGION", "ap-south-1")
    app.config["AWS_S3_BUCKET_NAME"] = os.getenv("AWS_S3_BUCKET_NAME")
    app.config["IMAGE_UPLOAD_CONNECT_TIMEOUT"] = float(os.getenv("IMAGE_UPLOAD_CONNECT_TIMEOUT", "5"))
    app.config["IMAGE_UPLOAD_READ_TIMEOUT"] = float(os.getenv("IMAGE_UPLOAD_READ_TIMEOUT", "30"))

    app.config["MAIL_API_URL"] = os.getenv("MAIL_API_URL")
    app.config["MAIL_API_TOKEN"] = os.getenv("MAIL_API_TOKEN")
    app.config["MAIL_SENDER"] = os.getenv("MAIL_SENDER", "no-reply@food-ordering.local")
    app.config["MAIL_API_TIMEOUT"] = float(os.getenv("MAIL_API_TIMEOUT", "10"))

    app.config["BCRYPT_LOG_ROUNDS"] = int(os.getenv("BCRYPT_LOG_ROUNDS", "12"))
    app.config["LOG_DIR"] = os.getenv("LOG_DIR", "logs")
    app.config["LOG_JSON"] = os.getenv("LOG_JSON", "false").lower() == "true"
    app.config["CREATE_INDEXES"] = True


def create_app(test_config=None):
    app = Flask(__name__)

    # Configuration
    load_config(app)
    if test_config:
        app.config.update(test_config)

    if not app.testing:
        from food_ordering.utils.logging_config import setup_logging
        setup_logging(app)

    # Initialize extensions
    mongo.init_app(app)
    bcrypt.init_app(app)
    init_s3(app)

    if app.config["CREATE_INDEXES"]:
        ensure_indexes(mongo.db)

    # Enable CORS
    CORS(app, origins=[app.config["CLIENT_URL"]], supports_credentials=True)

    from food_ordering.routes import register_blueprints
    register_blueprints(app)

    from food_ordering.utils.routes import register_routes
    register_routes(app)

    return app

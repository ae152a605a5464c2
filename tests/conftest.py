from unittest.mock import MagicMock

import mongomock
import pytest

from food_ordering import create_app
from food_ordering.extensions import ensure_indexes, mongo
from tests.utils.request_utils import checkout, create_restaurant, image_file, signup


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "MONGO_URI": "mongodb://localhost:27017/food_ordering_test",
        "SECRET_KEY": "test-secret",
        "BCRYPT_LOG_ROUNDS": 4,
        "CREATE_INDEXES": False,
        "AWS_S3_BUCKET_NAME": "test-bucket",
        "AWS_REGION": "us-east-1",
        "MAIL_API_URL": None,
        "CLIENT_URL": "http://localhost:5173",
        "CLIENT_DIST_DIR": str(tmp_path / "dist"),
    })
    mongo.cx = mongomock.MongoClient()
    mongo.db = mongo.cx["food_ordering_test"]
    ensure_indexes(mongo.db)
    app.extensions["s3"] = MagicMock()
    yield app


@pytest.fixture
def db(app):
    return mongo.db


@pytest.fixture
def s3(app):
    return app.extensions["s3"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def owner(app):
    """A logged-in client that owns no restaurant yet"""
    owner_client = app.test_client()
    owner_client.user = signup(owner_client, "owner@example.com", fullname="Olivia Owner")
    return owner_client


@pytest.fixture
def customer(app):
    customer_client = app.test_client()
    customer_client.user = signup(customer_client, "customer@example.com", fullname="Carl Customer")
    return customer_client


@pytest.fixture
def restaurant(owner):
    response = create_restaurant(owner)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["restaurant"]


@pytest.fixture
def menu(owner, restaurant):
    response = owner.post(
        "/api/v1/menu",
        data={
            "name": "Croissant",
            "description": "Butter croissant",
            "price": "3.5",
            "image": image_file("croissant.jpg"),
        },
        content_type="multipart/form-data",
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["menu"]


@pytest.fixture
def order(customer, restaurant, menu):
    response = checkout(customer, restaurant["id"], menu["id"])
    assert response.status_code == 201, response.get_json()
    return response.get_json()["order"]

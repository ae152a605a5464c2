from datetime import datetime

import pytest
from bson import ObjectId

from food_ordering.models.restaurant import Restaurant


def add_restaurant(db, name, city, country, cuisines):
    db.restaurants.insert_one({
        "user": ObjectId(),
        "restaurantName": name,
        "city": city,
        "country": country,
        "deliveryTime": 25,
        "cuisines": cuisines,
        "imageUrl": "https://example.com/image.png",
        "menus": [],
        "created_at": datetime.utcnow(),
        "updated_at": datetime.utcnow(),
    })


@pytest.fixture
def seeded(db):
    add_restaurant(db, "Sunrise Cafe", "Paris", "France", ["French", "Breakfast"])
    add_restaurant(db, "Sunset Grill", "Paris", "France", ["Italian", "Grill"])
    add_restaurant(db, "Night Diner", "Tokyo", "Japan", ["Japanese"])


def search(client, text="", **params):
    response = client.get(f"/api/v1/restaurant/search/{text}", query_string=params)
    assert response.status_code == 200
    return sorted(r["restaurantName"] for r in response.get_json()["data"])


def test_search_text_matches_city_case_insensitively(customer, seeded):
    assert search(customer, "paris") == ["Sunrise Cafe", "Sunset Grill"]


def test_selected_cuisines_filter(customer, seeded):
    assert search(customer, selectedCuisines="Italian") == ["Sunset Grill"]


def test_search_text_matches_partial_name(customer, seeded):
    assert search(customer, "sun") == ["Sunrise Cafe", "Sunset Grill"]


def test_search_query_matches_cuisine(customer, seeded):
    assert search(customer, searchQuery="japan") == ["Night Diner"]


def test_text_and_cuisines_are_combined(customer, seeded):
    assert search(customer, "paris", selectedCuisines="French,Japanese") == ["Sunrise Cafe"]


def test_empty_search_returns_everything(customer, seeded):
    assert search(customer) == ["Night Diner", "Sunrise Cafe", "Sunset Grill"]


def test_regex_characters_are_literal(customer, seeded):
    assert search(customer, "(") == []


def test_search_requires_login(client, seeded):
    assert client.get("/api/v1/restaurant/search/paris").status_code == 401


def test_build_search_query_shape():
    query = Restaurant.build_search_query("paris", "", ["Italian"])

    assert query["cuisines"] == {"$in": ["Italian"]}
    assert {"city": {"$regex": "paris", "$options": "i"}} in query["$or"]
    assert len(query["$or"]) == 3
    assert Restaurant.build_search_query("", "", []) == {}

from datetime import datetime
import re

from food_ordering.extensions import mongo
from food_ordering.utils.mongo_utils import to_object_id


class Restaurant:
    def __init__(self, user, restaurantName, city, country, deliveryTime, cuisines, imageUrl):
        self.user = user
        self.restaurantName = restaurantName
        self.city = city
        self.country = country
        self.deliveryTime = deliveryTime
        self.cuisines = cuisines
        self.imageUrl = imageUrl
        self.menus = []
        self.created_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()

    def to_document(self):
        return {
            "user": self.user,
            "restaurantName": self.restaurantName,
            "city": self.city,
            "country": self.country,
            "deliveryTime": self.deliveryTime,
            "cuisines": self.cuisines,
            "imageUrl": self.imageUrl,
            "menus": self.menus,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def save(self):
        """Save restaurant to database, raises DuplicateKeyError if the owner already has one"""
        restaurant_data = self.to_document()
        result = mongo.db.restaurants.insert_one(restaurant_data)
        restaurant_data["_id"] = result.inserted_id
        return restaurant_data

    @staticmethod
    def find_by_id(restaurant_id):
        """Find restaurant by ID"""
        oid = to_object_id(restaurant_id)
        if oid is None:
            return None
        return mongo.db.restaurants.find_one({"_id": oid})

    @staticmethod
    def find_by_owner(user_id):
        """Find the restaurant owned by a user"""
        return mongo.db.restaurants.find_one({"user": to_object_id(user_id)})

    @staticmethod
    def build_search_query(search_text, search_query, selected_cuisines):
        """
        Build the search filter:
          - searchText matches restaurantName, city or country
          - searchQuery matches restaurantName or a cuisine
          - selectedCuisines restricts to restaurants carrying any of them
        Matches are case-insensitive substrings.
        """
        query = {}
        or_conditions = []

        if search_text:
            pattern = re.escape(search_text)
            or_conditions.extend([
                {"restaurantName": {"$regex": pattern, "$options": "i"}},
                {"city": {"$regex": pattern, "$options": "i"}},
                {"country": {"$regex": pattern, "$options": "i"}},
            ])

        if search_query:
            pattern = re.escape(search_query)
            or_conditions.extend([
                {"restaurantName": {"$regex": pattern, "$options": "i"}},
                {"cuisines": {"$regex": pattern, "$options": "i"}},
            ])

        if or_conditions:
            query["$or"] = or_conditions
        if selected_cuisines:
            query["cuisines"] = {"$in": list(selected_cuisines)}
        return query

    @staticmethod
    def search(search_text, search_query, selected_cuisines):
        query = Restaurant.build_search_query(search_text, search_query, selected_cuisines)
        return list(mongo.db.restaurants.find(query))

    @staticmethod
    def update_restaurant(restaurant_id, update_data):
        """Update restaurant data"""
        update_data['updated_at'] = datetime.utcnow()
        result = mongo.db.restaurants.update_one(
            {"_id": to_object_id(restaurant_id)},
            {"$set": update_data}
        )
        return result.matched_count > 0

    @staticmethod
    def add_menu(restaurant_id, menu_id):
        result = mongo.db.restaurants.update_one(
            {"_id": to_object_id(restaurant_id)},
            {"$push": {"menus": menu_id}, "$set": {"updated_at": datetime.utcnow()}}
        )
        return result.modified_count > 0

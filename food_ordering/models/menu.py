from datetime import datetime

from food_ordering.extensions import mongo
from food_ordering.utils.mongo_utils import to_object_id


class Menu:
    def __init__(self, restaurant, name, description, price, image):
        self.restaurant = restaurant
        self.name = name
        self.description = description
        self.price = price
        self.image = image
        self.created_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()

    def save(self):
        """Save Menu to database"""
        menu_data = {
            "restaurant": self.restaurant,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        result = mongo.db.menus.insert_one(menu_data)
        menu_data["_id"] = result.inserted_id
        return menu_data

    @staticmethod
    def find_by_id(menu_id):
        """Find menu by menu id"""
        oid = to_object_id(menu_id)
        if oid is None:
            return None
        return mongo.db.menus.find_one({"_id": oid})

    @staticmethod
    def find_by_ids(menu_ids):
        """Find menus by ids, newest first"""
        cursor = mongo.db.menus.find({"_id": {"$in": list(menu_ids)}}).sort("created_at", -1)
        return list(cursor)

    @staticmethod
    def update_menu(menu_id, update_data):
        """Update menu data"""
        update_data['updated_at'] = datetime.utcnow()
        result = mongo.db.menus.update_one(
            {"_id": to_object_id(menu_id)},
            {"$set": update_data}
        )
        return result.matched_count > 0

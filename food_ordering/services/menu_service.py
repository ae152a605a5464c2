from food_ordering.core.constants import S3_FOLDER_MENUS
from food_ordering.core.exceptions import BadRequest, Forbidden, NotFound
from food_ordering.models.menu import Menu
from food_ordering.models.restaurant import Restaurant
from food_ordering.utils.aws_utils import upload_image, validate_image
from food_ordering.utils.serializers import serialize_doc
from food_ordering.utils.validators import clean_str


def parse_price(raw):
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise BadRequest(code="INVALID_PRICE", message="price must be a number")
    if price < 0:
        raise BadRequest(code="INVALID_PRICE", message="price cannot be negative")
    return price


class MenuService:

    @staticmethod
    def add_menu(owner_id, form, image):
        restaurant = Restaurant.find_by_owner(owner_id)
        if not restaurant:
            raise NotFound(code="RESTAURANT_NOT_FOUND", message="Restaurant not found")

        validate_image(image)
        for field in ['name', 'description', 'price']:
            if not form.get(field):
                raise BadRequest(code="FIELD_REQUIRED", message=f"{field} is required")
        price = parse_price(form['price'])
        name = clean_str(form, 'name')
        description = clean_str(form, 'description')

        image_url = upload_image(image, S3_FOLDER_MENUS, restaurant["_id"])
        menu = Menu(
            restaurant=restaurant["_id"],
            name=name,
            description=description,
            price=price,
            image=image_url,
        )
        saved = menu.save()
        Restaurant.add_menu(restaurant["_id"], saved["_id"])
        return serialize_doc(saved)

    @staticmethod
    def edit_menu(owner_id, menu_id, form, image=None):
        menu = Menu.find_by_id(menu_id)
        if not menu:
            raise NotFound(code="MENU_NOT_FOUND", message="Menu not found")

        restaurant = Restaurant.find_by_owner(owner_id)
        if not restaurant or menu["restaurant"] != restaurant["_id"]:
            raise Forbidden(code="MENU_NOT_OWNED", message="Menu does not belong to your restaurant")

        update_data = {}
        for field in ['name', 'description']:
            value = clean_str(form, field)
            if value:
                update_data[field] = value
        if form.get('price'):
            update_data['price'] = parse_price(form['price'])
        if image is not None and image.filename:
            validate_image(image)
            update_data['image'] = upload_image(image, S3_FOLDER_MENUS, restaurant["_id"])

        Menu.update_menu(menu["_id"], update_data)
        return serialize_doc(Menu.find_by_id(menu["_id"]))

"""
Custom column types
"""

from sqlalchemy.types import Text, TypeDecorator

from app.schemas.menu import Menu, decode_menu, encode_menu

class MenuType(TypeDecorator):
    """Stores a Menu as JSON text; the only place menus are (de)serialized"""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, dict):
            value = Menu(**value)
        return encode_menu(value)

    def process_result_value(self, value, dialect):
        return decode_menu(value)

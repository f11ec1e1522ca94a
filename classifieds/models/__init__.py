from .schemas import Country, Currency, Item, PhoneNumber

__all__ = [
    "Country",
    "Currency",
    "Item",
    "PhoneNumber",
]

"""Data-access layer.

Two persistence strategies live side by side:
- ORM DAOs (countries, currencies, phone numbers) built on SQLAlchemy sessions
- a hand-written SQL DAO for items built on an SQLAlchemy engine

Usage:
    from classifieds.dao import country_dao, item_dao

    country = country_dao.get_by_name("Belarus")
    items = item_dao.items_with_similar_name("bicycle")
"""

from classifieds.dao.country import OrmCountryDao, country_dao
from classifieds.dao.currency import CurrencyDao, currency_dao
from classifieds.dao.exceptions import (
    DaoException,
    DeleteException,
    FetchException,
    StoreException,
    UpdateException,
)
from classifieds.dao.item import SqlItemDao, item_dao
from classifieds.dao.orm import OrmDao
from classifieds.dao.phone_number import PhoneNumberDao, phone_number_dao
from classifieds.dao.similar_names import create_similar_strings

__all__ = [
    "OrmDao",
    "OrmCountryDao",
    "country_dao",
    "CurrencyDao",
    "currency_dao",
    "PhoneNumberDao",
    "phone_number_dao",
    "SqlItemDao",
    "item_dao",
    "create_similar_strings",
    "DaoException",
    "FetchException",
    "StoreException",
    "UpdateException",
    "DeleteException",
]

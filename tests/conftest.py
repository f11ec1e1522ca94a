#!/usr/bin/env python
"""
pytest configuration file

This file contains shared fixtures for all tests.
"""

import os

# Must be set before classifieds.settings is imported
os.environ.setdefault("CLASSIFIEDS_ENVIRONMENT", "test")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from classifieds.dao import CurrencyDao, OrmCountryDao, PhoneNumberDao, SqlItemDao  # noqa: E402
from classifieds.db import Base, CountryModel, CurrencyModel, PhoneNumberModel  # noqa: E402
from classifieds.db.mysql import build_engine, build_session_factory  # noqa: E402
from classifieds.models import Country, Currency, Item, PhoneNumber  # noqa: E402


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite database with the full schema."""
    engine = build_engine("sqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest.fixture
def country_dao(session_factory) -> OrmCountryDao:
    return OrmCountryDao(session_factory)


@pytest.fixture
def currency_dao(session_factory) -> CurrencyDao:
    return CurrencyDao(session_factory)


@pytest.fixture
def phone_number_dao(session_factory) -> PhoneNumberDao:
    return PhoneNumberDao(session_factory)


@pytest.fixture
def item_dao(db_engine) -> SqlItemDao:
    return SqlItemDao(db_engine)


@pytest.fixture
def currencies(currency_dao) -> dict[str, CurrencyModel]:
    """USD, EUR and BYN stored with ids 1, 2, 3."""
    stored = {}
    for name in ("USD", "EUR", "BYN"):
        currency = CurrencyModel(name=name)
        currency_dao.save(currency)
        stored[name] = currency
    return stored


@pytest.fixture
def phone_numbers(phone_number_dao) -> dict[str, PhoneNumberModel]:
    stored = {}
    for number in ("+375291234567", "+15550100"):
        phone = PhoneNumberModel(number=number)
        phone_number_dao.save(phone)
        stored[number] = phone
    return stored


@pytest.fixture
def belarus(country_dao, currencies) -> CountryModel:
    country = CountryModel(name="Belarus", currencies=[currencies["BYN"], currencies["USD"]])
    country_dao.save(country)
    return country


@pytest.fixture
def sample_item(currencies, phone_numbers, belarus) -> Item:
    """Unsaved item referencing the seeded currency, phone number and country."""
    return Item(
        name="Mountain bike",
        amount=2,
        price_for_one=Decimal("349.99"),
        currency=Currency(name="USD"),
        image_url="https://img.example.com/bike.png",
        description="Barely used, 21 gears",
        put_up_for_sale=date(2024, 5, 17),
        phone_number=PhoneNumber(number="+375291234567"),
        country=Country(name="Belarus"),
    )

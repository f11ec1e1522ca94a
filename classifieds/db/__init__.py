"""Database module for the classifieds data-access layer.

Components:
- models: ORM entities mapped onto the is_* tables
- mysql: engine, session factory and schema bootstrap
"""

from classifieds.db.models import (
    Base,
    CountryModel,
    CurrencyModel,
    ItemModel,
    PhoneNumberModel,
    country_to_currency,
)
from classifieds.db.mysql import (
    SessionLocal,
    build_engine,
    build_session_factory,
    check_connection,
    close_db,
    engine,
    get_db_session,
    init_db,
)

__all__ = [
    # Connection
    "engine",
    "SessionLocal",
    "build_engine",
    "build_session_factory",
    "get_db_session",
    "init_db",
    "close_db",
    "check_connection",
    # Models
    "Base",
    "CountryModel",
    "CurrencyModel",
    "ItemModel",
    "PhoneNumberModel",
    "country_to_currency",
]

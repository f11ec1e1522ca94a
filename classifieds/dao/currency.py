"""ORM DAO for currencies."""

from sqlalchemy.orm import sessionmaker

from classifieds.dao.orm import OrmDao
from classifieds.db.models import Currency


class CurrencyDao(OrmDao[Currency]):
    """DAO for Currency entity operations."""

    entity_name = "currency"

    def __init__(self, session_factory: sessionmaker | None = None):
        super().__init__(Currency, session_factory)


# Singleton instance
currency_dao = CurrencyDao()

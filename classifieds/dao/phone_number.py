"""ORM DAO for phone numbers."""

from sqlalchemy.orm import sessionmaker

from classifieds.dao.orm import OrmDao
from classifieds.db.models import PhoneNumber


class PhoneNumberDao(OrmDao[PhoneNumber]):
    """DAO for PhoneNumber entity operations."""

    entity_name = "phone number"

    def __init__(self, session_factory: sessionmaker | None = None):
        super().__init__(PhoneNumber, session_factory)


# Singleton instance
phone_number_dao = PhoneNumberDao()

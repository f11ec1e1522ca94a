"""ORM DAO for countries and the currencies they accept."""

from sqlalchemy import delete, select, text
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from classifieds.dao.exceptions import DeleteException, FetchException, StoreException
from classifieds.dao.orm import OrmDao, require
from classifieds.db.models import Country, Currency
from classifieds.utils import get_logger

logger = get_logger(__name__)

INSERT_COUNTRY_SQL = text("INSERT INTO is_country(country_name) VALUES (:country_name)")

INSERT_COUNTRY_TO_CURRENCY_SQL = text(
    "INSERT INTO is_country_to_currency(country_id, currency_id) VALUES ("
    "(SELECT country_id FROM is_country WHERE country_name = :country_name), "
    "(SELECT currency_id FROM is_currency WHERE currency_name = :currency_name))"
)


class OrmCountryDao(OrmDao[Country]):
    """DAO for Country entity operations.

    Not thread-safe: ``save`` writes the generated ID back onto the country
    passed in.
    """

    entity_name = "country"

    def __init__(self, session_factory: sessionmaker | None = None):
        super().__init__(Country, session_factory)

    def save_ignore_id(self, country: Country) -> int:
        """Insert the country and its currency links under a generated ID.

        Currencies are matched by name and must already exist. The inserts run
        in one transaction which is rolled back if any of them fails.

        Returns:
            The generated country ID

        Raises:
            StoreException: If any insert fails
        """
        require(country, self.entity_name)
        params = {"country_name": country.name}
        try:
            with self._session_factory() as session:
                transaction = session.begin()
                try:
                    country_id = session.execute(INSERT_COUNTRY_SQL, params).lastrowid
                    for currency in country.currencies:
                        session.execute(INSERT_COUNTRY_TO_CURRENCY_SQL, {**params, "currency_name": currency.name})
                except SQLAlchemyError as e:
                    transaction.rollback()
                    logger.error(f"Rolled back insert of country {country.name!r}: {e}")
                    raise StoreException(f"Failed to save country {country.name!r}") from e
                transaction.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save country {country.name!r}: {e}")
            raise StoreException(f"Failed to save country {country.name!r}") from e
        logger.debug(f"Saved country #{country_id} {country.name!r} with {len(country.currencies)} currencies")
        return country_id

    def get_by_name(self, country_name: str) -> Country:
        """Get country by its exact (case-sensitive) name.

        Raises:
            FetchException: If the read fails or no country has this name
        """
        require(country_name, "country_name")
        try:
            with self._session_factory() as session, session.begin():
                stmt = select(Country).where(Country.name == country_name)
                out = session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch country {country_name!r}: {e}")
            raise FetchException(f"Failed to fetch country with name = {country_name}") from e
        if out is None:
            raise FetchException(f"No such country with name = {country_name}")
        return out

    def delete_by_name(self, country_name: str) -> None:
        """Delete the country with this name; a missing name is not an error.

        Raises:
            DeleteException: If the delete fails
        """
        require(country_name, "country_name")
        try:
            with self._session_factory() as session, session.begin():
                session.execute(delete(Country).where(Country.name == country_name))
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete country {country_name!r}: {e}")
            raise DeleteException(f"Failed to delete country with name = {country_name}") from e

    def _copy_relationships(self, session: Session, source: Country, target: Country) -> None:
        # link stored currencies only, their rows are never written through a country
        target.currencies = [self._stored_currency(session, currency) for currency in source.currencies]

    def _stored_currency(self, session: Session, currency: Currency) -> Currency:
        """Stored currency by ID, or by name when the currency carries no ID."""
        if currency.id is not None:
            stored = session.get(Currency, currency.id)
        else:
            stored = session.execute(select(Currency).where(Currency.name == currency.name)).scalar_one_or_none()
        if stored is None:
            raise NoResultFound(f"No such currency {currency.id if currency.id is not None else currency.name!r}")
        return stored


# Singleton instance
country_dao = OrmCountryDao()

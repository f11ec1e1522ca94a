"""
SQL DAO for items.

Every statement is hand-written and parameterized. Foreign keys are resolved
inside the statement from the currency name, phone number and country name
carried by the item, and rows are mapped back to ``Item`` domain models with
their nested currency, phone number and country.
"""

from sqlalchemy import BigInteger, Date, Integer, Numeric, bindparam, text
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from classifieds.dao.exceptions import DeleteException, FetchException, StoreException, UpdateException
from classifieds.dao.orm import require, require_preset_id
from classifieds.dao.similar_names import ESCAPE_CHAR, create_similar_strings
from classifieds.db.mysql import engine as default_engine
from classifieds.models import Country, Currency, Item, PhoneNumber
from classifieds.utils import get_logger

logger = get_logger(__name__)

_SELECT_ITEMS = """
    SELECT i.item_id AS item_id, i.item_name AS item_name, i.amount AS amount,
           i.price_for_one AS price_for_one, i.currency_id AS currency_id,
           i.img_url AS img_url, i.item_description AS item_description,
           i.put_up_for_sale AS put_up_for_sale, c.currency_name AS currency_name,
           i.phone_number_id AS phone_number_id, p.phone_number AS phone_number,
           i.country_id AS country_id, co.country_name AS country_name
    FROM is_item i
    INNER JOIN is_currency c ON c.currency_id = i.currency_id
    INNER JOIN is_phone_number p ON p.phone_number_id = i.phone_number_id
    LEFT JOIN is_country co ON co.country_id = i.country_id
"""

# Numeric and Date need explicit types for SQLite, which has neither
_RESULT_TYPES = {
    "item_id": BigInteger,
    "amount": Integer,
    "price_for_one": Numeric(12, 2),
    "currency_id": Integer,
    "put_up_for_sale": Date,
    "phone_number_id": BigInteger,
    "country_id": Integer,
}

_WRITE_PARAM_TYPES = (
    bindparam("price_for_one", type_=Numeric(12, 2)),
    bindparam("put_up_for_sale", type_=Date),
)

_CURRENCY_ID_SUBQUERY = "(SELECT currency_id FROM is_currency WHERE currency_name = :currency_name)"
_PHONE_NUMBER_ID_SUBQUERY = "(SELECT phone_number_id FROM is_phone_number WHERE phone_number = :phone_number)"
_COUNTRY_ID_SUBQUERY = "(SELECT country_id FROM is_country WHERE country_name = :country_name)"


def _select(where: str = "") -> TextClause:
    return text(f"{_SELECT_ITEMS} {where}").columns(**_RESULT_TYPES)


GET_BY_ID_SQL = _select("WHERE i.item_id = :item_id")
ALL_ITEMS_SQL = _select("ORDER BY i.item_id")
SIMILAR_NAME_SQL = _select(f"WHERE i.item_name LIKE :pattern ESCAPE '{ESCAPE_CHAR}' ORDER BY i.item_id")

INSERT_SQL = text(
    f"""
    INSERT INTO is_item(item_id, item_name, amount, price_for_one, currency_id, img_url,
                        item_description, put_up_for_sale, phone_number_id, country_id)
    VALUES (:item_id, :item_name, :amount, :price_for_one, {_CURRENCY_ID_SUBQUERY}, :img_url,
            :item_description, :put_up_for_sale, {_PHONE_NUMBER_ID_SUBQUERY}, {_COUNTRY_ID_SUBQUERY})
    """
).bindparams(*_WRITE_PARAM_TYPES)

INSERT_IGNORE_ID_SQL = text(
    f"""
    INSERT INTO is_item(item_name, amount, price_for_one, currency_id, img_url,
                        item_description, put_up_for_sale, phone_number_id, country_id)
    VALUES (:item_name, :amount, :price_for_one, {_CURRENCY_ID_SUBQUERY}, :img_url,
            :item_description, :put_up_for_sale, {_PHONE_NUMBER_ID_SUBQUERY}, {_COUNTRY_ID_SUBQUERY})
    """
).bindparams(*_WRITE_PARAM_TYPES)

UPDATE_SQL = text(
    f"""
    UPDATE is_item
    SET item_name = :item_name, amount = :amount, price_for_one = :price_for_one,
        currency_id = {_CURRENCY_ID_SUBQUERY},
        img_url = :img_url, item_description = :item_description, put_up_for_sale = :put_up_for_sale,
        phone_number_id = {_PHONE_NUMBER_ID_SUBQUERY},
        country_id = {_COUNTRY_ID_SUBQUERY}
    WHERE item_id = :item_id
    """
).bindparams(*_WRITE_PARAM_TYPES)

DELETE_SQL = text("DELETE FROM is_item WHERE item_id = :item_id")


class SqlItemDao:
    """DAO for items backed by hand-written SQL on an SQLAlchemy engine."""

    def __init__(self, engine: Engine | None = None):
        self._engine = engine or default_engine

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, item_id: int) -> Item:
        """
        Fetch a single item with its currency, phone number and country.

        Raises:
            FetchException: If the read fails or no item has this ID.
        """
        require(item_id, "item_id")
        try:
            with self._engine.connect() as conn:
                row = conn.execute(GET_BY_ID_SQL, {"item_id": item_id}).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch item #{item_id}: {e}")
            raise FetchException(f"Failed to fetch item with id = {item_id}") from e
        if row is None:
            raise FetchException(f"No such item with id = {item_id}")
        return self._row_to_item(row)

    def all_entities(self) -> list[Item]:
        """Fetch every item, ordered by ID."""
        try:
            with self._engine.connect() as conn:
                return [self._row_to_item(r) for r in conn.execute(ALL_ITEMS_SQL)]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list items: {e}")
            raise FetchException("Failed to list items") from e

    def items_with_similar_name(self, name: str) -> list[Item]:
        """
        Fuzzy search on item names.

        Runs one LIKE query per pattern from ``create_similar_strings`` on a
        single connection. Items matched by several patterns are returned
        once, in the position of their first (most specific) match.

        Args:
            name: Name typed by the user.

        Returns:
            Matching items; empty for a blank name.
        """
        require(name, "name")
        found: dict[int, Item] = {}
        try:
            with self._engine.connect() as conn:
                for pattern in create_similar_strings(name):
                    for row in conn.execute(SIMILAR_NAME_SQL, {"pattern": pattern}):
                        if row.item_id not in found:
                            found[row.item_id] = self._row_to_item(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to search items similar to {name!r}: {e}")
            raise FetchException(f"Failed to search items similar to {name!r}") from e
        return list(found.values())

    # ── CREATE ────────────────────────────────────────────

    def save(self, item: Item) -> None:
        """
        Insert the item under its own ID (generated when ``item.id`` is None).

        The ID the row ends up with is written back onto ``item``.

        Raises:
            StoreException: If the insert fails, e.g. the currency or phone
                number does not exist.
            ValueError: If ``item.id`` is preset below 1.
        """
        self._require_writable(item)
        require_preset_id(item.id, "item_id")
        params = {"item_id": item.id, **self._write_params(item)}
        try:
            with self._engine.begin() as conn:
                item_id = conn.execute(INSERT_SQL, params).lastrowid
        except SQLAlchemyError as e:
            logger.error(f"Failed to save item {item.name!r}: {e}")
            raise StoreException(f"Failed to save item {item.name!r}") from e
        if item_id:
            item.id = item_id
        logger.debug(f"Saved item #{item.id}")

    def save_ignore_id(self, item: Item) -> int:
        """
        Insert the item under a generated ID; ``item`` is left untouched.

        Returns:
            The generated item ID.

        Raises:
            StoreException: If the insert fails.
        """
        self._require_writable(item)
        try:
            with self._engine.begin() as conn:
                item_id = conn.execute(INSERT_IGNORE_ID_SQL, self._write_params(item)).lastrowid
        except SQLAlchemyError as e:
            logger.error(f"Failed to save item {item.name!r}: {e}")
            raise StoreException(f"Failed to save item {item.name!r}") from e
        logger.debug(f"Saved item #{item_id}")
        return item_id

    # ── UPDATE ────────────────────────────────────────────

    def update(self, item_id: int, item: Item) -> None:
        """
        Overwrite every column of item ``item_id`` with the fields of ``item``.

        Updating a missing ID changes nothing.

        Raises:
            UpdateException: If the update fails.
        """
        require(item_id, "item_id")
        self._require_writable(item)
        params = {"item_id": item_id, **self._write_params(item)}
        try:
            with self._engine.begin() as conn:
                updated = conn.execute(UPDATE_SQL, params).rowcount
        except SQLAlchemyError as e:
            logger.error(f"Failed to update item #{item_id}: {e}")
            raise UpdateException(f"Failed to update item with id = {item_id}") from e
        if not updated:
            logger.debug(f"Update matched no item with id = {item_id}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, item_id: int) -> None:
        """
        Delete an item by ID; a missing ID is not an error.

        Raises:
            DeleteException: If the delete fails.
        """
        require(item_id, "item_id")
        try:
            with self._engine.begin() as conn:
                deleted = conn.execute(DELETE_SQL, {"item_id": item_id}).rowcount
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete item #{item_id}: {e}")
            raise DeleteException(f"Failed to delete item with id = {item_id}") from e
        if deleted:
            logger.info(f"Deleted item #{item_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _require_writable(item: Item) -> None:
        require(item, "item")
        require(item.currency, "item.currency")
        require(item.phone_number, "item.phone_number")

    @staticmethod
    def _write_params(item: Item) -> dict:
        """Bind values shared by INSERT and UPDATE."""
        return {
            "item_name": item.name,
            "amount": item.amount,
            "price_for_one": item.price_for_one,
            "currency_name": item.currency.name,
            "img_url": item.image_url,
            "item_description": item.description,
            "put_up_for_sale": item.put_up_for_sale,
            "phone_number": item.phone_number.number,
            "country_name": item.country.name if item.country else None,
        }

    @staticmethod
    def _row_to_item(row: Row) -> Item:
        """Convert a joined result row to an Item domain object."""
        m = row._mapping
        country = None
        if m["country_id"] is not None:
            country = Country(id=m["country_id"], name=m["country_name"])
        return Item(
            id=m["item_id"],
            name=m["item_name"],
            amount=m["amount"],
            price_for_one=m["price_for_one"],
            currency=Currency(id=m["currency_id"], name=m["currency_name"]),
            image_url=m["img_url"],
            description=m["item_description"],
            put_up_for_sale=m["put_up_for_sale"],
            phone_number=PhoneNumber(id=m["phone_number_id"], number=m["phone_number"]),
            country=country,
        )


# Singleton instance
item_dao = SqlItemDao()

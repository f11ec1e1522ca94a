"""SQLAlchemy ORM models for the classifieds marketplace.

Table names follow the production MySQL schema (``is_*`` prefix).

Entity relationships:
    Country <-> Currency (is_country_to_currency)
    Item -> Currency, PhoneNumber, Country (optional)
"""

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import DeclarativeBase, relationship


def _binary_string(length: int):
    """VARCHAR compared case-sensitively on MySQL (SQLite compares binary already)."""
    return String(length).with_variant(mysql.VARCHAR(length, collation="utf8mb4_bin"), "mysql")


# SQLite only autoincrements INTEGER PRIMARY KEY columns
_BigId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


country_to_currency = Table(
    "is_country_to_currency",
    Base.metadata,
    Column("country_id", Integer, ForeignKey("is_country.country_id", ondelete="CASCADE"), primary_key=True),
    Column("currency_id", Integer, ForeignKey("is_currency.currency_id", ondelete="CASCADE"), primary_key=True),
)


class Currency(Base):
    """Currency accepted in one or more countries."""

    __tablename__ = "is_currency"

    id = Column("currency_id", Integer, primary_key=True, autoincrement=True)
    name = Column("currency_name", _binary_string(64), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Currency(id={self.id}, name={self.name})>"


class Country(Base):
    """Country - owns the collection of currencies accepted there."""

    __tablename__ = "is_country"

    id = Column("country_id", Integer, primary_key=True, autoincrement=True)
    name = Column("country_name", _binary_string(128), nullable=False, unique=True)

    # selectin so the collection survives session close
    currencies = relationship("Currency", secondary=country_to_currency, lazy="selectin", order_by=Currency.id)

    def __repr__(self) -> str:
        return f"<Country(id={self.id}, name={self.name})>"


class PhoneNumber(Base):
    """Contact phone number attached to items."""

    __tablename__ = "is_phone_number"

    id = Column("phone_number_id", _BigId, primary_key=True, autoincrement=True)
    number = Column("phone_number", _binary_string(32), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<PhoneNumber(id={self.id}, number={self.number})>"


class Item(Base):
    """Item put up for sale.

    Rows are read and written by the hand-written SQL item DAO; the mapping
    here defines the schema.
    """

    __tablename__ = "is_item"

    id = Column("item_id", _BigId, primary_key=True, autoincrement=True)
    name = Column("item_name", String(255), nullable=False)
    amount = Column(Integer, nullable=False, default=1)
    price_for_one = Column(Numeric(12, 2), nullable=False)
    currency_id = Column(Integer, ForeignKey("is_currency.currency_id"), nullable=False)
    img_url = Column(String(512), nullable=True)
    item_description = Column(Text, nullable=True)
    put_up_for_sale = Column(Date, nullable=True)
    phone_number_id = Column(_BigId, ForeignKey("is_phone_number.phone_number_id"), nullable=False)
    country_id = Column(Integer, ForeignKey("is_country.country_id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index("idx_is_item_name", "item_name"),
        Index("idx_is_item_country_id", "country_id"),
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name})>"


# Aliases to tell ORM entities apart from the pydantic domain models
CountryModel = Country
CurrencyModel = Currency
PhoneNumberModel = PhoneNumber
ItemModel = Item

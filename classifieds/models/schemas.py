"""Pydantic domain models exchanged with the SQL item DAO."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Currency(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str


class PhoneNumber(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    number: str


class Country(BaseModel):
    """Country reference carried by an item (currencies are not loaded here)."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str


class Item(BaseModel):
    """Item put up for sale.

    Foreign keys are written by name: the DAO resolves ``currency.name``,
    ``phone_number.number`` and ``country.name`` to ids inside the statement.
    """

    id: int | None = None
    name: str
    amount: int = Field(1, ge=0)
    price_for_one: Decimal = Field(..., ge=0, decimal_places=2)
    currency: Currency | None = None
    image_url: str | None = None
    description: str | None = None
    put_up_for_sale: date | None = None
    phone_number: PhoneNumber | None = None
    country: Country | None = None

"""Tests for the generic ORM DAO through the currency and phone number DAOs."""

import pytest

from classifieds.dao import CurrencyDao, FetchException, PhoneNumberDao, StoreException, UpdateException
from classifieds.db import CurrencyModel, PhoneNumberModel


class TestCurrencyDao:
    def test_create_and_get(self, currency_dao: CurrencyDao):
        currency = CurrencyModel(name="GBP")
        currency_dao.save(currency)

        retrieved = currency_dao.get_by_id(currency.id)
        assert retrieved.name == "GBP"

    def test_get_nonexistent(self, currency_dao: CurrencyDao):
        with pytest.raises(FetchException, match="No such currency with id = 1"):
            currency_dao.get_by_id(1)

    def test_all_entities(self, currency_dao: CurrencyDao, currencies):
        assert [c.name for c in currency_dao.all_entities()] == ["USD", "EUR", "BYN"]

    def test_names_are_case_sensitive(self, currency_dao: CurrencyDao, currencies):
        """'usd' and 'USD' are different currencies."""
        currency_dao.save(CurrencyModel(name="usd"))

        assert len(currency_dao.all_entities()) == 4

    def test_duplicate_name(self, currency_dao: CurrencyDao, currencies):
        with pytest.raises(StoreException):
            currency_dao.save(CurrencyModel(name="USD"))

    def test_zero_id_rejected(self, currency_dao: CurrencyDao):
        with pytest.raises(ValueError):
            currency_dao.save(CurrencyModel(id=0, name="GBP"))

        assert currency_dao.all_entities() == []

    def test_save_ignore_id(self, currency_dao: CurrencyDao, currencies):
        currency = CurrencyModel(id=1, name="PLN")

        new_id = currency_dao.save_ignore_id(currency)

        assert new_id == 4
        assert currency.id == 1
        assert currency_dao.get_by_id(1).name == "USD"
        assert currency_dao.get_by_id(4).name == "PLN"

    def test_update(self, currency_dao: CurrencyDao, currencies):
        currency_dao.update(currencies["BYN"].id, CurrencyModel(name="BYR"))

        assert currency_dao.get_by_id(currencies["BYN"].id).name == "BYR"

    def test_update_nonexistent(self, currency_dao: CurrencyDao):
        with pytest.raises(UpdateException):
            currency_dao.update(1, CurrencyModel(name="GBP"))

    def test_delete(self, currency_dao: CurrencyDao, currencies):
        currency_dao.delete(currencies["EUR"].id)

        assert [c.name for c in currency_dao.all_entities()] == ["USD", "BYN"]


class TestPhoneNumberDao:
    def test_create_and_get(self, phone_number_dao: PhoneNumberDao):
        phone = PhoneNumberModel(number="+48221234567")
        phone_number_dao.save(phone)

        assert phone_number_dao.get_by_id(phone.id).number == "+48221234567"

    def test_get_nonexistent(self, phone_number_dao: PhoneNumberDao):
        with pytest.raises(FetchException, match="No such phone number"):
            phone_number_dao.get_by_id(7)

    def test_delete_missing_is_noop(self, phone_number_dao: PhoneNumberDao, phone_numbers):
        phone_number_dao.delete(404)

        assert len(phone_number_dao.all_entities()) == 2

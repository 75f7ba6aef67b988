# nosec B101


import pytest
from decimal import Decimal

from domain.exceptions.currency import DomainValidationError
from domain.models.currency import CurrencyCode
from domain.models.requests import ConversionRequest

EXCLUSION_MESSAGE = 'Currency conversion is not supported for TRY, PLN, THB, or MXN.'


@pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-1'), Decimal('-100.50')])
def test_non_positive_amount_is_rejected(amount):
    with pytest.raises(DomainValidationError) as exc_info:
        ConversionRequest.create(amount, CurrencyCode('USD'), CurrencyCode('EUR'))

    assert str(exc_info.value) == 'Amount must be greater than zero.'


@pytest.mark.parametrize('from_code,to_code', [
    ('TRY', 'EUR'),
    ('USD', 'PLN'),
    ('THB', 'USD'),
    ('EUR', 'MXN'),
    ('TRY', 'MXN'),
    ('pln', 'usd'),
])
def test_excluded_currency_on_either_side_is_rejected(from_code, to_code):
    with pytest.raises(DomainValidationError) as exc_info:
        ConversionRequest.create(Decimal('100'), CurrencyCode(from_code), CurrencyCode(to_code))

    assert str(exc_info.value) == EXCLUSION_MESSAGE


def test_amount_is_checked_before_exclusion():
    with pytest.raises(DomainValidationError) as exc_info:
        ConversionRequest.create(Decimal('0'), CurrencyCode('TRY'), CurrencyCode('EUR'))

    assert str(exc_info.value) == 'Amount must be greater than zero.'


def test_valid_request_builds_money_and_target():
    request = ConversionRequest.create(Decimal('100'), CurrencyCode('usd'), CurrencyCode('eur'))

    assert request.source.amount == Decimal('100')
    assert request.source.currency == CurrencyCode('USD')
    assert request.target == CurrencyCode('EUR')

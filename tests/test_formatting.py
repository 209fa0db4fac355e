from datetime import date, datetime

import pytest

from billing.templatetags.billing_format import currency, local_date


@pytest.mark.parametrize('amount, expected', [
    (15795, '$157.95'),
    (123456, '$1,234.56'),
    (0, '$0.00'),
    (-500, '-$5.00'),
    (None, ''),
])
def test_currency(amount, expected):
    assert currency(amount) == expected


@pytest.mark.parametrize('value, expected', [
    ('2024-01-05', 'Jan 5, 2024'),
    (date(2023, 12, 25), 'Dec 25, 2023'),
    (datetime(2024, 3, 15, 9, 30), 'Mar 15, 2024'),
    ('', ''),
    ('not a date', 'not a date'),
])
def test_local_date(value, expected):
    assert local_date(value) == expected

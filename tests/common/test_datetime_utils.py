from datetime import date

import pytest

from src.employee_directory.employee_directory.common.datetime_utils import parse_iso_date
from src.employee_directory.employee_directory.core.exceptions import DateFormatError, DateValueError


def test_valid_leap_day():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)


def test_impossible_calendar_date_is_value_error():
    with pytest.raises(DateValueError):
        parse_iso_date("2024-02-30")


def test_non_leap_year_feb_29_is_value_error():
    with pytest.raises(DateValueError):
        parse_iso_date("2023-02-29")


@pytest.mark.parametrize("value", ["02-30-2024", "2024/02/10", "2024-02-10\n", "2024-02-10T00:00", ""])
def test_wrong_shape_is_format_error(value):
    with pytest.raises(DateFormatError):
        parse_iso_date(value)

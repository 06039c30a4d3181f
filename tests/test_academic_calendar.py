from datetime import date

import pytest

from services.academic_calendar import current_school_year, current_trimester, trimester_label


@pytest.mark.parametrize("today, expected", [
    (date(2024, 9, 1), "2024-2025"),
    (date(2024, 12, 31), "2024-2025"),
    (date(2025, 1, 15), "2024-2025"),
    (date(2025, 8, 31), "2024-2025"),
])
def test_current_school_year_switches_in_september(today, expected):
    assert current_school_year(today) == expected


@pytest.mark.parametrize("month, trimester", [(9, 1), (12, 1), (1, 2), (3, 2), (4, 3), (8, 3)])
def test_current_trimester(month, trimester):
    assert current_trimester(date(2025, month, 10)) == trimester


def test_trimester_label():
    assert trimester_label(1) == "1er Trimestre"
    assert trimester_label(3) == "3ème Trimestre"

"""
Password generator classes for the PDF Lock Scanner.

This module builds the date-shaped candidate list used to recover passwords
of personally owned documents: hints taken from the filename first, then
birth dates across a plausible age range.
"""

from abc import ABC, abstractmethod
import datetime
import re
from typing import Iterable, List, Optional

from pdf_lock_scanner.utils.exceptions import InvalidPasswordGeneratorError


MONTH_NUMBERS = ['01', '02', '03', '04', '05', '06', '07', '08', '09', '10', '11', '12']
MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

# September, October and August have the highest birth rates (zero-based)
PRIORITY_MONTHS = [8, 9, 7]
PRIORITY_DAYS = [1, 12, 19, 15, 31, 30, 28]

DEFAULT_MIN_AGE = 20
DEFAULT_MAX_AGE = 85

# e.g. 01JAN25, 19Dec1985
DAY_MONTH_YEAR_PATTERN = re.compile(r'\d{2}[A-Za-z]{3}\d{2,4}')
DIGIT_RUN_PATTERN = re.compile(r'\d{6,8}')


def _unique(values: Iterable[str]) -> List[str]:
    """Drop repeated values, keeping the first occurrence"""
    return list(dict.fromkeys(values))


def month_order() -> List[int]:
    """Zero-based month indices in the order they are tried"""
    others = [m for m in range(12) if m not in PRIORITY_MONTHS]
    return PRIORITY_MONTHS + others


def day_order() -> List[int]:
    """Days of the month in the order they are tried"""
    days = PRIORITY_DAYS + list(range(1, 32))
    return [day for day in dict.fromkeys(days) if day <= 31]


def birth_years(current_year: int, min_age: int = DEFAULT_MIN_AGE,
                max_age: int = DEFAULT_MAX_AGE) -> List[int]:
    """Birth years for every age in [min_age, max_age], youngest first"""
    if min_age < 0 or max_age < min_age:
        raise InvalidPasswordGeneratorError(
            f"Invalid age range: {min_age}-{max_age}"
        )
    return [current_year - age for age in range(min_age, max_age + 1)]


def filename_hints(filename: Optional[str]) -> List[str]:
    """Extract priority candidates from a filename

    Dates written as day, month abbreviation and year come first, followed by
    every run of six to eight digits. An eight digit run is ambiguous between
    several day/month/year layouts, so its first six characters and its tail
    from index 2 are tried right after it.
    """
    if not filename:
        return []

    matches = DAY_MONTH_YEAR_PATTERN.findall(filename) + DIGIT_RUN_PATTERN.findall(filename)

    hints = []
    for match in matches:
        hints.append(match)
        if len(match) == 8:
            hints.append(match[:6])
            hints.append(match[2:])
    return hints


def systematic_dates(current_year: int, min_age: int = DEFAULT_MIN_AGE,
                     max_age: int = DEFAULT_MAX_AGE) -> List[str]:
    """Every DDMMYYYY and DDMonYYYY birth date for the age range"""
    days = day_order()
    months = month_order()
    passwords = []
    for year in birth_years(current_year, min_age, max_age):
        for month in months:
            for day in days:
                passwords.append(f"{day:02d}{MONTH_NUMBERS[month]}{year}")
                passwords.append(f"{day:02d}{MONTH_NAMES[month]}{year}")
    return passwords


def generate_date_passwords(filename_hint: Optional[str] = None,
                            current_year: Optional[int] = None,
                            min_age: int = DEFAULT_MIN_AGE,
                            max_age: int = DEFAULT_MAX_AGE) -> List[str]:
    """Build the ordered, duplicate-free candidate list

    Args:
        filename_hint: Optional filename to mine for embedded dates
        current_year: Year the ages are counted from (default: this year)
        min_age: Youngest owner age to cover
        max_age: Oldest owner age to cover

    Returns:
        Filename hints followed by systematic date candidates
    """
    if current_year is None:
        current_year = datetime.date.today().year

    return _unique(
        filename_hints(filename_hint)
        + systematic_dates(current_year, min_age, max_age)
    )


class PasswordGenerator(ABC):
    """Abstract base class for password generators"""

    @abstractmethod
    def generate(self, start_pos: int, count: int) -> List[str]:
        """Generate a batch of passwords from a starting position"""
        pass

    @abstractmethod
    def get_total_count(self) -> int:
        """Get the total number of possible passwords"""
        pass

    @abstractmethod
    def position_to_password(self, position: int) -> str:
        """Convert a numeric position to a password"""
        pass

    @abstractmethod
    def password_to_position(self, password: str) -> int:
        """Convert a password to its numeric position"""
        pass


class DatePasswordGenerator(PasswordGenerator):
    """Generator for date-shaped passwords prioritised by filename hints"""

    def __init__(self, filename_hint: Optional[str] = None,
                 current_year: Optional[int] = None,
                 min_age: int = DEFAULT_MIN_AGE,
                 max_age: int = DEFAULT_MAX_AGE):
        self.filename_hint = filename_hint
        self.passwords = generate_date_passwords(
            filename_hint, current_year, min_age, max_age
        )
        self.password_count = len(self.passwords)
        self._positions = {password: i for i, password in enumerate(self.passwords)}

    def generate(self, start_pos: int, count: int) -> List[str]:
        end_pos = min(start_pos + count, self.password_count)
        return self.passwords[start_pos:end_pos]

    def get_total_count(self) -> int:
        return self.password_count

    def position_to_password(self, position: int) -> str:
        if position < 0 or position >= self.password_count:
            raise ValueError(f"Position must be between 0 and {self.password_count-1}")
        return self.passwords[position]

    def password_to_position(self, password: str) -> int:
        try:
            return self._positions[password]
        except KeyError:
            raise ValueError(f"Password not in candidate list: {password}")

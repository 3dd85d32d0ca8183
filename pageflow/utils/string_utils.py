"""
String utilities for generating and formatting test values.
"""

import random
import string
from datetime import date as date_type
from datetime import datetime
from typing import Optional, Union

ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_random_string(length: int = 10) -> str:
    """
    Generate a random alphanumeric string.

    Characters are drawn uniformly, with replacement, from the 62-character
    set A-Z, a-z, 0-9.

    Args:
        length: Number of characters. Defaults to 10.

    Returns:
        A string of exactly ``length`` characters, or '' when length <= 0.

    Examples:
        >>> len(generate_random_string(12))
        12

        >>> generate_random_string(0)
        ''
    """
    if length <= 0:
        return ""
    return "".join(random.choice(ALPHANUMERIC) for _ in range(length))


def generate_random_email(domain: str = "example.com") -> str:
    """
    Generate a random email address.

    Examples:
        >>> generate_random_email('test.io').endswith('@test.io')
        True
    """
    return f"test_{generate_random_string(10)}@{domain}"


def generate_random_number(min_value: int = 0, max_value: int = 100) -> int:
    """
    Generate a random integer in [min_value, max_value], both inclusive.

    Callers must pass min_value <= max_value.
    """
    return int((max_value - min_value + 1) * random.random()) + min_value


def format_date(date: Optional[Union[date_type, datetime]] = None, fmt: str = "YYYY-MM-DD") -> str:
    """
    Format a date using YYYY, MM and DD tokens.

    Each token replaces its first occurrence in ``fmt``; every other
    character is copied as is.

    Args:
        date: Date to format. Defaults to today.
        fmt: Format string. Defaults to 'YYYY-MM-DD'.

    Returns:
        The formatted date string.

    Examples:
        >>> format_date(datetime(2024, 3, 5))
        '2024-03-05'

        >>> format_date(datetime(2024, 3, 5), 'DD/MM/YYYY')
        '05/03/2024'

        >>> format_date(datetime(2024, 3, 5), 'MM-YYYY')
        '03-2024'
    """
    if date is None:
        date = datetime.now()

    return (
        fmt.replace("YYYY", str(date.year), 1)
        .replace("MM", f"{date.month:02d}", 1)
        .replace("DD", f"{date.day:02d}", 1)
    )


def truncate_string(text: str, max_length: int = 50) -> str:
    """
    Truncate a string, appending '...' when it was cut.

    The ellipsis comes on top of ``max_length`` characters.

    Examples:
        >>> truncate_string('abcdefgh', 5)
        'abcde...'

        >>> truncate_string('ab', 5)
        'ab'
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def capitalize_first_letter(text: Optional[str]) -> str:
    """
    Uppercase the first character and leave the rest untouched.

    Examples:
        >>> capitalize_first_letter('test')
        'Test'

        >>> capitalize_first_letter('')
        ''
    """
    if not text:
        return ""
    return text[0].upper() + text[1:]

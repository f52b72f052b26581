"""Built-in field cleaners.

Fake values are derived from a hash of the original value, so the same input
always produces the same output and joins on cleaned columns still line up.
"""

import hashlib
import random
import string
from datetime import date, datetime
from typing import Any

from dbsampler.cleaners.registry import field_cleaner

FIRST_NAMES = [
    "Alex", "Amira", "Ben", "Chloe", "Daniel", "Elena", "Farah", "George",
    "Hannah", "Isaac", "Jade", "Kofi", "Laura", "Mohammed", "Nina", "Oliver",
    "Priya", "Quentin", "Rosa", "Samuel", "Tara", "Umar", "Violet", "William",
]
LAST_NAMES = [
    "Adams", "Brown", "Clarke", "Davies", "Evans", "Fraser", "Green", "Hughes",
    "Iqbal", "Jones", "Khan", "Lewis", "Morgan", "Nowak", "Owen", "Patel",
    "Quinn", "Roberts", "Smith", "Taylor", "Walker", "Young",
]
STREETS = [
    "High Street", "Station Road", "Church Lane", "Park Avenue", "Mill Road",
    "Victoria Street", "Green Lane", "Manor Road", "Kings Road", "Queens Walk",
]


def _rng(value: Any) -> random.Random:
    digest = hashlib.sha256(repr(value).encode("utf-8")).hexdigest()
    return random.Random(int(digest[:16], 16))


@field_cleaner("null")
def null(value, row):
    return None


@field_cleaner("empty")
def empty(value, row):
    return ""


@field_cleaner("zero")
def zero(value, row):
    return 0


@field_cleaner("fixed")
def fixed(value, row, *parts):
    return ":".join(parts)


@field_cleaner("integer")
def integer(value, row):
    if value is None or value == "":
        return None
    return int(value)


@field_cleaner("truncate", arg_types=(int,))
def truncate(value, row, length):
    if value is None:
        return None
    return str(value)[:length]


@field_cleaner("hash", arg_types=(int,))
def hash_value(value, row, length=64):
    if value is None:
        return None
    return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:length]


@field_cleaner("randomdigits", arg_types=(int,))
def random_digits(value, row, length):
    return "".join(random.choice(string.digits) for _ in range(length))


@field_cleaner("randomstring", arg_types=(int,))
def random_string(value, row, length):
    return "".join(random.choice(string.ascii_letters) for _ in range(length))


@field_cleaner("fakefirstname")
def fake_first_name(value, row):
    if value is None:
        return None
    return _rng(value).choice(FIRST_NAMES)


@field_cleaner("fakelastname")
def fake_last_name(value, row):
    if value is None:
        return None
    return _rng(value).choice(LAST_NAMES)


@field_cleaner("fakename")
def fake_full_name(value, row):
    if value is None:
        return None
    rng = _rng(value)
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


@field_cleaner("fakeemail")
def fake_email(value, row, domain="example.com"):
    if value is None:
        return None
    rng = _rng(value)
    local = f"{rng.choice(FIRST_NAMES)}.{rng.choice(LAST_NAMES)}{rng.randrange(10000)}"
    return f"{local.lower()}@{domain}"


@field_cleaner("fakephone")
def fake_phone(value, row):
    if value is None:
        return None
    # 07700 900000-900999 is reserved for drama use
    return f"07700 900{_rng(value).randrange(1000):03d}"


@field_cleaner("fakestreetaddress")
def fake_street_address(value, row):
    if value is None:
        return None
    rng = _rng(value)
    return f"{rng.randrange(1, 200)} {rng.choice(STREETS)}"


@field_cleaner("fakepostcode")
def fake_postcode(value, row):
    if value is None:
        return None
    rng = _rng(value)
    letters = string.ascii_uppercase
    return (
        f"{rng.choice(letters)}{rng.choice(letters)}{rng.randrange(1, 100)} "
        f"{rng.randrange(10)}{rng.choice(letters)}{rng.choice(letters)}"
    )


@field_cleaner("dateofbirth")
def date_of_birth(value, row):
    """Keep only the year of a date, moving it to the 1st of January."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    if isinstance(value, date):
        return value.replace(month=1, day=1)
    text_value = str(value)
    return f"{text_value[:4]}-01-01" + (" 00:00:00" if len(text_value) > 10 else "")

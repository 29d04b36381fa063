import re
import time
import uuid
from decimal import Decimal
from typing import Optional

CUSTOM_ID_PREFIX = "custom-"

# Plain decimal text only; exponent forms like "1e5000" never reach Decimal/int
NUMERIC_ID_PATTERN = re.compile(r"^[+-]?\d{1,30}(\.\d{1,30})?$")


def generate_custom_id() -> str:
    return f"{CUSTOM_ID_PREFIX}{int(time.time() * 1000)}"


def generate_unique_suffix() -> str:
    return uuid.uuid4().hex[:6]


def normalize_numeric_id(raw_id: str) -> Optional[str]:
    """
    Canonical form of a numeric id ("042" and "42.0" both become "42").

    Returns None when raw_id is not plain decimal text of bounded length.
    """
    if not isinstance(raw_id, str):
        return None

    text = raw_id.strip()
    if not NUMERIC_ID_PATTERN.match(text):
        return None

    number = Decimal(text)
    if number == number.to_integral_value():
        return str(int(number))
    return format(number.normalize(), "f")

import re

from pydantic import HttpUrl, TypeAdapter, ValidationError

CODE_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")

# Paths served by the app itself; a link with one of these codes could never be reached
RESERVED_CODES = {"static", "shorten", "delete", "health", "favicon.ico",
                  "robots.txt", "docs", "redoc", "openapi.json"}

http_url = TypeAdapter(HttpUrl)


def is_valid_url(value) -> bool:
    """True when value parses as an absolute http(s) URL.

    Only the verdict is used; callers keep the string they were given, not
    pydantic's normalized form.
    """
    if not isinstance(value, str) or not value:
        return False
    try:
        http_url.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_code(value) -> bool:
    if not isinstance(value, str):
        return False
    return value not in RESERVED_CODES and CODE_PATTERN.fullmatch(value) is not None

from typing import Mapping, Optional, Union
from urllib.parse import quote, urlencode

QueryValue = Optional[Union[str, int, float, bool]]
QueryParams = Mapping[str, QueryValue]


def _stringify(value: QueryValue) -> str:
    # lowercase booleans, integral floats without ".0"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_query(params: Optional[QueryParams]) -> str:
    """
    Serialize query parameters, skipping `None` and empty-string values.

    Keys keep their insertion order. Returns an empty string when no
    parameters remain.
    """

    if not params:
        return ""

    pairs = [
        (key, _stringify(value))
        for key, value in params.items()
        if value is not None and value != ""
    ]
    return urlencode(pairs, quote_via=quote)


def build_url(base_url: str, endpoint: str, params: Optional[QueryParams] = None) -> str:
    """Join base URL and endpoint path with a single slash and append the query."""

    url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
    query = encode_query(params)
    return f"{url}?{query}" if query else url

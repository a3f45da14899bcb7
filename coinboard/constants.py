from enum import Enum

class EnvVars:
    """
    Environment variable names read at startup.
    """

    BASE_URL = "COINGECKO_BASE_URL"
    API_KEY = "COINGECKO_API_KEY"
    API_KEY_HEADER = "COINGECKO_API_KEY_HEADER"
    TIMEOUT = "COINGECKO_TIMEOUT"


class Defaults:
    """
    Default values for client and renderer settings.
    """

    API_KEY_HEADER = "x-api-key"
    TIMEOUT = 30
    REVALIDATE_SECONDS = 60
    TRENDING_REVALIDATE_SECONDS = 300
    TRENDING_LIMIT = 6
    USER_AGENT = "CoinboardClient/1.0"


class Endpoints:
    """
    Upstream API paths used by the dashboard sections.
    """

    TRENDING = "search/trending"


class SectionStatus(str, Enum):
    """
    Outcome of a single dashboard section.
    """

    OK = "ok"
    FAILED = "failed"

from typing import Any, Optional, TypedDict

from .constants import SectionStatus


class SectionResult(TypedDict):
    """
    Outcome of running one dashboard section.
    """

    name: str
    status: SectionStatus
    content: Any  # Section output (e.g. a Table) when status is OK
    error: Optional[str]  # Failure message when status is FAILED

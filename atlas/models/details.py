"""Entity detail model returned by summary lookups."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EntityDetails:
    """Summary text and external reference URL for a location or region."""

    summary_text: str
    url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EntityDetails":
        """
        Create details from an API payload.

        Accepts both ``summary`` and ``summaryText`` keys.

        Raises:
            ValueError: If the payload lacks summary text or URL
        """
        summary = data.get("summaryText", data.get("summary"))
        url = data.get("url")
        if summary is None or url is None:
            raise ValueError(f"Detail payload missing summary or url: keys={sorted(data)}")
        return cls(summary_text=str(summary), url=str(url))

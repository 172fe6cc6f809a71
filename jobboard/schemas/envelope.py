from typing import Any

from pydantic import BaseModel, ConfigDict


class Pagination(BaseModel):
    total: int = 0
    pages: int = 0
    page: int = 1
    limit: int = 10


class Envelope(BaseModel):
    """Response wrapper shared by every endpoint: {success, data, message}.

    A body without a ``success`` key is treated as successful; only an explicit
    ``success: false`` marks a failed call that still returned 2xx.
    """
    model_config = ConfigDict(extra="allow")

    success: bool = True
    data: Any = None
    message: str | None = None
    error: str | None = None
    pagination: Pagination | None = None

    def page_data(self) -> dict | None:
        """Unvalidated pagination fields nested under ``data``, if any."""
        if isinstance(self.data, dict):
            nested = self.data.get("pagination")
            if isinstance(nested, dict):
                return nested
            if "total" in self.data and "pages" in self.data:
                return self.data
        return None

    def page_info(self) -> Pagination | None:
        """Pagination from the top level or nested under ``data``."""
        if self.pagination is not None:
            return self.pagination
        raw = self.page_data()
        if raw is None:
            return None
        return Pagination.model_validate(raw)

    def extra(self, key: str, default: Any = None) -> Any:
        """Read a non-standard top-level field (e.g. ``hasApplied``)."""
        return (self.model_extra or {}).get(key, default)

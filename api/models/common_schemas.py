from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Paging block returned next to every list under `data`."""
    page: int = Field(..., ge=1, description="1-based page number")
    page_size: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Items matching the filters")
    total_pages: int = Field(..., ge=0, description="Number of pages")

    @classmethod
    def build(cls, page: int, page_size: int, total: int) -> "Pagination":
        return cls(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=(total + page_size - 1) // page_size,
        )


class ErrorResponse(BaseModel):
    """Error body produced by the API exception handlers."""
    detail: str = Field(..., description="Human readable error message")

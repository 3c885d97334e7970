"""
Shared models for company records and resolve requests.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Category = Literal["high-fit", "icp-similar"]
Region = Literal["India", "Global"]
Complexity = Literal["Low", "Medium", "High"]
RecordSource = Literal["live", "static"]
ResultSource = Literal["live", "static", "hybrid"]


class CompanyRecord(BaseModel):
    """Canonical company record, from either the static catalog or a live scrape."""
    company: str = "Unknown"
    industry: str = "Unknown"
    category: str = "high-fit"
    region: Region = "Global"
    hq: str = "Unknown"
    employee_count: int = 0
    cloud_providers: List[str] = Field(default_factory=list)
    cloud_complexity: Complexity = "Low"
    est_cloud_spend: str = "Research needed"
    cloud_signals: str = ""
    why_fit: str = ""
    icp_similarity: str = "Analyze"
    verified: bool = False
    source: RecordSource = "static"

    # LinkedIn details, only filled for live records
    linkedin_url: str = ""
    linkedin_slug: str = ""
    followers: int = 0
    about: str = ""
    specialties: List[str] = Field(default_factory=list)
    scraped_at: Optional[str] = None

    @property
    def key(self) -> str:
        """Merge key - company names are unique case-insensitively."""
        return self.company.strip().lower()


class ResolveFilters(BaseModel):
    search: Optional[str] = None
    region: Optional[str] = None
    complexity: Optional[str] = None
    live: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1)


class ResolveResult(BaseModel):
    total: int
    page: int
    limit: int
    source: ResultSource
    companies: List[CompanyRecord]

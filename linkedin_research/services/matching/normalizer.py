"""
Normalizer - Transform raw BrightData company results into CompanyRecords.

BrightData output is loosely shaped: fields go missing, lists arrive as
comma-separated strings, counts arrive as "12,345". Every field falls back
to a default so a single bad record never breaks a batch.

Region, complexity and the narrative fields (signals, why-fit, ICP label)
are inferred from whatever is present. Output is deterministic for the same
input except for scraped_at.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models import CompanyRecord

INDIAN_CITIES = [
    "mumbai", "bangalore", "bengaluru", "delhi", "gurugram", "gurgaon",
    "hyderabad", "chennai", "pune", "kolkata", "noida", "ahmedabad",
    "jaipur", "kochi", "indore",
]

TECH_SPECIALTY = re.compile(r"tech|cloud|data|ai|software|saas|digital", re.IGNORECASE)

# Industry pattern -> closest existing ICP
ICP_PATTERNS = [
    (re.compile(r"food|beverage|fmcg|consumer", re.IGNORECASE), "TCPL / Coca-Cola"),
    (re.compile(r"media|publishing|entertainment", re.IGNORECASE), "Condé Nast"),
    (re.compile(r"spirits|wine|beer|brew", re.IGNORECASE), "Diageo"),
    (re.compile(r"ecommerce|e-commerce|retail|d2c", re.IGNORECASE), "Shaddu.com"),
]


# =============================================================================
# Field helpers
# =============================================================================

def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _to_int(value: Any) -> int:
    """Parse 12345, "12,345" or "12345 employees"; anything else is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = re.search(r"\d[\d,]*", _text(value))
    if not match:
        return 0
    return int(match.group(0).replace(",", ""))


def _as_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [_text(v) for v in value if _text(v)]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def _headquarters(company: Dict[str, Any]) -> str:
    hq = _text(company.get("headquarters"))
    if hq:
        return hq
    locations = company.get("locations")
    if isinstance(locations, list) and locations:
        return _text(locations[0])
    return ""


def _industry(company: Dict[str, Any]) -> str:
    industry = _text(company.get("industry"))
    if industry:
        return industry
    return ", ".join(_as_list(company.get("industries")))


def employee_count(company: Dict[str, Any]) -> int:
    """LinkedIn employee count, else the lower bound of company_size."""
    count = _to_int(company.get("employees_in_linkedin"))
    if count:
        return count
    return _to_int(company.get("company_size"))


# =============================================================================
# Inference
# =============================================================================

def detect_region(company: Dict[str, Any]) -> str:
    """India if country code is IN or the HQ mentions a major Indian city."""
    hq = _headquarters(company).lower()
    country = _text(company.get("country_code")).lower()

    if country == "in" or any(city in hq for city in INDIAN_CITIES):
        return "India"
    return "Global"


def estimate_complexity(employees: int) -> str:
    if employees > 5000:
        return "High"
    if employees > 1000:
        return "Medium"
    return "Low"


def build_cloud_signals(company: Dict[str, Any]) -> str:
    parts = []
    employees = _to_int(company.get("employees_in_linkedin"))
    followers = _to_int(company.get("followers"))
    specialties = _as_list(company.get("specialties"))
    industry = _text(company.get("industry"))

    if employees:
        parts.append(f"{employees} LinkedIn employees")
    if followers:
        parts.append(f"{followers} followers")
    if specialties:
        parts.append(f"Specialties: {', '.join(specialties)}")
    if industry:
        parts.append(f"Industry: {industry}")

    return ". ".join(parts) or "Scraped from LinkedIn - verify cloud stack"


def build_why_fit(company: Dict[str, Any], employees: int) -> str:
    parts = []
    if employees > 5000:
        parts.append("Large enterprise with significant cloud infrastructure.")
    elif employees > 1000:
        parts.append("Mid-size company likely running cloud workloads.")

    if any(TECH_SPECIALTY.search(s) for s in _as_list(company.get("specialties"))):
        parts.append("Technology-oriented specialties suggest cloud dependency.")

    return " ".join(parts) or "LinkedIn company - analyze cloud fit."


def match_icp(industry: str) -> str:
    """Closest existing ICP for an industry string."""
    for pattern, label in ICP_PATTERNS:
        if pattern.search(industry or ""):
            return label
    return "Analyze similarity"


# =============================================================================
# Normalize
# =============================================================================

def normalize_company(company: Any, category: str, scraped_at: Optional[str] = None) -> CompanyRecord:
    """Normalize a single raw BrightData company record."""
    if not isinstance(company, dict):
        company = {}

    employees = employee_count(company)
    industry = _industry(company)

    return CompanyRecord(
        company=_text(company.get("name")) or _text(company.get("company_name")) or "Unknown",
        industry=industry or "Unknown",
        category=category,
        region=detect_region(company),
        hq=_headquarters(company) or "Unknown",
        employee_count=employees,
        cloud_providers=[],
        cloud_complexity=estimate_complexity(employees),
        est_cloud_spend="Research needed",
        cloud_signals=build_cloud_signals(company),
        why_fit=build_why_fit(company, employees),
        icp_similarity=match_icp(industry) if category == "icp-similar" else "Analyze",
        verified=False,
        source="live",
        linkedin_url=_text(company.get("url")),
        linkedin_slug=_text(company.get("company_id") or company.get("linkedin_id") or company.get("id")),
        followers=_to_int(company.get("followers")),
        about=_text(company.get("about")),
        specialties=_as_list(company.get("specialties")),
        scraped_at=scraped_at,
    )


def normalize(raw_records: Any, category: str = "high-fit") -> List[CompanyRecord]:
    """
    Transform raw BrightData results into CompanyRecords.

    Args:
        raw_records: Snapshot result array (anything else yields [])
        category: "high-fit" or "icp-similar"

    Returns:
        One record per input, in input order
    """
    if not isinstance(raw_records, list):
        return []

    scraped_at = datetime.now(timezone.utc).isoformat()
    return [normalize_company(r, category, scraped_at) for r in raw_records]

"""
LinkedIn URL Utilities - build company, people-search and verification URLs.

Company URLs are what we send to BrightData; the search links are handed
back to the user to open in a browser.
"""

import re
from typing import Dict, List, Optional
from urllib.parse import quote

LINKEDIN_BASE = "https://www.linkedin.com"

DEFAULT_ROLE_QUERY = (
    'CTO OR "VP Engineering" OR "Head of Technology" OR "VP DevOps" OR "Head of DevOps" '
    'OR "FinOps" OR "CISO" OR "CIO" OR "VP Infrastructure" OR "Head of SRE"'
)
DEFAULT_GOOGLE_ROLES = "CTO OR VP Engineering OR DevOps OR CISO OR CIO"


def company_slug(name: str) -> str:
    """
    Turn a company name into a LinkedIn company slug.

    "Tata Consumer Products" -> "tata-consumer-products"
    """
    slug = (name or "").lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug.strip())
    return re.sub(r"-+", "-", slug)


def build_company_urls(company_names: List[str]) -> List[str]:
    """Generate LinkedIn company URLs from company names for scraping."""
    return [f"{LINKEDIN_BASE}/company/{company_slug(name)}" for name in company_names]


def _require_company(company: Optional[str]) -> str:
    if not company or not company.strip():
        raise ValueError("Company name is required")
    return company.strip()


def build_people_search(company: Optional[str], role: Optional[str] = None) -> Dict[str, str]:
    """
    LinkedIn people-search URL showing decision makers at a company,
    plus a Google site: search as fallback.
    """
    company = _require_company(company)
    role_query = role or DEFAULT_ROLE_QUERY

    linkedin_url = (
        f"{LINKEDIN_BASE}/search/results/people/?keywords={quote(role_query)}"
        f"&company={quote(company)}&origin=FACETED_SEARCH"
    )
    google_fallback = (
        f"https://www.google.com/search?q=site:linkedin.com/in+{quote(company)}"
        f"+{quote(role or DEFAULT_GOOGLE_ROLES)}"
    )
    return {"linkedin_url": linkedin_url, "google_fallback": google_fallback}


def build_google_verify_links(company: Optional[str]) -> Dict[str, str]:
    """Google searches for manually verifying a company's cloud footprint."""
    company = _require_company(company)

    def google(query: str) -> str:
        return f"https://www.google.com/search?q={quote(query)}"

    return {
        "revenue": google(f"{company} annual revenue financial results"),
        "cloud": google(f"{company} cloud infrastructure AWS Azure GCP kubernetes"),
        "devops": google(f"{company} DevOps SRE engineering team hiring"),
        "finops": google(f"{company} FinOps cloud cost optimization"),
        "tech": google(f"{company} technology stack engineering blog"),
        "linkedin": f"https://www.google.com/search?q=site:linkedin.com+{quote(company)}+CTO+OR+VP+Engineering",
    }

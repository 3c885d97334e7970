"""
Static Catalog - the pre-researched company dataset.

Always available, always complete: this is what we answer with when live
scraping is disabled or fails. Records are returned as copies so callers
can't mutate the catalog.
"""

from typing import Dict, List, Optional

from ..models import CompanyRecord

ICP_REFERENCE = [
    {"name": "TCPL", "industry": "FMCG / Food & Beverages"},
    {"name": "Coca-Cola", "industry": "Beverages"},
    {"name": "Condé Nast", "industry": "Media & Publishing"},
    {"name": "Diageo", "industry": "Spirits"},
    {"name": "Shaddu.com", "industry": "E-Commerce / D2C"},
]

TARGET_ROLES = [
    "CTO", "VP Engineering", "Head of Technology", "VP DevOps",
    "Head of DevOps", "Director FinOps", "CISO", "CIO",
    "Head of SRE", "VP Infrastructure", "Head of Cloud",
]


def _company(
    company: str,
    industry: str,
    category: str,
    region: str,
    hq: str,
    employee_count: int,
    cloud_providers: List[str],
    cloud_complexity: str,
    est_cloud_spend: str,
    cloud_signals: str,
    why_fit: str,
    icp_similarity: str = "N/A",
    verified: bool = False,
) -> Dict:
    return {
        "company": company,
        "industry": industry,
        "category": category,
        "region": region,
        "hq": hq,
        "employee_count": employee_count,
        "cloud_providers": cloud_providers,
        "cloud_complexity": cloud_complexity,
        "est_cloud_spend": est_cloud_spend,
        "cloud_signals": cloud_signals,
        "why_fit": why_fit,
        "icp_similarity": icp_similarity,
        "verified": verified,
    }


# ============================================
# High-fit cloud companies
# ============================================

HIGH_FIT = [
    _company("Swiggy", "Food Delivery / Quick Commerce", "high-fit", "India", "Bengaluru, Karnataka",
             5500, ["AWS"], "High", "$10M+",
             "Large Kubernetes footprint, public engineering blog on EKS and data platform",
             "Hyperscale consumer platform with spiky traffic and heavy data workloads", verified=True),
    _company("Razorpay", "Fintech / Payments", "high-fit", "India", "Bengaluru, Karnataka",
             3000, ["AWS"], "High", "$5M-$10M",
             "Microservices on Kubernetes, dedicated SRE and platform teams hiring",
             "Payments infra with strict uptime and compliance needs", verified=True),
    _company("Freshworks", "SaaS", "high-fit", "India", "Chennai, Tamil Nadu",
             5000, ["AWS", "Azure"], "High", "$10M+",
             "Multi-region SaaS deployment, FinOps roles posted",
             "Multi-product SaaS running across several cloud regions"),
    _company("Zerodha", "Fintech / Brokerage", "high-fit", "India", "Bengaluru, Karnataka",
             1200, ["AWS", "On-prem"], "Medium", "$1M-$5M",
             "Open-source tooling, hybrid infra, market-hours traffic peaks",
             "Latency-sensitive trading workloads with hybrid cloud"),
    _company("Meesho", "E-Commerce", "high-fit", "India", "Bengaluru, Karnataka",
             2000, ["GCP"], "High", "$5M-$10M",
             "Public talks on GCP cost optimization and data platform migration",
             "Large social commerce platform with active cloud cost program"),
    _company("Dream11", "Gaming / Fantasy Sports", "high-fit", "India", "Mumbai, Maharashtra",
             1000, ["AWS"], "High", "$5M-$10M",
             "Handles massive match-day concurrency spikes on AWS",
             "Extreme burst traffic makes autoscaling and cost control critical"),
    _company("PhonePe", "Fintech / Payments", "high-fit", "India", "Bengaluru, Karnataka",
             4000, ["Private cloud", "Azure"], "High", "$10M+",
             "Runs own data centers plus cloud burst, large SRE org",
             "UPI-scale transaction volume with hybrid infra"),
    _company("Postman", "Developer Tools / SaaS", "high-fit", "India", "Bengaluru, Karnataka",
             800, ["AWS"], "Medium", "$1M-$5M",
             "API platform serving millions of developers, platform engineering hiring",
             "Global developer SaaS with steady cloud growth"),
    _company("Practo", "HealthTech", "high-fit", "India", "Bengaluru, Karnataka",
             1500, ["AWS"], "Medium", "$1M-$5M",
             "Health records and telemedicine workloads, compliance-driven infra",
             "Regulated health data on cloud with DevOps team"),
    _company("Delhivery", "Logistics Tech", "high-fit", "India", "Gurugram, Haryana",
             20000, ["AWS"], "High", "$5M-$10M",
             "Routing and tracking data platform, ML for logistics",
             "Logistics network running heavy data and ML workloads"),
    _company("Canva", "SaaS / Design", "high-fit", "Global", "Sydney, Australia",
             4000, ["AWS"], "High", "$10M+",
             "Engineering blog on scaling AWS and cost engineering",
             "High-growth global SaaS with large media storage"),
    _company("Revolut", "Fintech / Banking", "high-fit", "Global", "London, UK",
             8000, ["GCP", "AWS"], "High", "$10M+",
             "Multi-cloud banking platform, heavy SRE and security hiring",
             "Global digital bank with multi-cloud complexity"),
    _company("Miro", "SaaS / Collaboration", "high-fit", "Global", "Amsterdam, Netherlands",
             1800, ["AWS"], "Medium", "$1M-$5M",
             "Real-time collaboration backend, Kubernetes migration talks",
             "Real-time SaaS with growing infra footprint"),
    _company("Grab", "Super App / Mobility", "high-fit", "Global", "Singapore",
             9000, ["AWS"], "High", "$10M+",
             "Large AWS footprint, public FinOps initiatives",
             "Regional super app with big data and ML infra"),
]


# ============================================
# Companies similar to existing ICP
# ============================================

ICP_SIMILAR = [
    _company("Hindustan Unilever", "FMCG", "icp-similar", "India", "Mumbai, Maharashtra",
             21000, ["Azure"], "High", "$5M-$10M",
             "Digital transformation and data programs on Azure",
             "Large FMCG with growing D2C and analytics workloads", "TCPL / Coca-Cola", verified=True),
    _company("Nestlé India", "Food & Beverages", "icp-similar", "India", "Gurugram, Haryana",
             8000, ["Azure", "SAP"], "Medium", "$1M-$5M",
             "SAP on cloud migration, supply chain analytics",
             "Food & beverage major modernizing ERP on cloud", "TCPL / Coca-Cola"),
    _company("Dabur", "FMCG / Consumer Goods", "icp-similar", "India", "Ghaziabad, Uttar Pradesh",
             7000, ["AWS"], "Medium", "$500K-$1M",
             "E-commerce channel growth, data lake initiatives",
             "Consumer goods company expanding digital channels", "TCPL / Coca-Cola"),
    _company("Times Internet", "Digital Media", "icp-similar", "India", "Noida, Uttar Pradesh",
             3000, ["AWS", "GCP"], "High", "$5M-$10M",
             "Large content delivery and ad-tech stack",
             "Media publisher running high-traffic content platforms", "Condé Nast"),
    _company("HT Media", "Media & Publishing", "icp-similar", "India", "New Delhi, Delhi",
             2500, ["AWS"], "Medium", "$1M-$5M",
             "Digital news platforms, video streaming workloads",
             "Publishing house shifting to digital-first delivery", "Condé Nast"),
    _company("United Spirits", "Spirits", "icp-similar", "India", "Bengaluru, Karnataka",
             3500, ["Azure"], "Medium", "$1M-$5M",
             "Diageo subsidiary, shared global cloud platforms",
             "Spirits major aligned with Diageo's cloud strategy", "Diageo", verified=True),
    _company("Bira 91", "Brewing / Beverages", "icp-similar", "India", "New Delhi, Delhi",
             700, ["AWS"], "Low", "$100K-$500K",
             "D2C and distribution analytics",
             "Young beverage brand with digital distribution", "Diageo"),
    _company("Nykaa", "E-Commerce / Beauty", "icp-similar", "India", "Mumbai, Maharashtra",
             4000, ["AWS"], "High", "$5M-$10M",
             "Large e-commerce platform, personalization and search on AWS",
             "D2C/e-commerce leader with heavy cloud usage", "Shaddu.com"),
    _company("Mamaearth", "D2C / Consumer Goods", "icp-similar", "India", "Gurugram, Haryana",
             1000, ["AWS"], "Low", "$500K-$1M",
             "D2C storefront and marketing analytics",
             "Fast-growing D2C brand similar to Shaddu.com", "Shaddu.com"),
    _company("PepsiCo", "Beverages / FMCG", "icp-similar", "Global", "Purchase, New York, USA",
             300000, ["Azure"], "High", "$10M+",
             "Enterprise-wide Azure partnership, data and AI programs",
             "Global beverage giant closest to Coca-Cola ICP", "TCPL / Coca-Cola"),
    _company("Pernod Ricard", "Spirits", "icp-similar", "Global", "Paris, France",
             19000, ["Azure", "GCP"], "High", "$5M-$10M",
             "Digital acceleration program, data platforms",
             "Global spirits peer of Diageo", "Diageo"),
    _company("Vox Media", "Digital Media", "icp-similar", "Global", "New York, USA",
             1500, ["AWS"], "Medium", "$1M-$5M",
             "Proprietary publishing platform on AWS",
             "Digital publisher comparable to Condé Nast", "Condé Nast"),
]


class StaticCatalog:
    """In-memory catalog of pre-researched companies."""

    def __init__(self, records: Optional[List[Dict]] = None):
        rows = records if records is not None else HIGH_FIT + ICP_SIMILAR
        self._records = [CompanyRecord(**{**row, "source": "static"}) for row in rows]

    def get_all(self, category: Optional[str] = None) -> List[CompanyRecord]:
        """All records for a category (or every record when category is None)."""
        return [
            record.model_copy(deep=True)
            for record in self._records
            if category is None or record.category == category
        ]

    def search(self, query: Optional[str]) -> List[CompanyRecord]:
        """Search the whole catalog by name, industry or HQ."""
        if not query or not query.strip():
            raise ValueError("Query is required")

        q = query.strip().lower()
        return [
            record
            for record in self.get_all()
            if q in record.company.lower() or q in record.industry.lower() or q in record.hq.lower()
        ]

    def stats(self) -> Dict[str, int]:
        """Counts for the dashboard."""
        records = self._records
        return {
            "totalCompanies": len(records),
            "icpSimilar": sum(1 for r in records if r.category == "icp-similar"),
            "highFit": sum(1 for r in records if r.category == "high-fit"),
            "indianCompanies": sum(1 for r in records if r.region == "India"),
            "globalCompanies": sum(1 for r in records if r.region == "Global"),
            "highComplexity": sum(1 for r in records if r.cloud_complexity == "High"),
            "verified": sum(1 for r in records if r.verified),
            "targetRoles": len(TARGET_ROLES),
        }

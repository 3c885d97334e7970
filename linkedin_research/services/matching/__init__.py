# Record normalization
from .normalizer import normalize, normalize_company, detect_region, estimate_complexity, match_icp

__all__ = [
    "normalize",
    "normalize_company",
    "detect_region",
    "estimate_complexity",
    "match_icp"
]

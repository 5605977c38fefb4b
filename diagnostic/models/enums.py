from enum import Enum


class BusinessType(str, Enum):
    B2B = "B2B"
    B2C = "B2C"


class RecommendationType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class RecommendationCode(str, Enum):
    CAPACITY = "capacity"
    BUDGET = "budget"
    CAC = "cac"
    CONVERSION = "conversion"
    CONCENTRATION = "concentration"


class ProfitAnchor(str, Enum):
    """Which of margin/profit the user entered; the other one is derived."""

    MARGIN = "margin"
    PROFIT = "profit"


class RolloutPhaseName(str, Enum):
    DISCOVERY = "discovery"
    OPTIMIZATION = "optimization"
    SCALE = "scale"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    JSON = "json"

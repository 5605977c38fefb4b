from .diagnostic_data import (
    DEFAULT_BENCHMARKS,
    INITIAL_DIAGNOSTIC_DATA,
    BenchmarkData,
    ClientOrigin,
    ConversionRates,
    DiagnosticData,
    FinancialData,
    GoogleOrganicMetrics,
    HistoryData,
    InvestmentData,
    PaidTrafficMetrics,
    SocialMediaMetrics,
    ValidationData,
    initial_diagnostic_data,
)
from .enums import BusinessType, ProfitAnchor, RecommendationCode, RecommendationType
from .loader import load_diagnostic_data, normalize_diagnostic_data

__all__ = [
    "DEFAULT_BENCHMARKS",
    "INITIAL_DIAGNOSTIC_DATA",
    "BenchmarkData",
    "BusinessType",
    "ClientOrigin",
    "ConversionRates",
    "DiagnosticData",
    "FinancialData",
    "GoogleOrganicMetrics",
    "HistoryData",
    "InvestmentData",
    "PaidTrafficMetrics",
    "ProfitAnchor",
    "RecommendationCode",
    "RecommendationType",
    "SocialMediaMetrics",
    "ValidationData",
    "initial_diagnostic_data",
    "load_diagnostic_data",
    "normalize_diagnostic_data",
]

from .calculator import MetricsCalculator, calculate_metrics, effective_conversion_rates
from .derived import recompute_derived_fields
from .recommendations import generate_recommendations
from .report import build_report
from .result import CalculatedMetrics, DiagnosticReport, Recommendation, RolloutPhase
from .rollout import plan_rollout

__all__ = [
    "CalculatedMetrics",
    "DiagnosticReport",
    "MetricsCalculator",
    "Recommendation",
    "RolloutPhase",
    "build_report",
    "calculate_metrics",
    "effective_conversion_rates",
    "generate_recommendations",
    "plan_rollout",
    "recompute_derived_fields",
]

"""Fixed conversion-rate presets keyed by business type."""

from __future__ import annotations

import logging

from diagnostic.models.diagnostic_data import (
    DEFAULT_BENCHMARKS,
    BenchmarkData,
    ConversionRates,
    DiagnosticData,
)
from diagnostic.models.enums import BusinessType

logger = logging.getLogger(__name__)


def _coerce_business_type(business_type: BusinessType | str) -> BusinessType:
    try:
        return BusinessType(business_type)
    except ValueError:
        valid = ", ".join(t.value for t in BusinessType)
        raise ValueError(
            f"Unknown business type {business_type!r}; expected one of: {valid}"
        ) from None


def get_preset(business_type: BusinessType | str) -> ConversionRates:
    """Look up the conversion-rate triple for a business type."""
    return DEFAULT_BENCHMARKS[_coerce_business_type(business_type)]


def list_presets() -> dict[BusinessType, ConversionRates]:
    """Return every preset (read-only copy of the table)."""
    return dict(DEFAULT_BENCHMARKS)


def apply_business_type(
    data: DiagnosticData,
    business_type: BusinessType | str,
) -> DiagnosticData:
    """Switch the business type, resetting the rates to that type's preset.

    Manual edits to the previous rates are discarded; the benchmark section
    is replaced, never merged.
    """
    resolved = _coerce_business_type(business_type)
    benchmark = BenchmarkData(
        business_type=resolved,
        conversion_rates=DEFAULT_BENCHMARKS[resolved],
    )
    if data.benchmark.business_type != resolved:
        logger.debug(
            "Business type switched %s -> %s",
            data.benchmark.business_type.value,
            resolved.value,
        )
    return data.model_copy(update={"benchmark": benchmark})

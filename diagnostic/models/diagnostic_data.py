"""Pydantic models for the diagnostic snapshot edited by the wizard form.

Every model is frozen: edits go through ``with_changes`` / ``model_copy`` and
return a new snapshot, so references held by other views stay valid.

The wire format keeps the camelCase keys the dashboard already persists
(``averageTicket``, ``clientOrigin``, ``averageCAC`` ...); snake_case field
names are accepted as well.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import BusinessType


class SnapshotModel(BaseModel):
    """Base for every section of the diagnostic snapshot."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        # Missing and null fields both fall back to the declared default.
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def with_changes(self, **changes: Any) -> SnapshotModel:
        """Return a validated copy with ``changes`` applied."""
        return type(self).model_validate({**self.model_dump(), **changes})


# ---------------------------------------------------------------------------
# Financial section
# ---------------------------------------------------------------------------

class ClientOrigin(SnapshotModel):
    """Where current clients come from, as user-entered percentages.

    The buckets are not forced to sum to 100; deviation is only flagged.
    """

    referral: float = Field(default=0, ge=0, le=100)
    paid_traffic: float = Field(default=0, ge=0, le=100)
    organic_social: float = Field(default=0, ge=0, le=100)
    google_search: float = Field(default=0, ge=0, le=100)
    others: float = Field(default=0, ge=0, le=100)

    def buckets(self) -> dict[str, float]:
        return {
            "referral": self.referral,
            "paid_traffic": self.paid_traffic,
            "organic_social": self.organic_social,
            "google_search": self.google_search,
            "others": self.others,
        }

    def total(self) -> float:
        return sum(self.buckets().values())

    def shares(self) -> dict[str, float]:
        """Each bucket's share (0-100) of the entered total; empty if total is 0."""
        total = self.total()
        if total <= 0:
            return {}
        return {name: (value / total) * 100 for name, value in self.buckets().items()}

    def deviation_from_full(self) -> float:
        """How far the entered percentages are from summing to 100."""
        return self.total() - 100


class FinancialData(SnapshotModel):
    average_ticket: float = Field(default=0, ge=0)
    profit_margin: float = Field(default=30, ge=0, le=100)
    profit: float = Field(default=0, ge=0)
    current_monthly_revenue: float = Field(default=0, ge=0)
    current_monthly_sales: float = Field(default=0, ge=0)
    monthly_goal_revenue: float = Field(default=0, ge=0)
    # Sales-count goal, derived from monthly_goal_revenue (see engine.derived)
    monthly_goal: int = Field(default=0, ge=0)

    clients_per_month: float = Field(default=0, ge=0)
    can_grow: bool = False
    growth_percentage: float = Field(default=0, ge=0)
    operational_bottleneck: str = ""

    client_origin: ClientOrigin = Field(default_factory=ClientOrigin)

    monthly_budget: float = Field(default=0, ge=0)
    previous_failed_investment: float = Field(default=0, ge=0)


# ---------------------------------------------------------------------------
# Benchmark section
# ---------------------------------------------------------------------------

class ConversionRates(SnapshotModel):
    """Stage conversion percentages: reach->click, click->lead, lead->sale."""

    reach_to_click: float = Field(default=0, ge=0, le=100)
    click_to_lead: float = Field(default=0, ge=0, le=100)
    lead_to_sale: float = Field(default=0, ge=0, le=100)


DEFAULT_BENCHMARKS: dict[BusinessType, ConversionRates] = {
    BusinessType.B2C: ConversionRates(
        reach_to_click=5,
        click_to_lead=20,
        lead_to_sale=20,
    ),
    BusinessType.B2B: ConversionRates(
        reach_to_click=5,
        click_to_lead=32,
        lead_to_sale=12.5,
    ),
}


class BenchmarkData(SnapshotModel):
    business_type: BusinessType = BusinessType.B2C
    conversion_rates: ConversionRates = Field(
        default_factory=lambda: DEFAULT_BENCHMARKS[BusinessType.B2C]
    )

    @model_validator(mode="before")
    @classmethod
    def fill_rates_from_preset(cls, data: Any) -> Any:
        """Rates missing from a stored snapshot come from the type's preset."""
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        raw_type = data.get("businessType", data.get("business_type"))
        try:
            business_type = BusinessType(raw_type) if raw_type else BusinessType.B2C
        except ValueError:
            # Let field validation report the bad value.
            return data

        preset = DEFAULT_BENCHMARKS[business_type].model_dump()
        key = "conversionRates" if "conversionRates" in data else "conversion_rates"
        rates = data.get(key)
        if rates is None:
            data[key] = preset
        elif isinstance(rates, Mapping):
            merged = dict(preset)
            for name, value in rates.items():
                if value is None:
                    continue
                merged[_snake_name(ConversionRates, name)] = value
            data[key] = merged
        return data


# ---------------------------------------------------------------------------
# History section
# ---------------------------------------------------------------------------

class SocialMediaMetrics(SnapshotModel):
    average_monthly_reach: float = Field(default=0, ge=0)
    engagement_rate: float = Field(default=0, ge=0, le=100)
    link_clicks: float = Field(default=0, ge=0)
    messages_received: float = Field(default=0, ge=0)
    leads_generated: float = Field(default=0, ge=0)


class PaidTrafficMetrics(SnapshotModel):
    total_investment: float = Field(default=0, ge=0)
    leads_generated: float = Field(default=0, ge=0)
    sales_generated: float = Field(default=0, ge=0)


class GoogleOrganicMetrics(SnapshotModel):
    monthly_visits: float = Field(default=0, ge=0)
    conversion_rate: float = Field(default=0, ge=0, le=100)


class HistoryData(SnapshotModel):
    has_history: bool = False
    social_media: SocialMediaMetrics = Field(default_factory=SocialMediaMetrics)
    paid_traffic: PaidTrafficMetrics = Field(default_factory=PaidTrafficMetrics)
    google_organic: GoogleOrganicMetrics = Field(default_factory=GoogleOrganicMetrics)

    # Legacy aggregates, still preferred by the calculator when populated
    average_leads_per_month: float = Field(default=0, ge=0)
    average_conversion_rate: float = Field(default=0, ge=0, le=100)
    average_cac: float = Field(default=0, ge=0, alias="averageCAC")


# ---------------------------------------------------------------------------
# Investment and validation sections
# ---------------------------------------------------------------------------

class InvestmentData(SnapshotModel):
    available_budget: float = Field(default=0, ge=0)
    current_investment: float = Field(default=0, ge=0)
    max_acceptable_cac: float = Field(default=0, ge=0, alias="maxAcceptableCAC")


class ValidationData(SnapshotModel):
    """Three-month rollout: month 1 and 2 take a share of the budget, month 3 all of it."""

    test_duration: int = Field(default=30, ge=0)
    test_budget: float = Field(default=0, ge=0)
    minimum_leads: int = Field(default=50, ge=0)
    month1_percentage: float = Field(default=50, ge=0, le=100)
    month2_percentage: float = Field(default=70, ge=0, le=100)


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

class DiagnosticData(SnapshotModel):
    """Complete diagnostic snapshot for one client."""

    financial: FinancialData = Field(default_factory=FinancialData)
    benchmark: BenchmarkData = Field(default_factory=BenchmarkData)
    history: HistoryData = Field(default_factory=HistoryData)
    investment: InvestmentData = Field(default_factory=InvestmentData)
    validation: ValidationData = Field(default_factory=ValidationData)

    def with_section(self, section: str, **changes: Any) -> DiagnosticData:
        """Return a new snapshot with one section replaced by an edited copy."""
        current = getattr(self, section, None)
        if not isinstance(current, SnapshotModel):
            raise ValueError(f"Unknown diagnostic section: {section!r}")
        return self.model_copy(update={section: current.with_changes(**changes)})

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the dashboard."""
        return self.model_dump(mode="json", by_alias=True)


INITIAL_DIAGNOSTIC_DATA = DiagnosticData()


def initial_diagnostic_data() -> DiagnosticData:
    """Return the documented defaults for a new diagnostic."""
    return INITIAL_DIAGNOSTIC_DATA.model_copy(deep=True)


def _snake_name(model: type[BaseModel], name: str) -> str:
    """Map a field alias back to its attribute name (identity for unknown names)."""
    for field_name, info in model.model_fields.items():
        if name in (field_name, info.alias):
            return field_name
    return name

"""FastAPI application for the marketing diagnostic: calculation and snapshot endpoints."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from diagnostic.benchmarks import apply_business_type, list_presets
from diagnostic.config.settings import Settings
from diagnostic.engine.derived import recompute_derived_fields
from diagnostic.engine.report import build_report
from diagnostic.engine.serialization import report_to_dict
from diagnostic.models.diagnostic_data import INITIAL_DIAGNOSTIC_DATA, DiagnosticData
from diagnostic.models.enums import BusinessType, ProfitAnchor
from diagnostic.storage import DiagnosticStore, SnapshotError, get_store

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Marketing Diagnostic API", version="0.1.0")

# CORS: allow the dashboard dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Singleton snapshot store (memory unless configured otherwise)
_store = get_store(settings)


def get_diagnostic_store() -> DiagnosticStore:
    return _store


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BusinessTypeRequest(_CamelModel):
    data: DiagnosticData = Field(default_factory=DiagnosticData)
    business_type: BusinessType


class RecomputeRequest(_CamelModel):
    data: DiagnosticData
    anchor: ProfitAnchor = ProfitAnchor.MARGIN


@app.get("/api/benchmarks")
async def get_benchmarks():
    """Conversion-rate presets per business type."""
    return {
        business_type.value: rates.model_dump(mode="json", by_alias=True)
        for business_type, rates in list_presets().items()
    }


@app.get("/api/diagnostics/initial")
async def get_initial_diagnostic():
    """Default snapshot for a new diagnostic."""
    return INITIAL_DIAGNOSTIC_DATA.to_snapshot()


@app.post("/api/diagnostics/calculate")
async def calculate_diagnostic(
    body: DiagnosticData,
    anchor: ProfitAnchor = ProfitAnchor.MARGIN,
):
    """Resolve derived fields, then run the reverse-funnel calculation."""
    return report_to_dict(build_report(recompute_derived_fields(body, anchor)))


@app.post("/api/diagnostics/business-type")
async def switch_business_type(body: BusinessTypeRequest):
    """Apply a business type, resetting conversion rates to its preset."""
    return apply_business_type(body.data, body.business_type).to_snapshot()


@app.post("/api/diagnostics/recompute")
async def recompute_diagnostic(body: RecomputeRequest):
    """Resolve derived financial fields (ticket, profit/margin, sales goal)."""
    return recompute_derived_fields(body.data, body.anchor).to_snapshot()


@app.get("/api/clients/{client_id}/diagnostic")
async def get_client_diagnostic(
    client_id: str,
    store: DiagnosticStore = Depends(get_diagnostic_store),
):
    """Return the stored snapshot for a client."""
    try:
        data = store.load(client_id)
    except SnapshotError as e:
        logger.exception(f"Could not load diagnostic for client {client_id}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    if data is None:
        raise HTTPException(status_code=404, detail="Diagnostic not found")
    return data.to_snapshot()


@app.put("/api/clients/{client_id}/diagnostic")
async def save_client_diagnostic(
    client_id: str,
    body: DiagnosticData,
    store: DiagnosticStore = Depends(get_diagnostic_store),
):
    """Store a client's snapshot with derived fields resolved."""
    data = recompute_derived_fields(body)
    try:
        store.save(client_id, data)
    except SnapshotError as e:
        logger.exception(f"Could not save diagnostic for client {client_id}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    return data.to_snapshot()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def run():
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()

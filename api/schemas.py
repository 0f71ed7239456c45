"""
Modelli Pydantic v2 per le risposte API.

Rispecchiano AnalysisResult; i valori non finiti diventano null (JSON
non ammette NaN).
"""
import math
from typing import List, Optional
from pydantic import BaseModel, Field

from analysis.types import AnalysisResult, ProcessOutcome


def _finite(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


class AnalyzeRequest(BaseModel):
    text: str = Field(..., description="Testo copiato dal programma di carico")


class PalletTypeModel(BaseModel):
    type: str
    count: int = Field(..., ge=0)


class CustomerModel(BaseModel):
    name: str
    pallets: int = Field(..., ge=0)
    colli: Optional[float] = None
    weight: Optional[float] = Field(None, description="Peso lordo (null se non calcolabile)")


class AnomalyModel(BaseModel):
    row: int = Field(..., ge=0, description="Indice record (0-based)")
    field: str
    raw_value: str


class AnalysisResultModel(BaseModel):
    total_pallets: int
    total_colli: Optional[float]
    total_weight: Optional[float]
    unique_customers: int
    pallet_types: List[PalletTypeModel]
    top_customers: List[CustomerModel]
    all_customers: List[CustomerModel]
    record_count: int
    has_anomalies: bool
    anomalies: List[AnomalyModel]

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResultModel":
        def customer(c) -> CustomerModel:
            return CustomerModel(name=c.name, pallets=c.pallets, colli=_finite(c.colli), weight=_finite(c.weight))

        return cls(
            total_pallets=result.total_pallets,
            total_colli=_finite(result.total_colli),
            total_weight=_finite(result.total_weight),
            unique_customers=result.unique_customers,
            pallet_types=[PalletTypeModel(type=t.type, count=t.count) for t in result.pallet_types],
            top_customers=[customer(c) for c in result.top_customers],
            all_customers=[customer(c) for c in result.all_customers],
            record_count=result.record_count,
            has_anomalies=result.has_anomalies,
            anomalies=[AnomalyModel(row=a.row, field=a.field, raw_value=a.raw_value) for a in result.anomalies],
        )


class AnalyzeResponse(BaseModel):
    status: str = "ok"
    correlation_id: Optional[str] = None
    headers: List[str]
    header_index: int
    result: Optional[AnalysisResultModel] = None
    message: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: ProcessOutcome, correlation_id: Optional[str] = None) -> "AnalyzeResponse":
        result = outcome.result
        return cls(
            status="ok" if result is not None else "empty",
            correlation_id=correlation_id,
            headers=outcome.parsed.headers,
            header_index=outcome.parsed.header_index,
            result=AnalysisResultModel.from_result(result) if result is not None else None,
            message=None if result is not None else "Geen gegevensrijen gevonden na de header.",
        )

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

Record = Dict[str, str]

NumericField = Literal["Colli", "Bruto"]


@dataclass
class ParsedText:
    headers: List[str]
    records: List[Record]
    header_index: int = 0
    lines_total: int = 0


@dataclass
class NumericAnomaly:
    """Cella numerica non interpretabile (riga = indice record, 0-based)."""

    row: int
    field: NumericField
    raw_value: str


@dataclass
class PalletTypeCount:
    type: str
    count: int


@dataclass
class CustomerSummary:
    name: str
    pallets: int
    colli: float
    weight: float


@dataclass
class AnalysisResult:
    total_pallets: int
    total_colli: float
    total_weight: float
    unique_customers: int
    pallet_types: List[PalletTypeCount]
    top_customers: List[CustomerSummary]
    all_customers: List[CustomerSummary]
    record_count: int = 0
    anomalies: List[NumericAnomaly] = field(default_factory=list)

    @property
    def has_anomalies(self) -> bool:
        return bool(self.anomalies)

    @property
    def totals_are_finite(self) -> bool:
        return math.isfinite(self.total_colli) and math.isfinite(self.total_weight)


@dataclass
class ProcessOutcome:
    parsed: ParsedText
    result: Optional[AnalysisResult]

"""
Aggregazione record pallet in statistiche riepilogative.

Un unico passaggio sui record: totali (somme di riga, senza dedup),
pallet unici globali, pallet unici per tipo e riepilogo per cliente.
Tutti gli accumulatori sono locali alla chiamata.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Set

from analysis import fields
from analysis.types import (
    AnalysisResult,
    CustomerSummary,
    NumericAnomaly,
    PalletTypeCount,
    Record,
)

logger = logging.getLogger(__name__)

AnomalyPolicy = Literal["propagate", "skip"]

TOP_CUSTOMERS = 5


@dataclass
class CustomerAccumulator:
    pallet_numbers: Set[str] = field(default_factory=set)
    pallets: int = 0
    colli: float = 0.0
    weight: float = 0.0

    def add(self, pallet_number: str, colli: float, weight: float) -> None:
        # Un pallet ripetuto per lo stesso cliente conta una volta sola,
        # colli e peso si sommano sempre
        if pallet_number not in self.pallet_numbers:
            self.pallet_numbers.add(pallet_number)
            self.pallets += 1
        self.colli += colli
        self.weight += weight


@dataclass
class TypeAccumulator:
    pallet_numbers: Set[str] = field(default_factory=set)

    @property
    def count(self) -> int:
        return len(self.pallet_numbers)


def aggregate(
    records: Iterable[Record],
    top_n: int = TOP_CUSTOMERS,
    anomaly_policy: AnomalyPolicy = "propagate",
) -> Optional[AnalysisResult]:
    """
    Calcola le statistiche di carico.

    Args:
        records: Record prodotti dal parser, nell'ordine di input
        top_n: Numero di clienti nella classifica top
        anomaly_policy: 'propagate' lascia NaN nelle somme (segnalato in
            `anomalies`), 'skip' esclude il valore non interpretabile

    Returns:
        AnalysisResult, oppure None se non ci sono record
    """
    records = list(records)
    if not records:
        logger.info("[AGGREGATOR] Nessun record da aggregare")
        return None

    total_colli = 0.0
    total_weight = 0.0
    pallets: Set[str] = set()
    types: Dict[str, TypeAccumulator] = {}
    customers: Dict[str, CustomerAccumulator] = {}
    anomalies: List[NumericAnomaly] = []

    for row_idx, record in enumerate(records):
        pallet_number = fields.pallet_number(record)
        pallet_type = fields.pallet_type(record)
        customer = fields.customer(record)

        colli, bad_colli = fields.colli(record)
        if bad_colli is not None:
            anomalies.append(NumericAnomaly(row=row_idx, field=fields.COLLI_FIELD, raw_value=bad_colli))

        weight, bad_weight = fields.weight(record)
        if bad_weight is not None:
            anomalies.append(NumericAnomaly(row=row_idx, field=fields.WEIGHT_FIELD, raw_value=bad_weight))
            if anomaly_policy == "skip":
                weight = 0.0

        total_colli += colli
        total_weight += weight

        pallets.add(pallet_number)
        types.setdefault(pallet_type, TypeAccumulator()).pallet_numbers.add(pallet_number)
        customers.setdefault(customer, CustomerAccumulator()).add(pallet_number, colli, weight)

    # sorted() è stabile anche con reverse=True: i pari merito restano
    # nell'ordine di prima apparizione
    pallet_types = sorted(
        (PalletTypeCount(type=name, count=acc.count) for name, acc in types.items()),
        key=lambda item: item.count,
        reverse=True,
    )
    all_customers = sorted(
        (
            CustomerSummary(name=name, pallets=acc.pallets, colli=acc.colli, weight=acc.weight)
            for name, acc in customers.items()
        ),
        key=lambda item: item.pallets,
        reverse=True,
    )

    if anomalies:
        logger.warning(
            f"[AGGREGATOR] {len(anomalies)} celle numeriche non interpretabili "
            f"(policy={anomaly_policy}), prima: riga {anomalies[0].row} "
            f"{anomalies[0].field}='{anomalies[0].raw_value}'"
        )
    if math.isnan(total_weight):
        logger.warning("[AGGREGATOR] Peso totale non calcolabile (NaN)")

    logger.info(
        f"[AGGREGATOR] {len(records)} record → {len(pallets)} pallet unici, "
        f"{len(customers)} clienti, {len(types)} tipi"
    )

    return AnalysisResult(
        total_pallets=len(pallets),
        total_colli=total_colli,
        total_weight=total_weight,
        unique_customers=len(customers),
        pallet_types=pallet_types,
        top_customers=all_customers[:top_n],
        all_customers=all_customers,
        record_count=len(records),
        anomalies=anomalies,
    )

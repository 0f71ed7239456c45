"""
Test unitari per aggregazione statistiche pallet.
"""
import math

import pytest

from analysis.aggregator import aggregate
from analysis.parser import parse_text
from analysis.types import CustomerSummary, PalletTypeCount
from tests.samples import paste


def _row(pallet, type_="Euro", customer="A", colli="1", weight="1"):
    return {"Pallet (49)": pallet, "Omschrijving": type_, "Klant": customer, "Colli": colli, "Bruto": weight}


class TestEndToEnd:
    """Esempio completo: testo incollato → risultato."""

    def test_example(self, sample_text):
        result = aggregate(parse_text(sample_text).records)

        assert result.total_pallets == 2
        assert result.total_colli == 5
        assert result.total_weight == pytest.approx(26.0)
        assert result.unique_customers == 2
        assert result.pallet_types == [PalletTypeCount("Euro", 1), PalletTypeCount("Blok", 1)]
        assert result.all_customers == [
            CustomerSummary(name="A", pallets=1, colli=4.0, weight=21.0),
            CustomerSummary(name="B", pallets=1, colli=1.0, weight=5.0),
        ]
        assert result.top_customers == result.all_customers
        assert result.record_count == 3
        assert not result.has_anomalies

    def test_empty_records(self):
        assert aggregate([]) is None


class TestDeduplication:
    """Test dedup pallet vs somme di riga."""

    def test_totals_are_row_sums(self):
        records = [_row("111", colli="2", weight="10,5"), _row("111", colli="2", weight="10,5")]
        result = aggregate(records)

        assert result.total_pallets == 1
        assert result.total_colli == 4
        assert result.total_weight == pytest.approx(21.0)

    def test_same_pallet_counts_once_per_customer(self):
        records = [_row("111", customer="A", colli="3", weight="7"), _row("111", customer="A", colli="1", weight="2,5")]
        customer = aggregate(records).all_customers[0]

        assert customer.pallets == 1
        assert customer.colli == 4
        assert customer.weight == pytest.approx(9.5)

    def test_pallet_shared_by_two_customers(self):
        records = [_row("111", customer="A"), _row("111", customer="B")]
        result = aggregate(records)

        assert result.total_pallets == 1
        assert [c.pallets for c in result.all_customers] == [1, 1]

    def test_pallet_number_trimmed_for_identity(self):
        result = aggregate([_row("111"), _row(" 111 ")])
        assert result.total_pallets == 1

    def test_empty_pallet_number_is_one_identity(self):
        records = [_row(""), _row(""), {"Klant": "A"}, _row("222")]
        result = aggregate(records)
        assert result.total_pallets == 2

    def test_type_counts_distinct_pallets(self):
        records = [_row("1", "Euro"), _row("1", "Euro"), _row("2", "Euro"), _row("1", "Blok")]
        result = aggregate(records)
        assert result.pallet_types == [PalletTypeCount("Euro", 2), PalletTypeCount("Blok", 1)]

    def test_missing_fields_use_defaults(self):
        result = aggregate([{"Pallet (49)": "111"}])

        assert result.pallet_types == [PalletTypeCount("Onbekend", 1)]
        assert result.all_customers == [CustomerSummary("Onbekend", 1, 0.0, 0.0)]
        assert result.total_colli == 0
        assert result.total_weight == 0


class TestRanking:
    """Test ordinamento stabile e top-N."""

    def test_type_ties_keep_first_seen_order(self):
        records = [
            _row("1", "C"),
            _row("2", "A"), _row("3", "A"), _row("4", "A"),
            _row("5", "B"), _row("6", "B"), _row("7", "B"),
        ]
        result = aggregate(records)
        assert [(t.type, t.count) for t in result.pallet_types] == [("A", 3), ("B", 3), ("C", 1)]

    def test_customers_sorted_by_pallets(self):
        records = [
            _row("1", customer="Klein"),
            _row("2", customer="Groot"), _row("3", customer="Groot"),
            _row("4", customer="Midden"), _row("5", customer="Midden"),
        ]
        result = aggregate(records)
        assert [c.name for c in result.all_customers] == ["Groot", "Midden", "Klein"]

    def test_top_customers_is_prefix_of_all(self):
        records = []
        for idx, name in enumerate("ABCDEFG"):
            for n in range(idx + 1):
                records.append(_row(f"{name}{n}", customer=name))
        result = aggregate(records)

        assert len(result.all_customers) == 7
        assert result.top_customers == result.all_customers[:5]
        assert [c.name for c in result.top_customers] == ["G", "F", "E", "D", "C"]

    def test_custom_top_n(self):
        records = [_row(str(n), customer=f"K{n}") for n in range(4)]
        result = aggregate(records, top_n=2)
        assert [c.name for c in result.top_customers] == ["K0", "K1"]
        assert result.unique_customers == 4

    def test_fewer_than_five_customers(self, sample_text):
        result = aggregate(parse_text(sample_text).records)
        assert result.top_customers == result.all_customers


class TestNumericAnomalies:
    """Test celle numeriche non interpretabili."""

    def test_bad_weight_propagates_nan(self):
        records = [_row("1", weight="10"), _row("2", customer="B", weight="zwaar")]
        result = aggregate(records)

        assert math.isnan(result.total_weight)
        assert not result.totals_are_finite
        assert result.all_customers[0].weight == 10
        assert math.isnan(result.all_customers[1].weight)
        assert len(result.anomalies) == 1
        anomaly = result.anomalies[0]
        assert (anomaly.row, anomaly.field, anomaly.raw_value) == (1, "Bruto", "zwaar")

    def test_bad_weight_skipped(self):
        records = [_row("1", weight="10"), _row("2", weight="zwaar")]
        result = aggregate(records, anomaly_policy="skip")

        assert result.total_weight == 10
        assert result.totals_are_finite
        assert result.has_anomalies

    def test_bad_colli_counts_as_zero(self):
        records = [_row("1", colli="3"), _row("2", colli="veel")]
        result = aggregate(records)

        assert result.total_colli == 3
        assert [(a.row, a.field) for a in result.anomalies] == [(1, "Colli")]

    def test_bad_cell_does_not_abort(self):
        text = paste("1\tEuro\tA\tx\ty", "2\tEuro\tB\t2\t4")
        result = aggregate(parse_text(text).records)

        assert result.total_pallets == 2
        assert result.unique_customers == 2
        assert len(result.anomalies) == 2

    def test_blank_weight_cell_is_reported(self):
        text = paste("1\tEuro\tA\t1\t10", "2\tEuro\tB\t1\t  \t", "3\tEuro\tC\t1\t5")
        result = aggregate(parse_text(text).records)

        assert result.has_anomalies
        assert [(a.row, a.field, a.raw_value) for a in result.anomalies] == [(1, "Bruto", "  ")]
        assert math.isnan(result.total_weight)
        assert math.isnan(result.all_customers[1].weight)

    def test_out_of_range_weight_is_not_finite(self):
        result = aggregate([_row("1", weight="1e999")])

        assert not result.totals_are_finite
        assert result.anomalies[0].raw_value == "1e999"

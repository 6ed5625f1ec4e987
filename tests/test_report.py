import io

import pytest

from wastesim.config import SimulationConfig
from wastesim.report import CostReport, format_report, kilos_to_tons, print_report
from wastesim.stats import CollectionStats, Histogram


def _priced():
    stats = CollectionStats(households=120, meters=10_000, duration=120.0, communal_kg=500.0, sorted_kg=1000.0)
    config = SimulationConfig(fleet_size=2, consumption_spread=0, fuel_price_spread=0)
    return CostReport.from_run(stats, config), config


def test_cost_formulas():
    report, config = _priced()

    assert report.kilometers == 10
    assert report.fuel_liters == pytest.approx(17)
    assert report.fuel_cost == pytest.approx(8.5 * 30 * 2)
    assert report.hours == pytest.approx(2)
    assert report.hours_per_vehicle == pytest.approx(1)
    assert report.salary == pytest.approx(2 * 3 * 2 * 55)
    assert report.parking_rent == pytest.approx(2 * config.parking_rent_per_day * 7)
    assert report.communal_disposal == pytest.approx(0.5 * 1189)
    assert report.sorted_disposal == pytest.approx(1 * 300)
    assert report.total == pytest.approx(
        report.fuel_cost + report.salary + report.parking_rent + report.communal_disposal + report.sorted_disposal
    )
    assert report.as_dict()["total"] == report.total


def test_tons_are_thousand_kilos():
    assert kilos_to_tons(2500) == 2.5


def test_report_text_lists_every_figure():
    report, _ = _priced()
    text = format_report(report)

    assert text.splitlines()[:3] == ["Cars: 2", "Households: 120", "Distance: 10 km"]
    assert "Total duration: 1 h" in text
    assert "Total fuel consumption: 17l" in text
    assert "Total sorted liquidation price: 300 CZK" in text
    assert "Total price:" in text
    assert "HISTOGRAM" not in text


def test_print_report_appends_the_histogram():
    report, _ = _priced()
    hist = Histogram("Time on a single street")
    hist.record(4.2)
    stream = io.StringIO()

    print_report(report, hist, stream)

    assert "HISTOGRAM Time on a single street" in stream.getvalue()

"""
Shared fixtures for the footprint test-suite.

Rows are plain ActivityRow objects; no files or network are touched unless
a test asks for ``tmp_path``.
"""
import pytest

from footprint.calculations import ActivityRow
from footprint.emission_factors import EmissionFactor, FactorRegistry


@pytest.fixture
def scenario_a_rows():
    """Electricity 100 kWh + Diesel 50 L → 82.0 + 134.0 kg CO₂e."""
    return [
        ActivityRow("Electricity", 100, "kWh"),
        ActivityRow("Diesel", 50, "L"),
    ]


@pytest.fixture
def two_factor_registry():
    return FactorRegistry([
        EmissionFactor("Electricity", "kWh", 0.82),
        EmissionFactor("Diesel", "L", 2.68),
    ])


@pytest.fixture
def sample_csv_text():
    return (
        "Activity,Quantity,Unit\n"
        "Electricity (Dyehouse),\"1,200\",kWh\n"
        "\n"
        ",5,kg\n"
        "Diesel Generator,abc,L\n"
        "Electricity (Dyehouse),300,kWh\n"
    )

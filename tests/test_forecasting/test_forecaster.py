import json
from datetime import datetime, timedelta, timezone

import pytest

from flight_management.forecasting import ArrivalForecaster, ForecastTables, TaxiTime
from flight_management.forecasting.tables import (
    DEFAULT_CRUISE_SPEED_KMH, load_aircraft_speeds, load_taxi_times
)
from flight_management.models import AirportCoordinate

from conftest import InMemoryAirports

IST = AirportCoordinate('IST', 41.2753, 28.7519)
FRA = AirportCoordinate('FRA', 50.0333, 8.5706)
DEPARTURE = datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def airports():
    return InMemoryAirports([IST, FRA])


class TestArrivalForecaster:

    def test_istanbul_frankfurt_default_taxi(self, airports):
        """1837 km at 840 km/h is 131 min airborne, plus 15 min taxi out and 7 min taxi in."""
        forecaster = ArrivalForecaster(ForecastTables.from_dicts({'Airbus A320': 840}), airports)

        arrival = forecaster.estimate_arrival('IST', 'FRA', 'Airbus A320', DEPARTURE)

        expected = datetime(2025, 1, 1, 12, 3, tzinfo=timezone.utc)
        assert abs(arrival - expected) <= timedelta(minutes=1)

    def test_breakdown(self, airports):
        forecaster = ArrivalForecaster(ForecastTables.from_dicts({'Airbus A320': 840}), airports)

        estimate = forecaster.estimate('IST', 'FRA', 'Airbus A320', DEPARTURE)

        assert estimate.distance_km == pytest.approx(1837.4, abs=1.0)
        assert estimate.flight_minutes == 131
        assert estimate.taxi_out_minutes == 15
        assert estimate.taxi_in_minutes == 7
        assert estimate.total_minutes == 153
        assert estimate.arrival_time == DEPARTURE + timedelta(minutes=153)
        assert estimate.to_dict()['total_minutes'] == 153

    def test_unknown_model_uses_default_speed(self, airports):
        explicit = ArrivalForecaster(ForecastTables.from_dicts({'Airbus A320': 840}), airports)
        fallback = ArrivalForecaster(ForecastTables.from_dicts({}), airports)

        assert DEFAULT_CRUISE_SPEED_KMH == 840
        assert (fallback.estimate_arrival('IST', 'FRA', 'Unknown Jet', DEPARTURE)
                == explicit.estimate_arrival('IST', 'FRA', 'Airbus A320', DEPARTURE))

    @pytest.mark.parametrize("speed", [0, -500, float('nan')])
    def test_unusable_speed_uses_default(self, airports, speed):
        tables = ForecastTables.from_dicts({'Broken': speed, 'Airbus A320': 840})
        forecaster = ArrivalForecaster(tables, airports)

        arrival = forecaster.estimate_arrival('IST', 'FRA', 'Broken', DEPARTURE)

        assert tables.cruise_speed('Broken') == DEFAULT_CRUISE_SPEED_KMH
        assert arrival == forecaster.estimate_arrival('IST', 'FRA', 'Airbus A320', DEPARTURE)
        assert arrival > DEPARTURE

    def test_unusable_speed_in_file_uses_default(self, airports, tmp_path):
        speeds = tmp_path / 'speeds.json'
        speeds.write_text(json.dumps({'Broken': 0}))
        forecaster = ArrivalForecaster(ForecastTables.load(speeds), airports)
        assert forecaster.estimate('IST', 'FRA', 'Broken', DEPARTURE).flight_minutes == 131

    def test_faster_aircraft_arrives_earlier(self, airports):
        tables = ForecastTables.from_dicts({'Slow': 500, 'Fast': 900})
        forecaster = ArrivalForecaster(tables, airports)
        assert (forecaster.estimate_arrival('IST', 'FRA', 'Fast', DEPARTURE)
                < forecaster.estimate_arrival('IST', 'FRA', 'Slow', DEPARTURE))

    def test_unknown_airport_gives_none(self, airports):
        forecaster = ArrivalForecaster(ForecastTables.from_dicts({}), airports)
        assert forecaster.estimate_arrival('XXX', 'FRA', 'Airbus A320', DEPARTURE) is None
        assert forecaster.estimate_arrival('IST', 'YYY', 'Airbus A320', DEPARTURE) is None
        assert forecaster.estimate('IST', 'YYY', 'Airbus A320', DEPARTURE) is None

    def test_airport_specific_taxi_times(self, airports):
        tables = ForecastTables.from_dicts(
            {'Airbus A320': 840},
            {'IST': {'taxiOut': 20, 'taxiIn': 10}, 'FRA': {'taxiOut': 18, 'taxiIn': 9}},
        )
        estimate = ArrivalForecaster(tables, airports).estimate('IST', 'FRA', 'Airbus A320', DEPARTURE)
        # Taxi out at the origin, taxi in at the destination
        assert estimate.taxi_out_minutes == 20
        assert estimate.taxi_in_minutes == 9
        assert estimate.total_minutes == 20 + 131 + 9

    def test_default_taxi_entry(self, airports):
        tables = ForecastTables.from_dicts({}, {'default': (12, 4)})
        estimate = ArrivalForecaster(tables, airports).estimate('IST', 'FRA', 'Airbus A320', DEPARTURE)
        assert (estimate.taxi_out_minutes, estimate.taxi_in_minutes) == (12, 4)

    def test_codes_are_normalised(self, airports):
        forecaster = ArrivalForecaster(ForecastTables.from_dicts({}), airports)
        assert forecaster.estimate_arrival(' ist', 'fra ', 'Airbus A320', DEPARTURE) is not None

    def test_naive_departure_treated_as_utc(self, airports):
        forecaster = ArrivalForecaster(ForecastTables.from_dicts({}), airports)
        naive = forecaster.estimate_arrival('IST', 'FRA', 'Airbus A320', datetime(2025, 1, 1, 9, 30))
        aware = forecaster.estimate_arrival('IST', 'FRA', 'Airbus A320', DEPARTURE)
        assert naive == aware

    def test_database_airports(self, storage, seeded):
        forecaster = ArrivalForecaster(ForecastTables.from_dicts({}), storage)
        estimate = forecaster.estimate('IST', 'FRA', 'Airbus A320', DEPARTURE)
        assert estimate.flight_minutes == 131


class TestForecastTables:

    def test_tables_are_read_only(self):
        tables = ForecastTables.from_dicts({'Airbus A320': 840}, {'IST': (20, 10)})
        with pytest.raises(TypeError):
            tables.aircraft_speeds['Boeing 737-800'] = 842
        assert tables.taxi_times['IST'] == TaxiTime(20, 10)

    def test_literal_taxi_fallback_without_default_entry(self):
        tables = ForecastTables.from_dicts({}, {})
        assert tables.taxi_out('IST') == 15
        assert tables.taxi_in('IST') == 7

    def test_load_from_files(self, tmp_path):
        speeds = tmp_path / 'speeds.json'
        speeds.write_text(json.dumps({'Airbus A320': 840, 'ATR 72-600': 510}))
        taxi = tmp_path / 'taxi.json'
        taxi.write_text(json.dumps({'default': {'taxiOut': 15, 'taxiIn': 7}, 'IST': {'taxiOut': 20, 'taxiIn': 10}}))

        tables = ForecastTables.load(speeds, taxi)

        assert tables.cruise_speed('ATR 72-600') == 510
        assert tables.taxi_out('IST') == 20
        assert tables.taxi_in('ESB') == 7

    def test_missing_file_degrades_to_empty(self, tmp_path, caplog):
        assert load_aircraft_speeds(tmp_path / 'missing.json') == {}
        assert 'Error loading aircraft speeds' in caplog.text

    def test_malformed_file_degrades_to_empty(self, tmp_path):
        broken = tmp_path / 'taxi.json'
        broken.write_text('{"IST": ')
        assert load_taxi_times(broken) == {}

        tables = ForecastTables.load(tmp_path / 'nope.json', broken)
        assert tables.cruise_speed('Airbus A320') == DEFAULT_CRUISE_SPEED_KMH
        assert tables.taxi_out('IST') == 15

    def test_packaged_tables(self):
        tables = ForecastTables.load()
        assert tables.cruise_speed('Airbus A320') == 840
        assert 'default' in tables.taxi_times

from grislo.schemas.service_config import DEFAULT_TIME_SLOTS, ServiceConfig
from grislo.services.service_config import load_service_config
from tests.conftest import write_seed


def test_load_service_config_reads_settings(tmp_path):
    seed = write_seed(tmp_path, settings={
        "serviceName": "テスト便",
        "vehicleCapacity": 4,
        "reservationWindowDays": 14,
        "cancelDeadlineHours": 48,
        "timeSlots": ["08:00", "12:00"],
    })

    config = load_service_config(seed)

    assert config.service_name == "テスト便"
    assert config.vehicle_capacity == 4
    assert config.reservation_window_days == 14
    assert config.cancel_deadline_hours == 48
    assert config.time_slots == ["08:00", "12:00"]


def test_missing_config_falls_back_to_defaults(tmp_path):
    config = load_service_config(tmp_path)

    assert config == ServiceConfig()
    assert config.vehicle_capacity == 6
    assert config.reservation_window_days == 40
    assert config.time_slots == DEFAULT_TIME_SLOTS


def test_invalid_config_falls_back_to_defaults(tmp_path):
    (tmp_path / "config.json").write_text('{"settings": {"timeSlots": ["9am"]}}', encoding="utf-8")

    assert load_service_config(tmp_path) == ServiceConfig()


def test_corrupt_config_falls_back_to_defaults(tmp_path):
    (tmp_path / "config.json").write_text("{", encoding="utf-8")

    assert load_service_config(tmp_path) == ServiceConfig()


def test_bundled_seed_config_is_valid():
    config = load_service_config()

    assert config.vehicle_capacity == 6
    assert config.time_slots == DEFAULT_TIME_SLOTS

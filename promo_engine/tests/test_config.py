from promo_engine.config import AppConfig, get_config, set_config_for_test
from promo_engine.logging import get_logger


def test_defaults():
    config = AppConfig()
    assert config.app_env == "local"
    assert config.currency_symbol == "$"
    assert config.default_time_until == "23:59"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CURRENCY_SYMBOL", "€")
    monkeypatch.setenv("DATA_DIR", "/srv/menu")
    config = AppConfig()
    assert config.currency_symbol == "€"
    assert config.data_dir == "/srv/menu"


def test_set_config_for_test_replaces_singleton():
    set_config_for_test(log_level="WARNING")
    assert get_config().log_level == "WARNING"
    assert get_config() is get_config()


def test_logger_respects_level(capsys):
    set_config_for_test(log_level="INFO")
    logger = get_logger("promo_engine.tests")
    logger.debug("hidden message")
    logger.info("visible message")
    out = capsys.readouterr().out
    assert "visible message" in out
    assert "hidden message" not in out


def test_logger_records_component(capsys):
    set_config_for_test(log_level="INFO")
    get_logger("promo_engine.pricing").info("priced")
    get_logger().info("unnamed")
    out = capsys.readouterr().out.splitlines()
    assert "promo_engine.pricing:" in out[0]
    assert "| promo_engine:" in out[1]

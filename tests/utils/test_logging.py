import logging

from dbdialects.utils.logging import get_correlation_id, get_logger, set_correlation_id, time_call


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, sql="SELECT 1", threshold_ms=0):
        pass
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.message for record in records)
    assert records[-1].levelno == logging.WARNING
    assert records[-1].sql == "SELECT 1"


def test_package_logger_has_single_handler():
    get_logger("a")
    get_logger("b")
    assert len(logging.getLogger("dbdialects").handlers) == 1

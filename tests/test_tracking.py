import logging

from moneylab.tracking import LoggingUsageTracker


def test_logging_tracker_records_calculator(caplog):
    with caplog.at_level(logging.INFO, logger="moneylab.tracking"):
        LoggingUsageTracker().record("savings-projection")
    assert "Calculator used: savings-projection" in caplog.text

import pytest

from cabshare.config import ConfigError, int_setting


def test_int_setting_default(monkeypatch):
    monkeypatch.delenv("CABSHARE_RIDE_RETENTION_DAYS", raising=False)
    assert int_setting("CABSHARE_RIDE_RETENTION_DAYS", 1) == 1


def test_int_setting_reads_environment(monkeypatch):
    monkeypatch.setenv("CABSHARE_RIDE_RETENTION_DAYS", "3")
    assert int_setting("CABSHARE_RIDE_RETENTION_DAYS", 1) == 3


@pytest.mark.parametrize("raw", ["two", "1.5", ""])
def test_int_setting_rejects_non_integer(monkeypatch, raw):
    monkeypatch.setenv("CABSHARE_RIDE_RETENTION_DAYS", raw)
    with pytest.raises(ConfigError, match="integer"):
        int_setting("CABSHARE_RIDE_RETENTION_DAYS", 1)


def test_int_setting_rejects_negative(monkeypatch):
    monkeypatch.setenv("CABSHARE_RIDE_RETENTION_DAYS", "-1")
    with pytest.raises(ConfigError, match=">= 0"):
        int_setting("CABSHARE_RIDE_RETENTION_DAYS", 1)

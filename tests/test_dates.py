from stockarchiver.utils.dates import DEFAULT_TZ, iso_timestamp, timezone_name


def test_timezone_name_default(monkeypatch):
    monkeypatch.delenv("TIMEZONE", raising=False)
    assert timezone_name() == DEFAULT_TZ


def test_iso_timestamp_uses_configured_timezone(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "Asia/Tokyo")
    assert iso_timestamp().endswith("+09:00")
    assert iso_timestamp("Asia/Kolkata").endswith("+05:30")

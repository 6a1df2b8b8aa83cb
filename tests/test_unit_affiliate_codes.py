import re

from backoffice.config import AFFILIATE_CODE_SETTINGS
from backoffice.services import affiliates as affiliate_service
from backoffice.services.affiliates import generate_unique_affiliate_code

CODE_PATTERN = re.compile(r"^AFF[A-Z0-9]{5}$")


def test_code_format(db_session):
    for _ in range(20):
        assert CODE_PATTERN.match(generate_unique_affiliate_code(db_session))


def test_codes_are_distinct(db_session):
    codes = {generate_unique_affiliate_code(db_session) for _ in range(50)}
    assert len(codes) == 50


def test_existing_code_is_never_reissued(db_session, affiliate_factory, monkeypatch):
    affiliate_factory(affiliate_code="AFFAAAAA")
    candidates = iter(["AAAAA", "AAAAA", "BBBBB"])
    monkeypatch.setattr(affiliate_service, "_random_suffix", lambda length: next(candidates))

    assert generate_unique_affiliate_code(db_session) == "AFFBBBBB"


def test_timestamp_fallback_after_max_attempts(db_session, affiliate_factory, monkeypatch):
    affiliate_factory(affiliate_code="AFFZZZZZ")
    monkeypatch.setattr(affiliate_service, "_random_suffix", lambda length: "ZZZZZ")
    monkeypatch.setattr(affiliate_service, "epoch_millis", lambda: 1700000123456)

    code = generate_unique_affiliate_code(db_session)
    assert code == "AFF123456"
    assert len(code) == len(str(AFFILIATE_CODE_SETTINGS["prefix"])) + int(AFFILIATE_CODE_SETTINGS["fallback_digits"])


def test_attempt_count_follows_settings(db_session, affiliate_factory, monkeypatch):
    affiliate_factory(affiliate_code="AFFQQQQQ")
    calls = []

    def _suffix(length):
        calls.append(length)
        return "QQQQQ"

    monkeypatch.setattr(affiliate_service, "_random_suffix", _suffix)
    monkeypatch.setitem(AFFILIATE_CODE_SETTINGS, "max_attempts", 3)

    generate_unique_affiliate_code(db_session)
    assert calls == [5, 5, 5]

from __future__ import annotations

from attendance_dashboard.i18n import CATALOGS, Translator


def test_unknown_language_falls_back_to_english():
    assert Translator("de").language == "en"
    assert Translator("de")("nav.settings") == "Settings"


def test_turkish_catalog_is_used():
    assert Translator("tr")("attendance.status.absent") == "Katılmadı"


def test_missing_key_returns_default_or_key():
    translate = Translator("en")

    assert translate("does.not.exist") == "does.not.exist"
    assert translate("does.not.exist", "raw") == "raw"


def test_parameters_are_formatted():
    assert Translator("en")("courses.enroll.success", course_code="CS303") == "Enrolled in CS303 successfully!"


def test_catalogs_share_keys():
    assert set(CATALOGS["tr"]) == set(CATALOGS["en"])

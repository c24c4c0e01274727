"""Tests for the localized message catalog."""

from familytree.core.config.enums import Locale
from familytree.core.messages import message


def test_english_is_default_in_tests():
    assert message("forbidden") == "You do not have permission to perform this action"


def test_vietnamese_lookup():
    assert message("access_code_expired", Locale.VI) == (
        "Mã đã hết hạn, vui lòng liên hệ quản trị viên"
    )


def test_every_entry_has_both_locales():
    from familytree.core.messages import _CATALOG

    for key, entry in _CATALOG.items():
        assert set(entry) == {Locale.EN, Locale.VI}, key

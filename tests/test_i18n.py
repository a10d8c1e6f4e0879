# File: /tests/test_i18n.py | Version: 1.0 | Title: Locale negotiation and message lookup
import pytest

from testdesk.core.constants import InternalUserView, UserViewType
from testdesk.core.i18n import MESSAGES, Translator, normalize_locale


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, "en_US"),
        ("", "en_US"),
        ("zh-CN,zh;q=0.9", "zh_CN"),
        ("zh", "zh_CN"),
        ("en-GB", "en_US"),
        ("fr-FR, zh;q=0.5", "zh_CN"),
        ("fr-FR", "en_US"),
    ],
)
def test_normalize_locale(raw, expected):
    assert normalize_locale(raw) == expected


def test_translator_params_and_fallbacks():
    en = Translator("en_US")
    assert en.get("user_view.exist", name="Mine") == 'A view named "Mine" already exists'
    # Missing params stay as placeholders
    assert en.get("receiver_is_not_exist") == "Receivers do not exist: {receivers}"
    assert en.get("receiver_is_not_exist", other="x") == "Receivers do not exist: {receivers}"
    # Unknown key falls back to the key itself
    assert en.get("no.such.key") == "no.such.key"
    # Unknown locale uses the default
    assert Translator("de_DE").locale == "en_US"


def test_catalogues_cover_the_same_keys():
    assert set(MESSAGES["en_US"]) == set(MESSAGES["zh_CN"])


def test_every_internal_view_has_a_name():
    for locale in MESSAGES:
        for view in InternalUserView:
            assert view.message_key in MESSAGES[locale]


def test_internal_view_match():
    assert InternalUserView.match("ALL_DATA") is InternalUserView.ALL_DATA
    assert InternalUserView.match(" my_follow ") is InternalUserView.MY_FOLLOW
    assert InternalUserView.match("custom-uuid") is None
    assert InternalUserView.match(None) is None


def test_internal_views_per_type():
    common = [InternalUserView.ALL_DATA, InternalUserView.MY_FOLLOW, InternalUserView.MY_CREATE]
    assert UserViewType.FUNCTIONAL_CASE.internal_views == common
    assert UserViewType.BUG.internal_views == common + [InternalUserView.MY_ASSIGN]
    assert UserViewType.CASE_REVIEW.internal_views == common + [InternalUserView.MY_REVIEW]
    assert UserViewType.TEST_PLAN.internal_views == common + [InternalUserView.ARCHIVED]
    # Display positions follow declaration order
    assert [v.value for v in UserViewType.BUG.internal_views] == [1, 2, 3, 4]

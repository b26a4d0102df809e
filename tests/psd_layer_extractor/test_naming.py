import logging

import pytest

from psd_layer_extractor.naming import resolve_name, sanitize_filename

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Button", "Button"),
        ("a/b:c", "a_b_c"),
        ("  Hi  There  ", "Hi_There"),
        ('<>:"/\\|?*', ""),
        ("a__b___c", "a_b_c"),
        ("_leading", "leading"),
        ("trailing_", "trailing"),
        ("tab\tand\nnewline", "tab_and_newline"),
        ("a / b", "a_b"),
        ("日本語 レイヤー", "日本語_レイヤー"),
        ("", ""),
    ],
)
def test_sanitize_filename(name: str, expected: str) -> None:
    assert sanitize_filename(name) == expected


@pytest.mark.parametrize(
    "name", ["a/b:c", "  Hi  There  ", "__x__y__", "a? *b", "plain", "_ _ _"]
)
def test_sanitize_filename_idempotent(name: str) -> None:
    once = sanitize_filename(name)
    assert sanitize_filename(once) == once


@pytest.mark.parametrize(
    "path, name, expected",
    [
        ((), "Button", "Button"),
        (("UI",), "Button", "UI_Button"),
        (("UI", "Buttons"), "OK", "UI_Buttons_OK"),
        (("My Group",), "Layer 1", "My_Group_Layer_1"),
        (("a/b",), "c:d", "a_b_c_d"),
        (("???",), "Button", "Button"),
        (("UI", ""), "Button", "UI_Button"),
        (("_UI_",), "_Button_", "UI_Button"),
    ],
)
def test_resolve_name(path, name: str, expected: str) -> None:
    assert resolve_name(path, name) == expected


def test_resolve_name_is_deterministic() -> None:
    path = ("Header", "Nav  Bar")
    assert resolve_name(path, "Logo*") == resolve_name(path, "Logo*")


def test_resolve_name_default() -> None:
    assert resolve_name((), "***", default="Layer_3") == "Layer_3"
    assert resolve_name(("UI",), "***", default="Layer_3") == "UI"
    assert resolve_name((), "***") == ""


def test_resolve_name_collision() -> None:
    # Distinct layers can share an identifier; nothing is deduplicated.
    assert resolve_name(("a",), "b") == resolve_name((), "a b")

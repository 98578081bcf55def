import pytest

from utils.text_utils import (
    apply_font,
    available_fonts,
    get_module_font,
    register_module,
    set_module_font,
    style_text,
)


def test_normal_style_is_identity():
    assert style_text("Hello 123!", "normal") == "Hello 123!"


def test_bold_style_maps_letters_and_digits():
    styled = style_text("Ab1 *x*", "bold")
    assert styled == "𝗔𝗯𝟭 *𝘅*"


def test_styles_are_idempotent():
    for style in available_fonts():
        once = style_text("Help Module 2", style)
        assert style_text(once, style) == once


def test_unknown_style_rejected():
    with pytest.raises(ValueError):
        set_module_font("TextUtilsTest", "comic")


def test_register_does_not_override_existing_style():
    set_module_font("TextUtilsRegistered", "small_caps")
    register_module("TextUtilsRegistered")
    assert get_module_font("TextUtilsRegistered") == "small_caps"


@pytest.mark.asyncio
async def test_apply_font_uses_module_style():
    register_module("TextUtilsPlain")
    set_module_font("TextUtilsMono", "monospace")

    assert await apply_font("TextUtilsPlain", "abc") == "abc"
    assert await apply_font("TextUtilsMono", "abc") == "𝚊𝚋𝚌"
    assert await apply_font("TextUtilsUnregistered", "abc") == "abc"

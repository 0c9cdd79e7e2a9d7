import pytest

from fluentkit.textstyle import Font, FontWeight, TextStyle


def _fonts(style):
    return [
        style.caption, style.body, style.body_strong, style.subtitle,
        style.title, style.title_large, style.display,
    ]


def test_pixel_sizes_fixed_by_ramp():
    style = TextStyle()
    assert style.caption.pixel_size == 12
    assert style.body.pixel_size == 13
    assert style.display.pixel_size == 68


def test_sizes_never_shrink_along_ramp():
    sizes = [font.pixel_size for font in _fonts(TextStyle())]
    assert sizes == sorted(sizes)


def test_all_fonts_share_family():
    style = TextStyle()
    assert {font.family for font in _fonts(style)} == {style.family}


def test_custom_family_propagates():
    style = TextStyle("Segoe UI")
    assert style.family == "Segoe UI"
    assert all(font.family == "Segoe UI" for font in _fonts(style))


def test_weights():
    style = TextStyle()
    assert style.caption.weight is FontWeight.NORMAL
    assert style.body.weight is FontWeight.NORMAL
    assert style.body_strong.weight is FontWeight.DEMI_BOLD
    assert style.body_strong.pixel_size == style.body.pixel_size
    assert style.title.weight is FontWeight.DEMI_BOLD


def test_font_weight_coerced_from_int():
    font = Font("Mono", 10, 700)
    assert font.weight is FontWeight.BOLD


@pytest.mark.parametrize("size", [0, -3])
def test_font_rejects_bad_size(size):
    with pytest.raises(ValueError):
        Font("Mono", size)
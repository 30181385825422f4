import pytest

from webrenderer.bridge import Color, Declaration, LayoutNode, LayoutRect


def test_constants():
    assert Color.BLACK == Color(0, 0, 0, 255)
    assert Color.WHITE == Color(255, 255, 255, 255)
    assert Color.RED == Color(255, 0, 0, 255)
    assert Color.TRANSPARENT == Color(0, 0, 0, 0)


def test_from_rgba_round_trip():
    color = Color.from_rgba(10, 20, 30, 40)
    assert (color.r, color.g, color.b, color.a) == (10, 20, 30, 40)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#fff", Color.WHITE),
        ("#f00", Color.RED),
        ("#ff0000", Color.RED),
        ("ffffff", Color.WHITE),
        ("#00000000", Color.TRANSPARENT),
        ("#000", Color.BLACK),
    ],
)
def test_from_hex_known(text, expected):
    assert Color.from_hex(text) == expected


def test_from_hex_six_digits():
    assert Color.from_hex("#336699") == Color(0x33, 0x66, 0x99, 255)


def test_from_hex_eight_digits_alpha():
    assert Color.from_hex("#336699cc") == Color(0x33, 0x66, 0x99, 0xCC)


def test_from_hex_bad_length_is_opaque_black():
    assert Color.from_hex("#12345") == Color.BLACK
    assert Color.from_hex("") == Color.BLACK


def test_from_hex_invalid_digits_are_zero():
    assert Color.from_hex("#zzz") == Color(0, 0, 0, 255)
    assert Color.from_hex("#zz00ff") == Color(0, 0, 0xFF, 255)


def test_from_hex_strips_repeated_hashes():
    assert Color.from_hex("##fff") == Color.WHITE


def test_color_is_immutable():
    color = Color.from_rgba(1, 2, 3, 4)
    with pytest.raises(AttributeError):
        setattr(color, "r", 0)
    assert color.r == 1


def test_layout_types_hold_values():
    rect = LayoutRect(1.0, 2.0, 3.0, 4.0)
    assert (rect.x, rect.y, rect.width, rect.height) == (1.0, 2.0, 3.0, 4.0)
    node = LayoutNode(7, "div", 1.0, 2.0, 3.0, 4.0)
    assert node.background is None
    assert node.dom_node == 7 and node.tag_name == "div"
    decl = Declaration("color", "red")
    assert decl == Declaration("color", "red")
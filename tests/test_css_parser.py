import pytest

from webrenderer.css_parser import (
    AttributeSelector,
    ClassSelector,
    Declaration,
    DescendantSelector,
    IdSelector,
    Keyframe,
    PseudoClassSelector,
    StyleRule,
    StyleSheet,
    TagSelector,
    UniversalSelector,
    calculate_specificity,
    parse_selector,
)


def test_selector_parse_tag():
    assert parse_selector("div") == [TagSelector("div")]


def test_selector_parse_id():
    assert parse_selector("#header") == [IdSelector("header")]


def test_selector_parse_class():
    assert parse_selector(".container") == [ClassSelector("container")]


def test_selector_parse_pseudo_class():
    assert parse_selector(":hover") == [PseudoClassSelector("hover")]


def test_selector_parse_nth_child():
    assert parse_selector(":nth-child(2)") == [PseudoClassSelector("nth-child(2)")]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("div:first-child", [TagSelector("div"), PseudoClassSelector("first-child")]),
        ("a.b#c", [TagSelector("a"), ClassSelector("b"), IdSelector("c")]),
        ("[type='text']", [AttributeSelector("type", "text")]),
        ('input[type="text"]', [TagSelector("input"), AttributeSelector("type", "text")]),
        ("[disabled]", [AttributeSelector("disabled", "")]),
        ("*", [UniversalSelector()]),
        ("", []),
        ("   ", []),
    ],
)
def test_selector_parse_compound(text, expected):
    assert parse_selector(text) == expected


def test_selector_parse_unterminated_attribute_yields_nothing():
    assert parse_selector("[type") == []
    assert parse_selector("div[type") == [TagSelector("div")]


def test_selector_parse_descendant():
    assert parse_selector("div p") == [
        DescendantSelector(TagSelector("div"), TagSelector("p"))
    ]


def test_selector_parse_descendant_uses_outer_parts():
    assert parse_selector(".a > span b.c") == [
        DescendantSelector(ClassSelector("a"), TagSelector("b"))
    ]


def test_declaration():
    decl = Declaration("color", "red")
    assert decl.property == "color"
    assert decl.value == "red"
    assert not decl.important


def test_declaration_important():
    decl = Declaration("color", "red !important").with_important()
    assert decl.important


def test_with_important_returns_copy():
    original = Declaration("color", "red")
    flagged = original.with_important()
    assert flagged.important and not original.important
    assert flagged.value == "red"


def test_specificity():
    tag_rule = StyleRule([TagSelector("div")], [])
    class_rule = StyleRule([ClassSelector("container")], [])
    id_rule = StyleRule([IdSelector("header")], [])
    assert id_rule.specificity > class_rule.specificity
    assert class_rule.specificity > tag_rule.specificity


def test_pseudo_class_specificity():
    pseudo_rule = StyleRule([PseudoClassSelector("hover")], [])
    tag_rule = StyleRule([TagSelector("div")], [])
    class_rule = StyleRule([ClassSelector("container")], [])
    assert pseudo_rule.specificity == class_rule.specificity
    assert pseudo_rule.specificity > tag_rule.specificity


def test_specificity_values():
    assert calculate_specificity([TagSelector("div")]) == 1
    assert calculate_specificity([ClassSelector("x")]) == 256
    assert calculate_specificity([IdSelector("x")]) == 65536
    assert calculate_specificity([UniversalSelector()]) == 0


def test_descendant_specificity_sums_parts():
    descendant = [DescendantSelector(TagSelector("div"), ClassSelector("x"))]
    assert calculate_specificity(descendant) == calculate_specificity(
        [TagSelector("div"), ClassSelector("x")]
    )


def test_stylesheet_parse_simple():
    sheet = StyleSheet.parse("div { color: red; }")
    assert len(sheet.rules) == 1
    assert len(sheet.rules[0].selectors) == 1
    assert sheet.rules[0].declarations == [Declaration("color", "red")]


def test_stylesheet_parse_multiple():
    sheet = StyleSheet.parse("div { color: red; } p { font-size: 16px; }")
    assert len(sheet.rules) == 2


def test_stylesheet_selector_list_creates_rule_per_selector():
    sheet = StyleSheet.parse("h1, h2 , { margin: 0 }")
    assert [rule.selectors for rule in sheet.rules] == [
        [TagSelector("h1")],
        [TagSelector("h2")],
    ]
    assert all(rule.declarations == [Declaration("margin", "0")] for rule in sheet.rules)


def test_stylesheet_important_is_stripped():
    sheet = StyleSheet.parse("p { color: blue !IMPORTANT; width: 10px }")
    decls = sheet.rules[0].declarations
    assert decls[0] == Declaration("color", "blue", True)
    assert decls[1] == Declaration("width", "10px", False)


def test_stylesheet_skips_empty_and_unterminated_rules():
    assert StyleSheet.parse("div { }").rules == []
    assert StyleSheet.parse("div { color: red").rules == []
    assert StyleSheet.parse("div { novalue; }").rules == []


def test_stylesheet_value_keeps_colons():
    sheet = StyleSheet.parse("a { background: url(http://example.com/x.png); }")
    assert sheet.rules[0].declarations[0].value == "url(http://example.com/x.png)"


def test_parse_keyframes():
    css = """
        @keyframes slide {
            0% { left: 0px; opacity: 0; }
            100% { left: 100px; opacity: 1; }
        }
        div { width: 200px; }
    """
    sheet = StyleSheet.parse(css)
    assert "slide" in sheet.keyframes
    frames = sheet.keyframes["slide"]
    assert len(frames) == 2
    assert frames[0].selector == 0.0
    assert frames[1].selector == 1.0
    assert frames[1].declarations == [
        Declaration("left", "100px"),
        Declaration("opacity", "1"),
    ]
    assert len(sheet.rules) == 1
    assert len(sheet.rules[0].selectors) == 1

    sheet2 = StyleSheet.parse("@keyframes fade { from { opacity: 0; } to { opacity: 1; } }")
    frames2 = sheet2.keyframes["fade"]
    assert frames2[0].selector == 0.0
    assert frames2[1].selector == 1.0


def test_keyframes_are_sorted_and_clamped():
    css = "@keyframes k { to { a: 1 } 50% { a: 2 } 150% { a: 3 } from { a: 0 } }"
    frames = StyleSheet.parse(css).keyframes["k"]
    assert [kf.selector for kf in frames] == [0.0, 0.5, 1.0, 1.0]
    assert [kf.declarations[0].value for kf in frames] == ["0", "2", "1", "3"]


def test_keyframes_empty_body():
    sheet = StyleSheet.parse("@keyframes nothing { }")
    assert sheet.keyframes == {"nothing": []}
    assert sheet.rules == []


def test_keyframes_without_name_ignored():
    sheet = StyleSheet.parse("@keyframes { 0% { a: 1 } }")
    assert sheet.keyframes == {}


def test_keyframe_dataclass_fields():
    kf = Keyframe(0.25, [Declaration("left", "5px")])
    assert kf.selector == 0.25
    assert kf.declarations[0].property == "left"


def test_add_rule_appends():
    sheet = StyleSheet()
    rule = StyleRule([TagSelector("p")], [Declaration("color", "red")])
    sheet.add_rule(rule)
    assert sheet.rules == [rule]


def test_find_matching_rules():
    sheet = StyleSheet.parse(
        "div { a: 1 } #main { b: 2 } .box { c: 3 } * { d: 4 } "
        "[type='x'] { e: 5 } :hover { f: 6 } section .box { g: 7 } span { h: 8 }"
    )
    matched = sheet.find_matching_rules("div", "main", ["box", "wide"])
    props = [rule.declarations[0].property for rule in matched]
    assert props == ["a", "b", "c", "d", "g"]


def test_find_matching_rules_without_tag_or_id():
    sheet = StyleSheet.parse("div { a: 1 } #main { b: 2 } .box { c: 3 }")
    matched = sheet.find_matching_rules(None, None, ["box"])
    assert [rule.declarations[0].property for rule in matched] == ["c"]
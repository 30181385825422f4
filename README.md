# webrenderer

A small toolkit for working with HTML and CSS in Python. It relies on
nothing outside the standard library.

- `webrenderer.dom_tree`: `DomTree` and `DomNode`. Nodes are numbered from 1 and can be looked up by id, tag and class.
- `webrenderer.html_parser`: `HtmlParser` and `parse_html`. This is a forgiving HTML parser that builds a `DomTree`. It raises `HtmlParseError` on malformed tags.
- `webrenderer.css_parser`: `StyleSheet.parse` turns CSS text into `StyleRule`s and `@keyframes`. The module also has the selector classes (`TagSelector`, `IdSelector`, `ClassSelector`, `AttributeSelector`, `PseudoClassSelector`, `DescendantSelector`, `UniversalSelector`), plus `parse_selector` and `calculate_specificity`.
- `webrenderer.style_matcher`: `StyleMatcher.compute_style` resolves a node's style in this order:
  1. matching rules, ordered by specificity;
  2. the inline `style` attribute;
  3. inherited text properties.

  Values are returned as typed `StyleValue`s, with kinds given by `StyleKind`.
- `webrenderer.animation`: the `AnimState` timeline, with `FillMode` and `Direction`, and `interpolate_keyframes`.
- `webrenderer.bridge`: shared value types. These are `Color` (with `from_hex` and `from_rgba`), `LayoutRect`, `LayoutNode` and `Declaration`. The module also has the handler type aliases `EventHandler`, `FormHandler` and `WindowOpenHandler`.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Usage

Parse a document and query it:

```python
from webrenderer.html_parser import parse_html

tree = parse_html('<div id="main" class="box"><p>Hello</p></div>')
main_id = tree.query_by_id("#main")
print(tree.get_node(main_id).tag_name)   # div
print(tree.query_by_class(".box"))       # [1]
print(len(tree))                         # 2
```

Parse a stylesheet and compute a node's style:

```python
from webrenderer.css_parser import StyleSheet
from webrenderer.style_matcher import StyleMatcher

sheet = StyleSheet.parse("div { color: blue; } #main { color: red; } div p { font-size: 16px; }")
matcher = StyleMatcher(sheet)
style = matcher.compute_style(tree, main_id)
print(matcher.get_property_or_default(style, "color", "black"))  # red
```

Animate with keyframes:

```python
from webrenderer.animation import AnimState, interpolate_keyframes

sheet = StyleSheet.parse("@keyframes slide { from { left: 0px; } to { left: 100px; } }")
state = AnimState("slide")   # 0.3 s duration by default
state.advance(0.15)
print(interpolate_keyframes(sheet.keyframes["slide"], "left", state.progress()))
```

Work with colours:

```python
from webrenderer.bridge import Color

print(Color.from_hex("#f80"))  # Color(r=255, g=136, b=0, a=255)
```

## What it does not do

The package parses, matches styles and interpolates animations. Nothing more.

- It does not lay out pages. `LayoutRect` and `LayoutNode` are plain data holders, and nothing in the package computes them.
- It draws nothing and produces no images.
- It fetches nothing over the network.
- It dispatches no events. The handler types in `webrenderer.bridge` are type aliases only.
- It provides no command-line program.

## Running the tests

```
pytest
```
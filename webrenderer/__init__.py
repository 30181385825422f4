"""HTML and CSS toolkit: DOM tree, HTML parsing, stylesheets, style matching, animation and shared value types."""

__version__ = "0.1.0"

__all__ = ["animation", "bridge", "css_parser", "dom_tree", "html_parser", "style_matcher"]
"""Document tree: element nodes addressed by integer ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass
class DomNode:
    """A single element in the document tree."""

    id: int
    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[int] = field(default_factory=list)
    parent: Optional[int] = None
    text_content: Optional[str] = None

    def set_attr(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def get_attr(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def add_child(self, child_id: int) -> None:
        self.children.append(child_id)

    def set_parent(self, parent_id: int) -> None:
        self.parent = parent_id

    def set_text(self, text: str) -> None:
        self.text_content = text

    @property
    def classes(self) -> list[str]:
        """The whitespace-separated entries of the ``class`` attribute."""
        return (self.get_attr("class") or "").split()


class DomTree:
    """Owns every node of a document and hands out fresh ids starting at 1."""

    def __init__(self) -> None:
        self._nodes: dict[int, DomNode] = {}
        self._next_id = 1
        self.root: Optional[int] = None

    def create_node(self, tag_name: str) -> int:
        """Create a detached node and return its id."""
        node_id = self._next_id
        self._next_id += 1
        self._nodes[node_id] = DomNode(node_id, tag_name)
        return node_id

    def add_node(self, parent_id: Optional[int], node_id: int) -> None:
        """Attach a node under a parent, or make it the root when there is none."""
        if parent_id is None:
            self.root = node_id
            return
        parent = self._nodes.get(parent_id)
        if parent is not None:
            parent.add_child(node_id)
        node = self._nodes.get(node_id)
        if node is not None:
            node.set_parent(parent_id)

    def get_node(self, node_id: int) -> Optional[DomNode]:
        return self._nodes.get(node_id)

    def query_by_id(self, selector: str) -> Optional[int]:
        """Find the first node whose ``id`` attribute matches (a leading '#' is ignored)."""
        wanted = selector.lstrip("#")
        return next(
            (nid for nid, node in self._nodes.items() if node.get_attr("id") == wanted),
            None,
        )

    def query_by_tag(self, tag: str) -> list[int]:
        return [nid for nid, node in self._nodes.items() if node.tag_name == tag]

    def query_by_class(self, class_name: str) -> list[int]:
        """Find all nodes carrying the class (a leading '.' is ignored)."""
        wanted = class_name.lstrip(".")
        return [nid for nid, node in self._nodes.items() if wanted in node.classes]

    def clear(self) -> None:
        self._nodes.clear()
        self._next_id = 1
        self.root = None

    def node_ids(self) -> list[int]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[DomNode]:
        return iter(self._nodes.values())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
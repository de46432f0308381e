# src/pagespec/dom/query.py
"""
Read-only query helpers over a parsed BeautifulSoup snapshot.

Every helper is a free function: no parser handle or cursor state is kept
between calls. Nodes are compared by identity (`is`), never with `==`,
because bs4 tags compare equal when their markup is equal.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from pagespec.utils.text_utils import normalize_whitespace

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
MEDIA_TAGS = frozenset({"img", "video"})
FORM_CONTROL_TAGS = frozenset({"form", "input", "textarea", "select"})
SKIPPED_TEXT_TAGS = frozenset({"script", "style", "noscript", "template"})

_INT_PREFIX_RE = re.compile(r"^\s*(-?\d+)")


# -------- Node basics --------

def tag_name(node: Tag) -> str:
    return (node.name or "").lower() if isinstance(node, Tag) else ""


def get_attr(node: Tag, name: str) -> Optional[str]:
    """Attribute value as a string; multi-valued attributes (class, rel) are space-joined."""
    value = node.attrs.get(name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def has_attr(node: Tag, name: str) -> bool:
    return name in node.attrs


def class_string(node: Tag) -> str:
    return get_attr(node, "class") or ""


def class_list(node: Tag) -> List[str]:
    return [c for c in class_string(node).split() if c]


def role_of(node: Tag) -> Optional[str]:
    return get_attr(node, "role")


def is_heading(node: Tag) -> bool:
    return tag_name(node) in HEADING_TAGS


def is_media(node: Tag) -> bool:
    return tag_name(node) in MEDIA_TAGS


def is_link(node: Tag) -> bool:
    """Matches `a[href]`."""
    return tag_name(node) == "a" and has_attr(node, "href")


def is_navigation(node: Tag) -> bool:
    """Matches `nav, [role=navigation]`."""
    return tag_name(node) == "nav" or role_of(node) == "navigation"


# -------- Traversal --------

def element_children(node: Tag) -> List[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]


def iter_descendants(node: Tag) -> Iterator[Tag]:
    """Element descendants in document order, excluding the node itself."""
    for child in node.descendants:
        if isinstance(child, Tag):
            yield child


def find_all(node: Tag, predicate: Callable[[Tag], bool]) -> List[Tag]:
    return [el for el in iter_descendants(node) if predicate(el)]


def find_first(node: Tag, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
    for el in iter_descendants(node):
        if predicate(el):
            return el
    return None


def closest(node: Tag, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
    """The node itself or its nearest ancestor matching `predicate`."""
    current = node
    while isinstance(current, Tag):
        if predicate(current):
            return current
        current = current.parent
    return None


def same_tag_position(node: Tag) -> Tuple[int, int]:
    """1-based position of `node` among same-tag element siblings, and the sibling count."""
    parent = node.parent
    if parent is None:
        return 1, 1
    name = tag_name(node)
    siblings = [child for child in element_children(parent) if tag_name(child) == name]
    for position, sibling in enumerate(siblings, start=1):
        if sibling is node:
            return position, len(siblings)
    return 1, len(siblings)


# -------- Text --------

def _iter_strings(node: Tag) -> Iterator[str]:
    """Text runs below `node` in document order; skipped subtrees are pruned with an explicit stack."""
    stack = list(reversed(node.contents))
    while stack:
        child = stack.pop()
        if isinstance(child, Tag):
            if tag_name(child) not in SKIPPED_TEXT_TAGS:
                stack.extend(reversed(child.contents))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            yield str(child)


def raw_text(node: Tag) -> str:
    """Concatenated text content (script/style/template contents and comments excluded)."""
    if tag_name(node) in SKIPPED_TEXT_TAGS:
        return ""
    return "".join(_iter_strings(node))


def element_text(node: Tag) -> str:
    """Whitespace-normalized text of a node, as a reader would see it inline."""
    return normalize_whitespace(raw_text(node))


def spaced_text(node: Tag) -> str:
    """Normalized text with every text run separated, so adjacent tags never glue words together."""
    if tag_name(node) in SKIPPED_TEXT_TAGS:
        return ""
    return normalize_whitespace(" ".join(_iter_strings(node)))


# -------- Inline style --------

def inline_styles(node: Tag) -> Dict[str, str]:
    """Parses the `style` attribute into a lowercase property map (last declaration wins)."""
    styles: Dict[str, str] = {}
    for declaration in (get_attr(node, "style") or "").split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        value = value.replace("!important", "").strip()
        if prop.strip() and value:
            styles[prop.strip().lower()] = value
    return styles


def inline_style(node: Tag, prop: str) -> Optional[str]:
    return inline_styles(node).get(prop.lower())


def parse_int_prefix(value: Optional[str]) -> Optional[int]:
    """Leading integer of a CSS length ('24px' -> 24, '1.5rem' -> 1); None when there is none."""
    if not value:
        return None
    match = _INT_PREFIX_RE.match(value)
    return int(match.group(1)) if match else None


def is_transparent_color(value: Optional[str]) -> bool:
    if not value:
        return True
    compact = value.replace(" ", "").lower()
    return compact in ("transparent", "rgba(0,0,0,0)")


def background_color(node: Tag) -> Optional[str]:
    """The node's own non-transparent background color, if declared."""
    value = inline_style(node, "background-color")
    return None if is_transparent_color(value) else value


# -------- Regions --------

@dataclass(frozen=True)
class Region:
    """
    The subtree a block candidate spans.

    `Region.of(node)` behaves like the node: queries see its descendants.
    `Region.group(nodes)` behaves like a virtual wrapper around a run of
    sibling nodes: queries see the nodes themselves plus their descendants,
    and its children are the grouped nodes (or, for a run of one, that
    node's children). Tag, id, classes and style come from the first node.
    """
    nodes: Tuple[Tag, ...]
    inclusive: bool = False

    @classmethod
    def of(cls, node: Tag) -> "Region":
        return cls(nodes=(node,))

    @classmethod
    def group(cls, nodes: Sequence[Tag]) -> "Region":
        return cls(nodes=tuple(nodes), inclusive=True)

    @property
    def anchor(self) -> Tag:
        return self.nodes[0]

    @property
    def is_group(self) -> bool:
        return len(self.nodes) > 1

    def children(self) -> List[Tag]:
        if self.is_group:
            return list(self.nodes)
        return element_children(self.anchor)

    def elements(self) -> Iterator[Tag]:
        for node in self.nodes:
            if self.inclusive:
                yield node
            yield from iter_descendants(node)

    def select(self, predicate: Callable[[Tag], bool]) -> List[Tag]:
        return [el for el in self.elements() if predicate(el)]

    def first(self, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
        for el in self.elements():
            if predicate(el):
                return el
        return None

    def text(self) -> str:
        return normalize_whitespace(" ".join(raw_text(node) for node in self.nodes))

    def spaced_text(self) -> str:
        return normalize_whitespace(" ".join(spaced_text(node) for node in self.nodes))

    @property
    def tag(self) -> str:
        return tag_name(self.anchor)

    @property
    def role(self) -> Optional[str]:
        return role_of(self.anchor)

    @property
    def classes(self) -> str:
        return class_string(self.anchor)

    @property
    def element_id(self) -> Optional[str]:
        return get_attr(self.anchor, "id")

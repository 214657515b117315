# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Visual element tree and the role-keyed element registry."""

from dataclasses import dataclass, field
from enum import Enum
from html import escape
from typing import Dict, Iterator, List, Optional


class Role(Enum):
    """Visual role of an element in the clock."""
    CLOCK = "clock"
    FACE = "face"
    CENTER = "center"
    HAND_HOURS = "hand_hours"
    HAND_MINUTES = "hand_minutes"
    HAND_SECONDS = "hand_seconds"
    MARKERS = "markers"
    MARKER = "marker"


HAND_ROLES = (Role.HAND_HOURS, Role.HAND_MINUTES, Role.HAND_SECONDS)


@dataclass(frozen=True)
class ElementKey:
    """Registry key: a role, plus the slot index for markers."""
    role: Role
    index: Optional[int] = None


@dataclass
class Element:
    """A node of the visual tree."""
    tag: str
    classes: List[str]
    text: Optional[str] = None
    children: List["Element"] = field(default_factory=list)
    # Display rotation in degrees (offset already applied)
    rotation: Optional[float] = None
    transform: Optional[str] = None

    @property
    def class_name(self) -> str:
        return ' '.join(self.classes)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def iter(self) -> Iterator["Element"]:
        """Depth-first iteration over this element and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    def structure(self) -> tuple:
        """Comparable summary of the subtree (tag, classes, text, children)."""
        return (
            self.tag,
            tuple(self.classes),
            self.text,
            tuple(child.structure() for child in self.children),
        )

    def to_html(self) -> str:
        attrs = f' class="{escape(self.class_name)}"'
        if self.transform:
            attrs += f' style="transform: {escape(self.transform)}"'
        inner = escape(self.text) if self.text else ''
        inner += ''.join(child.to_html() for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


class ElementRegistry:
    """Maps ElementKey to the live element of the current tree."""

    def __init__(self):
        self._elements: Dict[ElementKey, Element] = {}

    def register(self, key: ElementKey, element: Element) -> Element:
        self._elements[key] = element
        return element

    def get(self, role: Role, index: Optional[int] = None) -> Optional[Element]:
        return self._elements.get(ElementKey(role, index))

    def markers(self) -> List[Element]:
        """Marker elements ordered by slot."""
        keys = sorted(
            (k for k in self._elements if k.role is Role.MARKER),
            key=lambda k: k.index
        )
        return [self._elements[k] for k in keys]

    def __contains__(self, key: ElementKey) -> bool:
        return key in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def keys(self) -> List[ElementKey]:
        return list(self._elements)

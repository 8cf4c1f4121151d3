from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from phoenix_dash.domain.errors import MissingElementError

POSITIVE = "#22c55e"
NEGATIVE = "#ef4444"

_CLASS_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def signed_color(value: float) -> str:
    return POSITIVE if value >= 0 else NEGATIVE


def css_token(raw: str) -> str:
    return _CLASS_UNSAFE.sub("_", raw) or "unknown"


@dataclass(frozen=True)
class Node:
    """A rendered child node. ``text`` is always literal text, never markup."""

    tag: str
    text: str = ""
    classes: tuple[str, ...] = ()
    color: str | None = None
    children: tuple["Node", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"tag": self.tag, "text": self.text}
        if self.classes:
            out["classes"] = list(self.classes)
        if self.color:
            out["color"] = self.color
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out


@dataclass
class Element:
    id: str
    text: str = ""
    class_name: str = ""
    color: str | None = None
    value: str = ""
    children: list[Node] = field(default_factory=list)
    chart: Any = None

    def replace_children(self, nodes: list[Node]) -> None:
        self.children = list(nodes)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "text": self.text}
        if self.class_name:
            out["class"] = self.class_name
        if self.color:
            out["color"] = self.color
        if self.value:
            out["value"] = self.value
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        if self.chart is not None:
            out["chart"] = self.chart.to_dict()
        return out


FINANCIAL_FIELDS = (
    "val-net-value",
    "val-total-pnl",
    "val-position",
    "val-entry-price",
    "val-current-price",
    "val-unrealized-pnl",
)
ACTIVITY_FIELDS = (
    "val-active-orders",
    "val-orders-min",
    "val-total-placed",
    "val-total-canceled",
    "val-total-filled",
    "val-risk-triggers",
)
LAYOUT = FINANCIAL_FIELDS + ACTIVITY_FIELDS + (
    "chart-activity",
    "chart-price",
    "trade-table",
    "event-log",
    "status-indicator",
    "pid-display",
    "config-editor",
)


class Document:
    """In-process rendering surface: elements addressed by id.

    Renderers resolve every element they write before touching any of them,
    so a missing element aborts the render with nothing changed.
    """

    def __init__(self, ids=LAYOUT):
        self._elements: dict[str, Element] = {i: Element(id=i) for i in ids}

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements

    def get(self, element_id: str) -> Element:
        el = self._elements.get(element_id)
        if el is None:
            raise MissingElementError(element_id)
        return el

    def require(self, *element_ids: str) -> list[Element]:
        return [self.get(i) for i in element_ids]

    def remove(self, element_id: str) -> None:
        self._elements.pop(element_id, None)

    def to_dict(self) -> dict[str, Any]:
        return {i: el.to_dict() for i, el in self._elements.items()}

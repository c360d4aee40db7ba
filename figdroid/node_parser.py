"""
Figma 節點解析 — 原始文件樹 → 扁平元件序列

以前序走訪輸出 Component，子節點以 parent_id 指向最近一個已正規化的祖先。
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from .naming_engine import NamingConfig, NamingEngine
from .type_mapper import map_kind


class InvalidDocument(ValueError):
    """輸入缺少 document 根節點."""


@dataclass(frozen=True)
class Bounds:
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class Component:
    id: str
    name: str
    widget_kind: str
    bounds: Bounds
    parent_id: Optional[str] = None
    properties: Mapping = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Figma 0–1 色彩通道轉 #rrggbb."""
    def to_hex(value) -> str:
        try:
            value = float(value)
        except (TypeError, ValueError):
            value = 0.0
        if math.isnan(value):
            value = 0.0
        value = min(max(value, 0.0), 1.0)
        return f"{math.floor(value * 255 + 0.5):02x}"

    return f"#{to_hex(r)}{to_hex(g)}{to_hex(b)}"


def _list_of(node: Mapping, key: str) -> list:
    value = node.get(key)
    return value if isinstance(value, list) else []


class FigmaNodeParser:
    """將 Figma REST API 文件樹轉成 Component 序列."""

    def __init__(self, naming_config: Optional[NamingConfig] = None):
        self.naming_config = naming_config or NamingConfig()
        self.namer = NamingEngine(self.naming_config)
        self._used_ids: set[str] = set()
        self._auto_ids = 0
        # (原始 id, 實際使用的 id)；缺 id 的節點不記錄
        self.duplicate_ids: list[tuple[str, str]] = []

    @property
    def collisions(self) -> list[tuple[str, str, str]]:
        return self.namer.collisions

    def parse_document(self, figma_data: Any) -> list[Component]:
        if not isinstance(figma_data, Mapping) or not isinstance(figma_data.get("document"), Mapping):
            raise InvalidDocument("Figma data has no document root node.")
        self.namer.reset()
        self._used_ids = set()
        self._auto_ids = 0
        self.duplicate_ids = []
        components: list[Component] = []
        self._traverse(figma_data["document"], components)
        return components

    def _traverse(self, document: Mapping, components: list) -> None:
        """前序走訪；以明確堆疊取代遞迴，深層巢狀也不會超過遞迴上限."""
        stack: list[tuple[Mapping, Optional[Component]]] = [(document, None)]
        while stack:
            node, parent = stack.pop()
            # 隱藏節點連同整個子樹略過
            if node.get("visible") is False:
                continue

            component = self._create_component(node, parent)
            if component is not None:
                components.append(component)
                parent = component

            children = [c for c in _list_of(node, "children") if isinstance(c, Mapping)]
            stack.extend((child, parent) for child in reversed(children))

    def _unique_id(self, raw_id: Any) -> str:
        if raw_id is None or raw_id == "":
            while True:
                self._auto_ids += 1
                node_id = f"_auto:{self._auto_ids}"
                if node_id not in self._used_ids:
                    break
        else:
            node_id = base = str(raw_id)
            suffix = 2
            while node_id in self._used_ids:
                node_id = f"{base}_{suffix}"
                suffix += 1
            if node_id != base:
                self.duplicate_ids.append((base, node_id))
        self._used_ids.add(node_id)
        return node_id

    def _create_component(self, node: Mapping, parent: Optional[Component]) -> Optional[Component]:
        bbox = node.get("absoluteBoundingBox")
        if not isinstance(bbox, Mapping):
            return None

        node_id = self._unique_id(node.get("id"))
        return Component(
            id=node_id,
            name=self.namer.resolve_name(node.get("name"), node_id),
            widget_kind=map_kind(node.get("type")),
            bounds=Bounds(
                x=bbox.get("x"),
                y=bbox.get("y"),
                width=bbox.get("width"),
                height=bbox.get("height"),
            ),
            parent_id=parent.id if parent is not None else None,
            properties=MappingProxyType(self._extract_properties(node)),
        )

    def _extract_properties(self, node: Mapping) -> dict:
        props: dict = {}

        for fill in _list_of(node, "fills"):
            if not isinstance(fill, Mapping):
                continue
            if fill.get("type") == "SOLID" and fill.get("visible") is not False and isinstance(fill.get("color"), Mapping):
                c = fill["color"]
                props["backgroundColor"] = rgb_to_hex(c.get("r", 0), c.get("g", 0), c.get("b", 0))
                if fill.get("opacity") is not None:
                    props["backgroundAlpha"] = fill["opacity"]
                break

        strokes = _list_of(node, "strokes")
        if strokes and isinstance(strokes[0], Mapping) and isinstance(strokes[0].get("color"), Mapping):
            c = strokes[0]["color"]
            props["borderColor"] = rgb_to_hex(c.get("r", 0), c.get("g", 0), c.get("b", 0))

        if node.get("strokeWeight") is not None:
            props["borderWidth"] = node["strokeWeight"]
        if node.get("cornerRadius") is not None:
            props["cornerRadius"] = node["cornerRadius"]

        if str(node.get("type", "")).upper() == "TEXT":
            if node.get("characters"):
                props["text"] = node["characters"]
            style = node.get("style")
            if isinstance(style, Mapping):
                if style.get("fontFamily"):
                    props["fontFamily"] = style["fontFamily"]
                if style.get("fontWeight") is not None:
                    props["fontWeight"] = style["fontWeight"]
                if style.get("fontSize") is not None:
                    props["fontSize"] = style["fontSize"]
                align = style.get("textAlignHorizontal")
                if isinstance(align, str) and align:
                    props["textAlignment"] = align.lower()

        return props


def normalize(figma_data: Any, naming_config: Optional[NamingConfig] = None) -> list[Component]:
    return FigmaNodeParser(naming_config).parse_document(figma_data)


def build_child_index(components: list[Component]) -> dict[Optional[str], list[Component]]:
    """parent_id → 子元件清單（依序列順序）；根元件放在 None 底下."""
    index: dict[Optional[str], list[Component]] = {}
    for component in components:
        index.setdefault(component.parent_id, []).append(component)
    return index


def find_root(components: list[Component]) -> Optional[Component]:
    for component in components:
        if component.parent_id is None:
            return component
    return None

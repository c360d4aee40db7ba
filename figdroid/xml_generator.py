"""
Android XML 產生器 — Component 序列 → layout XML

以第一個根元件為版面根節點，依 parent_id 遞迴輸出巢狀元素。
子元件的 margin 取自文件原點的絕對座標（非相對父元件），僅適用單層階層。
"""

from __future__ import annotations

from typing import Optional

from .dimensions import as_number, format_number, positive_size, round_half_up
from .node_parser import Component, build_child_index, find_root
from .type_mapper import is_text_kind, map_alignment

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n'
ANDROID_NS = 'xmlns:android="http://schemas.android.com/apk/res/android"'
INDENT = "    "

EMPTY_LAYOUT = (
    XML_HEADER
    + f"<FrameLayout {ANDROID_NS}\n"
    + f'{INDENT}android:layout_width="match_parent"\n'
    + f'{INDENT}android:layout_height="match_parent" />'
)


def escape_xml(text: str) -> str:
    # & 必須最先處理，避免重複跳脫
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def dimension_value(value) -> str:
    size = positive_size(value)
    if size is None:
        return "wrap_content"
    return f"{size}dp"


def offset_value(value) -> str:
    number = as_number(value)
    if number is None:
        return "0dp"
    return f"{round_half_up(number)}dp"


class AndroidXmlGenerator:
    """將 Component 序列輸出為 Android layout XML."""

    def generate_xml(self, components: Optional[list[Component]]) -> str:
        if not components:
            return EMPTY_LAYOUT
        root = find_root(components)
        if root is None:
            return EMPTY_LAYOUT

        index = build_child_index(components)
        lines = [XML_HEADER]
        self._tree_xml(root, index, lines)
        return "".join(lines)

    def _tree_xml(self, root: Component, index: dict, out: list) -> None:
        # (元件, 層級, 是否為結束標籤)；每個元件只輸出一次，重複 id 不會形成迴圈
        seen = {id(root)}
        stack: list[tuple[Component, int, bool]] = [(root, 0, False)]
        while stack:
            component, level, closing = stack.pop()
            indent = INDENT * level
            if closing:
                out.append(f"{indent}</{component.widget_kind}>\n\n")
                continue

            children = [c for c in index.get(component.id, []) if id(c) not in seen]
            seen.update(id(c) for c in children)
            self._open_tag(component, level, out)
            if children:
                out.append(f"{indent}>\n\n")
                stack.append((component, level, True))
                stack.extend((child, level + 1, False) for child in reversed(children))
            else:
                out.append(f"{indent}/>\n\n")

    def _open_tag(self, component: Component, level: int, out: list) -> None:
        indent = INDENT * level
        attr_indent = INDENT * (level + 1)
        if component.is_root:
            out.append(f"{indent}<{component.widget_kind} {ANDROID_NS}\n")
        else:
            out.append(f"{indent}<{component.widget_kind}\n")
        for name, value in self._attributes(component):
            out.append(f'{attr_indent}{name}="{value}"\n')

    def _attributes(self, component: Component) -> list[tuple[str, str]]:
        bounds = component.bounds
        attrs = [
            ("android:id", f"@+id/{component.name}"),
            ("android:layout_width", dimension_value(bounds.width)),
            ("android:layout_height", dimension_value(bounds.height)),
        ]
        if not component.is_root:
            attrs.append(("android:layout_marginStart", offset_value(bounds.x)))
            attrs.append(("android:layout_marginTop", offset_value(bounds.y)))
        attrs.extend(self._style_attributes(component))
        return attrs

    def _style_attributes(self, component: Component) -> list[tuple[str, str]]:
        props = component.properties
        attrs = []
        if props.get("backgroundColor"):
            attrs.append(("android:background", props["backgroundColor"]))

        # 圓角與邊框需要自訂 drawable，這裡不輸出
        if is_text_kind(component.widget_kind):
            if props.get("text"):
                attrs.append(("android:text", escape_xml(props["text"])))
            if props.get("textAlignment"):
                attrs.append(("android:textAlignment", map_alignment(props["textAlignment"], "xml")))
            if as_number(props.get("fontSize")) is not None:
                attrs.append(("android:textSize", f"{format_number(props['fontSize'])}sp"))
            if props.get("fontFamily"):
                attrs.append(("android:fontFamily", escape_xml(props["fontFamily"])))
            weight = as_number(props.get("fontWeight"))
            if weight is not None:
                attrs.append(("android:textStyle", "bold" if weight >= 700 else "normal"))
        return attrs


def generate_xml(components: Optional[list[Component]]) -> str:
    return AndroidXmlGenerator().generate_xml(components)

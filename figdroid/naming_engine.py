"""
命名引擎 — Figma 圖層名稱 → Android 識別字

sanitize_name 只負責把單一名稱轉成合法識別字；
NamingEngine 在同一次轉換中追蹤已用名稱，重複時加上 _2、_3 後綴並記錄。
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")
_STARTS_WITH_LETTER = re.compile(r"^[A-Za-z]")

PLACEHOLDER_NAME = "unnamed"
NAME_PREFIX = "view_"

# Java / Kotlin 保留字，以及產生的類別中已使用的名稱（皆為小寫）
RESERVED_NAMES = frozenset({
    # Java
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
    "var", "record", "yield",
    # Kotlin
    "as", "fun", "in", "is", "object", "typealias", "typeof", "val", "when",
    # 產生的類別
    "context",
})


def sanitize_name(
    name: Any,
    placeholder: str = PLACEHOLDER_NAME,
    prefix: str = NAME_PREFIX,
) -> str:
    """任意顯示名稱轉成合法識別字（不處理重名）.

    數字名稱先轉成字串；其他非字串值視為沒有名稱。
    """
    if isinstance(name, (int, float)) and not isinstance(name, bool):
        name = str(name)
    if not name or not isinstance(name, str):
        return placeholder
    sanitized = _DISALLOWED.sub("", name)
    sanitized = _WHITESPACE.sub("_", sanitized).lower()
    if not sanitized:
        return placeholder
    if not _STARTS_WITH_LETTER.match(sanitized) or sanitized in RESERVED_NAMES:
        sanitized = prefix + sanitized
    return sanitized


@dataclass
class NamingConfig:
    """命名引擎設定."""
    dedupe: bool = True
    placeholder: str = PLACEHOLDER_NAME
    prefix: str = NAME_PREFIX


class NamingEngine:
    """將 Figma 節點名稱轉成在同一份輸出中唯一的識別字."""

    def __init__(self, config: Optional[NamingConfig] = None):
        self.config = config or NamingConfig()
        self._used: set[str] = set()
        self.collisions: list[tuple[str, str, str]] = []

    def resolve_name(self, raw_name: Any, node_id: str = "") -> str:
        base = sanitize_name(raw_name, self.config.placeholder, self.config.prefix)
        if not self.config.dedupe:
            return base
        if base not in self._used:
            self._used.add(base)
            return base
        suffix = 2
        while f"{base}_{suffix}" in self._used:
            suffix += 1
        resolved = f"{base}_{suffix}"
        self._used.add(resolved)
        self.collisions.append((node_id, base, resolved))
        return resolved

    def reset(self) -> None:
        self._used = set()
        self.collisions = []


def preview_component_tree(components: list, index: Optional[dict] = None) -> str:
    """除錯用：印出元件樹."""
    from .node_parser import build_child_index

    if index is None:
        index = build_child_index(components)
    lines = []
    roots = index.get(None, [])
    seen = {id(c) for c in roots}
    stack = [(root, 0) for root in reversed(roots)]
    while stack:
        component, depth = stack.pop()
        label = f"{'  ' * depth}├─ {component.name}  [{component.widget_kind}]  ({component.id})"
        text = component.properties.get("text")
        if text:
            label += f"  \"{text}\""
        lines.append(label)
        children = [c for c in index.get(component.id, []) if id(c) not in seen]
        seen.update(id(c) for c in children)
        stack.extend((child, depth + 1) for child in reversed(children))
    return "\n".join(lines)

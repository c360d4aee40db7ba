"""
類型對照表 — Figma 節點類型 → Android View 類型

另含文字對齊方式在各輸出語法（xml / java / kotlin）中的常數名稱。
"""

from typing import Optional

# Figma type → Android widget kind
_KIND_MAP = {
    "FRAME": "FrameLayout",
    "GROUP": "LinearLayout",
    "RECTANGLE": "View",
    "TEXT": "TextView",
    "ELLIPSE": "View",
    "VECTOR": "ImageView",
    "INSTANCE": "include",
    "COMPONENT": "include",
    "CANVAS": "ScrollView",
    "DOCUMENT": "ViewGroup",
}

FALLBACK_KIND = "View"
TEXT_KIND = "TextView"

_VIEW_ALIGNMENTS = {
    "left": "View.TEXT_ALIGNMENT_TEXT_START",
    "center": "View.TEXT_ALIGNMENT_CENTER",
    "right": "View.TEXT_ALIGNMENT_TEXT_END",
    "justified": "View.TEXT_ALIGNMENT_TEXT_START",
}

_ALIGNMENT_MAP = {
    "xml": {
        "left": "textStart",
        "center": "center",
        "right": "textEnd",
        "justified": "textStart",
    },
    "java": _VIEW_ALIGNMENTS,
    "kotlin": _VIEW_ALIGNMENTS,
}

# include / ViewGroup 沒有可呼叫的建構子，程式碼輸出時以容器代替
_VIEW_CLASS_OVERRIDES = {
    "include": "FrameLayout",
    "ViewGroup": "FrameLayout",
}


def map_kind(raw_kind: Optional[str]) -> str:
    """Figma 節點類型轉 Android widget kind；未知類型回傳 View。"""
    if not isinstance(raw_kind, str):
        return FALLBACK_KIND
    return _KIND_MAP.get(raw_kind.upper(), FALLBACK_KIND)


def map_alignment(value: Optional[str], dialect: str = "xml") -> str:
    """left/center/right/justified → 對應語法的常數；未知值一律靠起始邊。"""
    table = _ALIGNMENT_MAP.get(dialect.lower())
    if table is None:
        raise ValueError(f"Unsupported dialect: {dialect}")
    key = value.lower() if isinstance(value, str) else ""
    return table.get(key, table["left"])


def view_class(widget_kind: str) -> str:
    return _VIEW_CLASS_OVERRIDES.get(widget_kind, widget_kind or FALLBACK_KIND)


def is_text_kind(widget_kind: str) -> bool:
    return widget_kind == TEXT_KIND

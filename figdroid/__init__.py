"""
figdroid — Figma 設計稿 → Android 版面（Python 管線）

原始文件樹正規化為扁平元件序列，再輸出 layout XML、Java、Kotlin 三種程式碼。
"""

__version__ = "0.1.0"

from .type_mapper import map_kind, map_alignment, view_class
from .naming_engine import NamingConfig, NamingEngine, sanitize_name, preview_component_tree
from .node_parser import (
    Bounds,
    Component,
    FigmaNodeParser,
    InvalidDocument,
    build_child_index,
    normalize,
    rgb_to_hex,
)
from .xml_generator import AndroidXmlGenerator, generate_xml
from .view_generator import JAVA, KOTLIN, Dialect, AndroidViewGenerator, generate_view_code
from .figma_reader import FigmaAPIClient, documents_from_nodes, sample_document
from .config import load_config, validate_config
from .generator import ConversionResult, convert_document, write_outputs, generate_project

__all__ = [
    "__version__",
    "map_kind",
    "map_alignment",
    "view_class",
    "NamingConfig",
    "NamingEngine",
    "sanitize_name",
    "preview_component_tree",
    "Bounds",
    "Component",
    "FigmaNodeParser",
    "InvalidDocument",
    "build_child_index",
    "normalize",
    "rgb_to_hex",
    "AndroidXmlGenerator",
    "generate_xml",
    "JAVA",
    "KOTLIN",
    "Dialect",
    "AndroidViewGenerator",
    "generate_view_code",
    "FigmaAPIClient",
    "documents_from_nodes",
    "sample_document",
    "load_config",
    "validate_config",
    "ConversionResult",
    "convert_document",
    "write_outputs",
    "generate_project",
]

"""
Generator — Figma document → Android layout XML + Java + Kotlin.

One normalization pass feeds all three emitters; write_outputs lays the
results out like an Android source tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .figma_reader import FigmaAPIClient, documents_from_nodes
from .naming_engine import NamingConfig
from .node_parser import Component, FigmaNodeParser
from .view_generator import (
    DEFAULT_CLASS_NAME,
    DEFAULT_PACKAGE,
    JAVA,
    KOTLIN,
    AndroidViewGenerator,
)
from .xml_generator import AndroidXmlGenerator

DEFAULT_LAYOUT_NAME = "generated_layout"


@dataclass
class ConversionResult:
    components: list
    xml: str
    java: str
    kotlin: str
    collisions: list = field(default_factory=list)
    duplicate_ids: list = field(default_factory=list)

    @property
    def root_count(self) -> int:
        return sum(1 for c in self.components if c.parent_id is None)


def convert_document(
    raw_document: dict,
    package_name: str = DEFAULT_PACKAGE,
    class_name: str = DEFAULT_CLASS_NAME,
    naming_config: Optional[NamingConfig] = None,
) -> ConversionResult:
    parser = FigmaNodeParser(naming_config)
    components: list[Component] = parser.parse_document(raw_document)
    views = AndroidViewGenerator()
    return ConversionResult(
        components=components,
        xml=AndroidXmlGenerator().generate_xml(components),
        java=views.generate_view_code(components, JAVA, package_name, class_name),
        kotlin=views.generate_view_code(components, KOTLIN, package_name, class_name),
        collisions=list(parser.collisions),
        duplicate_ids=list(parser.duplicate_ids),
    )


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _package_dir(package_name: str) -> Path:
    parts = [p for p in package_name.split(".") if p]
    return Path(*parts) if parts else Path(".")


def write_outputs(
    result: ConversionResult,
    output_dir: str,
    package_name: str = DEFAULT_PACKAGE,
    class_name: str = DEFAULT_CLASS_NAME,
    layout_name: str = DEFAULT_LAYOUT_NAME,
) -> Dict[str, Path]:
    base = Path(output_dir)
    pkg = _package_dir(package_name)
    paths = {
        "xml": base / "res" / "layout" / f"{layout_name}.xml",
        "java": base / "java" / pkg / f"{class_name}{JAVA.extension}",
        "kotlin": base / "kotlin" / pkg / f"{class_name}{KOTLIN.extension}",
    }
    _write(paths["xml"], result.xml)
    _write(paths["java"], result.java)
    _write(paths["kotlin"], result.kotlin)
    return paths


def fetch_document(client: FigmaAPIClient, file_key: str, node_id: Optional[str] = None) -> dict:
    if not node_id:
        return client.get_file(file_key)
    documents = documents_from_nodes(client.get_file_nodes(file_key, [node_id]), [node_id])
    if not documents:
        raise ValueError(f"Node '{node_id}' not found in Figma file '{file_key}'.")
    return documents[0]


def generate_project(
    figma_token: str,
    file_key: str,
    output_dir: str,
    node_id: Optional[str] = None,
    package_name: str = DEFAULT_PACKAGE,
    class_name: str = DEFAULT_CLASS_NAME,
    layout_name: str = DEFAULT_LAYOUT_NAME,
) -> ConversionResult:
    client = FigmaAPIClient(figma_token)
    raw_document = fetch_document(client, file_key, node_id)
    result = convert_document(raw_document, package_name, class_name)
    write_outputs(result, output_dir, package_name, class_name, layout_name)
    return result

"""
Android View 程式碼產生器 — Component 序列 → Java / Kotlin

兩種語言共用同一套走訪邏輯，差異只放在 Dialect（語法 token、區塊符號、字串跳脫）。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from .dimensions import as_number, format_number, positive_size
from .node_parser import Component, build_child_index, find_root
from .type_mapper import is_text_kind, map_alignment, view_class

DEFAULT_PACKAGE = "com.example.app"
DEFAULT_CLASS_NAME = "GeneratedLayout"
WRAP_CONTENT = "ViewGroup.LayoutParams.WRAP_CONTENT"
INDENT = "    "


def escape_java_string(text: str) -> str:
    return (
        str(text)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def escape_kotlin_string(text: str) -> str:
    # Kotlin 字串中的 $ 會被當成 template
    return escape_java_string(text).replace("$", "\\$")


@dataclass(frozen=True)
class Dialect:
    """單一輸出語言的語法描述；模板以 str.format 代入."""
    name: str
    extension: str
    terminator: str
    imports: tuple
    class_open: str
    field_decl: str
    constructor: tuple
    routine_open: str
    create_open: str
    create_block: bool
    receiver: str
    property_indent: str
    layout_params_open: str
    layout_params_close: str
    set_id: str
    set_x: str
    set_y: str
    set_background: str
    set_text: str
    set_alignment: str
    set_text_size: str
    add_child: str
    accessor: tuple
    empty_class: str
    escape: Callable[[str], str]

    def statement(self, text: str) -> str:
        return text + self.terminator


JAVA = Dialect(
    name="java",
    extension=".java",
    terminator=";",
    imports=(
        "android.content.Context",
        "android.view.View",
        "android.view.ViewGroup",
        "android.widget.*",
        "androidx.annotation.NonNull",
    ),
    class_open="public class {class_name} {{",
    field_decl="private {view_type} {name}",
    constructor=(
        "public {class_name}(@NonNull Context context) {{",
        "    createViews(context);",
        "}}",
    ),
    routine_open="private void createViews(@NonNull Context context) {",
    create_open="{name} = new {view_type}(context)",
    create_block=False,
    receiver="{name}.",
    property_indent="",
    layout_params_open="setLayoutParams(new ViewGroup.LayoutParams(",
    layout_params_close="))",
    set_id="setId(View.generateViewId())",
    set_x="setX({value}f)",
    set_y="setY({value}f)",
    set_background='setBackgroundColor(android.graphics.Color.parseColor("{color}"))',
    set_text='setText("{text}")',
    set_alignment="setTextAlignment({alignment})",
    set_text_size="setTextSize({size}f)",
    add_child="{parent}.addView({child})",
    accessor=(
        "public {view_type} getRootView() {{",
        "    return {name};",
        "}}",
    ),
    empty_class=(
        "package {package};\n\n"
        "import android.content.Context;\n"
        "import android.widget.FrameLayout;\n\n"
        "public class {class_name} {{\n"
        "    private final FrameLayout rootView;\n\n"
        "    public {class_name}(Context context) {{\n"
        "        rootView = new FrameLayout(context);\n"
        "    }}\n\n"
        "    public FrameLayout getRootView() {{\n"
        "        return rootView;\n"
        "    }}\n"
        "}}\n"
    ),
    escape=escape_java_string,
)

KOTLIN = Dialect(
    name="kotlin",
    extension=".kt",
    terminator="",
    imports=(
        "android.content.Context",
        "android.view.View",
        "android.view.ViewGroup",
        "android.widget.*",
    ),
    class_open="class {class_name}(private val context: Context) {{",
    field_decl="private lateinit var {name}: {view_type}",
    constructor=(
        "init {{",
        "    createViews()",
        "}}",
    ),
    routine_open="private fun createViews() {",
    create_open="{name} = {view_type}(context).apply {{",
    create_block=True,
    receiver="",
    property_indent=INDENT,
    layout_params_open="layoutParams = ViewGroup.LayoutParams(",
    layout_params_close=")",
    set_id="id = View.generateViewId()",
    set_x="x = {value}f",
    set_y="y = {value}f",
    set_background='setBackgroundColor(android.graphics.Color.parseColor("{color}"))',
    set_text='text = "{text}"',
    set_alignment="textAlignment = {alignment}",
    set_text_size="textSize = {size}f",
    add_child="{parent}.addView({child})",
    accessor=(
        "fun getRootView(): {view_type} = {name}",
    ),
    empty_class=(
        "package {package}\n\n"
        "import android.content.Context\n"
        "import android.widget.FrameLayout\n\n"
        "class {class_name}(context: Context) {{\n"
        "    private val rootView = FrameLayout(context)\n\n"
        "    fun getRootView(): FrameLayout = rootView\n"
        "}}\n"
    ),
    escape=escape_kotlin_string,
)

DIALECTS = {JAVA.name: JAVA, KOTLIN.name: KOTLIN}


def get_dialect(dialect: Union[str, Dialect]) -> Dialect:
    if isinstance(dialect, Dialect):
        return dialect
    found = DIALECTS.get(str(dialect).lower())
    if found is None:
        raise ValueError(f"Unsupported dialect: {dialect}")
    return found


def _layout_size(value) -> str:
    size = positive_size(value)
    return WRAP_CONTENT if size is None else str(size)


class AndroidViewGenerator:
    """將 Component 序列輸出為建立 View 階層的 Java / Kotlin 類別."""

    def generate_view_code(
        self,
        components: Optional[list[Component]],
        dialect: Union[str, Dialect] = "java",
        package_name: str = DEFAULT_PACKAGE,
        class_name: str = DEFAULT_CLASS_NAME,
    ) -> str:
        d = get_dialect(dialect)
        root = find_root(components) if components else None
        if root is None:
            return d.empty_class.format(package=package_name, class_name=class_name)

        index = build_child_index(components)
        lines = [d.statement(f"package {package_name}"), ""]
        lines.extend(d.statement(f"import {imp}") for imp in d.imports)
        lines.append("")
        lines.append(d.class_open.format(class_name=class_name))
        lines.append("")

        for component in components:
            field = d.field_decl.format(view_type=view_class(component.widget_kind), name=component.name)
            lines.append(INDENT + d.statement(field))
        lines.append("")

        lines.extend(INDENT + line.format(class_name=class_name) for line in d.constructor)
        lines.append("")

        lines.append(INDENT + d.routine_open)
        blocks = self._collect_blocks(d, root, index)
        for i, block in enumerate(blocks):
            if i:
                lines.append("")
            lines.extend(block)
        lines.append(INDENT + "}")
        lines.append("")

        root_type = view_class(root.widget_kind)
        lines.extend(INDENT + line.format(view_type=root_type, name=root.name) for line in d.accessor)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _collect_blocks(self, d: Dialect, root: Component, index: dict) -> list[list[str]]:
        """前序走訪 root 子樹，每個元件產生一段建構程式碼."""
        blocks = []
        seen = {id(root)}
        stack: list[tuple[Component, Optional[Component]]] = [(root, None)]
        while stack:
            component, parent = stack.pop()
            blocks.append(self._component_block(d, component, parent))
            children = [c for c in index.get(component.id, []) if id(c) not in seen]
            seen.update(id(c) for c in children)
            stack.extend((child, component) for child in reversed(children))
        return blocks

    def _component_block(self, d: Dialect, component: Component, parent: Optional[Component]) -> list[str]:
        body = INDENT * 2
        name = component.name
        view_type = view_class(component.widget_kind)
        create = d.create_open.format(name=name, view_type=view_type)
        lines = [body + (create if d.create_block else d.statement(create))]

        prop_indent = body + d.property_indent
        receiver = d.receiver.format(name=name)

        def prop(text: str) -> None:
            lines.append(prop_indent + d.statement(receiver + text))

        lines.append(prop_indent + receiver + d.layout_params_open)
        lines.append(prop_indent + INDENT + _layout_size(component.bounds.width) + ",")
        lines.append(prop_indent + INDENT + _layout_size(component.bounds.height))
        lines.append(prop_indent + d.statement(d.layout_params_close))

        prop(d.set_id)
        if parent is not None:
            prop(d.set_x.format(value=format_number(component.bounds.x)))
            prop(d.set_y.format(value=format_number(component.bounds.y)))

        props = component.properties
        if props.get("backgroundColor"):
            prop(d.set_background.format(color=props["backgroundColor"]))
        if is_text_kind(component.widget_kind):
            if props.get("text"):
                prop(d.set_text.format(text=d.escape(props["text"])))
            if props.get("textAlignment"):
                prop(d.set_alignment.format(alignment=map_alignment(props["textAlignment"], d.name)))
            if as_number(props.get("fontSize")) is not None:
                prop(d.set_text_size.format(size=format_number(props["fontSize"])))

        if d.create_block:
            lines.append(body + "}")
        if parent is not None:
            lines.append(body + d.statement(d.add_child.format(parent=parent.name, child=name)))
        return lines


def generate_view_code(
    components: Optional[list[Component]],
    dialect: Union[str, Dialect] = "java",
    package_name: str = DEFAULT_PACKAGE,
    class_name: str = DEFAULT_CLASS_NAME,
) -> str:
    return AndroidViewGenerator().generate_view_code(components, dialect, package_name, class_name)

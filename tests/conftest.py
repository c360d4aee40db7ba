import pytest


def make_node(node_id, node_type="RECTANGLE", name=None, bbox=(0, 0, 100, 100), children=None, **kwargs):
    node = {
        "id": node_id,
        "name": name if name is not None else f"Node {node_id}",
        "type": node_type,
    }
    if bbox is not None:
        x, y, w, h = bbox
        node["absoluteBoundingBox"] = {"x": x, "y": y, "width": w, "height": h}
    if children is not None:
        node["children"] = children
    node.update(kwargs)
    return node


def solid(r, g, b, **kwargs):
    fill = {"type": "SOLID", "visible": True, "color": {"r": r, "g": g, "b": b}}
    fill.update(kwargs)
    return fill


def wrap_document(*children):
    return {
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {"id": "0:1", "name": "Page 1", "type": "CANVAS", "children": list(children)},
            ],
        }
    }


@pytest.fixture
def login_document():
    """根 frame + 一個矩形 + 一個文字節點."""
    rect = make_node(
        "1:3", "RECTANGLE", name="Username Input", bbox=(40, 200, 280, 48),
        fills=[solid(0.96, 0.96, 0.96, opacity=1)], cornerRadius=4,
    )
    text = make_node(
        "1:3b", "TEXT", name="Login Label", bbox=(40, 300, 280, 24),
        characters="Login",
        style={"fontFamily": "Roboto", "fontSize": 16, "fontWeight": 400, "textAlignHorizontal": "CENTER"},
    )
    frame = make_node(
        "1:2", "FRAME", name="Login Container", bbox=(0, 0, 360, 640),
        fills=[solid(1, 1, 1, opacity=1)], children=[rect, text],
    )
    return wrap_document(frame)


def nested_frames(depth):
    """depth 層單鏈巢狀的 FRAME，id 依序為 n:0 … n:depth-1."""
    node = make_node(f"n:{depth - 1}", "FRAME", bbox=(1, 1, 10, 10))
    for i in range(depth - 2, -1, -1):
        node = make_node(f"n:{i}", "FRAME", bbox=(1, 1, 10, 10), children=[node])
    return node

"""
Figma REST API 讀取

只負責取得原始文件樹；轉換流程不依賴網路，也可改用內建範例文件。
"""

from typing import Optional

import requests


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 30):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def get_file(self, file_key: str, node_ids: Optional[list] = None) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}"
        params = {}
        if node_ids:
            params["ids"] = ",".join(node_ids)
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_file_nodes(self, file_key: str, node_ids: list) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}/nodes"
        params = {"ids": ",".join(node_ids)}
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def get_images(self, file_key: str, node_ids: list, format: str = "png", scale: int = 1) -> dict:
        url = f"{self.BASE_URL}/images/{file_key}"
        params = {"ids": ",".join(node_ids), "format": format, "scale": scale}
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


def documents_from_nodes(response: dict, node_ids: Optional[list] = None) -> list:
    """/files/:key/nodes 回應 → 每個節點一份 {"document": ...}（依請求順序）."""
    nodes = response.get("nodes") or {}
    order = node_ids or list(nodes.keys())
    documents = []
    for node_id in order:
        entry = nodes.get(node_id)
        # 找不到的節點 API 回傳 null
        if entry and entry.get("document"):
            documents.append({"document": entry["document"]})
    return documents


def _solid(r: float, g: float, b: float) -> list:
    return [{"type": "SOLID", "visible": True, "opacity": 1, "color": {"r": r, "g": g, "b": b}}]


def _input_box(node_id: str, name: str, y: int, color: tuple) -> dict:
    return {
        "id": node_id,
        "name": name,
        "type": "RECTANGLE",
        "visible": True,
        "absoluteBoundingBox": {"x": 40, "y": y, "width": 280, "height": 48},
        "fills": _solid(*color),
        "cornerRadius": 4,
    }


def sample_document() -> dict:
    """內建登入頁範例（不需 Figma Token）."""
    return {
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "登录页面",
                    "type": "CANVAS",
                    "children": [
                        {
                            "id": "1:2",
                            "name": "Login Container",
                            "type": "FRAME",
                            "visible": True,
                            "absoluteBoundingBox": {"x": 0, "y": 0, "width": 360, "height": 640},
                            "fills": _solid(1, 1, 1),
                            "children": [
                                _input_box("1:3", "Username Input", 200, (0.96, 0.96, 0.96)),
                                _input_box("1:4", "Password Input", 260, (0.96, 0.96, 0.96)),
                                _input_box("1:5", "Login Button", 340, (0.2, 0.4, 0.9)),
                                {
                                    "id": "1:6",
                                    "name": "Login Label",
                                    "type": "TEXT",
                                    "visible": True,
                                    "absoluteBoundingBox": {"x": 40, "y": 352, "width": 280, "height": 24},
                                    "fills": _solid(1, 1, 1),
                                    "characters": "Login",
                                    "style": {
                                        "fontFamily": "Roboto",
                                        "fontWeight": 700,
                                        "fontSize": 16,
                                        "textAlignHorizontal": "CENTER",
                                    },
                                },
                            ],
                        }
                    ],
                }
            ],
        }
    }

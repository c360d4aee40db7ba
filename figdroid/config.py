"""設定檔載入與基本驗證."""

import json
import re
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = "figdroid.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "android", "export"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey", "nodeId"},
    "android": {"packageName", "className", "layoutName"},
    "export": {"outputDir"},
}

_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    android = cfg.get("android", {})
    if not isinstance(android, dict):
        return
    for key in ("packageName", "className", "layoutName"):
        val = android.get(key)
        if val is not None and not isinstance(val, str):
            _warn(f"android.{key} 應為字串，目前是 {type(val).__name__}")

    # 識別字只提示，不修正（輸出時原樣代入）
    package_name = android.get("packageName")
    if isinstance(package_name, str) and not _PACKAGE_RE.match(package_name):
        _warn(f"android.packageName '{package_name}' 不是合法的套件名稱")
    class_name = android.get("className")
    if isinstance(class_name, str) and not _IDENTIFIER_RE.match(class_name):
        _warn(f"android.className '{class_name}' 不是合法的類別名稱")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg

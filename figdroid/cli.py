#!/usr/bin/env python3
"""
figdroid CLI — Figma → Android（XML / Java / Kotlin）

  python -m figdroid.cli generate --file-key KEY [--node-id 1:2]   # 從 Figma 產生
  python -m figdroid.cli generate --sample                         # 內建範例
  python -m figdroid.cli preview --input design.json               # 預覽元件樹
  python -m figdroid.cli watch --input design.json                 # 檔案變更時重新產生
"""

import argparse
import json
import os
import time
from pathlib import Path
from typing import Optional

import requests
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .config import DEFAULT_CONFIG_PATH, load_config
from .figma_reader import FigmaAPIClient, sample_document
from .generator import DEFAULT_LAYOUT_NAME, convert_document, fetch_document, write_outputs
from .naming_engine import preview_component_tree
from .node_parser import InvalidDocument
from .view_generator import DEFAULT_CLASS_NAME, DEFAULT_PACKAGE

DEFAULT_OUTPUT_DIR = "./generated"


def _android_options(args, config: dict) -> dict:
    android = config.get("android", {}) or {}
    export = config.get("export", {}) or {}
    return {
        "package_name": getattr(args, "package", None) or android.get("packageName") or DEFAULT_PACKAGE,
        "class_name": getattr(args, "class_name", None) or android.get("className") or DEFAULT_CLASS_NAME,
        "layout_name": getattr(args, "layout_name", None) or android.get("layoutName") or DEFAULT_LAYOUT_NAME,
        "output_dir": getattr(args, "output", None) or export.get("outputDir") or DEFAULT_OUTPUT_DIR,
    }


def _read_input_file(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"❌ 找不到輸入檔 '{path}'。")
    except json.JSONDecodeError as e:
        print(f"❌ '{path}' 不是合法的 JSON：{e}")
    return None


def _fetch_from_figma(args, config: dict) -> Optional[dict]:
    figma_cfg = config.get("figma", {}) or {}
    token = figma_cfg.get("personalAccessToken") or os.environ.get("FIGMA_TOKEN")
    file_key = getattr(args, "file_key", None) or figma_cfg.get("fileKey")
    node_id = getattr(args, "node_id", None) or figma_cfg.get("nodeId")

    if not token:
        print("❌ 請設定 FIGMA_TOKEN 環境變數，或在 figdroid.config.json 的 figma.personalAccessToken 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return None
    if not file_key:
        print("❌ 請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key（或改用 --input / --sample）。")
        return None

    print(f"📥 Fetching from Figma: {file_key}" + (f" (node {node_id})" if node_id else ""))
    client = FigmaAPIClient(token)
    try:
        return fetch_document(client, file_key, node_id)
    except requests.HTTPError as e:
        status = getattr(e.response, "status_code", None)
        if status == 403:
            print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
        elif status == 404:
            print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
        else:
            print(f"❌ Figma API 錯誤：{e}")
    except requests.RequestException as e:
        print(f"❌ 無法連線到 Figma：{e}")
    except ValueError as e:
        print(f"❌ {e}")
    return None


def resolve_document(args, config: dict) -> Optional[dict]:
    """依參數取得原始文件：--sample → --input → Figma API."""
    if getattr(args, "sample", False):
        return sample_document()
    if getattr(args, "input", None):
        return _read_input_file(args.input)
    return _fetch_from_figma(args, config)


def _report_collisions(collisions: list) -> None:
    if not collisions:
        return
    print(f"   ⚠️  {len(collisions)} 個圖層名稱重複，已加上後綴：")
    for node_id, base, resolved in collisions:
        print(f"     - {node_id}: {base} → {resolved}")


def _report_duplicate_ids(duplicate_ids: list) -> None:
    if not duplicate_ids:
        return
    print(f"   ⚠️  {len(duplicate_ids)} 個節點 id 重複，已改用：")
    for raw_id, resolved in duplicate_ids:
        print(f"     - {raw_id} → {resolved}")


def run_generate(raw_document: dict, options: dict) -> bool:
    try:
        result = convert_document(raw_document, options["package_name"], options["class_name"])
    except InvalidDocument as e:
        print(f"❌ {e}")
        return False

    print(f"   ✅ Normalized {len(result.components)} components ({result.root_count} root)")
    _report_collisions(result.collisions)
    _report_duplicate_ids(result.duplicate_ids)
    paths = write_outputs(
        result,
        options["output_dir"],
        options["package_name"],
        options["class_name"],
        options["layout_name"],
    )
    for kind, path in paths.items():
        print(f"   📄 {kind}: {path}")
    return True


def cmd_generate(args, config: dict):
    """Generate: Figma 文件 → layout XML + Java + Kotlin."""
    raw_document = resolve_document(args, config)
    if raw_document is None:
        return
    options = _android_options(args, config)
    print(f"🚀 Generating Android code to {options['output_dir']}")
    if run_generate(raw_document, options):
        print(f"✅ Generated to {options['output_dir']}")


def cmd_preview(args, config: dict):
    """預覽元件樹."""
    raw_document = resolve_document(args, config)
    if raw_document is None:
        return
    options = _android_options(args, config)
    try:
        result = convert_document(raw_document, options["package_name"], options["class_name"])
    except InvalidDocument as e:
        print(f"❌ {e}")
        return
    print(preview_component_tree(result.components))
    print(f"\nTotal components: {len(result.components)}")
    _report_collisions(result.collisions)
    _report_duplicate_ids(result.duplicate_ids)


_WATCHED_EXTENSIONS = (".json",)


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, debounce: float = 1.0):
        self.callback = callback
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def on_modified(self, event):
        if event.is_directory:
            return
        if not str(event.src_path).endswith(_WATCHED_EXTENSIONS):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {event.src_path}")
        try:
            self.callback()
        except Exception as e:
            # 單次失敗不應中斷 watch
            print(f"   ⚠️  Regenerate failed: {e}")


def cmd_watch(args, config: dict):
    """Watch: 監聽輸入 JSON 變更並自動重新產生."""
    input_path = Path(args.input)
    options = _android_options(args, config)
    print(f"👀 Watching '{input_path}'...")
    print(f"   Output: {options['output_dir']}")
    print("   Press Ctrl+C to stop.")

    def regenerate():
        raw_document = _read_input_file(str(input_path))
        if raw_document is not None:
            run_generate(raw_document, options)

    # 初始執行一次
    regenerate()

    event_handler = ChangeHandler(regenerate)
    observer = Observer()
    observer.schedule(event_handler, path=str(input_path.parent), recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--file-key", help="Figma file key")
    p.add_argument("--node-id", help="Only convert this node (e.g. 1:2)")
    p.add_argument("--input", help="Read a Figma file JSON from disk instead of the API")
    p.add_argument("--sample", action="store_true", help="Use the built-in sample document")


def _add_android_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--output", help="Output directory")
    p.add_argument("--package", help=f"Package name (default {DEFAULT_PACKAGE})")
    p.add_argument("--class-name", help=f"Class name (default {DEFAULT_CLASS_NAME})")
    p.add_argument("--layout-name", help=f"Layout file name (default {DEFAULT_LAYOUT_NAME})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="figdroid: Figma → Android layout XML / Java / Kotlin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    gen_p = sub.add_parser("generate", help="Figma → Android code",
        epilog="Examples:\n  figdroid generate --file-key ABC123 --output ./out\n  figdroid generate --sample --package com.acme.login --class-name LoginLayout",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_input_args(gen_p)
    _add_android_args(gen_p)

    preview_p = sub.add_parser("preview", help="Preview component tree",
        epilog="Examples:\n  figdroid preview --sample\n  figdroid preview --input design.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_input_args(preview_p)

    watch_p = sub.add_parser("watch", help="Regenerate when the input JSON changes",
        epilog="Examples:\n  figdroid watch --input design.json --output ./out",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("--input", required=True, help="Figma file JSON to watch")
    _add_android_args(watch_p)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "generate":
        cmd_generate(args, config)
    elif args.command == "preview":
        cmd_preview(args, config)
    elif args.command == "watch":
        cmd_watch(args, config)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

"""
Watch Mode / ChangeHandler debounce 單元測試
不需要真實檔案系統事件，用 mock event 物件測試過濾與防抖。
"""
import time
from unittest.mock import MagicMock

from figdroid.cli import ChangeHandler, _WATCHED_EXTENSIONS


def make_event(src_path: str, is_directory: bool = False):
    ev = MagicMock()
    ev.is_directory = is_directory
    ev.src_path = src_path
    return ev


class TestChangeHandlerFilter:
    def setup_method(self):
        self.callback = MagicMock()
        self.handler = ChangeHandler(self.callback, debounce=0.0)

    def test_directory_event_ignored(self):
        self.handler.on_modified(make_event("/designs/", is_directory=True))
        self.callback.assert_not_called()

    def test_non_watched_extension_ignored(self):
        for ext in [".png", ".md", ".xml", ".java", ".kt"]:
            self.handler.on_modified(make_event(f"/designs/file{ext}"))
        self.callback.assert_not_called()

    def test_watched_extensions_trigger_callback(self):
        for ext in _WATCHED_EXTENSIONS:
            self.handler.last_trigger = 0
            self.handler.on_modified(make_event(f"/designs/login{ext}"))
        assert self.callback.call_count == len(_WATCHED_EXTENSIONS)

    def test_callback_failure_does_not_raise(self, capsys):
        self.callback.side_effect = RuntimeError("boom")
        self.handler.on_modified(make_event("/designs/login.json"))
        assert "boom" in capsys.readouterr().out


class TestChangeHandlerDebounce:
    def test_rapid_events_trigger_once(self):
        callback = MagicMock()
        handler = ChangeHandler(callback, debounce=10.0)
        for _ in range(5):
            handler.on_modified(make_event("/designs/login.json"))
        assert callback.call_count == 1

    def test_event_after_window_triggers_again(self):
        callback = MagicMock()
        handler = ChangeHandler(callback, debounce=0.05)
        handler.on_modified(make_event("/designs/login.json"))
        time.sleep(0.1)
        handler.on_modified(make_event("/designs/login.json"))
        assert callback.call_count == 2

from __future__ import annotations

import threading

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.logging import TextualHandler
from textual.widgets import Input, RichLog, Static

from transit.runtime.logsetup import configure_logging
from transit.runtime.session import EngineSession
from transit.ui_textual import presenter


class CommandInput(Input):
    def key_up(self) -> None:
        self.app.action_history_prev()
        return

    def key_down(self) -> None:
        self.app.action_history_next()
        return


class TransitTextualApp(App):
    CSS = """
    Screen {
        layout: vertical;
        background: $background;
        overflow: hidden;
    }
    #header {
        height: 1;
        padding: 0 2;
        background: #0B3D2E;
        color: #f2f2f2;
    }
    #main {
        height: 1fr;
    }
    #status {
        width: 1.2fr;
        padding: 1 2;
        border: none;
        background: $background;
        scrollbar-size-vertical: 1;
        scrollbar-color: #666666;
    }
    #alerts {
        width: 1fr;
        padding: 1 2;
        border: none;
        background: $background;
        scrollbar-size-vertical: 1;
        scrollbar-color: #666666;
    }
    #log {
        height: 14;
        border: none;
        margin: 1 0;
        padding: 0 2;
        background: $background;
        scrollbar-size-vertical: 1;
        scrollbar-color: #666666;
    }
    #input {
        height: 1;
        background: $background;
        border: none;
    }
    #footer {
        height: 1;
        padding: 0 2;
        background: #0B3D2E;
        color: #f2f2f2;
    }
    """

    BINDINGS = [
        Binding("ctrl+l", "clear_log", "Clear log"),
    ]

    def __init__(self, session: EngineSession | None = None) -> None:
        self.session = session or EngineSession.from_env()
        self._history: list[str] = []
        self._history_index: int = 0
        self._history_current: str = ""
        # heartbeat thread -> UI thread
        self._alerts_lock = threading.Lock()
        self._alerts: list[str] = []
        self._alerts_dirty = False
        super().__init__()

    def compose(self) -> ComposeResult:
        yield Static(id="header")
        with Horizontal(id="main"):
            yield RichLog(id="status", wrap=True, highlight=False, min_width=0)
            yield RichLog(id="alerts", wrap=True, highlight=False, min_width=0)
        yield RichLog(id="log", wrap=True, highlight=False)
        yield CommandInput(id="input", placeholder="Enter command… (help)")
        yield Static(id="footer")

    def on_mount(self) -> None:
        self.query_one("#status", RichLog).auto_scroll = False
        self.session.start(self._on_tick)
        self.set_interval(0.25, self.refresh_panels)
        self.refresh_panels()
        result = self.session.submit("look")
        self._log_lines(result.message.splitlines())
        self.call_later(lambda: self.query_one("#input", Input).focus())

    def on_shutdown(self) -> None:
        self.session.stop()

    def _on_tick(self, systems: dict[str, float], alerts: list[str]) -> None:
        # Runs on the heartbeat thread with the session lock held; only queue.
        with self._alerts_lock:
            self._alerts = list(alerts)
            self._alerts_dirty = True

    def action_clear_log(self) -> None:
        self.query_one("#log", RichLog).clear()

    def action_history_prev(self) -> None:
        input_widget = self.query_one("#input", Input)
        if not self._history:
            return
        if self._history_index >= len(self._history):
            self._history_current = input_widget.value
        if self._history_index > 0:
            self._history_index -= 1
        input_widget.value = self._history[self._history_index]
        input_widget.cursor_position = len(input_widget.value)

    def action_history_next(self) -> None:
        input_widget = self.query_one("#input", Input)
        if not self._history:
            return
        if self._history_index < len(self._history) - 1:
            self._history_index += 1
            input_widget.value = self._history[self._history_index]
        else:
            self._history_index = len(self._history)
            input_widget.value = self._history_current
        input_widget.cursor_position = len(input_widget.value)

    def _log_line(self, line: str) -> None:
        self.query_one("#log", RichLog).write(line)

    def _log_lines(self, lines: list[str]) -> None:
        for line in lines:
            self._log_line(line)

    def _set_log_content(self, widget: RichLog, lines: list[str]) -> None:
        scroll_y = widget.scroll_y
        widget.clear()
        for line in lines:
            widget.write(line)
        widget.scroll_y = min(scroll_y, widget.max_scroll_y)

    def refresh_panels(self) -> None:
        with self.session.with_lock() as state:
            header = presenter.build_header(self.session, state)
            status_lines = presenter.build_status_lines(self.session, state)
            footer = presenter.build_footer(state)
        self.query_one("#header", Static).update(header)
        self._set_log_content(self.query_one("#status", RichLog), status_lines)
        self.query_one("#footer", Static).update(footer)

        with self._alerts_lock:
            dirty, alerts = self._alerts_dirty, list(self._alerts)
            self._alerts_dirty = False
        if dirty:
            self._set_log_content(self.query_one("#alerts", RichLog), presenter.build_alerts_lines(alerts))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.value = ""
        if not text:
            return
        self._history.append(text)
        self._history_index = len(self._history)
        self._history_current = ""

        if text.lower() in {"quit", "exit"}:
            self.exit()
            return

        result = self.session.submit(text)
        self._log_lines(presenter.result_lines(text, result.message))
        self.refresh_panels()


def main() -> None:
    # stderr would draw over the running screen
    configure_logging(handler=TextualHandler())
    TransitTextualApp().run()


if __name__ == "__main__":
    main()

# main.py
import asyncio
import logging
from typing import Optional

try:
    import pyperclip
except ImportError:
    pyperclip = None

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input

from config import Config
from errors import UpstreamDataError
from export import export_selection, suggest_filename
from interactions import InteractionAdapter
from models import ClickEvent, MoveEvent, SelectAllEvent, ToggleEvent
from services import ExportWriter, LinkOpener, VideoSearchService, YouTubeDataClient
from store import OrderedCollection
from ui import DetailsPane, LogPane, ResultsDisplay, SearchControls, SelectionSummary

logger = logging.getLogger(__name__)


class FindYTManualApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("space", "toggle_selected", "Select"),
        ("a", "toggle_all", "Select all"),
        ("g", "grab", "Grab"),
        ("p", "drop", "Drop here"),
        ("u", "move_up", "Move up"),
        ("n", "move_down", "Move down"),
        ("c", "copy_link", "Copy Link"),
        ("e", "export", "Export"),
    ]
    CSS_PATH = "find_yt_manual.css"

    highlighted_id: reactive[Optional[str]] = reactive(None, init=False)

    def __init__(self, search_service: VideoSearchService, export_writer: ExportWriter,
                 link_opener: LinkOpener, config: Config):
        super().__init__()
        self.search_service = search_service
        self.export_writer = export_writer
        self.link_opener = link_opener
        self.config = config
        self.store = OrderedCollection()
        self.adapter = InteractionAdapter(self.store, opener=self._open_link, watch_host=config.WATCH_HOST)
        self.grabbed_id: Optional[str] = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            with Horizontal(id="app-grid"):
                with Vertical(id="left-pane"):
                    yield SearchControls()
                    yield SelectionSummary(id="selection-summary")
                    yield ResultsDisplay(id="results-table")
                with Vertical(id="right-pane"):
                    yield DetailsPane(id="details-pane")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        log = self.query_one(LogPane)
        self.query_one(Input).focus()
        if self.config.API_KEY:
            log.add_message("[green]✅ YouTube API key found.[/green]")
        else:
            log.add_message("[yellow]⚠️ YOUTUBE_API_KEY is not set; searches will fail.[/yellow]")
        if pyperclip:
            log.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        self.refresh_results()

    def watch_highlighted_id(self, video_id: Optional[str]) -> None:
        item = self.store.get(video_id) if video_id else None
        self.query_one(DetailsPane).update_details(
            item,
            self.store.is_selected(video_id) if item else False,
            self.adapter.watch_url(item.id) if item else "",
        )

    def refresh_results(self, cursor_id: Optional[str] = None) -> None:
        if self.grabbed_id not in self.store:
            self.grabbed_id = None
        self.query_one(ResultsDisplay).update_results(
            self.store.items, self.store.selected_ids, cursor_id, self.grabbed_id)
        self.query_one(SelectionSummary).update_summary(
            len(self.store.selected_ids), len(self.store), self.store.all_selected)
        self.watch_highlighted_id(self.highlighted_id)

    def _current_key(self) -> Optional[str]:
        return self.query_one(ResultsDisplay).current_key()

    def _open_link(self, url: str) -> None:
        success, message = self.link_opener.open(url)
        if success:
            self.query_one(LogPane).add_message(f"🌐 {escape(message)}")
        else:
            self.query_one(LogPane).add_message(f"[red]❌ {escape(message)}[/red]")

    def _report_dropped(self, what: str) -> None:
        log = self.query_one(LogPane)
        if self.adapter.search_in_flight:
            log.add_message(f"[yellow]⚠️ Search in progress; {what} ignored.[/yellow]")
        else:
            log.add_message(f"[yellow]⚠️ The list changed; {what} ignored.[/yellow]")

    # --- Actions ---
    def action_toggle_dark(self) -> None:
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    def action_toggle_selected(self) -> None:
        key = self._current_key()
        if key is None:
            return
        if self.adapter.dispatch(ToggleEvent(key)):
            self.refresh_results(cursor_id=key)
        else:
            self._report_dropped("selection")

    def action_toggle_all(self) -> None:
        if not len(self.store):
            return
        if self.adapter.dispatch(SelectAllEvent(not self.store.all_selected)):
            self.refresh_results(cursor_id=self._current_key())
        else:
            self._report_dropped("select all")

    def action_grab(self) -> None:
        key = self._current_key()
        if key is None:
            return
        self.grabbed_id = None if self.grabbed_id == key else key
        self.refresh_results(cursor_id=key)

    def action_drop(self) -> None:
        log = self.query_one(LogPane)
        target = self._current_key()
        if self.grabbed_id is None or target is None:
            log.add_message("[yellow]⚠️ Grab a video with 'g' first.[/yellow]")
            return
        moved, self.grabbed_id = self.grabbed_id, None
        if self.adapter.dispatch(MoveEvent(moved, target)):
            self.refresh_results(cursor_id=moved)
        else:
            self._report_dropped("move")
            self.refresh_results(cursor_id=target)

    def action_move_up(self) -> None:
        self._move_by(-1)

    def action_move_down(self) -> None:
        self._move_by(1)

    def _move_by(self, offset: int) -> None:
        key = self._current_key()
        if key is None or key not in self.store:
            return
        ids = self.store.ids
        target_index = ids.index(key) + offset
        if not 0 <= target_index < len(ids):
            return
        if self.adapter.dispatch(MoveEvent(key, ids[target_index])):
            self.refresh_results(cursor_id=key)
        else:
            self._report_dropped("move")

    def action_copy_link(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        item = self.store.get(self.highlighted_id) if self.highlighted_id else None
        if item:
            pyperclip.copy(self.adapter.watch_url(item.id))
            log.add_message(f"📋 Copied link for '[b]{escape(item.title)}[/b]'.")
        else:
            log.add_message("[yellow]⚠️ No video highlighted.[/yellow]")

    def action_export(self) -> None:
        log = self.query_one(LogPane)
        if not len(self.store):
            log.add_message("[yellow]⚠️ Nothing to export; search first.[/yellow]")
            return
        if not self.store.selected_ids:
            log.add_message("[yellow]⚠️ No videos selected; exporting an empty manual.[/yellow]")
        blob = export_selection(self.adapter.keyword, self.store, self.config.WATCH_HOST)
        success, message = self.export_writer.save(blob, suggest_filename(self.adapter.keyword))
        if success:
            log.add_message(f"[green]✅ {escape(message)}[/green]")
        else:
            log.add_message(f"[red]❌ {escape(message)}[/red]")

    # --- Messages ---
    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.query_one(LogPane).add_message(f"🔎 Searching for '{escape(message.query)}'...")
        generation = self.adapter.begin_search(message.query)
        self.run_worker(self.perform_search(message.query, generation), group="search_worker", exclusive=True)

    def on_results_display_row_selected(self, message: ResultsDisplay.RowSelected) -> None:
        if self.adapter.dispatch(ClickEvent(message.key)) is None:
            self._report_dropped("click")

    def on_results_display_row_highlighted(self, message: ResultsDisplay.RowHighlighted) -> None:
        self.highlighted_id = message.key

    async def perform_search(self, query: str, generation: int) -> None:
        log = self.query_one(LogPane)
        try:
            items = await asyncio.to_thread(self.search_service.search, query)
        except UpstreamDataError as e:
            self.adapter.fail_search(generation)
            logger.warning("Search for %r failed: %s", query, e)
            log.add_message("[red]❌ An error occurred during search.[/red]")
            log.add_message(f"[dim]{escape(str(e))}[/dim]")
            return

        if not self.adapter.complete_search(generation, query, items):
            return
        self.grabbed_id = None
        self.refresh_results()
        if not items:
            log.add_message(f"🤷 No Japanese-titled videos found for '{escape(query)}'.")
        else:
            log.add_message(f"🎬 Found {len(items)} videos, ranked by views.")


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        filename=config.LOG_FILE,
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app_config = Config()
    configure_logging(app_config)
    client = YouTubeDataClient(app_config.API_KEY, app_config.API_BASE_URL, app_config.REQUEST_TIMEOUT)
    search_service = VideoSearchService(client, app_config.SEARCH_RESULT_LIMIT)

    app = FindYTManualApp(search_service, ExportWriter(app_config.EXPORT_DIR), LinkOpener(), app_config)

    try:
        app.run()
    finally:
        client.close()

# ui.py
from typing import AbstractSet, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import (Button, DataTable, Input, Label, Markdown, RichLog,
                             Static)

from models import Item

class SearchControls(Static):
    """Widget for the keyword input and search button."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Enter a keyword:")
        yield Input(id="search-input", placeholder="Keyword")
        yield Button("Search", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.post_search_message()

    def post_search_message(self) -> None:
        query = self.query_one(Input).value.strip()
        if query:
            self.post_message(self.SearchRequested(query))


def details_markdown(item: Optional[Item], selected: bool, link: str) -> str:
    if not item:
        return "## Details\n\n*Highlight a video to see its details.*"
    return (
        f"## {item.title}\n\n"
        f"- **Views**: {item.view_metric}\n"
        f"- **Duration**: {item.duration_text}\n"
        f"- **Selected**: {'Yes' if selected else 'No'}\n"
        f"- **Link**: `{link}`\n"
        f"- **Thumbnail**: `{item.thumbnail_ref or 'N/A'}`"
    )


class DetailsPane(Static):
    """Widget to display details of the highlighted video."""
    def on_mount(self) -> None:
        self.update_details(None, False, "")

    def update_details(self, item: Optional[Item], selected: bool, link: str) -> None:
        self.query_one(Markdown).update(details_markdown(item, selected, link))

    def compose(self) -> ComposeResult:
        yield Markdown()


class SelectionSummary(Static):
    """One-line count of selected videos."""
    def update_summary(self, selected: int, total: int, all_selected: bool) -> None:
        if total == 0:
            self.update("No results.")
            return
        suffix = " (all)" if all_selected else ""
        self.update(f"{selected} of {total} selected{suffix}")


class ResultsDisplay(DataTable):
    """Widget for the ordered results table."""
    class RowSelected(Message):
        def __init__(self, key: str) -> None:
            self.key = key
            super().__init__()

    class RowHighlighted(Message):
        def __init__(self, key: Optional[str]) -> None:
            self.key = key
            super().__init__()

    def on_mount(self) -> None:
        self.add_columns("✓", "Title", "Views", "Duration")
        self.cursor_type = "row"

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value:
            self.post_message(self.RowSelected(event.row_key.value))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self.post_message(self.RowHighlighted(event.row_key.value))

    def current_key(self) -> Optional[str]:
        if self.row_count == 0:
            return None
        row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        return row_key.value

    def update_results(self, items: Sequence[Item], selected_ids: AbstractSet[str],
                       cursor_id: Optional[str] = None, grabbed_id: Optional[str] = None) -> None:
        self.clear()
        for item in items:
            title = Text(item.title)
            if item.id == grabbed_id:
                title = Text.assemble(("» ", "bold yellow"), title)
            self.add_row(
                "✓" if item.id in selected_ids else "",
                title,
                str(item.view_metric),
                item.duration_text,
                key=item.id,
            )
        if cursor_id is not None:
            for row, item in enumerate(items):
                if item.id == cursor_id:
                    self.move_cursor(row=row)
                    break
        if items:
            self.focus()


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)

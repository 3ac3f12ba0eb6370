# export.py
"""Static HTML "video manual" built from the selected videos."""
import html
import re
from typing import Iterable
from urllib.parse import quote

from models import DEFAULT_WATCH_HOST, Item, watch_url
from store import OrderedCollection

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="ja">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{heading}</title>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; padding: 20px; background-color: #EBF8FF; color: #2C5282; }}
    h1 {{ color: #2B6CB0; text-align: center; margin-bottom: 20px; }}
    table {{ width: 100%; border-collapse: collapse; background-color: white; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
    th, td {{ padding: 12px; text-align: left; border-bottom: 1px solid #E2E8F0; }}
    th {{ background-color: #4299E1; color: white; }}
    tr:hover {{ background-color: #EBF8FF; }}
    a {{ color: #3182CE; text-decoration: none; font-weight: bold; }}
    a:hover {{ text-decoration: underline; }}
  </style>
</head>
<body>
  <h1>{heading}</h1>
  <table>
    <thead>
      <tr>
        <th>Title</th>
        <th>Views</th>
        <th>Duration</th>
      </tr>
    </thead>
    <tbody>
{rows}    </tbody>
  </table>
</body>
</html>
"""

ROW_TEMPLATE = """      <tr>
        <td><a href="{href}" target="_blank" rel="noopener">{title}</a></td>
        <td>{views}</td>
        <td>{duration}</td>
      </tr>
"""


def document_heading(keyword: str) -> str:
    return f"{keyword} video manual" if keyword else "Video manual"


def _render_row(item: Item, host: str) -> str:
    href = watch_url(quote(item.id, safe=""), host)
    return ROW_TEMPLATE.format(
        href=html.escape(href, quote=True),
        title=html.escape(item.title, quote=True),
        views=str(item.view_metric),
        duration=html.escape(item.duration_text, quote=True),
    )


def render_document(keyword: str, items: Iterable[Item], host: str = DEFAULT_WATCH_HOST) -> bytes:
    """Renders ``items`` in the given order. Same inputs always give the same bytes."""
    rows = "".join(_render_row(item, host) for item in items)
    document = DOCUMENT_TEMPLATE.format(
        heading=html.escape(document_heading(keyword), quote=True),
        rows=rows,
    )
    return document.encode("utf-8")


def export_selection(keyword: str, collection: OrderedCollection, host: str = DEFAULT_WATCH_HOST) -> bytes:
    """Renders the selected items in display order. Reads the collection, never changes it."""
    return render_document(keyword, collection.selected_items(), host)


def suggest_filename(keyword: str) -> str:
    name = _UNSAFE_FILENAME_CHARS.sub("_", keyword.strip()).strip(". ")
    if not name:
        return "video-manual.html"
    return f"{name}-manual.html"

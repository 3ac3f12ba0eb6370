# services.py
import logging
import webbrowser
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from errors import UpstreamDataError
from merger import merge_records, rank_items
from models import Item, SearchRecord, StatsRecord

logger = logging.getLogger(__name__)


class YouTubeDataClient:
    """A thin client for the two YouTube Data API v3 endpoints we need."""
    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 10.0,
                 http_client: Optional[httpx.Client] = None):
        self.api_key = api_key
        self.http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def search(self, keyword: str, limit: int) -> List[SearchRecord]:
        """Fetches one page of video search results for ``keyword``."""
        payload = self._get("/search", {
            "part": "snippet",
            "q": keyword,
            "type": "video",
            "maxResults": limit,
        })
        records = []
        for raw in self._items(payload, "search"):
            try:
                video_id = raw["id"]["videoId"]
                snippet = raw["snippet"]
                title = snippet["title"]
            except (KeyError, TypeError) as e:
                raise UpstreamDataError(f"Search result is missing {e}: {raw!r}") from e
            if not isinstance(snippet, dict):
                raise UpstreamDataError(f"Search result snippet is not an object: {raw!r}")
            records.append(SearchRecord(video_id=str(video_id), title=str(title),
                                        thumbnail_url=self._thumbnail_url(snippet, raw)))
        logger.info("Search for %r returned %d records.", keyword, len(records))
        return records

    def fetch_statistics(self, video_ids: Sequence[str]) -> List[StatsRecord]:
        """Fetches view counts and durations, aligned to the order of ``video_ids``.

        Videos the API did not return get an empty StatsRecord, which the
        merger turns into default values.
        """
        if not video_ids:
            return []
        payload = self._get("/videos", {
            "part": "statistics,contentDetails",
            "id": ",".join(video_ids),
        })
        by_id: Dict[str, Dict[str, Any]] = {}
        for raw in self._items(payload, "videos"):
            if isinstance(raw, dict) and "id" in raw:
                by_id[str(raw["id"])] = raw

        aligned = []
        for video_id in video_ids:
            raw = by_id.get(video_id)
            if raw is None:
                aligned.append(StatsRecord())
                continue
            statistics = raw.get("statistics") or {}
            details = raw.get("contentDetails") or {}
            if not isinstance(statistics, dict) or not isinstance(details, dict):
                logger.warning("Malformed statistics for %s; using defaults.", video_id)
                aligned.append(StatsRecord())
                continue
            aligned.append(StatsRecord(
                view_count_text=str(statistics.get("viewCount", "")),
                duration_code=str(details.get("duration", "")),
            ))
        return aligned

    def close(self) -> None:
        self.http.close()

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise UpstreamDataError("No YouTube API key configured (set YOUTUBE_API_KEY).")
        try:
            response = self.http.get(path, params={**params, "key": self.api_key})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP %s from %s", e.response.status_code, path)
            raise UpstreamDataError(f"YouTube API returned HTTP {e.response.status_code} for {path}") from e
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", path, e)
            raise UpstreamDataError(f"Request to {path} failed: {e}") from e
        except ValueError as e:
            raise UpstreamDataError(f"YouTube API returned invalid JSON for {path}") from e

        if not isinstance(payload, dict):
            raise UpstreamDataError(f"Unexpected payload type from {path}: {type(payload).__name__}")
        return payload

    @staticmethod
    def _thumbnail_url(snippet: Dict[str, Any], raw: Any) -> str:
        thumbnails = snippet.get("thumbnails") or {}
        if not isinstance(thumbnails, dict):
            raise UpstreamDataError(f"Search result thumbnails are not an object: {raw!r}")
        chosen = thumbnails.get("medium") or thumbnails.get("default") or {}
        if not isinstance(chosen, dict):
            raise UpstreamDataError(f"Search result thumbnail is not an object: {raw!r}")
        url = chosen.get("url", "")
        if not isinstance(url, str):
            raise UpstreamDataError(f"Search result thumbnail url is not a string: {raw!r}")
        return url

    @staticmethod
    def _items(payload: Dict[str, Any], endpoint: str) -> List[Any]:
        items = payload.get("items")
        if not isinstance(items, list):
            raise UpstreamDataError(f"The {endpoint} response has no 'items' list.")
        return items


class VideoSearchService:
    """Runs fetch, merge and rank as one unit. Nothing partial is returned."""
    def __init__(self, client: YouTubeDataClient, limit: int):
        self.client = client
        self.limit = limit

    def search(self, keyword: str) -> List[Item]:
        records = self.client.search(keyword, self.limit)
        stats = self.client.fetch_statistics([r.video_id for r in records])
        items = rank_items(merge_records(records, stats))
        logger.info("%d of %d results for %r kept after filtering.", len(items), len(records), keyword)
        return items


class ExportWriter:
    """Saves exported documents into a directory."""
    def __init__(self, directory: str):
        self.directory = Path(directory)

    def save(self, blob: bytes, filename: str) -> Tuple[bool, str]:
        """Writes ``blob`` to ``filename``, returning success status and message."""
        path = self.directory / filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(blob)
        except OSError as e:
            logger.error("Could not write %s: %s", path, e)
            return False, f"Could not write '{path}': {e}"
        return True, f"Saved '{path}'."


class LinkOpener:
    """Opens watch URLs in the system browser."""
    def open(self, url: str) -> Tuple[bool, str]:
        try:
            webbrowser.open(url)
        except (webbrowser.Error, OSError) as e:
            logger.warning("Failed to open browser for %s: %s", url, e)
            return False, f"Could not open '{url}': {e}"
        return True, f"Opened {url}"

# errors.py


class UpstreamDataError(Exception):
    """The YouTube API call failed or returned a payload of the wrong shape."""


class InvalidReference(KeyError):
    """An operation named a video id that is not in the current result set."""
    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__(video_id)

    def __str__(self) -> str:
        return f"Unknown video id: {self.video_id!r}"


class MalformedStatEntry(ValueError):
    """A single statistics field could not be parsed."""

"""Static track catalog."""

from .catalog import TRACK_CATALOG, TrackKind, build_figure8_track, build_oval_track, get_track

__all__ = [
    "TRACK_CATALOG",
    "TrackKind",
    "build_figure8_track",
    "build_oval_track",
    "get_track",
]

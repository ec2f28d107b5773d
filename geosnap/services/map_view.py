from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from geosnap.services.clustering import PhotoGroup, PhotoPoint, cluster_photos
from geosnap.utils.geo import padded_bounds


logger = logging.getLogger(__name__)

ZOOM_THRESHOLD = 14
DEFAULT_CENTER: Tuple[float, float] = (10.7769, 106.7009)  # Ho Chi Minh City
DEFAULT_ZOOM = 13

GOLD = "#FFD700"
ACCENT = "#FF6B6B"
HIGH_RATING = 4

PREVIEW_LIMIT = 4


class RenderMode(str, Enum):
    DETAILED = "detailed"
    OVERVIEW = "overview"


def render_mode(zoom: float) -> RenderMode:
    return RenderMode.DETAILED if zoom >= ZOOM_THRESHOLD else RenderMode.OVERVIEW


def rating_color(avg_rating: int) -> str:
    return GOLD if avg_rating >= HIGH_RATING else ACCENT


def marker_size(count: int) -> int:
    return 56 if count > 1 else 48


def dot_radius(count: int) -> int:
    if count > 5:
        return 12
    if count >= 4:
        return 10
    if count >= 2:
        return 8
    return 6


def marker_spec(group: PhotoGroup, mode: RenderMode) -> Dict:
    color = rating_color(group.average_rating)
    if mode is RenderMode.DETAILED:
        return {
            "kind": "photo",
            "image": group.photos[0].image if group.photos else None,
            "size": marker_size(group.count),
            "border_color": color,
            "badge": group.count if group.count > 1 else None,
        }
    return {
        "kind": "dot",
        "radius": dot_radius(group.count),
        "fill_color": color,
    }


def preview(group: PhotoGroup, limit: int = PREVIEW_LIMIT) -> Dict:
    shown = group.photos[:limit]
    return {
        "photos": shown,
        "more": max(0, group.count - limit),
        "average_rating": group.average_rating,
        "count": group.count,
    }


SelectCallback = Callable[[List[PhotoPoint], Optional[str]], None]


def _fingerprint(photos: Sequence[PhotoPoint]) -> Tuple:
    return tuple(
        (p.id, p.latitude, p.longitude, p.rating, p.created_at) for p in photos
    )


@dataclass
class MapView:
    """Map screen state: current zoom, selected group and the cached groups.

    Groups are rebuilt only when the photo list changes; zoom changes only
    re-derive the render mode.
    """

    zoom: float = DEFAULT_ZOOM
    selected_group: Optional[PhotoGroup] = None
    groups: Optional[List[PhotoGroup]] = None
    on_select: Optional[SelectCallback] = None
    _photos_key: Optional[Tuple] = None

    def __post_init__(self) -> None:
        if self.groups is None:
            self.groups = []

    @property
    def mode(self) -> RenderMode:
        return render_mode(self.zoom)

    def set_photos(self, photos: Sequence[PhotoPoint]) -> bool:
        """Returns True when groups were recomputed."""
        key = _fingerprint(photos)
        if key == self._photos_key:
            return False
        self._photos_key = key
        self.groups = cluster_photos(photos)
        # a stale selection would point at a group that no longer exists
        self.selected_group = None
        return True

    def on_zoom_end(self, zoom: float) -> RenderMode:
        self.zoom = zoom
        return self.mode

    def select(self, index: int) -> PhotoGroup:
        group = self.groups[index]
        self.selected_group = group
        if self.on_select is not None:
            self.on_select(list(group.photos), group.label)
        return group

    def clear_selection(self) -> None:
        self.selected_group = None

    def markers(self) -> List[Dict]:
        mode = self.mode
        return [marker_spec(g, mode) for g in self.groups]

    def bounds(self) -> Optional[List[List[float]]]:
        return padded_bounds(
            (p.latitude, p.longitude) for g in self.groups for p in g.photos)

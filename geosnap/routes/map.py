from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from geosnap.routes.photos import filtered_photos
from geosnap.services.clustering import PhotoGroup, PhotoPoint
from geosnap.services.map_view import (
    DEFAULT_CENTER, DEFAULT_ZOOM, MapView, RenderMode, marker_spec, preview,
)
from geosnap.utils.security import get_db


router = APIRouter(prefix="/api/map", tags=["map"])


def _point_dict(p: PhotoPoint) -> Dict[str, Any]:
    d = asdict(p)
    d["created_at"] = p.created_at.isoformat() if p.created_at else None
    return d


def _group_dict(group: PhotoGroup, mode: RenderMode) -> Dict[str, Any]:
    pv = preview(group)
    return {
        "latitude": group.latitude,
        "longitude": group.longitude,
        "label": group.label,
        "count": group.count,
        "average_rating": group.average_rating,
        "photos": [_point_dict(p) for p in group.photos],
        "marker": marker_spec(group, mode),
        "preview": {**pv, "photos": [_point_dict(p) for p in pv["photos"]]},
    }


@router.get("/groups")
def map_groups(
    zoom: float = Query(DEFAULT_ZOOM, ge=0, le=22),
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius: Optional[float] = Query(None, gt=0),
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    photos = [PhotoPoint.from_model(p) for p in filtered_photos(db, lat, lng, radius, user_id).all()]
    view = MapView()
    view.set_photos(photos)
    mode = view.on_zoom_end(zoom)
    return {
        "zoom": zoom,
        "mode": mode.value,
        "center": list(DEFAULT_CENTER),
        "default_zoom": DEFAULT_ZOOM,
        "bounds": view.bounds(),
        "photo_count": len(photos),
        "groups": [_group_dict(g, mode) for g in view.groups],
    }

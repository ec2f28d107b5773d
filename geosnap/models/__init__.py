from geosnap.models.user import User
from geosnap.models.photo import Photo, PhotoLike
from geosnap.models.comment import Comment

__all__ = ["User", "Photo", "PhotoLike", "Comment"]

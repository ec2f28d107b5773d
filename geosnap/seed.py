from __future__ import annotations

import base64
import logging

import click
from sqlalchemy.orm import Session

from geosnap.db import SessionLocal, init_db
from geosnap.models import Comment, Photo, PhotoLike, User
from geosnap.utils.logs import configure_logging
from geosnap.utils.security import hash_password


logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@geosnap.com"
DEMO_PASSWORD = "demo123"

# (lat, lng, address, rating, caption, background)
SAMPLE_PHOTOS = [
    (10.7721, 106.6980, "Ben Thanh Market", 5, "The busiest market in Saigon", "#1a1a2e"),
    (10.7798, 106.6990, "Notre-Dame Cathedral", 5, "French colonial architecture", "#16213e"),
    (10.7716, 106.7043, "Bitexco Tower", 4, "The city's landmark tower", "#0f3460"),
    (10.7678, 106.6932, "Bui Vien Walking Street", 4, "Lively nightlife", "#1a3c40"),
    (10.7770, 106.6953, "Independence Palace", 5, "A key historical site", "#3d2c8d"),
]

SAMPLE_COMMENTS = [
    (0, "Great street food here!"),
    (0, "Remember to bring back souvenirs"),
    (1, "Beautiful gothic details"),
    (2, "Amazing view from the top"),
    (3, "So much fun at night"),
]


def placeholder_image(label: str, background: str) -> str:
    svg = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="400">'
        f'<rect fill="{background}" width="100%" height="100%"/>'
        '<text x="50%" y="50%" fill="#fff" font-size="24" text-anchor="middle" dy=".3em">'
        f'{label}</text></svg>'
    )
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def clear_all(db: Session) -> None:
    for model in (Comment, PhotoLike, Photo, User):
        db.query(model).delete()
    db.commit()


def seed(db: Session, reset: bool = False) -> User:
    if reset:
        clear_all(db)
        logger.info("cleared existing data")

    demo = db.query(User).filter(User.email == DEMO_EMAIL).first()
    if demo:
        logger.info("demo user already present (id=%s); nothing to seed", demo.id)
        return demo

    demo = User(username="demo_user", email=DEMO_EMAIL,
                password_hash=hash_password(DEMO_PASSWORD))
    db.add(demo)
    db.flush()

    photos = []
    for lat, lng, address, rating, caption, bg in SAMPLE_PHOTOS:
        photo = Photo(user_id=demo.id, image=placeholder_image(address, bg),
                      latitude=lat, longitude=lng, address=address,
                      rating=rating, caption=caption)
        db.add(photo)
        photos.append(photo)
    db.flush()

    for idx, text in SAMPLE_COMMENTS:
        db.add(Comment(photo_id=photos[idx].id, user_id=demo.id, text=text))
    db.commit()
    logger.info("seeded %d photos and %d comments", len(photos), len(SAMPLE_COMMENTS))
    return demo


@click.command(name="seed")
@click.option("--reset", is_flag=True, help="Delete all users, photos and comments first.")
def main(reset: bool) -> None:
    """Populate the database with a demo user and sample photos."""
    configure_logging()
    init_db()
    db = SessionLocal()
    try:
        seed(db, reset=reset)
    finally:
        db.close()
    click.echo(f"Login: {DEMO_EMAIL} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()

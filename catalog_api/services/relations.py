# ============================================================================
# FILE: catalog_api/services/relations.py
# Join-row + denormalized counter pairs, always written in one transaction
# ============================================================================
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from catalog_api.core.exceptions import ConflictError, BadRequestError
from catalog_api.db.models import (
    Artist,
    ArtistFollow,
    Playlist,
    PlaylistFollow,
    Song,
    SongLike,
)
import logging

logger = logging.getLogger(__name__)


class CountedRelation:
    """
    A user -> target join table whose row count is mirrored in a counter
    column on the target

    add() and remove() insert/delete the join row and move the counter by
    one inside the same transaction, so the two never diverge.
    """

    def __init__(self, link_model, target_fk: str, target_model, counter: str,
                 duplicate_message: str, missing_message: str):
        self.link_model = link_model
        self.target_fk = target_fk
        self.target_model = target_model
        self.counter = counter
        self.duplicate_message = duplicate_message
        self.missing_message = missing_message

    def _link_query(self, db: Session, user_id: int, target_id: int):
        return db.query(self.link_model).filter(
            self.link_model.user_id == user_id,
            getattr(self.link_model, self.target_fk) == target_id,
        )

    def _counter_update(self, target_id: int, delta: int):
        column = getattr(self.target_model, self.counter)
        return (
            update(self.target_model)
            .where(self.target_model.id == target_id)
            .values({self.counter: column + delta})
        )

    def exists(self, db: Session, user_id: int, target_id: int) -> bool:
        return self._link_query(db, user_id, target_id).first() is not None

    def add(self, db: Session, user_id: int, target_id: int) -> None:
        if self.exists(db, user_id, target_id):
            raise ConflictError(self.duplicate_message)

        try:
            db.add(self.link_model(user_id=user_id, **{self.target_fk: target_id}))
            db.flush()
            db.execute(self._counter_update(target_id, 1))
            db.commit()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            db.rollback()
            raise ConflictError(self.duplicate_message)
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding {self.link_model.__tablename__} row: {e}")
            raise
        logger.info(f"{self.link_model.__tablename__}: user {user_id} -> {target_id} added")

    def remove(self, db: Session, user_id: int, target_id: int) -> None:
        link = self._link_query(db, user_id, target_id).first()
        if link is None:
            raise BadRequestError(self.missing_message)

        try:
            deleted = self._link_query(db, user_id, target_id).delete(synchronize_session=False)
            if deleted:
                db.execute(self._counter_update(target_id, -1))
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing {self.link_model.__tablename__} row: {e}")
            raise
        if not deleted:
            # Removed by a concurrent request between the check and the delete
            raise BadRequestError(self.missing_message)
        logger.info(f"{self.link_model.__tablename__}: user {user_id} -> {target_id} removed")

    def release_user(self, db: Session, user_id: int) -> None:
        """
        Decrement every counter the user contributes to, ahead of deleting
        the user (the rows themselves go with ON DELETE CASCADE)

        Does not commit; the caller owns the transaction.
        """
        column = getattr(self.target_model, self.counter)
        target_ids = select(getattr(self.link_model, self.target_fk)).where(self.link_model.user_id == user_id)
        db.execute(
            update(self.target_model)
            .where(self.target_model.id.in_(target_ids))
            .values({self.counter: column - 1})
            .execution_options(synchronize_session=False)
        )


playlist_follows = CountedRelation(
    PlaylistFollow, "playlist_id", Playlist, "follower_count",
    duplicate_message="You are already following this playlist",
    missing_message="You are not following this playlist",
)

artist_follows = CountedRelation(
    ArtistFollow, "artist_id", Artist, "follower_count",
    duplicate_message="You are already following this artist",
    missing_message="You are not following this artist",
)

song_likes = CountedRelation(
    SongLike, "song_id", Song, "like_count",
    duplicate_message="You have already liked this song",
    missing_message="You have not liked this song",
)

COUNTED_RELATIONS = (playlist_follows, artist_follows, song_likes)

"""
Persisted State Repository
==========================
Loads and saves the two durable records of a ReelWave install:

- "preferences": the UserPreferences document
- "movie-details": the {movie_id: MovieDetails} cache

Every record carries a schema version. A record that cannot be read, or was
written with another schema version, is discarded and loaded as empty state.
"""
from typing import Dict, Optional
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from reelwave.database import SessionLocal
from reelwave.models.persisted_record import PersistedRecord
from reelwave.schemas.movie import MovieDetails
from reelwave.schemas.preferences import UserPreferences
import logging

logger = logging.getLogger(__name__)

PREFERENCES_RECORD = "preferences"
MOVIE_DETAILS_RECORD = "movie-details"
SCHEMA_VERSION = 1


class StateRepository:
    """SQL-backed store for named, versioned JSON records."""

    def __init__(self, session_factory: sessionmaker = SessionLocal, schema_version: int = SCHEMA_VERSION):
        self._session_factory = session_factory
        self.schema_version = schema_version

    def _read_payload(self, name: str) -> Optional[object]:
        """
        Return the payload of a record, or None when it is absent,
        unreadable, or written with an incompatible schema version.
        """
        db: Session = self._session_factory()
        try:
            record = db.get(PersistedRecord, name)
            if record is None:
                return None
            if record.schema_version != self.schema_version:
                logger.warning(
                    f"Discarding persisted record '{name}': schema version "
                    f"{record.schema_version} != {self.schema_version}"
                )
                return None
            return record.payload
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Could not read persisted record '{name}': {str(e)}")
            return None
        finally:
            db.close()

    def _write_payload(self, name: str, payload: object) -> bool:
        db: Session = self._session_factory()
        try:
            record = db.get(PersistedRecord, name)
            if record is None:
                record = PersistedRecord(name=name)
                db.add(record)
            record.schema_version = self.schema_version
            record.payload = payload
            db.commit()
            logger.debug(f"Persisted record '{name}'")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Could not persist record '{name}': {str(e)}")
            return False
        finally:
            db.close()

    # ==================== PREFERENCES ====================

    def load_preferences(self) -> UserPreferences:
        payload = self._read_payload(PREFERENCES_RECORD)
        if payload is None:
            return UserPreferences()
        try:
            return UserPreferences.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Persisted preferences are corrupt, starting empty: {str(e)}")
            return UserPreferences()

    def save_preferences(self, preferences: UserPreferences) -> bool:
        return self._write_payload(PREFERENCES_RECORD, preferences.model_dump(mode="json"))

    # ==================== MOVIE DETAILS CACHE ====================

    def load_movie_details(self) -> Dict[int, MovieDetails]:
        payload = self._read_payload(MOVIE_DETAILS_RECORD)
        if payload is None:
            return {}
        try:
            return {
                int(movie_id): MovieDetails.model_validate(details)
                for movie_id, details in payload.items()
            }
        except (ValidationError, ValueError, AttributeError) as e:
            logger.warning(f"Persisted movie details cache is corrupt, starting empty: {str(e)}")
            return {}

    def save_movie_details(self, movie_details: Dict[int, MovieDetails]) -> bool:
        payload = {
            str(movie_id): details.model_dump(mode="json")
            for movie_id, details in movie_details.items()
        }
        return self._write_payload(MOVIE_DETAILS_RECORD, payload)

"""
Import all models to ensure they are registered with SQLAlchemy
"""
from reelwave.models.persisted_record import PersistedRecord

__all__ = [
    "PersistedRecord",
]

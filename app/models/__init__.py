# Import all models to ensure they are registered with SQLAlchemy
from . import note, user

__all__ = [
    "note",
    "user",
]

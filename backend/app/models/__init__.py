"""ORM models. Importing this package registers every table with Base.metadata."""

from app.models.mood_entry import MoodEntry, MoodLabel  # noqa: F401

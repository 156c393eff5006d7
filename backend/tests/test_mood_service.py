"""
Mood Tracker Backend — Mood Service Unit Tests
================================================

What:  Tests for MoodService business logic with a mocked session.
How:   The session's execute/flush are AsyncMocks, so no database is needed.
       End-to-end behaviour against SQLite lives in test_api_moods.py.
"""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.mood_entry import MoodEntry, MoodLabel
from app.schemas.mood import MoodEntryCreate, MoodEntryUpdate
from app.services.mood_service import MoodService


def _result_with(entry):
    result = MagicMock()
    result.scalar_one_or_none.return_value = entry
    return result


class TestMoodServiceCreate:
    """Tests for create_entry."""

    def setup_method(self):
        self.service = MoodService()

    @pytest.mark.asyncio
    async def test_create_entry_returns_response(self, mock_db_session):
        """The flushed entry should be returned as a MoodEntryResponse."""
        async def fake_flush():
            # Simulate the defaults the database flush would fill in
            entry = mock_db_session.add.call_args[0][0]
            entry.id = uuid4()
            entry.created_at = entry.updated_at = datetime.now(timezone.utc)

        mock_db_session.flush = AsyncMock(side_effect=fake_flush)
        payload = MoodEntryCreate(
            entry_date=date(2026, 10, 2), mood="Happy", intensity=7, notes="  Good day  ",
        )

        result = await self.service.create_entry(mock_db_session, payload)

        assert result.mood == MoodLabel.HAPPY
        assert result.intensity == 7
        assert result.notes == "Good day"
        assert result.entry_date == date(2026, 10, 2)
        stored = mock_db_session.add.call_args[0][0]
        assert isinstance(stored, MoodEntry)
        assert stored.mood == "happy"

    @pytest.mark.asyncio
    async def test_create_entry_wraps_driver_errors(self, mock_db_session):
        """SQLAlchemy failures should surface as DatabaseError."""
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        payload = MoodEntryCreate(mood="sad", intensity=3)

        with pytest.raises(DatabaseError):
            await self.service.create_entry(mock_db_session, payload)


class TestMoodServiceGet:
    """Tests for get_entry."""

    def setup_method(self):
        self.service = MoodService()

    @pytest.mark.asyncio
    async def test_get_entry_found(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = _result_with(sample_entry)

        result = await self.service.get_entry(mock_db_session, sample_entry.id)

        assert result.id == sample_entry.id
        assert result.mood == MoodLabel.CALM
        assert result.notes == "Long walk after work."

    @pytest.mark.asyncio
    async def test_get_entry_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_entry(mock_db_session, uuid4())
        assert exc_info.value.context["resource"] == "mood entry"


class TestMoodServiceUpdate:
    """Tests for update_entry."""

    def setup_method(self):
        self.service = MoodService()

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="at least one field"):
            await self.service.update_entry(mock_db_session, uuid4(), MoodEntryUpdate())
        mock_db_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_null_required_field_rejected(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_entry(
                mock_db_session, uuid4(), MoodEntryUpdate(intensity=None),
            )
        assert exc_info.value.field == "intensity"

    @pytest.mark.asyncio
    async def test_partial_update_changes_only_given_fields(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = _result_with(sample_entry)
        before = sample_entry.updated_at

        result = await self.service.update_entry(
            mock_db_session, sample_entry.id, MoodEntryUpdate(mood="ANXIOUS"),
        )

        assert result.mood == MoodLabel.ANXIOUS
        assert result.intensity == 4
        assert result.notes == "Long walk after work."
        assert sample_entry.mood == "anxious"
        assert sample_entry.updated_at >= before
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_notes_can_be_cleared(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = _result_with(sample_entry)

        result = await self.service.update_entry(
            mock_db_session, sample_entry.id, MoodEntryUpdate(notes=None),
        )

        assert result.notes is None

    @pytest.mark.asyncio
    async def test_update_missing_entry(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.update_entry(mock_db_session, uuid4(), MoodEntryUpdate(intensity=2))


class TestMoodServiceDelete:
    """Tests for delete_entry."""

    def setup_method(self):
        self.service = MoodService()

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_db_session, sample_entry):
        mock_db_session.execute.return_value = _result_with(sample_entry)

        await self.service.delete_entry(mock_db_session, sample_entry.id)

        mock_db_session.delete.assert_awaited_once_with(sample_entry)

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_entry(mock_db_session, uuid4())
        mock_db_session.delete.assert_not_called()


class TestMoodServiceList:
    """Tests for list_entries."""

    def setup_method(self):
        self.service = MoodService()

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_db_session):
        rows = MagicMock()
        rows.scalars.return_value.all.return_value = []
        count = MagicMock()
        count.scalar.return_value = 0
        mock_db_session.execute = AsyncMock(side_effect=[rows, count])

        entries, total = await self.service.list_entries(mock_db_session)

        assert entries == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_list_returns_entries_and_total(self, mock_db_session, sample_entry):
        rows = MagicMock()
        rows.scalars.return_value.all.return_value = [sample_entry]
        count = MagicMock()
        count.scalar.return_value = 12
        mock_db_session.execute = AsyncMock(side_effect=[rows, count])

        entries, total = await self.service.list_entries(mock_db_session, limit=1)

        assert [e.id for e in entries] == [sample_entry.id]
        assert total == 12

    @pytest.mark.asyncio
    async def test_inverted_date_range_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="from_date"):
            await self.service.list_entries(
                mock_db_session, from_date=date(2026, 10, 5), to_date=date(2026, 10, 1),
            )
        mock_db_session.execute.assert_not_called()


class TestMoodServiceStats:
    """Tests for get_stats."""

    def setup_method(self):
        self.service = MoodService()

    def _mock_stats(self, mock_db_session, summary_row, count_rows):
        summary = MagicMock()
        summary.one.return_value = summary_row
        counts = MagicMock()
        counts.all.return_value = count_rows
        mock_db_session.execute = AsyncMock(side_effect=[summary, counts])

    @pytest.mark.asyncio
    async def test_stats_empty(self, mock_db_session):
        self._mock_stats(mock_db_session, (0, None, None, None), [])

        stats = await self.service.get_stats(mock_db_session)

        assert stats.total_entries == 0
        assert stats.average_intensity is None
        assert stats.mood_counts == {}
        assert stats.most_common_mood is None

    @pytest.mark.asyncio
    async def test_stats_tie_breaks_alphabetically(self, mock_db_session):
        self._mock_stats(
            mock_db_session,
            (5, 5.333333, date(2026, 10, 1), date(2026, 10, 4)),
            [("sad", 2), ("calm", 2), ("happy", 1)],
        )

        stats = await self.service.get_stats(mock_db_session)

        assert stats.total_entries == 5
        assert stats.average_intensity == 5.33
        assert stats.mood_counts == {"sad": 2, "calm": 2, "happy": 1}
        assert stats.most_common_mood == MoodLabel.CALM
        assert stats.first_entry_date == date(2026, 10, 1)
        assert stats.last_entry_date == date(2026, 10, 4)

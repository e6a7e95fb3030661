"""
Unit tests for the Google Sheets writer
"""
import pytest
from unittest.mock import Mock, patch
from googleapiclient.errors import HttpError
from idea_canvas.errors import NotInitializedError, SheetWriteError
from idea_canvas.models import IdeaSubmission, LeanCanvas
from idea_canvas.services.sheets_service import (
    SheetsService,
    build_sheets_client,
    generate_idea_id,
    utc_timestamp,
)


TIMESTAMP = "2025-01-01T10:00:00.000Z"


def make_sheets_client(fail_ranges=()):
    """Create a mock Sheets client whose appends fail for the given ranges"""
    client = Mock()
    append = client.spreadsheets.return_value.values.return_value.append

    def append_side_effect(**kwargs):
        request = Mock()
        if kwargs["range"] in fail_ranges:
            request.execute.side_effect = HttpError(Mock(status=503, reason="Unavailable"), b"backend error")
        else:
            request.execute.return_value = {"updates": {"updatedRows": 1}}
        return request

    append.side_effect = append_side_effect
    return client, append


class TestSheetsService:
    """Test spreadsheet append behaviour"""

    @pytest.fixture
    def submission(self):
        return IdeaSubmission(title="Smart Parking Assistant", description="d" * 620)

    @pytest.fixture
    def canvas(self):
        return LeanCanvas(problem="P", solution="S", key_metrics="K")

    def make_service(self, client):
        return SheetsService(client, "sheet-123", id_factory=lambda: "abcd1234", clock=lambda: TIMESTAMP)

    @pytest.mark.asyncio
    async def test_append_writes_both_rows(self, submission, canvas):
        """Test Ideas then LeanCanvas rows are appended with the same id"""
        client, append = make_sheets_client()
        service = self.make_service(client)

        idea_id = await service.append(submission, canvas)

        assert idea_id == "abcd1234"
        assert append.call_count == 2

        ideas_call, canvas_call = append.call_args_list
        assert ideas_call.kwargs["spreadsheetId"] == "sheet-123"
        assert ideas_call.kwargs["range"] == "Ideas!A:E"
        assert ideas_call.kwargs["valueInputOption"] == "USER_ENTERED"
        assert ideas_call.kwargs["body"] == {"values": [[
            "abcd1234", "Smart Parking Assistant", TIMESTAMP, "processed", "d" * 500
        ]]}

        assert canvas_call.kwargs["range"] == "LeanCanvas!A:I"
        assert canvas_call.kwargs["body"] == {"values": [[
            "abcd1234", "P", "", "", "S", "", "", "", "K"
        ]]}

    @pytest.mark.asyncio
    async def test_append_short_description_kept_whole(self, canvas):
        """Test notes hold the full description when it fits"""
        client, append = make_sheets_client()
        service = self.make_service(client)

        await service.append(IdeaSubmission(title="T", description="Short"), canvas)

        ideas_row = append.call_args_list[0].kwargs["body"]["values"][0]
        assert ideas_row[4] == "Short"

    @pytest.mark.asyncio
    async def test_append_not_initialized(self, submission, canvas):
        """Test that a missing client raises NotInitializedError"""
        service = SheetsService(None, "sheet-123")

        assert service.is_initialized is False
        with pytest.raises(NotInitializedError, match="Google Sheets client not initialized"):
            await service.append(submission, canvas)

    @pytest.mark.asyncio
    async def test_append_ideas_failure(self, submission, canvas):
        """Test failure of the first append skips the second"""
        client, append = make_sheets_client(fail_ranges=("Ideas!A:E",))
        service = self.make_service(client)

        with pytest.raises(SheetWriteError) as exc_info:
            await service.append(submission, canvas)

        assert exc_info.value.phase == "Ideas"
        assert exc_info.value.idea_id == "abcd1234"
        assert append.call_count == 1

    @pytest.mark.asyncio
    async def test_append_lean_canvas_failure_leaves_ideas_row(self, submission, canvas):
        """Test partial write is reported and not rolled back"""
        client, append = make_sheets_client(fail_ranges=("LeanCanvas!A:I",))
        service = self.make_service(client)

        with pytest.raises(SheetWriteError) as exc_info:
            await service.append(submission, canvas)

        assert exc_info.value.phase == "LeanCanvas"
        assert "Unavailable" in str(exc_info.value)
        assert append.call_count == 2
        # Only append was used, no clear or delete of the Ideas row
        values = client.spreadsheets.return_value.values.return_value
        values.clear.assert_not_called()
        client.spreadsheets.return_value.batchUpdate.assert_not_called()

    @pytest.mark.asyncio
    async def test_append_rows_outcome_partial(self, submission, canvas):
        """Test the two-phase outcome for a failed LeanCanvas append"""
        client, _ = make_sheets_client(fail_ranges=("LeanCanvas!A:I",))
        service = self.make_service(client)

        outcome = await service.append_rows(submission, canvas)

        assert outcome.idea_id == "abcd1234"
        assert outcome.ideas_appended is True
        assert outcome.lean_canvas_appended is False
        assert outcome.partial is True
        assert outcome.succeeded is False
        assert outcome.failed_phase == "LeanCanvas"
        assert isinstance(outcome.error, HttpError)

    @pytest.mark.asyncio
    async def test_append_rows_outcome_success(self, submission, canvas):
        """Test the two-phase outcome for a full write"""
        client, _ = make_sheets_client()
        service = self.make_service(client)

        outcome = await service.append_rows(submission, canvas)

        assert outcome.succeeded is True
        assert outcome.partial is False
        assert outcome.failed_phase is None
        assert outcome.error is None


class TestSheetsHelpers:
    """Test identifier, timestamp and client helpers"""

    def test_generate_idea_id(self):
        """Test identifiers are 8 characters and vary"""
        ids = {generate_idea_id() for _ in range(50)}

        assert all(len(idea_id) == 8 for idea_id in ids)
        assert len(ids) > 1

    def test_utc_timestamp_format(self):
        """Test ISO-8601 UTC timestamp with Z suffix"""
        timestamp = utc_timestamp()

        assert timestamp.endswith("Z")
        assert "T" in timestamp
        assert len(timestamp) == len(TIMESTAMP)

    def test_build_sheets_client_without_path(self):
        """Test missing credentials path raises NotInitializedError"""
        with pytest.raises(NotInitializedError, match="GOOGLE_APPLICATION_CREDENTIALS not set"):
            build_sheets_client(None)

    def test_build_sheets_client(self):
        """Test client is built from the service account file"""
        with patch('idea_canvas.services.sheets_service.service_account.Credentials') as mock_credentials:
            with patch('idea_canvas.services.sheets_service.build') as mock_build:
                client = build_sheets_client("/secrets/key.json")

        mock_credentials.from_service_account_file.assert_called_once_with(
            "/secrets/key.json", scopes=["https://www.googleapis.com/auth/spreadsheets"]
        )
        mock_build.assert_called_once_with(
            "sheets", "v4",
            credentials=mock_credentials.from_service_account_file.return_value,
            cache_discovery=False
        )
        assert client == mock_build.return_value

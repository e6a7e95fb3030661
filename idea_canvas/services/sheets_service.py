"""
Google Sheets writer for the Ideas and LeanCanvas tabs
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional
from uuid import uuid4

from google.oauth2 import service_account
from googleapiclient.discovery import build

from idea_canvas.errors import NotInitializedError, SheetWriteError
from idea_canvas.logging_config import logger
from idea_canvas.models import IdeaSubmission, LeanCanvas


SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

IDEAS_RANGE = "Ideas!A:E"
LEAN_CANVAS_RANGE = "LeanCanvas!A:I"

IDEAS_PHASE = "Ideas"
LEAN_CANVAS_PHASE = "LeanCanvas"

IDEA_STATUS = "processed"
IDEA_ID_LENGTH = 8


def generate_idea_id() -> str:
    """Short random identifier joining an idea's two rows"""
    return str(uuid4())[:IDEA_ID_LENGTH]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-01T10:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_sheets_client(credentials_path: Optional[str]) -> Any:
    """
    Build an authenticated Sheets v4 client from a service account key file

    Args:
        credentials_path: Path to the service account JSON key

    Returns:
        googleapiclient Resource for the Sheets API

    Raises:
        NotInitializedError: If no credentials path is configured
    """
    if not credentials_path:
        raise NotInitializedError("GOOGLE_APPLICATION_CREDENTIALS not set")

    credentials = service_account.Credentials.from_service_account_file(
        credentials_path, scopes=SHEETS_SCOPES
    )
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


@dataclass
class AppendOutcome:
    """Result of the two sequential appends for one idea"""

    idea_id: str
    ideas_appended: bool = False
    lean_canvas_appended: bool = False
    failed_phase: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.ideas_appended and self.lean_canvas_appended

    @property
    def partial(self) -> bool:
        """Ideas row written without its LeanCanvas row"""
        return self.ideas_appended and not self.lean_canvas_appended


class SheetsService:
    """Appends processed ideas to the Ideas and LeanCanvas tabs"""

    def __init__(
        self,
        client: Any,
        spreadsheet_id: Optional[str],
        id_factory: Callable[[], str] = generate_idea_id,
        clock: Callable[[], str] = utc_timestamp,
    ):
        """
        Initialize the writer

        Args:
            client: Authenticated Sheets client, or None when credentials are missing
            spreadsheet_id: Target spreadsheet
            id_factory: Produces idea identifiers
            clock: Produces the created_at timestamp
        """
        self.client = client
        self.spreadsheet_id = spreadsheet_id
        self.id_factory = id_factory
        self.clock = clock

    @property
    def is_initialized(self) -> bool:
        return self.client is not None

    def build_idea_row(self, idea_id: str, submission: IdeaSubmission) -> List[str]:
        return [idea_id, submission.title, self.clock(), IDEA_STATUS, submission.notes]

    def build_lean_canvas_row(self, idea_id: str, canvas: LeanCanvas) -> List[str]:
        return [idea_id] + canvas.to_row()

    async def append(self, submission: IdeaSubmission, canvas: LeanCanvas) -> str:
        """
        Append one Ideas row and one LeanCanvas row

        Returns:
            The idea identifier written to both rows

        Raises:
            NotInitializedError: If the Sheets client was never built
            SheetWriteError: If either append failed. A failure on the
                LeanCanvas phase leaves the Ideas row in place.
        """
        outcome = await self.append_rows(submission, canvas)
        if not outcome.succeeded:
            raise SheetWriteError(
                str(outcome.error), phase=outcome.failed_phase, idea_id=outcome.idea_id
            ) from outcome.error

        logger.info(f"Idea {outcome.idea_id} written to Google Sheets", extra={'idea_id': outcome.idea_id})
        return outcome.idea_id

    async def append_rows(self, submission: IdeaSubmission, canvas: LeanCanvas) -> AppendOutcome:
        """
        Run both appends in order and report how far they got

        Raises:
            NotInitializedError: If the Sheets client was never built
        """
        if not self.is_initialized:
            raise NotInitializedError("Google Sheets client not initialized")

        outcome = AppendOutcome(idea_id=self.id_factory())

        try:
            await self._append_row(IDEAS_RANGE, self.build_idea_row(outcome.idea_id, submission))
            outcome.ideas_appended = True
        except Exception as e:
            logger.error(f"Error writing Ideas row for {outcome.idea_id}: {str(e)}")
            outcome.failed_phase = IDEAS_PHASE
            outcome.error = e
            return outcome

        try:
            await self._append_row(LEAN_CANVAS_RANGE, self.build_lean_canvas_row(outcome.idea_id, canvas))
            outcome.lean_canvas_appended = True
        except Exception as e:
            logger.error(
                f"Error writing LeanCanvas row for {outcome.idea_id}, "
                f"Ideas row left without a canvas: {str(e)}"
            )
            outcome.failed_phase = LEAN_CANVAS_PHASE
            outcome.error = e

        return outcome

    async def _append_row(self, range_name: str, row: List[str]) -> Any:
        request = self.client.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=range_name,
            valueInputOption="USER_ENTERED",
            body={"values": [row]},
        )
        # googleapiclient is blocking
        return await asyncio.to_thread(request.execute)

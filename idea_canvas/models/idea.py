from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from idea_canvas.errors import ValidationError


REQUIRED_FIELDS_MESSAGE = "ideaTitle and ideaDescription are required"

NOTES_MAX_LENGTH = 500

# Only the wire names are accepted from clients
WIRE_FIELDS = {"ideaTitle", "ideaDescription"}


class IdeaSubmission(BaseModel):
    """Idea posted through the web form"""

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    title: str = Field(alias="ideaTitle", min_length=1)
    description: str = Field(alias="ideaDescription", min_length=1)

    @classmethod
    def from_payload(cls, payload: Any) -> "IdeaSubmission":
        """
        Build a submission from a decoded request body

        Raises:
            ValidationError: If the body is not an object or a field is missing or empty
        """
        if not isinstance(payload, dict) or not WIRE_FIELDS <= payload.keys():
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE) from e

    @property
    def notes(self) -> str:
        """Description as stored in the Ideas tab"""
        return self.description[:NOTES_MAX_LENGTH]

    def to_wire(self) -> dict:
        return {"ideaTitle": self.title, "ideaDescription": self.description}

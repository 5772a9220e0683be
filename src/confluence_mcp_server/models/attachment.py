"""Confluence Attachment Data Model

Pydantic models for Confluence attachments (files attached to content)
"""

from typing import List
from pydantic import BaseModel, Field


class AttachmentMetadata(BaseModel):
    """Service-assigned attachment metadata."""

    comment: str = Field(default="", description="Upload comment")
    mediaType: str = Field(default="", description="MIME type of file")

    class Config:
        frozen = True


class AttachmentVersion(BaseModel):
    """Attachment version, bumped by every successful update."""

    number: int = Field(default=0, description="Version number")

    class Config:
        frozen = True


class Attachment(BaseModel):
    """Confluence attachment (file attached to a page or blog post).

    Read-only snapshot of the service state at the time of the request.
    """

    id: str = Field(description="Attachment ID with type prefix (e.g. att123456)")
    type: str = Field(default="", description="Content type, normally 'attachment'")
    status: str = Field(default="", description="Content status (e.g. current)")
    title: str = Field(description="File name as stored on Confluence")
    metadata: AttachmentMetadata = Field(default_factory=AttachmentMetadata)
    version: AttachmentVersion = Field(default_factory=AttachmentVersion)

    @property
    def media_type(self) -> str:
        return self.metadata.mediaType

    @property
    def comment(self) -> str:
        return self.metadata.comment

    @property
    def version_number(self) -> int:
        return self.version.number

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "att123456",
                "type": "attachment",
                "status": "current",
                "title": "architecture-diagram.png",
                "metadata": {"comment": "", "mediaType": "image/png"},
                "version": {"number": 3}
            }
        }


class AttachmentList(BaseModel):
    """Envelope returned by the child/attachment collection endpoint.

    `size` is informational; the length of `results` is authoritative.
    """

    results: List[Attachment] = Field(description="Attachments in service order")
    size: int = Field(default=0, description="Reported result count")

    class Config:
        frozen = True

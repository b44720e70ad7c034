"""Media API schemas: standalone upload/delete and the reports shared by record writes."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.application.dtos.media import CleanupReport, FileFailure


class MediaUploadResponse(BaseModel):
    """Response for POST /media."""

    message: str = "Image uploaded"
    url: str
    identifier: str


class MediaDeleteRequest(BaseModel):
    """Request body for DELETE /media. public_id is accepted as an alias."""

    identifier: str | None = Field(
        default=None,
        validation_alias=AliasChoices("identifier", "public_id"),
        max_length=512,
    )


class MediaDeleteResponse(BaseModel):
    message: str = "Image deleted"
    identifier: str


class FileFailureItem(BaseModel):
    """A submitted file that was dropped from the photo set."""

    model_config = ConfigDict(from_attributes=True)

    index: int
    filename: str
    stage: str
    reason: str


class CleanupFailureItem(BaseModel):
    """A replaced or deleted photo the store could not remove (left as orphan)."""

    model_config = ConfigDict(from_attributes=True)

    locator: str
    identifier: str | None = None
    reason: str


class CleanupSummary(BaseModel):
    deleted: list[str] = Field(default_factory=list)
    failures: list[CleanupFailureItem] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: CleanupReport) -> "CleanupSummary":
        return cls(
            deleted=list(report.deleted),
            failures=[CleanupFailureItem.model_validate(f) for f in report.failures],
        )


def failed_file_items(failures: list[FileFailure]) -> list[FileFailureItem]:
    return [
        FileFailureItem(
            index=f.index, filename=f.filename, stage=f.stage.value, reason=f.reason
        )
        for f in failures
    ]

"""Pydantic schemas for update-check endpoints."""

from typing import Literal

from slatestack.infrastructure.api.schemas.common_schemas import CamelModel
from slatestack.infrastructure.services.update_service import ReleaseNote, UpdateCheckResult


class UpdateCheckResponse(CamelModel):
    current_version: str
    latest_version: str
    update_available: bool
    version_diff: Literal["major", "minor", "patch"] | None
    release_url: str
    published_at: str

    @classmethod
    def from_result(cls, result: UpdateCheckResult) -> "UpdateCheckResponse":
        return cls(
            current_version=result.current_version,
            latest_version=result.latest_version,
            update_available=result.update_available,
            version_diff=result.version_diff,
            release_url=result.release_url,
            published_at=result.published_at,
        )


class ReleaseNoteResponse(CamelModel):
    version: str
    name: str
    body: str
    published_at: str
    url: str


class ChangelogResponse(CamelModel):
    releases: list[ReleaseNoteResponse]

    @classmethod
    def from_notes(cls, notes: list[ReleaseNote]) -> "ChangelogResponse":
        return cls(
            releases=[
                ReleaseNoteResponse(
                    version=n.version,
                    name=n.name,
                    body=n.body,
                    published_at=n.published_at,
                    url=n.url,
                )
                for n in notes
            ]
        )

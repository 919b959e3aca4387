from datetime import datetime, timezone
from typing import Callable, Optional

from shipwright.core.models import BatchMetadata

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2026-10-19T08:30:00.123Z"""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class MetadataService:
    """Stamps output batches with version and provenance information."""

    def __init__(self, game_version: str, schema_format_version: str, clock: Optional[Clock] = None):
        self.game_version = game_version
        self.schema_format_version = schema_format_version
        self.clock = clock or _utc_now

    @property
    def schema_version(self) -> str:
        return f"{self.schema_format_version}-{self.game_version}"

    def create_metadata(self, species: str, item_count: int) -> BatchMetadata:
        return BatchMetadata(
            version=self.game_version,
            schema_version=self.schema_version,
            species=species,
            generated_at=iso_timestamp(self.clock()),
            item_count=item_count,
        )

# piloo/schemas/recording.py
from pydantic import Field
from typing import Literal, Optional
from piloo.schemas.base import ApiModel, PatchModel, UtcDateTime

Quality = Literal["480p", "720p", "1080p"]


class RecordingCreate(ApiModel):
    camera_id: int
    filename: str = Field(min_length=1)
    file_path: str = Field(min_length=1)
    start_time: UtcDateTime
    end_time: UtcDateTime
    duration: int = Field(ge=0)       # seconds
    file_size: int = Field(ge=0)      # bytes
    quality: Quality = "720p"
    has_motion: Optional[bool] = False
    has_audio: Optional[bool] = True
    thumbnail_path: Optional[str] = None


class RecordingUpdate(PatchModel):
    required_fields = ("camera_id", "filename", "file_path", "start_time",
                       "end_time", "duration", "file_size", "quality")

    camera_id: Optional[int] = None
    filename: Optional[str] = None
    file_path: Optional[str] = None
    start_time: Optional[UtcDateTime] = None
    end_time: Optional[UtcDateTime] = None
    duration: Optional[int] = Field(default=None, ge=0)
    file_size: Optional[int] = Field(default=None, ge=0)
    quality: Optional[Quality] = None
    has_motion: Optional[bool] = None
    has_audio: Optional[bool] = None
    thumbnail_path: Optional[str] = None


class RecordingOut(ApiModel):
    id: int
    camera_id: int
    filename: str
    file_path: str
    start_time: UtcDateTime
    end_time: UtcDateTime
    duration: int
    file_size: int
    quality: str
    has_motion: Optional[bool]
    has_audio: Optional[bool]
    thumbnail_path: Optional[str]
    created_at: Optional[UtcDateTime]


class RecordingFilter(ApiModel):
    """Composite footage filter; unset fields match everything."""
    camera_id: Optional[int] = None
    start: Optional[UtcDateTime] = None
    end: Optional[UtcDateTime] = None
    quality: Optional[Quality] = None
    has_motion: Optional[bool] = None

    def matches(self, recording: RecordingOut) -> bool:
        if self.camera_id is not None and recording.camera_id != self.camera_id:
            return False
        if self.start is not None and recording.start_time < self.start:
            return False
        if self.end is not None and recording.start_time > self.end:
            return False
        if self.quality is not None and recording.quality != self.quality:
            return False
        if self.has_motion is not None and bool(recording.has_motion) != self.has_motion:
            return False
        return True

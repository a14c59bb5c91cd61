"""Cue point model."""

from typing import ClassVar, List, Optional, Tuple

from catalog_objects.enums import CuePointType
from catalog_objects.mapper import BOOLEAN, INTEGER, STRING, CatalogRecord, EnumCodec, WireField


class CuePoint(CatalogRecord):
    """
    A marker set at a precise time point in the duration of a video.

    Cue points trigger mid-roll ads (AD), separate chapters (CHAPTER) or
    carry a metadata string (CODE). ``name`` and ``time`` are required by
    the Media API for writes but are not enforced here.

    Attributes:
        id: Server-assigned id.
        name: Name to refer to the cue point by.
        video_id: Comma-separated ids of the videos the cue point applies to.
        time: Milliseconds from the beginning of the video.
        force_stop: Stop playback at the cue point. Only valid for AD cue points.
        type: Cue point type.
        metadata: Free text for CODE cue points, at most 512 characters.
    """

    xml_tag: ClassVar[str] = "cuePoint"

    id: Optional[int] = None
    name: Optional[str] = None
    video_id: Optional[str] = None
    time: Optional[int] = None
    force_stop: Optional[bool] = None
    type: Optional[CuePointType] = None
    metadata: Optional[str] = None

    # The read API reports ``type`` as an integer code; only names are kept.
    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("id", "id", INTEGER),
        WireField("name", "name", STRING),
        WireField("video_id", "videoId", STRING),
        WireField("time", "time", INTEGER),
        WireField("force_stop", "forceStop", BOOLEAN),
        WireField("type", "type", EnumCodec(CuePointType), aliases=("typeEnum",)),
        WireField("metadata", "metadata", STRING),
    )

    @property
    def video_ids(self) -> List[str]:
        if not self.video_id:
            return []
        return [part.strip() for part in self.video_id.split(",") if part.strip()]

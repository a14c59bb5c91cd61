"""Rendition model: one encoded variant of a video."""

from typing import ClassVar, Optional, Tuple

from catalog_objects.enums import ControllerType, VideoCodec, VideoContainer
from catalog_objects.mapper import BOOLEAN, INTEGER, STRING, CatalogRecord, EnumCodec, WireField


class Rendition(CatalogRecord):
    """A single encoding of a video (bitrate, size, codec, delivery URL)."""

    xml_tag: ClassVar[str] = "rendition"

    id: Optional[int] = None
    reference_id: Optional[str] = None
    display_name: Optional[str] = None
    url: Optional[str] = None
    remote_url: Optional[str] = None
    remote_stream_name: Optional[str] = None
    encoding_rate: Optional[int] = None   # bits per second
    frame_width: Optional[int] = None
    frame_height: Optional[int] = None
    size: Optional[int] = None            # bytes
    video_duration: Optional[int] = None  # milliseconds
    upload_timestamp_millis: Optional[int] = None
    audio_only: Optional[bool] = None
    video_codec: Optional[VideoCodec] = None
    video_container: Optional[VideoContainer] = None
    controller_type: Optional[ControllerType] = None

    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("id", "id", INTEGER),
        WireField("reference_id", "referenceId", STRING),
        WireField("display_name", "displayName", STRING),
        WireField("url", "url", STRING),
        WireField("remote_url", "remoteUrl", STRING),
        WireField("remote_stream_name", "remoteStreamName", STRING),
        WireField("encoding_rate", "encodingRate", INTEGER),
        WireField("frame_width", "frameWidth", INTEGER),
        WireField("frame_height", "frameHeight", INTEGER),
        WireField("size", "size", INTEGER),
        WireField("video_duration", "videoDuration", INTEGER),
        WireField("upload_timestamp_millis", "uploadTimestampMillis", INTEGER),
        WireField("audio_only", "audioOnly", BOOLEAN),
        WireField("video_codec", "videoCodec", EnumCodec(VideoCodec)),
        WireField("video_container", "videoContainer", EnumCodec(VideoContainer)),
        WireField("controller_type", "controllerType", EnumCodec(ControllerType)),
    )

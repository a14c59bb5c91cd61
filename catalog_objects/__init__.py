"""Media API catalog objects with JSON and XML codecs."""

from catalog_objects.enums import (
    ControllerType,
    CuePointType,
    Economics,
    GeoFilterCode,
    ItemState,
    VideoCodec,
    VideoContainer,
)
from catalog_objects.errors import (
    CatalogObjectError,
    InvalidArgumentError,
    InvalidEnumValueError,
    MalformedInputError,
    TypeMismatchError,
    UnknownFieldError,
)
from catalog_objects.mapper import CatalogRecord, WireField
from catalog_objects.models import CuePoint, CustomField, Rendition, Video

__all__ = [
    "CatalogObjectError",
    "CatalogRecord",
    "ControllerType",
    "CuePoint",
    "CuePointType",
    "CustomField",
    "Economics",
    "GeoFilterCode",
    "InvalidArgumentError",
    "InvalidEnumValueError",
    "ItemState",
    "MalformedInputError",
    "Rendition",
    "TypeMismatchError",
    "UnknownFieldError",
    "Video",
    "VideoCodec",
    "VideoContainer",
    "WireField",
]

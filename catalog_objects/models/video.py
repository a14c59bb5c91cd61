"""Video model for Media API video objects."""

from datetime import datetime, timezone
from typing import ClassVar, FrozenSet, List, Optional, Tuple

from pydantic import field_validator

from catalog_objects.config import settings
from catalog_objects.enums import Economics, GeoFilterCode, ItemState
from catalog_objects.mapper import (
    BOOLEAN,
    DATE_MILLIS,
    INTEGER,
    STRING,
    CatalogRecord,
    EnumCodec,
    EnumListCodec,
    NamedValueMapCodec,
    RecordCodec,
    RecordListCodec,
    StringListCodec,
    WireField,
)
from catalog_objects.models.cue_point import CuePoint
from catalog_objects.models.custom_field import CustomField
from catalog_objects.models.rendition import Rendition


DATE_FIELDS = frozenset({
    "creation_date",
    "published_date",
    "last_modified_date",
    "release_date",
    "start_date",
    "end_date",
})


class Video(CatalogRecord):
    """
    Aggregate metadata for one media asset.

    ``name`` is required to create a video; ``id``, ``account_id``, the
    still/thumbnail URLs and the play counts are assigned by the server.
    Dates are milliseconds since the epoch. The Media API caps ``tags`` at
    1200 entries and ``renditions`` at 10; neither limit is enforced here.

    The video owns its nested records: assigning a list of cue points,
    renditions or custom fields stores copies of them.
    """

    xml_tag: ClassVar[str] = "video"

    name: Optional[str] = None
    id: Optional[int] = None
    reference_id: Optional[str] = None
    account_id: Optional[int] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    flv_url: Optional[str] = None
    creation_date: Optional[int] = None
    published_date: Optional[int] = None
    last_modified_date: Optional[int] = None
    release_date: Optional[int] = None
    start_date: Optional[int] = None
    end_date: Optional[int] = None
    link_url: Optional[str] = None
    link_text: Optional[str] = None
    video_still_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    length: Optional[int] = None
    geo_filtered: Optional[bool] = None
    geo_filtered_exclude: Optional[bool] = None
    plays_total: Optional[int] = None
    plays_trailing_week: Optional[int] = None
    renditions: Optional[List[Rendition]] = None
    video_full_length: Optional[Rendition] = None
    item_state: Optional[ItemState] = None
    tags: Optional[List[str]] = None
    economics: Optional[Economics] = None
    geo_filtered_countries: Optional[List[GeoFilterCode]] = None
    cue_points: Optional[List[CuePoint]] = None
    custom_fields: Optional[List[CustomField]] = None

    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("name", "name", STRING),
        WireField("id", "id", INTEGER),
        WireField("reference_id", "referenceId", STRING),
        WireField("account_id", "accountId", INTEGER),
        WireField("short_description", "shortDescription", STRING),
        WireField("long_description", "longDescription", STRING),
        WireField("flv_url", "FLVURL", STRING, label="flvUrl"),
        WireField("creation_date", "creationDate", DATE_MILLIS),
        WireField("published_date", "publishedDate", DATE_MILLIS),
        WireField("last_modified_date", "lastModifiedDate", DATE_MILLIS),
        WireField("release_date", "releaseDate", DATE_MILLIS),
        WireField("start_date", "startDate", DATE_MILLIS),
        WireField("end_date", "endDate", DATE_MILLIS),
        WireField("link_url", "linkURL", STRING, label="linkUrl"),
        WireField("link_text", "linkText", STRING),
        WireField("video_still_url", "videoStillURL", STRING, label="videoStillUrl"),
        WireField("thumbnail_url", "thumbnailURL", STRING, label="thumbnailUrl"),
        WireField("length", "length", INTEGER),
        # "geoFiltered" was renamed "geoRestricted" on the wire
        WireField("geo_filtered", "geoRestricted", BOOLEAN, aliases=("geoFiltered",), label="geoFiltered"),
        WireField(
            "geo_filtered_exclude",
            "geoFilterExclude",
            BOOLEAN,
            aliases=("excludeListedCountries",),
            label="geoFilteredExclude",
        ),
        WireField("plays_total", "playsTotal", INTEGER),
        WireField("plays_trailing_week", "playsTrailingWeek", INTEGER),
        WireField("renditions", "renditions", RecordListCodec(Rendition)),
        WireField("video_full_length", "videoFullLength", RecordCodec(Rendition), aliases=("FLVFullLength",)),
        WireField("item_state", "itemState", EnumCodec(ItemState, closed=True)),
        WireField("tags", "tags", StringListCodec("tag")),
        WireField("economics", "economics", EnumCodec(Economics)),
        WireField(
            "geo_filtered_countries",
            "geoFilteredCountries",
            EnumListCodec(GeoFilterCode, "country"),
            aliases=("allowedCountries",),
        ),
        WireField("cue_points", "cuePoints", RecordListCodec(CuePoint)),
        WireField("custom_fields", "customFields", NamedValueMapCodec(CustomField)),
    )

    ignored_json_keys: ClassVar[FrozenSet[str]] = frozenset({"version"})

    @classmethod
    def json_field_for(cls, key: str) -> Optional[WireField]:
        if key == "releaseDate" and settings.CATALOG_RELEASE_DATE_COMPAT:
            return cls.json_table["lastModifiedDate"]
        return super().json_field_for(key)

    @field_validator("renditions", "cue_points", "custom_fields", mode="after")
    @classmethod
    def _copy_owned_records(cls, value):
        if value is None:
            return value
        return [item.model_copy(deep=True) for item in value]

    @field_validator("video_full_length", mode="after")
    @classmethod
    def _copy_full_length(cls, value):
        if value is None:
            return value
        return value.model_copy(deep=True)

    @field_validator("custom_fields", mode="after")
    @classmethod
    def _unique_custom_field_names(cls, value):
        if value is None:
            return value
        seen = set()
        for item in value:
            if item.name is None:
                continue
            if item.name in seen:
                raise ValueError(f"duplicate custom field name '{item.name}'")
            seen.add(item.name)
        return value

    def custom_field(self, name: str) -> Optional[str]:
        """Value of the custom field called ``name``, if present."""
        for item in self.custom_fields or []:
            if item.name == name:
                return item.value
        return None

    def as_datetime(self, field: str) -> Optional[datetime]:
        """Return one of the date fields as an aware UTC datetime."""
        if field not in DATE_FIELDS:
            raise ValueError(f"'{field}' is not a date field")
        millis = getattr(self, field)
        if millis is None:
            return None
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)

    def set_datetime(self, field: str, value: Optional[datetime]) -> None:
        """Store ``value`` in one of the date fields as epoch milliseconds."""
        if field not in DATE_FIELDS:
            raise ValueError(f"'{field}' is not a date field")
        if value is None:
            setattr(self, field, None)
            return
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        setattr(self, field, round(value.timestamp() * 1000))

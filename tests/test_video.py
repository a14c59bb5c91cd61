from datetime import datetime, timezone
from xml.etree import ElementTree as ET

import pytest
from pydantic import ValidationError

from catalog_objects import (
    ControllerType,
    CuePoint,
    CuePointType,
    CustomField,
    Economics,
    GeoFilterCode,
    InvalidEnumValueError,
    ItemState,
    Rendition,
    TypeMismatchError,
    UnknownFieldError,
    Video,
    VideoCodec,
    VideoContainer,
)


@pytest.fixture
def full_video():
    """Video built purely from setters, without the releaseDate quirk."""
    return Video(
        name="Sea Turtles",
        id=1964520391001,
        reference_id="turtles-001",
        account_id=57838016001,
        short_description="Turtles at the reef",
        long_description="A longer look at sea turtles.",
        flv_url="http://cdn.example.com/turtles.mp4",
        creation_date=1334246940000,
        published_date=1334246940000,
        last_modified_date=1334248567000,
        start_date=1334300000000,
        end_date=1399999999000,
        link_url="http://example.com/turtles",
        link_text="More turtles",
        video_still_url="http://cdn.example.com/still.jpg",
        thumbnail_url="http://cdn.example.com/thumb.jpg",
        length=31500,
        geo_filtered=True,
        geo_filtered_exclude=False,
        plays_total=42,
        plays_trailing_week=7,
        renditions=[
            Rendition(id=2, url="http://cdn.example.com/t_600.mp4", encoding_rate=600000),
            Rendition(id=3, url="http://cdn.example.com/t_1200.mp4", encoding_rate=1200000,
                      video_codec=VideoCodec.H264),
        ],
        video_full_length=Rendition(id=4, size=4700000, video_container=VideoContainer.MP4),
        item_state=ItemState.ACTIVE,
        tags=["ocean", "turtles", "reef"],
        economics=Economics.FREE,
        geo_filtered_countries=[GeoFilterCode.US, GeoFilterCode.CA],
        cue_points=[
            CuePoint(name="preroll", time=0, type=CuePointType.AD, force_stop=True),
            CuePoint(name="chapter 1", time=12000, type=CuePointType.CHAPTER),
        ],
        custom_fields=[CustomField("genre", "nature"), CustomField("rating", "pg")],
    )


def test_geo_filter_exclude_aliases_decode_identically():
    first = Video.from_json('{"geoFilterExclude": true}')
    second = Video.from_json('{"excludeListedCountries": true}')
    assert first.geo_filtered_exclude is True
    assert first.geo_filtered_exclude == second.geo_filtered_exclude
    assert first == second


def test_geo_filtered_aliases_encode_under_canonical_key():
    video = Video.from_json({"geoFiltered": True})
    assert video.geo_filtered is True
    assert video.to_json() == {"geoRestricted": True}
    assert Video.from_json({"geoRestricted": False}).geo_filtered is False


def test_unknown_key_fails():
    with pytest.raises(UnknownFieldError) as exc_info:
        Video.from_json({"name": "ok", "foo": "bar"})
    assert exc_info.value.key == "foo"
    assert exc_info.value.entity == "Video"


def test_unknown_key_in_nested_cue_point_fails():
    with pytest.raises(UnknownFieldError) as exc_info:
        Video.from_json({"cuePoints": [{"name": "a", "adKey": "x"}]})
    assert exc_info.value.entity == "CuePoint"
    assert exc_info.value.key == "adKey"


def test_unknown_keys_are_skipped_when_strict_mode_is_off(default_settings, monkeypatch):
    monkeypatch.setattr(default_settings, "CATALOG_STRICT_JSON_KEYS", False)
    video = Video.from_json({"name": "ok", "foo": "bar"})
    assert video.to_json() == {"name": "ok"}


def test_invalid_item_state_fails():
    with pytest.raises(InvalidEnumValueError) as exc_info:
        Video.from_json({"itemState": "PUBLISHED"})
    assert exc_info.value.value == "PUBLISHED"
    assert set(exc_info.value.allowed) == {"ACTIVE", "INACTIVE", "DELETED"}


def test_unmatched_economics_is_left_unset():
    assert Video.from_json({"economics": "PREMIUM"}).economics is None
    assert Video.from_json({"economics": "FREE"}).economics == Economics.FREE


def test_release_date_lands_in_last_modified_date():
    video = Video.from_json({"releaseDate": 1334246940000})
    assert video.last_modified_date == 1334246940000
    assert video.release_date is None


def test_release_date_compat_can_be_switched_off(default_settings, monkeypatch):
    monkeypatch.setattr(default_settings, "CATALOG_RELEASE_DATE_COMPAT", False)
    video = Video(release_date=1334246940000)
    decoded = Video.from_json(video.to_json())
    assert decoded.release_date == 1334246940000
    assert decoded.last_modified_date is None
    assert decoded == video


def test_release_date_does_not_survive_json_round_trip_by_default():
    video = Video(release_date=5)
    decoded = Video.from_json(video.to_json())
    assert decoded.release_date is None
    assert decoded.last_modified_date == 5
    assert decoded != video


def test_version_key_is_ignored():
    video = Video.from_json({"name": "x", "version": "5"})
    assert video.to_json() == {"name": "x"}


def test_decode_full_payload(video_payload):
    video = Video.from_json(video_payload)

    assert video.id == 1964520391001
    assert video.name == "Sea Turtles"
    assert video.long_description is None
    assert video.creation_date == 1334246940000
    assert video.flv_url == "http://cdn.example.com/turtles.mp4"
    assert video.item_state == ItemState.ACTIVE
    assert video.economics == Economics.AD_SUPPORTED
    assert video.geo_filtered is True
    assert video.geo_filtered_exclude is False
    assert video.tags == ["ocean", "turtles"]
    assert video.geo_filtered_countries == [GeoFilterCode.US, GeoFilterCode.CA]

    assert len(video.renditions) == 1
    rendition = video.renditions[0]
    assert rendition.encoding_rate == 1200000
    assert rendition.video_codec == VideoCodec.H264
    assert rendition.controller_type == ControllerType.DEFAULT
    assert video.video_full_length == rendition

    assert len(video.cue_points) == 1
    cue_point = video.cue_points[0]
    assert cue_point.name == "preroll"
    assert cue_point.type is None
    assert cue_point.force_stop is False

    assert video.custom_field("genre") == "nature"
    assert video.custom_field("rating") == "pg"
    assert video.custom_field("missing") is None


def test_encode_uses_canonical_keys(video_payload):
    document = Video.from_json(video_payload).to_json()

    assert document["geoRestricted"] is True
    assert document["geoFilterExclude"] is False
    assert document["geoFilteredCountries"] == ["us", "ca"]
    assert document["FLVURL"] == "http://cdn.example.com/turtles.mp4"
    assert document["videoFullLength"]["displayName"] == "turtles_1200"
    assert document["customFields"] == {"genre": "nature", "rating": "pg"}
    assert document["cuePoints"] == [
        {"id": 1964520391010, "name": "preroll", "videoId": "1964520391001", "time": 0, "forceStop": False}
    ]
    for alias in ("excludeListedCountries", "allowedCountries", "FLVFullLength", "version"):
        assert alias not in document
    for unset in ("longDescription", "linkURL", "linkText", "releaseDate", "startDate", "endDate"):
        assert unset not in document


def test_empty_video_encodes_to_empty_object():
    assert Video().to_json() == {}
    assert Video.from_json({}) == Video()


def test_json_round_trip(full_video):
    assert Video.from_json(full_video.to_json()) == full_video
    assert Video.from_json(full_video.to_json_string()) == full_video


def test_xml_round_trip(full_video):
    full_video.release_date = 1334246940000
    element = full_video.append_xml()
    assert element.tag == "video"
    assert Video.from_xml(element) == full_video


def test_xml_nested_layout(full_video):
    root = ET.Element("videos")
    element = full_video.append_xml(root)

    assert root[0] is element
    assert [tag.text for tag in element.find("tags")] == ["ocean", "turtles", "reef"]
    assert [child.tag for child in element.find("cuePoints")] == ["cuePoint", "cuePoint"]
    assert element.find("videoFullLength/rendition/size").text == "4700000"
    assert element.find("geoRestricted").text == "true"
    assert [c.text for c in element.find("geoFilteredCountries")] == ["us", "ca"]
    fields = element.findall("customFields/customField")
    assert [(f.find("name").text, f.find("value").text) for f in fields] == [
        ("genre", "nature"),
        ("rating", "pg"),
    ]


def test_xml_decode_is_lenient():
    element = ET.fromstring(
        "<video>"
        "<name>Reef</name>"
        "<itemState>PUBLISHED</itemState>"
        "<excludeListedCountries>true</excludeListedCountries>"
        "<geoFilteredCountries><country>us</country><country>zz</country></geoFilteredCountries>"
        "<length></length>"
        "</video>"
    )
    video = Video.from_xml(element)
    assert video.name == "Reef"
    assert video.item_state is None
    assert video.geo_filtered_exclude is None
    assert video.geo_filtered_countries == [GeoFilterCode.US]
    assert video.length is None


def test_custom_fields_must_be_an_object():
    with pytest.raises(TypeMismatchError) as exc_info:
        Video.from_json({"customFields": [{"name": "genre", "value": "news"}]})
    assert exc_info.value.field == "customFields"


def test_custom_field_values_are_stringified():
    video = Video.from_json({"customFields": {"rating": 5, "featured": True}})
    assert video.custom_field("rating") == "5"
    assert video.custom_field("featured") == "true"
    assert video.to_json()["customFields"] == {"rating": "5", "featured": "true"}


def test_boolean_tags_use_wire_spelling():
    video = Video.from_json({"tags": [True, False, "live"], "name": True})
    assert video.tags == ["true", "false", "live"]
    assert video.name == "true"


def test_empty_custom_fields_object_is_set():
    video = Video.from_json({"customFields": {}})
    assert video.custom_fields == []
    assert video.to_json() == {"customFields": {}}


def test_custom_fields_without_name_are_not_encoded():
    video = Video(custom_fields=[CustomField(None, "orphan"), CustomField("genre", "news")])
    assert video.to_json() == {"customFields": {"genre": "news"}}


def test_duplicate_custom_field_names_are_rejected():
    with pytest.raises(ValidationError):
        Video(custom_fields=[CustomField("genre", "news"), CustomField("genre", "sport")])


def test_tags_must_be_an_array():
    with pytest.raises(TypeMismatchError) as exc_info:
        Video.from_json({"tags": "ocean,turtles"})
    assert exc_info.value.field == "tags"


def test_nested_record_must_be_an_object():
    with pytest.raises(TypeMismatchError):
        Video.from_json({"videoFullLength": "http://cdn.example.com/t.mp4"})
    with pytest.raises(TypeMismatchError):
        Video.from_json({"renditions": ["http://cdn.example.com/t.mp4"]})


def test_nested_records_are_owned_by_the_video():
    cue_point = CuePoint(name="original", time=10)
    video = Video(cue_points=[cue_point])
    cue_point.name = "changed"
    assert video.cue_points[0].name == "original"

    rendition = Rendition(id=1)
    video.video_full_length = rendition
    rendition.id = 2
    assert video.video_full_length.id == 1


def test_setters_coerce_and_clear():
    video = Video()
    video.item_state = "INACTIVE"
    assert video.item_state == ItemState.INACTIVE
    video.item_state = None
    assert not video.is_set("item_state")
    with pytest.raises(ValidationError):
        video.length = "long"


def test_datetime_helpers():
    video = Video(published_date=1334246940000)
    assert video.as_datetime("published_date") == datetime(2012, 4, 12, 16, 9, tzinfo=timezone.utc)
    assert video.as_datetime("end_date") is None

    video.set_datetime("start_date", datetime(2020, 1, 1, tzinfo=timezone.utc))
    assert video.start_date == 1577836800000
    video.set_datetime("start_date", None)
    assert video.start_date is None

    with pytest.raises(ValueError):
        video.as_datetime("name")


def test_to_xml_string_wraps_json_form():
    video = Video(name="Intro", geo_filtered=True, tags=["a", "b"])
    assert video.to_xml_string() == (
        "<Video><name>Intro</name><geoRestricted>true</geoRestricted><tags>a</tags><tags>b</tags></Video>"
    )


def test_describe_uses_field_labels():
    text = Video(flv_url="http://cdn.example.com/t.mp4", tags=["a", "b"]).describe()
    assert text.startswith("[com.brightcove.proserve.mediaapi.wrapper.apiobjects.Video (\n")
    assert "\tflvUrl:'http://cdn.example.com/t.mp4'" in text
    assert "\ttags:'[a, b]'" in text
    assert "\tgeoFilteredExclude:'null'" in text


def test_describe_prefix_comes_from_settings(default_settings, monkeypatch):
    monkeypatch.setattr(default_settings, "CATALOG_LEGACY_TYPE_PREFIX", "media")
    assert Video().describe().startswith("[media.Video (")

import copy

import pytest

from catalog_objects.config import settings


RENDITION_PAYLOAD = {
    "url": "http://cdn.example.com/turtles_1200.mp4",
    "encodingRate": 1200000,
    "frameHeight": 540,
    "frameWidth": 960,
    "size": 4700000,
    "remoteUrl": None,
    "remoteStreamName": None,
    "videoDuration": 31500,
    "videoCodec": "H264",
    "videoContainer": "MP4",
    "controllerType": "DEFAULT",
    "audioOnly": False,
    "id": 1964520391002,
    "referenceId": None,
    "displayName": "turtles_1200",
    "uploadTimestampMillis": 1334246940000,
}

# Shaped like a find_video_by_id response with all fields requested
VIDEO_PAYLOAD = {
    "id": 1964520391001,
    "name": "Sea Turtles",
    "shortDescription": "Turtles at the reef",
    "longDescription": None,
    "creationDate": "1334246940000",
    "publishedDate": "1334246940000",
    "lastModifiedDate": "1334248567000",
    "linkURL": None,
    "linkText": None,
    "tags": ["ocean", "turtles"],
    "videoStillURL": "http://cdn.example.com/still.jpg",
    "thumbnailURL": "http://cdn.example.com/thumb.jpg",
    "referenceId": "turtles-001",
    "length": 31500,
    "economics": "AD_SUPPORTED",
    "playsTotal": 42,
    "playsTrailingWeek": 7,
    "version": "5",
    "itemState": "ACTIVE",
    "accountId": 57838016001,
    "FLVURL": "http://cdn.example.com/turtles.mp4",
    "geoRestricted": True,
    "excludeListedCountries": False,
    "allowedCountries": ["us", "ca", "zz"],
    "renditions": [RENDITION_PAYLOAD],
    "FLVFullLength": RENDITION_PAYLOAD,
    "cuePoints": [
        {
            "id": 1964520391010,
            "name": "preroll",
            "videoId": "1964520391001",
            "time": 0,
            "forceStop": False,
            "type": 0,
            "metadata": None,
        }
    ],
    "customFields": {"genre": "nature", "rating": "pg"},
}


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Run every test against the library defaults."""
    monkeypatch.setattr(settings, "CATALOG_STRICT_JSON_KEYS", True)
    monkeypatch.setattr(settings, "CATALOG_RELEASE_DATE_COMPAT", True)
    monkeypatch.setattr(
        settings,
        "CATALOG_LEGACY_TYPE_PREFIX",
        "com.brightcove.proserve.mediaapi.wrapper.apiobjects",
    )
    yield settings


@pytest.fixture
def rendition_payload():
    return copy.deepcopy(RENDITION_PAYLOAD)


@pytest.fixture
def video_payload():
    return copy.deepcopy(VIDEO_PAYLOAD)

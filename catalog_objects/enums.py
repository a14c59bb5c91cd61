"""
Media API enumerations.

Values are the exact strings the Media API puts on the wire.
"""

from enum import Enum
from typing import Optional, Type, TypeVar


E = TypeVar("E", bound=Enum)


class ItemState(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"


class Economics(str, Enum):
    FREE = "FREE"
    AD_SUPPORTED = "AD_SUPPORTED"


class CuePointType(str, Enum):
    AD = "AD"          # Triggers a mid-roll ad request
    CHAPTER = "CHAPTER"
    CODE = "CODE"      # Carries metadata, e.g. scene breaks


class VideoCodec(str, Enum):
    SORENSON = "SORENSON"
    ON2 = "ON2"
    H264 = "H264"
    NONE = "NONE"


class VideoContainer(str, Enum):
    FLV = "FLV"
    MP4 = "MP4"
    M2TS = "M2TS"


class ControllerType(str, Enum):
    DEFAULT = "DEFAULT"
    AKAMAI_STREAMING = "AKAMAI_STREAMING"
    AKAMAI_SECURE_STREAMING = "AKAMAI_SECURE_STREAMING"
    AKAMAI_LIVE = "AKAMAI_LIVE"
    AKAMAI_HD = "AKAMAI_HD"
    AKAMAI_HD_LIVE = "AKAMAI_HD_LIVE"
    LIMELIGHT_LIVE = "LIMELIGHT_LIVE"
    LIMELIGHT_MEDIAVAULT = "LIMELIGHT_MEDIAVAULT"


_ISO_3166_ALPHA2 = """
AD AE AF AG AI AL AM AO AQ AR AS AT AU AW AX AZ BA BB BD BE BF BG BH BI BJ BL
BM BN BO BQ BR BS BT BV BW BY BZ CA CC CD CF CG CH CI CK CL CM CN CO CR CU CV
CW CX CY CZ DE DJ DK DM DO DZ EC EE EG EH ER ES ET FI FJ FK FM FO FR GA GB GD
GE GF GG GH GI GL GM GN GP GQ GR GS GT GU GW GY HK HM HN HR HT HU ID IE IL IM
IN IO IQ IR IS IT JE JM JO JP KE KG KH KI KM KN KP KR KW KY KZ LA LB LC LI LK
LR LS LT LU LV LY MA MC MD ME MF MG MH MK ML MM MN MO MP MQ MR MS MT MU MV MW
MX MY MZ NA NC NE NF NG NI NL NO NP NR NU NZ OM PA PE PF PG PH PK PL PM PN PR
PS PT PW PY QA RE RO RS RU RW SA SB SC SD SE SG SH SI SJ SK SL SM SN SO SR SS
ST SV SX SY SZ TC TD TF TG TH TJ TK TL TM TN TO TR TT TV TW TZ UA UG UM US UY
UZ VA VC VE VG VI VN VU WF WS YE YT ZA ZM ZW
"""

# Geo-filter country codes; the Media API uses lowercase ISO-3166 codes.
GeoFilterCode = Enum(
    "GeoFilterCode",
    [(code, code.lower()) for code in _ISO_3166_ALPHA2.split()],
    type=str,
    module=__name__,
)


def lookup_enum(enum_cls: Type[E], raw: object) -> Optional[E]:
    """Return the member whose wire value equals ``raw`` exactly, else None."""
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw)
    for member in enum_cls:
        if member.value == text:
            return member
    return None

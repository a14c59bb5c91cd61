"""Models package."""

from .custom_field import CustomField
from .cue_point import CuePoint
from .rendition import Rendition
from .video import Video

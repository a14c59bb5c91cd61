"""Custom field model: one name/value pair attached to a video."""

from typing import ClassVar, Optional, Tuple

from catalog_objects.mapper import STRING, CatalogRecord, WireField


class CustomField(CatalogRecord):
    """
    Account-defined metadata on a video.

    Inside a video payload the Media API sends all custom fields as one
    object keyed by field name; standalone the record uses ``name`` and
    ``value`` keys.
    """

    xml_tag: ClassVar[str] = "customField"

    name: Optional[str] = None
    value: Optional[str] = None

    wire_fields: ClassVar[Tuple[WireField, ...]] = (
        WireField("name", "name", STRING),
        WireField("value", "value", STRING),
    )

    def __init__(self, name: Optional[str] = None, value: Optional[str] = None, **data) -> None:
        super().__init__(name=name, value=value, **data)

"""
Record mapper: field-table driven JSON/XML codecs for Media API objects.

Every catalog entity declares a tuple of ``WireField`` entries. From that
table the base class derives a JSON lookup (canonical keys plus aliases)
and an XML lookup (canonical tags only), and implements decode/encode in
both formats. A field holding ``None`` is unset and is never emitted.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple, Type, Union
from xml.etree import ElementTree as ET

from pydantic import BaseModel, ConfigDict, ValidationError

from catalog_objects.config import settings
from catalog_objects.enums import lookup_enum
from catalog_objects.errors import (
    InvalidArgumentError,
    InvalidEnumValueError,
    MalformedInputError,
    TypeMismatchError,
    UnknownFieldError,
)
from catalog_objects.xml_utils import (
    append_text_element,
    element_children,
    element_text,
    first_element_child,
    format_wire_value,
    json_to_xml_string,
)

logger = logging.getLogger(__name__)

JsonSource = Union[str, bytes, bytearray, Dict[str, Any]]


def _is_null(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and raw == "null")


class Codec:
    """Converts one field between its Python value and its wire forms."""

    expected = "a value"

    def mismatch(self, owner: Type["CatalogRecord"], wire: "WireField", raw: Any) -> TypeMismatchError:
        return TypeMismatchError(owner.__name__, wire.display, raw, self.expected)

    def decode_json(self, raw: Any, owner: Type["CatalogRecord"], wire: "WireField") -> Any:
        return raw

    def encode_json(self, value: Any) -> Any:
        return value

    def decode_xml(self, element: ET.Element, owner: Type["CatalogRecord"], wire: "WireField") -> Any:
        text = element_text(element)
        if text is None:
            return None
        return self.parse_text(text, owner, wire)

    def parse_text(self, text: str, owner: Type["CatalogRecord"], wire: "WireField") -> Any:
        return text

    def append_xml(self, parent: ET.Element, tag: str, value: Any) -> None:
        append_text_element(parent, tag, value)


class StringCodec(Codec):
    expected = "a string"

    def decode_json(self, raw, owner, wire):
        if isinstance(raw, (dict, list)):
            raise self.mismatch(owner, wire, raw)
        return format_wire_value(raw)


class IntegerCodec(Codec):
    expected = "an integer"

    def _coerce(self, raw, owner, wire) -> int:
        if isinstance(raw, bool):
            raise self.mismatch(owner, wire, raw)
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        if isinstance(raw, str):
            try:
                return int(raw.strip())
            except ValueError:
                pass
        raise self.mismatch(owner, wire, raw)

    def decode_json(self, raw, owner, wire):
        return self._coerce(raw, owner, wire)

    def parse_text(self, text, owner, wire):
        return self._coerce(text, owner, wire)


class DateMillisCodec(IntegerCodec):
    """Dates travel as milliseconds since the epoch."""

    expected = "a date in epoch milliseconds"


class BooleanCodec(Codec):
    expected = "a boolean"

    def decode_json(self, raw, owner, wire):
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
            return raw.strip().lower() == "true"
        raise self.mismatch(owner, wire, raw)

    def parse_text(self, text, owner, wire):
        return text.strip().lower() == "true"


class EnumCodec(Codec):
    """
    Enum field matched on its exact wire value.

    A closed enum rejects unknown JSON values; otherwise unknown values
    leave the field unset. The XML path never rejects.
    """

    def __init__(self, enum_cls: Type[Enum], *, closed: bool = False) -> None:
        self.enum_cls = enum_cls
        self.closed = closed
        self.expected = f"a {enum_cls.__name__} name"

    @property
    def allowed(self) -> List[str]:
        return [member.value for member in self.enum_cls]

    def decode_json(self, raw, owner, wire):
        if isinstance(raw, (dict, list)):
            raise self.mismatch(owner, wire, raw)
        member = lookup_enum(self.enum_cls, raw)
        if member is None:
            if self.closed:
                raise InvalidEnumValueError(owner.__name__, wire.display, raw, self.allowed)
            logger.debug("Ignoring unmatched %s.%s value %r", owner.__name__, wire.display, raw)
        return member

    def encode_json(self, value):
        return value.value

    def parse_text(self, text, owner, wire):
        member = lookup_enum(self.enum_cls, text.strip())
        if member is None:
            logger.debug("Ignoring unmatched %s.%s XML value %r", owner.__name__, wire.display, text)
        return member


class ListCodec(Codec):
    """Ordered sequence; XML form is a container with one child per item."""

    expected = "an array"

    def __init__(self, item_tag: str) -> None:
        self.item_tag = item_tag

    def decode_item(self, raw, owner, wire) -> Any:
        return raw

    def encode_item(self, value) -> Any:
        return value

    def decode_xml_item(self, element: ET.Element, owner, wire) -> Any:
        return element_text(element)

    def append_xml_item(self, container: ET.Element, value: Any) -> None:
        append_text_element(container, self.item_tag, value)

    def decode_json(self, raw, owner, wire):
        if not isinstance(raw, list):
            raise self.mismatch(owner, wire, raw)
        items = []
        for item in raw:
            value = self.decode_item(item, owner, wire)
            if value is not None:
                items.append(value)
        return items

    def encode_json(self, value):
        return [self.encode_item(item) for item in value]

    def decode_xml(self, element, owner, wire):
        items = []
        for child in element_children(element):
            value = self.decode_xml_item(child, owner, wire)
            if value is not None:
                items.append(value)
        return items

    def append_xml(self, parent, tag, value):
        container = ET.SubElement(parent, tag)
        for item in value:
            self.append_xml_item(container, item)


class StringListCodec(ListCodec):
    expected = "an array of strings"

    def decode_item(self, raw, owner, wire):
        if raw is None:
            return None
        if isinstance(raw, (dict, list)):
            raise self.mismatch(owner, wire, raw)
        return format_wire_value(raw)


class EnumListCodec(ListCodec):
    """Sequence of best-effort enum values; unknown entries are dropped."""

    def __init__(self, enum_cls: Type[Enum], item_tag: str) -> None:
        super().__init__(item_tag)
        self.enum_cls = enum_cls
        self.expected = f"an array of {enum_cls.__name__} values"

    def _lookup(self, raw, owner, wire):
        member = lookup_enum(self.enum_cls, raw)
        if member is None:
            logger.debug("Dropping unmatched %s.%s entry %r", owner.__name__, wire.display, raw)
        return member

    def decode_item(self, raw, owner, wire):
        if isinstance(raw, (dict, list)):
            raise self.mismatch(owner, wire, raw)
        return self._lookup(raw, owner, wire)

    def encode_item(self, value):
        return value.value

    def decode_xml_item(self, element, owner, wire):
        text = element_text(element)
        if text is None:
            return None
        return self._lookup(text.strip(), owner, wire)


class RecordCodec(Codec):
    """A single nested record; XML form wraps the record's own element."""

    def __init__(self, record_cls: Type["CatalogRecord"]) -> None:
        self.record_cls = record_cls
        self.expected = f"a {record_cls.__name__} object"

    def decode_json(self, raw, owner, wire):
        if not isinstance(raw, dict):
            raise self.mismatch(owner, wire, raw)
        return self.record_cls.from_json(raw)

    def encode_json(self, value):
        return value.to_json()

    def decode_xml(self, element, owner, wire):
        child = first_element_child(element)
        if child is None:
            return None
        return self.record_cls.from_xml(child)

    def append_xml(self, parent, tag, value):
        container = ET.SubElement(parent, tag)
        value.append_xml(container)


class RecordListCodec(ListCodec):
    def __init__(self, record_cls: Type["CatalogRecord"]) -> None:
        super().__init__(record_cls.xml_tag)
        self.record_cls = record_cls
        self.expected = f"an array of {record_cls.__name__} objects"

    def decode_item(self, raw, owner, wire):
        if not isinstance(raw, dict):
            raise self.mismatch(owner, wire, raw)
        return self.record_cls.from_json(raw)

    def encode_item(self, value):
        return value.to_json()

    def decode_xml_item(self, element, owner, wire):
        return self.record_cls.from_xml(element)

    def append_xml_item(self, container, value):
        value.append_xml(container)


class NamedValueMapCodec(RecordListCodec):
    """
    Name/value records carried on the JSON wire as a single object.

    ``{"genre": "news"}`` decodes to ``[record(name="genre", value="news")]``.
    Entries without a name are skipped when encoding.
    """

    def decode_json(self, raw, owner, wire):
        if not isinstance(raw, dict):
            raise TypeMismatchError(owner.__name__, wire.display, raw, "a JSON object")
        records = []
        for name, value in raw.items():
            if isinstance(value, (dict, list)):
                raise TypeMismatchError(owner.__name__, f"{wire.display}.{name}", value, "a string")
            text = None if value is None else format_wire_value(value)
            records.append(self.record_cls(name=str(name), value=text))
        return records

    def encode_json(self, value):
        return {item.name: item.value for item in value if item.name is not None}


@dataclass(frozen=True)
class WireField:
    """One logical field and the wire names it travels under."""

    name: str
    key: str
    codec: Codec
    aliases: Tuple[str, ...] = ()
    xml_tag: Optional[str] = None
    label: Optional[str] = None

    @property
    def tag(self) -> str:
        return self.xml_tag or self.key

    @property
    def display(self) -> str:
        return self.label or self.key


STRING = StringCodec()
INTEGER = IntegerCodec()
BOOLEAN = BooleanCodec()
DATE_MILLIS = DateMillisCodec()


def load_json_object(source: Optional[JsonSource], entity: str) -> Dict[str, Any]:
    """Parse ``source`` into a JSON object, mapping failures onto catalog errors."""
    if source is None:
        raise InvalidArgumentError(f"{entity} can not be parsed from null JSON")
    if isinstance(source, dict):
        return source
    if isinstance(source, (bytes, bytearray)):
        try:
            source = bytes(source).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"{entity} JSON is not valid UTF-8") from exc
    if not isinstance(source, str):
        raise InvalidArgumentError(
            f"{entity} expects a JSON object, string or bytes, got {type(source).__name__}"
        )
    try:
        document = json.loads(source)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"{entity} JSON is malformed: {exc}") from exc
    if document is None:
        raise InvalidArgumentError(f"{entity} can not be parsed from null JSON")
    if not isinstance(document, dict):
        raise MalformedInputError(f"{entity} JSON must be an object, got {type(document).__name__}")
    return document


def _display_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, list):
        return "[" + ", ".join(_display_value(item) for item in value) + "]"
    return str(value)


class CatalogRecord(BaseModel):
    """Base class for Media API objects built on a ``WireField`` table."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    xml_tag: ClassVar[str] = "record"
    wire_fields: ClassVar[Tuple[WireField, ...]] = ()
    ignored_json_keys: ClassVar[FrozenSet[str]] = frozenset()

    json_table: ClassVar[Dict[str, WireField]] = {}
    xml_table: ClassVar[Dict[str, WireField]] = {}

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        json_table: Dict[str, WireField] = {}
        xml_table: Dict[str, WireField] = {}
        for wire in cls.wire_fields:
            if wire.name not in cls.model_fields:
                raise TypeError(f"{cls.__name__} has no field '{wire.name}' for wire key '{wire.key}'")
            for key in (wire.key, *wire.aliases):
                json_table[key] = wire
            xml_table[wire.tag] = wire
        cls.json_table = json_table
        cls.xml_table = xml_table

    @classmethod
    def json_field_for(cls, key: str) -> Optional[WireField]:
        return cls.json_table.get(key)

    @classmethod
    def _build(cls, values: Dict[str, Any]):
        try:
            return cls(**values)
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error.get("loc") else "?"
            raise TypeMismatchError(cls.__name__, field, error.get("input"), error.get("msg", "a valid value")) from exc

    @classmethod
    def from_json(cls, source: Optional[JsonSource]):
        """
        Decode one Media API JSON object.

        Null values (and the literal string "null") leave their field unset.
        Unknown keys raise ``UnknownFieldError`` unless strict key checking
        is switched off in settings. When several aliases of one field are
        present the last one wins.
        """
        document = load_json_object(source, cls.__name__)
        values: Dict[str, Any] = {}
        for key, raw in document.items():
            if _is_null(raw):
                continue
            if key in cls.ignored_json_keys:
                logger.debug("Ignoring %s key %r", cls.__name__, key)
                continue
            wire = cls.json_field_for(key)
            if wire is None:
                if settings.CATALOG_STRICT_JSON_KEYS:
                    raise UnknownFieldError(cls.__name__, key, raw)
                logger.debug("Skipping unknown %s key %r", cls.__name__, key)
                continue
            value = wire.codec.decode_json(raw, cls, wire)
            if value is not None:
                values[wire.name] = value
        return cls._build(values)

    @classmethod
    def from_xml(cls, element: Optional[ET.Element]):
        """
        Decode one XML element produced by ``append_xml``.

        Only canonical tags are matched; unknown child tags and empty
        elements are skipped.
        """
        if element is None:
            raise InvalidArgumentError(f"{cls.__name__} can not be parsed from a null XML element")
        values: Dict[str, Any] = {}
        for child in element_children(element):
            wire = cls.xml_table.get(child.tag)
            if wire is None:
                logger.debug("Ignoring %s XML tag %r", cls.__name__, child.tag)
                continue
            value = wire.codec.decode_xml(child, cls, wire)
            if value is not None:
                values[wire.name] = value
        return cls._build(values)

    def to_json(self) -> Dict[str, Any]:
        """JSON object holding every set field under its canonical key."""
        document: Dict[str, Any] = {}
        for wire in self.wire_fields:
            value = getattr(self, wire.name)
            if value is not None:
                document[wire.key] = wire.codec.encode_json(value)
        return document

    def to_json_string(self, **kwargs: Any) -> str:
        return json.dumps(self.to_json(), **kwargs)

    def append_xml(self, parent: Optional[ET.Element] = None) -> ET.Element:
        """
        Append this record as a new child of ``parent`` and return it.

        With no parent a detached element is returned instead.
        """
        if parent is None:
            element = ET.Element(self.xml_tag)
        else:
            element = ET.SubElement(parent, self.xml_tag)
        for wire in self.wire_fields:
            value = getattr(self, wire.name)
            if value is not None:
                wire.codec.append_xml(element, wire.tag, value)
        return element

    def to_xml_string(self) -> str:
        return json_to_xml_string(self.to_json(), type(self).__name__)

    def is_set(self, field: str) -> bool:
        if field not in type(self).model_fields:
            raise AttributeError(f"{type(self).__name__} has no field '{field}'")
        return getattr(self, field) is not None

    def describe(self) -> str:
        lines = [f"[{settings.CATALOG_LEGACY_TYPE_PREFIX}.{type(self).__name__} ("]
        for wire in self.wire_fields:
            lines.append(f"\t{wire.display}:'{_display_value(getattr(self, wire.name))}'")
        lines.append(")]")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

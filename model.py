from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, Dict, List, Tuple, Union
import math

from matplotlib import colors

import config

Point = Tuple[float, float]
Color = Tuple[int, int, int, int]


class ElementDecodeError(ValueError):
    """Raised when persisted element data is not well-formed."""


class ElementKind(IntEnum):
    STRAIGHT_TRACK = 0
    CIRCUIT_NODE = 1
    SIMPLE_SWITCH = 2


class Orientation(str, Enum):
    NORMAL = "Normal"
    INVERTED = "Invertido"

    def flipped(self) -> "Orientation":
        """Description: Flipped
        Inputs: None
        """
        return Orientation.INVERTED if self is Orientation.NORMAL else Orientation.NORMAL


def color_from_hex(value: str) -> Color:
    """Description: Color from hex
    Inputs: value: str (any matplotlib color)
    """
    rgba = colors.to_rgba(value)
    return tuple(int(round(channel * 255)) for channel in rgba)  # type: ignore[return-value]


def color_to_hex(color: Color) -> str:
    """Description: Color to hex (alpha dropped, Tk has no alpha)
    Inputs: color: Color
    """
    return colors.to_hex((color[0] / 255, color[1] / 255, color[2] / 255))


def lighten(color: Color, amount: int) -> Color:
    """Description: Lighten
    Inputs: color: Color, amount: int
    """
    r, g, b, a = color
    return (min(255, r + amount), min(255, g + amount), min(255, b + amount), a)


def _color_to_dict(color: Color) -> Dict[str, int]:
    return {"R": color[0], "G": color[1], "B": color[2], "A": color[3]}


def _color_from_dict(payload: object) -> Color:
    if not isinstance(payload, dict):
        raise ElementDecodeError(f"color must be an object, got {payload!r}")
    channels = []
    for key in ("R", "G", "B", "A"):
        value = payload.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise ElementDecodeError(f"color channel {key} must be an integer in 0..255, got {value!r}")
        channels.append(value)
    return tuple(channels)  # type: ignore[return-value]


def _number(payload: Dict, key: str, default: float | None = None) -> float:
    if key not in payload:
        if default is None:
            raise ElementDecodeError(f"missing field '{key}'")
        return default
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ElementDecodeError(f"field '{key}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise ElementDecodeError(f"field '{key}' is out of range") from None
    if not math.isfinite(number):
        raise ElementDecodeError(f"field '{key}' must be a finite number, got {value!r}")
    return number


def _element_id(payload: Dict) -> int:
    value = payload.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ElementDecodeError(f"field 'id' must be an integer, got {value!r}")
    if value < 1:
        raise ElementDecodeError(f"field 'id' must be >= 1, got {value}")
    return value


@dataclass
class Element:
    id: int
    x: float
    y: float
    color: Color
    gauge: float

    kind: ClassVar[ElementKind]

    def _base_dict(self) -> Dict:
        return {
            "tipo": int(self.kind),
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "cor": _color_to_dict(self.color),
            "espessura": self.gauge,
        }

    @staticmethod
    def _base_fields(payload: Dict) -> Dict:
        return {
            "id": _element_id(payload),
            "x": _number(payload, "x"),
            "y": _number(payload, "y"),
            "color": _color_from_dict(payload.get("cor")),
            "gauge": _number(payload, "espessura"),
        }


@dataclass
class StraightTrack(Element):
    length: float = 0.0
    rotation: float = 0.0
    filled: bool = False

    kind: ClassVar[ElementKind] = ElementKind.STRAIGHT_TRACK

    def end_point(self) -> Point:
        """Description: World-space far end of the centerline
        Inputs: None
        """
        world_length = self.length * config.PIXELS_PER_METER
        rad = math.radians(self.rotation)
        return (self.x + world_length * math.cos(rad), self.y + world_length * math.sin(rad))

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        payload = self._base_dict()
        payload["comprimento"] = self.length
        payload["rotacao"] = self.rotation
        payload["modoCheio"] = self.filled
        return payload

    @classmethod
    def from_dict(cls, payload: Dict) -> "StraightTrack":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        filled = payload.get("modoCheio", False)
        if not isinstance(filled, bool):
            raise ElementDecodeError(f"field 'modoCheio' must be a boolean, got {filled!r}")
        return cls(
            **cls._base_fields(payload),
            length=_number(payload, "comprimento"),
            rotation=_number(payload, "rotacao", 0.0),
            filled=filled,
        )


@dataclass
class CircuitNode(Element):
    bar_length: float = config.CIRCUIT_BAR_LENGTH
    orientation: Orientation = Orientation.NORMAL

    kind: ClassVar[ElementKind] = ElementKind.CIRCUIT_NODE

    def bar_segment(self) -> Tuple[Point, Point]:
        """Description: Vertical bar centerline
        Inputs: None
        """
        half = self.bar_length / 2.0
        return (self.x, self.y - half), (self.x, self.y + half)

    def stem_segment(self) -> Tuple[Point, Point]:
        """Description: Horizontal stem centerline, half the bar long
        Inputs: None
        """
        stem = self.bar_length / 2.0
        if self.orientation is Orientation.INVERTED:
            stem = -stem
        return (self.x, self.y), (self.x + stem, self.y)

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        payload = self._base_dict()
        payload["largura"] = self.bar_length
        payload["orientacaoTC"] = self.orientation.value
        return payload

    @classmethod
    def from_dict(cls, payload: Dict) -> "CircuitNode":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        raw = payload.get("orientacaoTC") or Orientation.NORMAL.value
        try:
            orientation = Orientation(raw)
        except ValueError:
            raise ElementDecodeError(f"unknown orientation {raw!r}") from None
        return cls(
            **cls._base_fields(payload),
            bar_length=_number(payload, "largura"),
            orientation=orientation,
        )


@dataclass
class SimpleSwitch(Element):
    kind: ClassVar[ElementKind] = ElementKind.SIMPLE_SWITCH

    @property
    def radius(self) -> float:
        return self.gauge

    def to_dict(self) -> Dict:
        """Description: To dict
        Inputs: None
        """
        return self._base_dict()

    @classmethod
    def from_dict(cls, payload: Dict) -> "SimpleSwitch":
        """Description: From dict
        Inputs: cls, payload: Dict
        """
        return cls(**cls._base_fields(payload))


AnyElement = Union[StraightTrack, CircuitNode, SimpleSwitch]

_ELEMENT_TYPES = {
    ElementKind.STRAIGHT_TRACK: StraightTrack,
    ElementKind.CIRCUIT_NODE: CircuitNode,
    ElementKind.SIMPLE_SWITCH: SimpleSwitch,
}


def element_from_dict(payload: object) -> AnyElement:
    """Description: Decode one persisted element, dispatching on 'tipo'
    Inputs: payload: object
    """
    if not isinstance(payload, dict):
        raise ElementDecodeError(f"element must be an object, got {payload!r}")
    tipo = payload.get("tipo")
    if isinstance(tipo, bool) or not isinstance(tipo, int):
        raise ElementDecodeError(f"field 'tipo' must be an integer, got {tipo!r}")
    try:
        kind = ElementKind(tipo)
    except ValueError:
        raise ElementDecodeError(f"unknown element type {tipo}") from None
    return _ELEMENT_TYPES[kind].from_dict(payload)


def palette_colors() -> List[Tuple[str, str, Color]]:
    """Description: Configured palette as (key, name, rgba), in order
    Inputs: None
    """
    return [(key, name, color_from_hex(value)) for key, name, value in config.PALETTE]

import math
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Tuple

from .utils import logger


# name, hex
PALETTE = [
    ('black', '#000000'),
    ('blue', '#0000ff'),
    ('cyan', '#00ffff'),
    ('green', '#00ff00'),
    ('red', '#ff0000'),
    ('magenta', '#ff00ff'),
    ('yellow', '#ffff00'),
    ('white', '#ffffff'),
    ('brown', '#a52a2a'),
    ('tan', '#d2b48c'),
    ('forest', '#228b22'),
    ('aqua', '#7fffd4'),
    ('salmon', '#fa8072'),
    ('purple', '#800080'),
    ('orange', '#ffa500'),
    ('grey', '#808080'),
]

DEFAULT_COLOR = 7


def end_coordinates(x: float, y: float, direction: int, distance: float) -> Tuple[float, float]:
    "Heading 0 points up, and angles grow clockwise. The y axis points down, as in SVG."
    rad = math.radians(direction)
    return x + distance * math.sin(rad), y - distance * math.cos(rad)


class Segment(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float
    color: int


class TurtleSink(ABC):
    """The drawing cursor driven by ``Interpreter``.

    Implementations keep the position, heading, pen state and pen color, and
    decide what a stroke actually produces.
    """

    @abstractmethod
    def pen_up(self) -> None:
        pass

    @abstractmethod
    def pen_down(self) -> None:
        pass

    @abstractmethod
    def pen_move(self, angle_offset: int, distance: float) -> Tuple[float, float]:
        "Moves `distance` units at `angle_offset` degrees from the heading. Returns the new position."

    @abstractmethod
    def set_pen_color(self, index: int) -> None:
        pass

    @abstractmethod
    def turn(self, degrees: int) -> None:
        pass

    @abstractmethod
    def set_heading(self, degrees: int) -> None:
        pass

    @abstractmethod
    def set_x(self, value: float) -> None:
        pass

    @abstractmethod
    def set_y(self, value: float) -> None:
        pass

    @abstractmethod
    def x(self) -> float:
        pass

    @abstractmethod
    def y(self) -> float:
        pass

    @abstractmethod
    def direction(self) -> int:
        pass

    @abstractmethod
    def color(self) -> int:
        pass


class Turtle(TurtleSink):
    """An in-memory turtle.

    Starts at the center of a `width` x `height` canvas, heading up, with the pen
    up. Strokes drawn with the pen down are kept in ``segments``, and every change
    of position or pen state is recorded in ``history`` as ``(x, y, pen_down)``.
    """

    def __init__(self, width: float = 400, height: float = 400) -> None:
        self.width = width
        self.height = height
        self._x = width / 2
        self._y = height / 2
        self._direction = 0
        self._pen_down = False
        self._color = DEFAULT_COLOR
        self.segments: List[Segment] = []
        self.history: List[Tuple[float, float, bool]] = []

    def __repr__(self):
        return 'Turtle(x=%r, y=%r, direction=%r, pen_down=%r, color=%r)' % (
            self._x, self._y, self._direction, self._pen_down, self._color)

    def _record(self):
        self.history.append((self._x, self._y, self._pen_down))

    def is_down(self) -> bool:
        return self._pen_down

    def pen_up(self):
        self._pen_down = False
        self._record()

    def pen_down(self):
        self._pen_down = True
        self._record()

    def pen_move(self, angle_offset, distance):
        direction = self._direction + angle_offset
        if distance < 0:
            direction += 180
            distance = -distance

        x, y = end_coordinates(self._x, self._y, direction, distance)
        if self._pen_down:
            self.segments.append(Segment(self._x, self._y, x, y, self._color))
        self._x, self._y = x, y
        self._record()
        return x, y

    def set_pen_color(self, index):
        if not 0 <= index < len(PALETTE):
            raise ValueError("Color index out of range: %r" % index)
        self._color = index

    def turn(self, degrees):
        self._direction += degrees

    def set_heading(self, degrees):
        self._direction = degrees

    def set_x(self, value):
        self._x = value
        self._record()

    def set_y(self, value):
        self._y = value
        self._record()

    def x(self):
        return self._x

    def y(self):
        return self._y

    def direction(self):
        return self._direction

    def color(self):
        return self._color

    def to_svg(self) -> str:
        "Renders the segments drawn so far as an SVG document"
        out = ['<svg xmlns="http://www.w3.org/2000/svg" width="%s" height="%s" viewBox="0 0 %s %s">'
               % (self.width, self.height, self.width, self.height),
               '<rect width="100%" height="100%" fill="black"/>']
        for s in self.segments:
            out.append('<line x1="%.3f" y1="%.3f" x2="%.3f" y2="%.3f" stroke="%s" stroke-width="1"/>'
                       % (s.x1, s.y1, s.x2, s.y2, PALETTE[s.color][1]))
        out.append('</svg>')
        return '\n'.join(out) + '\n'

    def save_svg(self, path: str) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_svg())
        logger.debug("Wrote %d segments to %s", len(self.segments), path)

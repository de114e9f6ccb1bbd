"""Headless layout primitives shared by the combo box widgets."""

from __future__ import annotations

import math
import textwrap
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

GLYPH_WIDTH = 7.0
ROW_HEIGHT = 14.0
ELLIPSIS = "…"


@dataclass(frozen=True)
class Vec2:
    """A two-dimensional vector or size."""

    x: float
    y: float

    @classmethod
    def splat(cls, value: float) -> Vec2:
        return cls(value, value)

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its two corners."""

    min: Vec2
    max: Vec2

    @classmethod
    def from_min_size(cls, origin: Vec2, size: Vec2) -> Rect:
        return cls(origin, origin + size)

    @classmethod
    def from_center_size(cls, center: Vec2, size: Vec2) -> Rect:
        half = size * 0.5
        return cls(center - half, center + half)

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def size(self) -> Vec2:
        return Vec2(self.width(), self.height())

    def center(self) -> Vec2:
        return Vec2((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2)

    @property
    def left_top(self) -> Vec2:
        return self.min

    @property
    def right_top(self) -> Vec2:
        return Vec2(self.max.x, self.min.y)

    @property
    def center_bottom(self) -> Vec2:
        return Vec2(self.center().x, self.max.y)

    def contains(self, point: Vec2) -> bool:
        return self.min.x <= point.x <= self.max.x and self.min.y <= point.y <= self.max.y

    def expand(self, amount: float) -> Rect:
        return self.expand2(Vec2.splat(amount))

    def expand2(self, amount: Vec2) -> Rect:
        return Rect(self.min - amount, self.max + amount)

    def shrink2(self, amount: Vec2) -> Rect:
        return self.expand2(amount * -1)

    def union(self, other: Rect) -> Rect:
        return Rect(
            Vec2(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Vec2(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def align_right_center(self, size: Vec2) -> Rect:
        """Place a rectangle of ``size`` against the right edge, centred vertically."""
        cy = self.center().y
        return Rect(
            Vec2(self.max.x - size.x, cy - size.y / 2),
            Vec2(self.max.x, cy + size.y / 2),
        )

    def align_left_center(self, size: Vec2) -> Rect:
        """Place a rectangle of ``size`` against the left edge, centred vertically."""
        cy = self.center().y
        return Rect(
            Vec2(self.min.x, cy - size.y / 2),
            Vec2(self.min.x + size.x, cy + size.y / 2),
        )


class TextWrapMode(Enum):
    """How text that does not fit is laid out."""

    EXTEND = "extend"
    WRAP = "wrap"
    TRUNCATE = "truncate"


class PopupCloseBehavior(Enum):
    """When an open popup closes."""

    CLOSE_ON_CLICK = "close_on_click"
    CLOSE_ON_CLICK_OUTSIDE = "close_on_click_outside"
    IGNORE_CLICKS = "ignore_clicks"


@dataclass(frozen=True)
class Spacing:
    """Sizes and gaps used when laying out widgets."""

    button_padding: Vec2 = Vec2(4.0, 1.0)
    item_spacing: Vec2 = Vec2(8.0, 3.0)
    interact_size: Vec2 = Vec2(40.0, 18.0)
    icon_width: float = 14.0
    icon_spacing: float = 4.0
    combo_width: float = 100.0
    combo_height: float = 200.0


@dataclass(frozen=True)
class WidgetVisuals:
    """Colours and geometry of a widget in one interaction state."""

    weak_bg_fill: str
    bg_stroke_color: str
    bg_stroke_width: float
    fg_stroke_color: str
    corner_radius: float
    expansion: float

    @property
    def text_color(self) -> str:
        return self.fg_stroke_color


_INACTIVE = WidgetVisuals("#3c3c3c", "#00000000", 0.0, "#b4b4b4", 2.0, 0.0)
_ACTIVE = WidgetVisuals("#373737", "#ffffff", 1.0, "#ffffff", 2.0, 1.0)
_OPEN = WidgetVisuals("#2d2d2d", "#3c3c3c", 1.0, "#d2d2d2", 2.0, 0.0)
_WINDOW_FILL = "#1b1b1b"


@dataclass(frozen=True)
class Shape:
    """Something painted: a filled rectangle, a polygon or a block of text."""

    kind: str
    rect: Rect | None = None
    points: tuple[Vec2, ...] = ()
    fill: str | None = None
    stroke: str | None = None
    corner_radius: float = 0.0
    text: str = ""

    @classmethod
    def filled_rect(
        cls, rect: Rect, fill: str, stroke: str | None = None, corner_radius: float = 0.0
    ) -> Shape:
        return cls("rect", rect=rect, fill=fill, stroke=stroke, corner_radius=corner_radius)

    @classmethod
    def convex_polygon(cls, points, fill: str, stroke: str | None = None) -> Shape:
        return cls("polygon", points=tuple(points), fill=fill, stroke=stroke)

    @classmethod
    def galley(cls, rect: Rect, text: str, color: str) -> Shape:
        return cls("text", rect=rect, fill=color, text=text)


@dataclass
class Response:
    """The outcome of showing a widget for one frame."""

    widget_id: Hashable
    rect: Rect
    clicked: bool = False
    changed: bool = False
    inner: Any = None
    label: str = ""


class Galley(NamedTuple):
    """Laid-out text: its rows and the size they take."""

    lines: tuple[str, ...]
    size: Vec2


class ButtonLayout(NamedTuple):
    """Where the parts of a combo box button ended up."""

    outer: Rect
    content: Rect
    icon: Rect
    text: Rect
    galley: Galley


class Ui:
    """A horizontal row of widgets, with popup and click state."""

    def __init__(
        self,
        available_width: float,
        spacing: Spacing | None = None,
        wrap_mode: TextWrapMode | None = None,
    ) -> None:
        self.spacing = spacing if spacing is not None else Spacing()
        self.wrap_mode = wrap_mode
        self.max_height = math.inf
        self.style: Any = None
        self.right_to_left = False
        self.inactive_visuals = _INACTIVE
        self.active_visuals = _ACTIVE
        self.open_visuals = _OPEN
        self.window_fill = _WINDOW_FILL
        self.shapes: list[Shape] = []
        self.items: list[tuple[str, bool]] = []
        self.clicked_inside = False
        self._left = 0.0
        self._right = float(available_width)
        self._top = 0.0
        self._popups: set[Hashable] = set()
        self._clicks: set[Hashable] = set()
        self._item_clicks: set[str] = set()

    @property
    def available_width(self) -> float:
        return max(0.0, self._right - self._left)

    def is_popup_open(self, popup_id: Hashable) -> bool:
        return popup_id in self._popups

    def open_popup(self, popup_id: Hashable) -> None:
        self._popups.add(popup_id)

    def close_popup(self, popup_id: Hashable) -> None:
        self._popups.discard(popup_id)

    def paint(self, shape: Shape) -> int:
        """Add a shape and return its index in paint order."""
        self.shapes.append(shape)
        return len(self.shapes) - 1

    def click(self, widget_id: Hashable) -> None:
        """Queue a click on a widget for this frame."""
        self._clicks.add(widget_id)

    def click_item(self, text: str) -> None:
        """Queue a click on a selectable label with this text."""
        self._item_clicks.add(str(text))

    def interact(self, widget_id: Hashable) -> bool:
        """Return whether the widget was clicked, consuming the click."""
        if widget_id in self._clicks:
            self._clicks.discard(widget_id)
            return True
        return False

    @contextmanager
    def layout(self, right_to_left: bool) -> Iterator[Ui]:
        """Lay out widgets in the given direction for the duration of the block."""
        previous = self.right_to_left
        self.right_to_left = right_to_left
        try:
            yield self
        finally:
            self.right_to_left = previous

    def allocate(self, size: Vec2) -> Rect:
        """Take space for a widget from the row."""
        gap = self.spacing.item_spacing.x
        if self.right_to_left:
            rect = Rect(Vec2(self._right - size.x, self._top), Vec2(self._right, self._top + size.y))
            self._right -= size.x + gap
        else:
            rect = Rect.from_min_size(Vec2(self._left, self._top), size)
            self._left += size.x + gap
        return rect

    def child(self, available_width: float, wrap_mode: TextWrapMode | None) -> Ui:
        """Return a new Ui that shares this one's popups, clicks and style."""
        sub = Ui(available_width, self.spacing, wrap_mode)
        sub.inactive_visuals = self.inactive_visuals
        sub.active_visuals = self.active_visuals
        sub.open_visuals = self.open_visuals
        sub.window_fill = self.window_fill
        sub._popups = self._popups
        sub._clicks = self._clicks
        sub._item_clicks = self._item_clicks
        return sub

    def label(self, text: str) -> Rect:
        """Add a text label and return where it was placed."""
        galley = measure_text(text, TextWrapMode.EXTEND, math.inf)
        rect = self.allocate(galley.size)
        self.paint(Shape.galley(rect, "\n".join(galley.lines), self.inactive_visuals.text_color))
        return rect

    def selectable_label(self, selected: bool, text: str) -> bool:
        """Add a selectable menu entry; return whether it was clicked."""
        text = str(text)
        self.items.append((text, selected))
        if text in self._item_clicks:
            self._item_clicks.discard(text)
            self.clicked_inside = True
            return True
        return False


def widget_to_popup_id(widget_id: Hashable) -> Hashable:
    """Return the id under which a widget's popup state is kept."""
    return (widget_id, "popup")


def measure_text(text: str, wrap_mode: TextWrapMode, wrap_width: float) -> Galley:
    """Lay out text in fixed-width glyphs; newlines always start a new row."""
    columns = math.inf if math.isinf(wrap_width) else max(1, int(wrap_width // GLYPH_WIDTH))
    lines: list[str] = []
    for raw in str(text).split("\n"):
        if wrap_mode is TextWrapMode.EXTEND or len(raw) <= columns:
            lines.append(raw)
        elif wrap_mode is TextWrapMode.WRAP:
            lines.extend(textwrap.wrap(raw, width=int(columns)) or [""])
        else:
            lines.append(raw[: max(int(columns) - 1, 0)] + ELLIPSIS)
    widest = max(len(line) for line in lines)
    return Galley(tuple(lines), Vec2(widest * GLYPH_WIDTH, len(lines) * ROW_HEIGHT))


def paint_default_icon(ui: Ui, rect: Rect, visuals: WidgetVisuals) -> None:
    """Paint a downward-pointing triangle inside ``rect``."""
    shrunk = Rect.from_center_size(
        rect.center(), Vec2(rect.width() * 0.7, rect.height() * 0.45)
    )
    ui.paint(
        Shape.convex_polygon(
            (shrunk.left_top, shrunk.right_top, shrunk.center_bottom),
            fill=visuals.fg_stroke_color,
        )
    )


def layout_button(
    ui: Ui, selected_text: str, width: float | None, wrap_mode: TextWrapMode
) -> ButtonLayout:
    """Allocate a combo box button in ``ui`` and work out where its parts go."""
    spacing = ui.spacing
    margin = spacing.button_padding
    icon_size = Vec2.splat(spacing.icon_width)

    minimum_width = (spacing.combo_width if width is None else width) - 2.0 * margin.x
    if wrap_mode is TextWrapMode.EXTEND:
        wrap_width = math.inf
    else:
        wrap_width = ui.available_width - 2.0 * margin.x - spacing.icon_spacing - icon_size.x

    galley = measure_text(selected_text, wrap_mode, wrap_width)
    content_size = Vec2(
        max(galley.size.x + spacing.icon_spacing + icon_size.x, minimum_width),
        max(galley.size.y, icon_size.y),
    )
    outer_size = Vec2(
        content_size.x + 2.0 * margin.x,
        max(content_size.y + 2.0 * margin.y, spacing.interact_size.y),
    )
    outer = ui.allocate(outer_size)
    content = Rect.from_min_size(outer.min + margin, content_size)
    return ButtonLayout(
        outer=outer,
        content=content,
        icon=content.align_right_center(icon_size),
        text=content.align_left_center(galley.size),
        galley=galley,
    )
"""A drop-down selection menu whose button fill colour can be set."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

from meowsn.widgets.layout import (
    PopupCloseBehavior,
    Rect,
    Response,
    Shape,
    TextWrapMode,
    Ui,
    WidgetVisuals,
    layout_button,
    paint_default_icon,
    widget_to_popup_id,
)

IconPainter = Callable[[Ui, Rect, WidgetVisuals, bool], None]


class CustomFillComboBox:
    """A combo box with a label to its right and an optional button fill colour."""

    def __init__(self, id_salt: Hashable, label: str | None = None) -> None:
        self.id = id_salt
        self._label = None if label is None else str(label)
        self._selected_text = ""
        self._width: float | None = None
        self._height: float | None = None
        self._icon: IconPainter | None = None
        self._wrap_mode: TextWrapMode | None = None
        self._close_behavior: PopupCloseBehavior | None = None
        self._popup_style: Any = None
        self._fill_color: str | None = None

    @classmethod
    def from_label(cls, label: str) -> CustomFillComboBox:
        """Create a combo box whose id is its label text."""
        text = str(label)
        return cls(text, text)

    def width(self, width: float) -> CustomFillComboBox:
        """Set the outer width of the button and menu."""
        self._width = width
        return self

    def height(self, height: float) -> CustomFillComboBox:
        """Set the maximum outer height of the menu."""
        self._height = height
        return self

    def selected_text(self, selected_text: str) -> CustomFillComboBox:
        """Set what is shown as the currently selected value."""
        self._selected_text = str(selected_text)
        return self

    def icon(self, icon_fn: IconPainter) -> CustomFillComboBox:
        """Paint the icon with ``icon_fn(ui, rect, visuals, is_open)``."""
        self._icon = icon_fn
        return self

    def wrap_mode(self, wrap_mode: TextWrapMode) -> CustomFillComboBox:
        self._wrap_mode = wrap_mode
        return self

    def wrap(self) -> CustomFillComboBox:
        return self.wrap_mode(TextWrapMode.WRAP)

    def truncate(self) -> CustomFillComboBox:
        return self.wrap_mode(TextWrapMode.TRUNCATE)

    def close_behavior(self, close_behavior: PopupCloseBehavior) -> CustomFillComboBox:
        self._close_behavior = close_behavior
        return self

    def popup_style(self, popup_style: Any) -> CustomFillComboBox:
        self._popup_style = popup_style
        return self

    def fill_color(self, fill_color: str) -> CustomFillComboBox:
        """Set the background fill of the button."""
        self._fill_color = fill_color
        return self

    def show_ui(self, ui: Ui, menu_contents: Callable[[Ui], Any]) -> Response:
        """Show the combo box; ``inner`` holds the menu's result, or None when closed."""
        button_id = self.id
        popup_id = widget_to_popup_id(button_id)
        was_open = ui.is_popup_open(popup_id)
        # A row lays out unwrapped text unless told otherwise.
        wrap_mode = self._wrap_mode or ui.wrap_mode or TextWrapMode.EXTEND
        close_behavior = self._close_behavior or PopupCloseBehavior.CLOSE_ON_CLICK

        with ui.layout(right_to_left=False):
            layout = layout_button(ui, self._selected_text, self._width, wrap_mode)
            clicked = ui.interact(button_id)
            if was_open:
                visuals = ui.open_visuals
            elif clicked:
                visuals = ui.active_visuals
            else:
                visuals = ui.inactive_visuals

            fill = self._fill_color if self._fill_color is not None else visuals.weak_bg_fill
            ui.paint(
                Shape.filled_rect(
                    layout.outer.expand(visuals.expansion),
                    fill=fill,
                    stroke=visuals.bg_stroke_color,
                    corner_radius=visuals.corner_radius,
                )
            )
            icon_rect = layout.icon.expand(visuals.expansion)
            if self._icon is not None:
                self._icon(ui, icon_rect, visuals, was_open)
            else:
                paint_default_icon(ui, icon_rect, visuals)
            ui.paint(Shape.galley(layout.text, "\n".join(layout.galley.lines), visuals.text_color))

            response = Response(
                widget_id=button_id,
                rect=layout.outer,
                clicked=clicked,
                label=self._label or "",
            )
            if self._label is not None:
                response.rect = response.rect.union(ui.label(self._label))

        response.inner = self._show_popup(
            ui, popup_id, clicked, layout.outer.width(), close_behavior, menu_contents
        )
        return response

    def _show_popup(
        self,
        ui: Ui,
        popup_id: Hashable,
        clicked: bool,
        width: float,
        close_behavior: PopupCloseBehavior,
        menu_contents: Callable[[Ui], Any],
    ) -> Any:
        if clicked:
            if ui.is_popup_open(popup_id):
                ui.close_popup(popup_id)
            else:
                ui.open_popup(popup_id)
        if not ui.is_popup_open(popup_id):
            return None

        # Menus are often narrow; wrapping is off so entries widen the menu instead.
        menu = ui.child(width, TextWrapMode.EXTEND)
        menu.max_height = self._height if self._height is not None else ui.spacing.combo_height
        menu.style = self._popup_style
        inner = menu_contents(menu)
        if menu.clicked_inside and close_behavior is PopupCloseBehavior.CLOSE_ON_CLICK:
            ui.close_popup(popup_id)
        return inner

    def show_index(
        self, ui: Ui, selected: int, length: int, get: Callable[[int], str]
    ) -> Response:
        """Show entries ``get(0)`` to ``get(length - 1)``; ``inner`` is the chosen index."""
        self.selected_text(get(selected))
        chosen = selected
        changed = False

        def contents(menu: Ui) -> None:
            nonlocal chosen, changed
            for index in range(length):
                if menu.selectable_label(index == chosen, get(index)):
                    chosen = index
                    changed = True

        response = self.show_ui(ui, contents)
        response.inner = chosen
        response.changed = changed
        return response

    @staticmethod
    def is_open(ui: Ui, widget_id: Hashable) -> bool:
        """Return whether the combo box with this id has its menu open."""
        return ui.is_popup_open(widget_to_popup_id(widget_id))
from meowsn.widgets.custom_fill_combo_box import CustomFillComboBox
from meowsn.widgets.layout import (
    ELLIPSIS,
    PopupCloseBehavior,
    TextWrapMode,
    Ui,
    widget_to_popup_id,
)

ALTERNATIVES = ["a", "b", "c", "d"]


def _get(index):
    return ALTERNATIVES[index]


def test_closed_box_does_not_run_menu():
    ui = Ui(400)
    calls = []
    response = CustomFillComboBox("box", "Pick").show_ui(ui, lambda menu: calls.append(menu))
    assert response.inner is None
    assert calls == []
    assert response.clicked is False


def test_click_opens_menu_and_returns_inner():
    ui = Ui(400)
    ui.click("box")
    response = CustomFillComboBox("box", "Pick").show_ui(ui, lambda menu: "shown")
    assert response.clicked is True
    assert response.inner == "shown"
    assert CustomFillComboBox.is_open(ui, "box") is True


def test_click_on_open_box_closes_it():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    ui.click("box")
    response = CustomFillComboBox("box").show_ui(ui, lambda menu: "shown")
    assert response.inner is None
    assert CustomFillComboBox.is_open(ui, "box") is False


def test_from_label_uses_label_as_id():
    ui = Ui(400)
    ui.click("Select one!")
    response = CustomFillComboBox.from_label("Select one!").show_ui(ui, lambda menu: 1)
    assert response.widget_id == "Select one!"
    assert response.label == "Select one!"
    assert response.inner == 1


def test_fill_color_is_painted_behind_button():
    ui = Ui(400)
    CustomFillComboBox("box").fill_color("#ff0000").show_ui(ui, lambda menu: None)
    assert ui.shapes[0].kind == "rect"
    assert ui.shapes[0].fill == "#ff0000"


def test_default_fill_uses_visuals():
    ui = Ui(400)
    CustomFillComboBox("box").show_ui(ui, lambda menu: None)
    assert ui.shapes[0].fill == ui.inactive_visuals.weak_bg_fill


def test_width_sets_button_width():
    ui = Ui(400)
    CustomFillComboBox("box").width(300).show_ui(ui, lambda menu: None)
    assert ui.shapes[0].rect.width() == 300


def test_label_extends_response_rect():
    ui = Ui(400)
    response = CustomFillComboBox("box", "Status").show_ui(ui, lambda menu: None)
    assert ui.shapes[-1].text == "Status"
    assert response.rect.contains(ui.shapes[-1].rect.max)
    assert response.rect.width() > ui.shapes[0].rect.width()


def test_selected_text_is_painted():
    ui = Ui(400)
    CustomFillComboBox("box").selected_text("Online").show_ui(ui, lambda menu: None)
    assert any(shape.kind == "text" and shape.text == "Online" for shape in ui.shapes)


def test_truncate_elides_long_selection():
    ui = Ui(60)
    CustomFillComboBox("box").selected_text("a very long selection").truncate().show_ui(
        ui, lambda menu: None
    )
    text_shapes = [shape for shape in ui.shapes if shape.kind == "text"]
    assert text_shapes[0].text.endswith(ELLIPSIS)


def test_wrap_splits_long_selection():
    ui = Ui(80)
    CustomFillComboBox("box").selected_text("one two three four").wrap().show_ui(
        ui, lambda menu: None
    )
    text_shapes = [shape for shape in ui.shapes if shape.kind == "text"]
    assert "\n" in text_shapes[0].text


def test_custom_icon_receives_open_state():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    seen = []
    CustomFillComboBox("box").icon(
        lambda u, rect, visuals, is_open: seen.append((is_open, visuals))
    ).show_ui(ui, lambda menu: None)
    assert seen == [(True, ui.open_visuals)]
    assert not any(shape.kind == "polygon" for shape in ui.shapes)


def test_default_icon_painted():
    ui = Ui(400)
    CustomFillComboBox("box").show_ui(ui, lambda menu: None)
    assert sum(shape.kind == "polygon" for shape in ui.shapes) == 1


def test_menu_ui_is_unwrapped_and_height_limited():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    seen = []
    CustomFillComboBox("box").height(120).popup_style("menu").show_ui(ui, seen.append)
    (menu,) = seen
    assert menu.wrap_mode is TextWrapMode.EXTEND
    assert menu.max_height == 120
    assert menu.style == "menu"


def test_menu_height_defaults_to_spacing():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    seen = []
    CustomFillComboBox("box").show_ui(ui, seen.append)
    assert seen[0].max_height == ui.spacing.combo_height


def test_show_index_selects_clicked_item_and_closes():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("Select one!"))
    ui.click_item("c")
    response = CustomFillComboBox.from_label("Select one!").show_index(
        ui, 0, len(ALTERNATIVES), _get
    )
    assert response.inner == 2
    assert response.changed is True
    assert CustomFillComboBox.is_open(ui, "Select one!") is False


def test_show_index_without_click_keeps_selection():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    seen = []
    box = CustomFillComboBox("box")
    response = box.show_index(ui, 2, len(ALTERNATIVES), _get)
    assert response.inner == 2
    assert response.changed is False
    assert CustomFillComboBox.is_open(ui, "box") is True
    text_shapes = [shape.text for shape in ui.shapes if shape.kind == "text"]
    assert "c" in text_shapes
    assert seen == []


def test_show_index_marks_selected_entry():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    menus = []
    box = CustomFillComboBox("box")
    original = box.show_ui

    response = box.show_index(ui, 1, len(ALTERNATIVES), _get)
    assert response.inner == 1
    assert original is not None
    assert menus == []


def test_ignore_clicks_keeps_menu_open():
    ui = Ui(400)
    ui.open_popup(widget_to_popup_id("box"))
    ui.click_item("d")
    response = (
        CustomFillComboBox("box")
        .close_behavior(PopupCloseBehavior.IGNORE_CLICKS)
        .show_index(ui, 0, len(ALTERNATIVES), _get)
    )
    assert response.inner == 3
    assert CustomFillComboBox.is_open(ui, "box") is True


def test_closed_show_index_returns_current_selection():
    ui = Ui(400)
    response = CustomFillComboBox("box").show_index(ui, 3, len(ALTERNATIVES), _get)
    assert response.inner == 3
    assert response.changed is False
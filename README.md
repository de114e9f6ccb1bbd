# meowsn

Building blocks for a lightweight MSN-style chat client:

- `meowsn.storage` keeps a local SQLite database of contacts, display
  pictures and message history.
- `meowsn.widgets` holds a headless layout model and two drop-down combo
  boxes built on it: `CustomFillComboBox`, whose button fill colour can be
  set, and `LeftLabelComboBox`, which is laid out right to left so that its
  label ends up on the left.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Storage

`Database(data_dir=None)` opens (or creates) `meowsn.db` in the given
directory, creating the directory and the `display_pictures`, `users` and
`messages` tables as needed. Without a directory it uses
`default_data_dir()`, the per-user data directory from `platformdirs`.
Both move a data directory or database file left under the application's
earlier name into place. `Database` is a context manager; `close()` closes
the connection. One connection is shared, guarded by a lock, so a
`Database` may be used from several threads.

```python
from meowsn.storage import Database, Message

with Database("/tmp/meowsn-data") as db:
    db.insert_user_if_not_in_db("alice@example.com")
    db.update_personal_message("alice@example.com", "Out for lunch")

    db.insert_display_picture(b"\x89PNG...", "pic-hash")
    db.update_user_display_picture("alice@example.com", "pic-hash")
    user = db.select_user("alice@example.com")
    print(user.personal_message, user.display_picture.hash)

    db.insert_message(Message(
        sender="alice@example.com",
        receiver="bob@example.com",
        text="hi!",
        bold=True,
    ))
    recent = db.select_messages("alice@example.com", "bob@example.com", 50)
```

What the methods do:

- `select_user_emails()` – every stored e-mail address.
- `select_user(email)` – a `User` with `personal_message` and
  `display_picture` (a `DisplayPicture` with `data` and `hash`). Only users
  that have a display picture are found; otherwise `NoRowsError` is raised.
- `select_display_picture_data(hash)` – the picture bytes, or `NoRowsError`.
- `select_messages(a, b, limit)` – up to `limit` messages between two
  users, newest first.
- `select_all_messages(a, b)` – every message between two users, in the
  order they were stored.
- `select_messages_by_session_id(session_id, limit)` – up to `limit`
  messages of a session, newest first.
- `insert_user_if_not_in_db(email)`, `insert_message(message)`,
  `update_personal_message(email, text)`, `delete_user(email)`.
- `insert_display_picture(data, hash)` – a hash already stored raises
  `sqlite3.IntegrityError`.
- `update_user_display_picture(email, hash)` – returns the number of users
  updated; an unknown hash raises `NoRowsError`.

`NoRowsError` is a `LookupError`. Messages read back have `is_history=True`,
`color="0"` and `errored=False`; those three fields are not stored.

## Combo boxes

`meowsn.widgets.layout` provides a small layout model: `Vec2`, `Rect`,
`Spacing`, `WidgetVisuals`, `Shape`, `Response`, the `TextWrapMode` and
`PopupCloseBehavior` enums, and `Ui`. A `Ui` is a single row of widgets
that records the shapes painted into `ui.shapes`, which popups are open,
and clicks queued with `ui.click(widget_id)` and `ui.click_item(text)`.
Text is measured in fixed-width glyphs (`measure_text`).

Each call to `show_ui` or `show_index` draws one frame. A click on the
button toggles the menu; with the default
`PopupCloseBehavior.CLOSE_ON_CLICK`, choosing an entry closes it.

```python
from meowsn.widgets.layout import Ui
from meowsn.widgets.custom_fill_combo_box import CustomFillComboBox

ui = Ui(available_width=300.0)
options = ["Online", "Busy", "Away"]

def status_box():
    return CustomFillComboBox.from_label("Status").fill_color("#202020")

ui.click("Status")                       # open the menu
status_box().show_index(ui, 0, len(options), lambda i: options[i])

ui.click_item("Busy")                    # choose an entry
response = status_box().show_index(ui, 0, len(options), lambda i: options[i])
print(response.inner, response.changed)  # 1 True
print(CustomFillComboBox.is_open(ui, "Status"))  # False
```

`show_ui(ui, menu_contents)` calls `menu_contents` with a menu `Ui` while
the menu is open and puts its result in `response.inner` (`None` when
closed). `show_index` puts the selected index in `response.inner` and sets
`response.changed` when it changed.

The builder methods `width`, `height`, `selected_text`, `icon`,
`wrap_mode`, `wrap`, `truncate`, `close_behavior` and `popup_style` (and
`fill_color` on `CustomFillComboBox`) return the combo box, so calls can be
chained. `icon(fn)` replaces the default triangle with
`fn(ui, rect, visuals, is_open)`. `LeftLabelComboBox` has the same methods
except `fill_color`; its button is filled with `ui.window_fill`.

## What this package does not do

It has no network client, no chat protocol and no command to run. The
widgets compute layout and record shapes; they do not draw to a screen or
read input from a real window.
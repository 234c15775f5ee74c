"""Widget ID constants for the TUI.

All widget IDs used in the TUI are defined here to prevent test breakage
when refactoring UI structure.
"""


class WidgetIds:
    # Track list
    TRACKS_TABLE = "tracks_table"
    TRACKS_EMPTY = "tracks_empty"

    # Edit track form
    EDIT_TRACK = "edit_track"
    TITLE_INPUT = "track_title_input"
    INFO_TABLE = "track_info_table"
    DELETE_BTN = "delete_track_btn"
    SAVE_BTN = "save_track_btn"

    # Color picker
    COLOR_MODAL = "color_modal"
    COLOR_SEARCH = "color_search"
    COLOR_CUSTOM = "color_custom"
    PALETTE_TABLE = "palette_table"

    # Group picker
    GROUP_MODAL = "group_modal"
    GROUP_TABLE = "group_table"

    # Small modals
    NEW_GROUP_MODAL = "new_group_modal"
    NEW_GROUP_INPUT = "new_group_input"
    NEW_GROUP_ERROR = "new_group_error"
    CREATE_BTN = "create_btn"
    CANCEL_BTN = "cancel_btn"
    CONFIRM_MODAL = "confirm_modal"
    CONFIRM_YES_BTN = "confirm_yes_btn"
    CONFIRM_NO_BTN = "confirm_no_btn"
    INFO_MODAL = "info_modal"


# Row key for the trailing "New group…" entry in the group picker.
NEW_GROUP_ROW_KEY = "__new_group__"

# Column key for the value column in the edit form table.
VALUE_COLUMN_KEY = "value"

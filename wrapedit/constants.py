"""Constants and configuration for the wrapedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Document layout
    STARTING_TEXT_POSITION_X = 5.0  # Left edge of every line
    STARTING_TEXT_POSITION_Y = 0.0  # Top edge of the first line
    MARGIN = 5  # Subtracted from the window width to get the wrap width
    STARTING_WINDOW_WIDTH = 500
    STARTING_WINDOW_HEIGHT = 500

    # Fonts
    STARTING_FONT_NAME = "Verdana"
    STARTING_FONT_SIZE = 12
    FONT_SIZE_STEP = 4  # Points added/removed per font size command

    # History
    UNDO_CAPACITY = 100  # Oldest undo event is evicted past this

    # Terminal host
    TERMINAL_ORIGIN_X = 0.0
    TERMINAL_MARGIN = 1  # Keep the last column free for the cursor
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Status messages
    NOTHING_TO_WRITE_MESSAGE = "There is nothing to write."
    SAVED_MESSAGE = "Successfully saved file to {}"
    SAVE_ERROR_MESSAGE = "Error when saving {}: {}"
    LOAD_ERROR_MESSAGE = "Error when loading {}: {}"

"""wrapedit - a word-wrapping text editor for the terminal.

Usage:
    wrapedit [--version] [FILE]

Controls:
    Arrow keys: Navigate cursor
    Ctrl-S: Save file
    Ctrl-Q: Quit (prompts to save if modified)
    Ctrl-Z / Ctrl-Y: Undo / redo
    Alt-= / Alt--: Grow / shrink the font
    Type to insert text, Enter for a new line, Backspace to delete
"""

import argparse
from importlib.metadata import PackageNotFoundError, version

from .editor import Editor


def _version() -> str:
    try:
        return version("wrapedit")
    except PackageNotFoundError:
        return "unknown"


def main(argv=None):
    """Entry point for the editor."""
    parser = argparse.ArgumentParser(prog="wrapedit", description="Word-wrapping text editor")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("file", nargs="?", help="document to open or create")
    args = parser.parse_args(argv)

    editor = Editor()
    if args.file:
        editor.load_file(args.file)
    editor.run()

    print("\nGoodbye!")


if __name__ == "__main__":
    main()

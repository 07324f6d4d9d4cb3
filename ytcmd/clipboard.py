from __future__ import annotations


class ClipboardUnavailable(RuntimeError):
    pass


def copy_to_clipboard(text: str) -> None:
    """Write text to the system clipboard through a hidden Tk root.

    On X11 the selection is owned by the Tk process, so some desktops drop it
    once we exit unless a clipboard manager picks it up.
    """
    try:
        import tkinter as tk
    except ImportError as e:
        raise ClipboardUnavailable("tkinter is not available") from e

    try:
        root = tk.Tk()
    except tk.TclError as e:
        # Typically no display (SSH session, CI).
        raise ClipboardUnavailable(str(e)) from e

    try:
        root.withdraw()
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update()
    except tk.TclError as e:
        raise ClipboardUnavailable(str(e)) from e
    finally:
        root.destroy()

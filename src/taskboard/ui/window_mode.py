# Rev 0.7.0

# ui/window_mode.py
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def _available_rect(win) -> QRect:
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    return screen.availableGeometry()


def restore_window(win, settings: dict) -> None:
    """Size the main window from saved settings, clamped to the screen."""
    rect = _available_rect(win)
    w = min(int(settings.get("width", 1280)), rect.width())
    h = min(int(settings.get("height", 760)), rect.height())
    win.resize(w, h)
    if settings.get("is_maximized"):
        win.showMaximized()
    else:
        win.show()


def lock_dialog_fixed(win, *, width_ratio=0.6, height_ratio=0.7):
    """
    For modal dialogs: keep them *not* maximized, but non-resizable and sized
    as a fraction of the current screen.
    """
    rect = _available_rect(win)
    w = int(rect.width() * width_ratio)
    h = int(rect.height() * height_ratio)
    win.setFixedSize(w, h)
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)

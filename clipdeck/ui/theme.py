"""Light and dark stylesheets."""

from __future__ import annotations

from PySide6.QtWidgets import QWidget

_PALETTES = {
    "dark": {
        "background": "#0f1320",
        "surface": "#1a2033",
        "text": "#e6e9f2",
        "muted": "#8c93a8",
        "accent": "#c89b3c",
        "border": "#2b334a",
    },
    "light": {
        "background": "#f4f5f9",
        "surface": "#ffffff",
        "text": "#1b1f2b",
        "muted": "#5d6478",
        "accent": "#0a7bbf",
        "border": "#d5d9e4",
    },
}

THEME_ICONS = {"dark": "🌙", "light": "☀️"}

_TEMPLATE = """
QWidget {{ background-color: {background}; color: {text}; }}
QFrame#clipCard {{
    background-color: {surface};
    border: 1px solid {border};
    border-radius: 10px;
}}
QLabel#clipTitle {{ font-size: 15px; font-weight: bold; }}
QLabel#clipMeta, QLabel#clipNotePlaceholder, QLabel#emptyState {{ color: {muted}; }}
QLabel#tagPill {{
    border: 1px solid {accent};
    border-radius: 8px;
    padding: 1px 6px;
    color: {accent};
}}
QPushButton#tagChip:checked {{ background-color: {accent}; color: {background}; }}
"""


def stylesheet(theme: str) -> str:
    palette = _PALETTES.get(theme, _PALETTES["dark"])
    return _TEMPLATE.format(**palette)


def apply_theme(widget: QWidget, theme: str) -> None:
    widget.setStyleSheet(stylesheet(theme))

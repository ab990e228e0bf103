"""Filter controls: search, facet selectors, tag chips, sort, and favorites."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from clipdeck.model.facets import Facets
from clipdeck.model.filters import ALL, SORT_MODES, FilterState

SORT_LABELS = {
    "newest": "Newest first",
    "oldest": "Oldest first",
    "champion": "Champion A–Z",
}
TAGS_PLACEHOLDER = "Tags will appear after your clips load."


class FilterPanel(QWidget):
    """Emits one signal per user change; holds no filter state of its own.

    The owner applies each change to its FilterState and calls
    :meth:`sync` or :meth:`set_facets` to reflect the result.
    """

    search_changed = Signal(str)
    champion_changed = Signal(str)
    role_changed = Signal(str)
    category_changed = Signal(str)
    sort_changed = Signal(str)
    favorites_toggled = Signal(bool)
    tag_toggled = Signal(str)
    reset_requested = Signal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._tag_chips: dict[str, QPushButton] = {}
        self.tags_placeholder: QLabel | None = None
        self._setup_ui()
        self._connect_signals()
        self.set_facets(Facets(), FilterState())

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        controls = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search titles, champions, notes…")
        controls.addWidget(self.search_edit, stretch=2)

        self.champion_combo = QComboBox()
        self.role_combo = QComboBox()
        self.category_combo = QComboBox()
        for combo in (self.champion_combo, self.role_combo, self.category_combo):
            controls.addWidget(combo, stretch=1)

        self.sort_combo = QComboBox()
        for mode in SORT_MODES:
            self.sort_combo.addItem(SORT_LABELS[mode], mode)
        controls.addWidget(self.sort_combo)

        self.favorites_check = QCheckBox("Favorites only")
        controls.addWidget(self.favorites_check)

        self.reset_button = QPushButton("Reset filters")
        controls.addWidget(self.reset_button)
        layout.addLayout(controls)

        self.tag_row = QHBoxLayout()
        layout.addLayout(self.tag_row)

    def _connect_signals(self) -> None:
        self.search_edit.textChanged.connect(lambda text: self.search_changed.emit(text.strip()))
        self.champion_combo.currentIndexChanged.connect(
            lambda _i: self.champion_changed.emit(self.champion_combo.currentData())
        )
        self.role_combo.currentIndexChanged.connect(
            lambda _i: self.role_changed.emit(self.role_combo.currentData())
        )
        self.category_combo.currentIndexChanged.connect(
            lambda _i: self.category_changed.emit(self.category_combo.currentData())
        )
        self.sort_combo.currentIndexChanged.connect(
            lambda _i: self.sort_changed.emit(self.sort_combo.currentData())
        )
        self.favorites_check.toggled.connect(self.favorites_toggled)
        self.reset_button.clicked.connect(self.reset_requested)

    # ── Population ────────────────────────────────────────────────────

    def set_facets(self, facets: Facets, filters: FilterState) -> None:
        """Rebuild selector options and tag chips, then show *filters*."""
        self._populate_combo(self.champion_combo, "All champions", facets.champions)
        self._populate_combo(self.role_combo, "All roles", facets.roles)
        self._populate_combo(self.category_combo, "All categories", facets.categories)
        self._rebuild_tag_chips(facets.tags)
        self.sync(filters)

    @staticmethod
    def _populate_combo(combo: QComboBox, all_label: str, values: list[str]) -> None:
        combo.blockSignals(True)
        combo.clear()
        combo.addItem(all_label, ALL)
        for value in values:
            combo.addItem(value, value)
        combo.blockSignals(False)

    def _rebuild_tag_chips(self, tags: list[str]) -> None:
        while self.tag_row.count():
            item = self.tag_row.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self._tag_chips = {}
        self.tags_placeholder = None

        if not tags:
            self.tags_placeholder = QLabel(TAGS_PLACEHOLDER)
            self.tag_row.addWidget(self.tags_placeholder)
            return

        for tag in tags:
            chip = QPushButton(tag)
            chip.setObjectName("tagChip")
            chip.setCheckable(True)
            chip.clicked.connect(lambda _checked, t=tag: self.tag_toggled.emit(t))
            self.tag_row.addWidget(chip)
            self._tag_chips[tag] = chip
        self.tag_row.addStretch()

    # ── Sync ──────────────────────────────────────────────────────────

    def sync(self, filters: FilterState) -> None:
        """Show *filters* in the controls without emitting change signals."""
        widgets = (
            self.search_edit,
            self.champion_combo,
            self.role_combo,
            self.category_combo,
            self.sort_combo,
            self.favorites_check,
        )
        for widget in widgets:
            widget.blockSignals(True)
        try:
            if self.search_edit.text().strip() != filters.search:
                self.search_edit.setText(filters.search)
            self._select(self.champion_combo, filters.champion)
            self._select(self.role_combo, filters.role)
            self._select(self.category_combo, filters.category)
            self._select(self.sort_combo, filters.sort)
            self.favorites_check.setChecked(filters.favorites_only)
        finally:
            for widget in widgets:
                widget.blockSignals(False)

        for tag, chip in self._tag_chips.items():
            chip.setChecked(tag in filters.tags)

    @staticmethod
    def _select(combo: QComboBox, value: str) -> None:
        index = combo.findData(value)
        combo.setCurrentIndex(index if index >= 0 else 0)

    @property
    def tag_chips(self) -> dict[str, QPushButton]:
        return dict(self._tag_chips)

"""Main window: header, filter panel, and the scrolling clip grid."""

from __future__ import annotations

import logging
from dataclasses import replace

from PySide6.QtCore import QPoint, QRect, Qt, QTimer
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from clipdeck.config import Preferences
from clipdeck.model.catalog import (
    CatalogState,
    begin_loading,
    fail_loading,
    finish_loading,
    plan_view,
    refresh_facets,
    toggle_favorite,
    with_filters,
)
from clipdeck.model.clips import normalize_payload
from clipdeck.model.facets import Facets
from clipdeck.model.filters import FilterState, reset_filters, toggle_tag
from clipdeck.ui.card_grid import CardGrid
from clipdeck.ui.filter_panel import FilterPanel
from clipdeck.ui.theme import THEME_ICONS, apply_theme
from clipdeck.workers.fetch_worker import FetchWorker
from clipdeck.yaml_config import DEFAULT_API_ENDPOINT

logger = logging.getLogger(__name__)

ADD_CLIP_MESSAGE = "Use the provided schema to add clips from your database tool."
SCROLL_TOP_THRESHOLD = 280
WORKER_SHUTDOWN_MS = 2000


class MainWindow(QMainWindow):
    """Summoner Highlights browser.

    All catalog state lives in ``self.state`` and is only replaced by the
    model's update functions; every replacement is followed by an explicit
    :meth:`render`.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_API_ENDPOINT,
        preferences: Preferences | None = None,
        timeout: float | None = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Summoner Highlights")
        self.setMinimumSize(960, 640)

        self.endpoint = endpoint
        self.timeout = timeout
        self.preferences = preferences or Preferences()
        self.state = CatalogState(filters=FilterState(muted=self.preferences.start_muted))
        self.facets = Facets()
        self._worker: FetchWorker | None = None

        self._setup_ui()
        self._connect_signals()
        self._apply_theme()
        self.render()

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Header
        header = QHBoxLayout()
        title = QLabel("Summoner Highlights")
        title.setObjectName("clipTitle")
        header.addWidget(title)
        header.addStretch()
        self.clips_count_label = QLabel()
        header.addWidget(self.clips_count_label)
        self.mute_check = QCheckBox("Start muted")
        self.mute_check.setChecked(self.state.filters.muted)
        header.addWidget(self.mute_check)
        self.theme_button = QPushButton()
        header.addWidget(self.theme_button)
        self.add_clip_button = QPushButton("Add clip")
        header.addWidget(self.add_clip_button)
        layout.addLayout(header)

        self.filter_panel = FilterPanel()
        layout.addWidget(self.filter_panel)

        self.empty_state_label = QLabel()
        self.empty_state_label.setObjectName("emptyState")
        self.empty_state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_state_label.setWordWrap(True)
        layout.addWidget(self.empty_state_label)

        self.card_grid = CardGrid()
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(self.card_grid)
        layout.addWidget(self.scroll_area, stretch=1)

        footer = QHBoxLayout()
        footer.addStretch()
        self.scroll_top_button = QPushButton("↑ Top")
        self.scroll_top_button.setVisible(False)
        footer.addWidget(self.scroll_top_button)
        layout.addLayout(footer)

        # Coalesces reveal checks from render, scroll and resize
        self._reveal_timer = QTimer(self)
        self._reveal_timer.setSingleShot(True)
        self._reveal_timer.setInterval(0)

    def _connect_signals(self) -> None:
        panel = self.filter_panel
        panel.search_changed.connect(lambda text: self._update_filters(search=text))
        panel.champion_changed.connect(lambda value: self._update_filters(champion=value))
        panel.role_changed.connect(lambda value: self._update_filters(role=value))
        panel.category_changed.connect(lambda value: self._update_filters(category=value))
        panel.sort_changed.connect(lambda value: self._update_filters(sort=value))
        panel.favorites_toggled.connect(lambda checked: self._update_filters(favorites_only=checked))
        panel.tag_toggled.connect(self._on_tag_toggled)
        panel.reset_requested.connect(self._on_reset)

        self.card_grid.favorite_toggled.connect(self._on_favorite_toggled)
        self.mute_check.toggled.connect(self._on_mute_toggled)
        self.theme_button.clicked.connect(self._toggle_theme)
        self.add_clip_button.clicked.connect(self._show_add_clip_info)
        self.scroll_top_button.clicked.connect(self._scroll_to_top)
        self.scroll_area.verticalScrollBar().valueChanged.connect(self._on_scrolled)
        self._reveal_timer.timeout.connect(self._reveal_visible_cards)

    # ── Loading ───────────────────────────────────────────────────────

    def load_clips(self) -> None:
        """Fetch the catalog in the background and render the result."""
        self.state = begin_loading(self.state)
        self.render()

        self._worker = FetchWorker(self.endpoint, timeout=self.timeout, parent=self)
        self._worker.complete.connect(self._on_fetch_complete)
        self._worker.error.connect(self._on_fetch_error)
        self._worker.start()

    def _on_fetch_complete(self, payload) -> None:
        clips = normalize_payload(payload)
        logger.info("Loaded %d clips from %s", len(clips), self.endpoint)
        self.state = finish_loading(self.state, clips)
        self._hydrate_filters()
        self.render()

    def _on_fetch_error(self, message: str) -> None:
        logger.error("Failed to load clips: %s", message)
        self.state = fail_loading(self.state)
        self._hydrate_filters()
        self.render()

    def _hydrate_filters(self) -> None:
        self.state, self.facets = refresh_facets(self.state)
        self.filter_panel.set_facets(self.facets, self.state.filters)

    # ── Rendering ─────────────────────────────────────────────────────

    def render(self) -> None:
        plan = plan_view(self.state)
        self.card_grid.set_clips(plan.clips, muted=self.state.filters.muted)
        self.clips_count_label.setText(plan.count_text)
        if plan.empty_message is None:
            self.empty_state_label.setVisible(False)
        else:
            self.empty_state_label.setText(plan.empty_message)
            self.empty_state_label.setVisible(True)
        self._reveal_timer.start()

    def _reveal_visible_cards(self) -> None:
        # Cards from the latest render may not be placed yet
        grid = self.card_grid
        grid.resize(grid.size().expandedTo(grid.minimumSizeHint()))
        grid.layout().activate()

        viewport = self.scroll_area.viewport()
        offset = QPoint(-self.card_grid.x(), -self.card_grid.y())
        self.card_grid.reveal_in(QRect(offset, viewport.size()))

    # ── Slots ─────────────────────────────────────────────────────────

    def _update_filters(self, **changes) -> None:
        self.state = with_filters(self.state, replace(self.state.filters, **changes))
        self.render()

    def _on_tag_toggled(self, tag: str) -> None:
        self.state = with_filters(self.state, toggle_tag(self.state.filters, tag))
        self.filter_panel.sync(self.state.filters)
        self.render()

    def _on_reset(self) -> None:
        self.state = with_filters(self.state, reset_filters(self.state.filters))
        self.filter_panel.sync(self.state.filters)
        self.render()

    def _on_favorite_toggled(self, clip_id: str) -> None:
        self.state = toggle_favorite(self.state, clip_id)
        self.render()

    def _on_mute_toggled(self, muted: bool) -> None:
        self.state = with_filters(self.state, replace(self.state.filters, muted=muted))
        self.preferences.start_muted = muted
        self.preferences.save()
        self.card_grid.set_muted(muted)

    def _toggle_theme(self) -> None:
        self.preferences.toggle_theme()
        self.preferences.save()
        self._apply_theme()

    def _apply_theme(self) -> None:
        apply_theme(self, self.preferences.theme)
        self.theme_button.setText(THEME_ICONS.get(self.preferences.theme, THEME_ICONS["dark"]))

    def _show_add_clip_info(self) -> None:
        QMessageBox.information(self, "Add clip", ADD_CLIP_MESSAGE)

    def _on_scrolled(self, value: int) -> None:
        self.scroll_top_button.setVisible(value > SCROLL_TOP_THRESHOLD)
        self._reveal_timer.start()

    def _scroll_to_top(self) -> None:
        self.scroll_area.verticalScrollBar().setValue(0)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._reveal_timer.start()

    def closeEvent(self, event) -> None:
        self.card_grid.clear()
        if self._worker is not None and self._worker.isRunning():
            if not self._worker.wait(WORKER_SHUTDOWN_MS):
                logger.warning("Clip fetch still running at shutdown")
        super().closeEvent(event)

"""Grid of clip cards with single-playback and scroll-reveal policies."""

from __future__ import annotations

from PySide6.QtCore import QRect, Signal, Slot
from PySide6.QtWidgets import QGridLayout, QWidget

from clipdeck.model.clips import Clip
from clipdeck.ui.clip_card import ClipCard

COLUMNS = 3
# Fraction of a card that must be inside the viewport before it fades in
REVEAL_THRESHOLD = 0.15


def visible_fraction(rect: QRect, viewport: QRect) -> float:
    """Share of *rect*'s area that lies inside *viewport* (0-1)."""
    area = rect.width() * rect.height()
    if area <= 0:
        return 0.0
    overlap = rect.intersected(viewport)
    if overlap.isEmpty():
        return 0.0
    return (overlap.width() * overlap.height()) / area


class CardGrid(QWidget):
    """Materializes the visible clip list as ClipCard widgets."""

    favorite_toggled = Signal(str)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._cards: list[ClipCard] = []
        self._layout = QGridLayout(self)
        self._layout.setSpacing(16)

    def set_clips(self, clips: list[Clip], muted: bool = False) -> list[ClipCard]:
        """Replace every card with one per clip, in order."""
        self.clear()
        for i, clip in enumerate(clips):
            card = ClipCard(clip, muted=muted)
            card.favorite_toggled.connect(self.favorite_toggled)
            card.playback_started.connect(self.pause_others)
            self._layout.addWidget(card, i // COLUMNS, i % COLUMNS)
            # Hidden widgets take no layout space
            card.show()
            self._cards.append(card)
        return list(self._cards)

    def clear(self) -> None:
        for card in self._cards:
            card.cleanup()
            self._layout.removeWidget(card)
            card.deleteLater()
        self._cards = []

    @Slot(str)
    def pause_others(self, active_id: str) -> None:
        """Only one clip plays at a time."""
        for card in self._cards:
            if card.clip.id != active_id:
                card.pause()

    def set_muted(self, muted: bool) -> None:
        for card in self._cards:
            card.set_muted(muted)

    def reveal_in(self, viewport: QRect) -> int:
        """Reveal unrevealed cards intersecting *viewport*; return how many."""
        revealed = 0
        for card in self._cards:
            if card.revealed:
                continue
            if visible_fraction(card.geometry(), viewport) >= REVEAL_THRESHOLD:
                card.reveal()
                revealed += 1
        return revealed

    @property
    def cards(self) -> list[ClipCard]:
        return list(self._cards)

    @property
    def card_count(self) -> int:
        return len(self._cards)

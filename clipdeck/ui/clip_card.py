"""Clip card: video player, metadata, tags, and actions for one clip."""

from __future__ import annotations

import logging

from PySide6.QtCore import QPropertyAnimation, Qt, QTimer, QUrl, Signal, Slot
from PySide6.QtGui import QGuiApplication, QPixmap
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from clipdeck.model.clips import Clip, format_date

logger = logging.getLogger(__name__)

FAVORITED_TEXT = "★ Favorited"
NOT_FAVORITED_TEXT = "☆ Mark favorite"
COPY_TEXT = "Copy clip ID"
COPIED_TEXT = "Copied!"
COPY_FAILED_TEXT = "Copy failed"
NOTES_PLACEHOLDER = "Add notes in your database to surface more context here."

COPY_FEEDBACK_MS = 1500
REVEAL_DURATION_MS = 450
MEDIA_WIDTH = 320
MEDIA_HEIGHT = 180

_POSTER_PAGE = 0
_VIDEO_PAGE = 1


def media_url(location: str) -> QUrl:
    """URL for a clip location that may be a web URL or a local path."""
    url = QUrl(location)
    # Single-letter schemes are Windows drive letters
    if len(url.scheme()) > 1:
        return url
    return QUrl.fromLocalFile(location)


def _system_clipboard():
    return QGuiApplication.clipboard()


class ClipCard(QFrame):
    """One clip in the grid.

    The video source is only set on first play, so building a grid of
    cards does not open any media.
    """

    favorite_toggled = Signal(str)  # clip id
    playback_started = Signal(str)  # clip id

    def __init__(self, clip: Clip, muted: bool = False, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("clipCard")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumWidth(MEDIA_WIDTH + 24)
        self.clip = clip
        self.revealed = False
        self._source_loaded = False
        self._animation: QPropertyAnimation | None = None
        self._network: QNetworkAccessManager | None = None

        self._setup_ui()
        self._connect_signals()
        self.set_muted(muted)

        # Hidden until scrolled into view
        self._opacity: QGraphicsOpacityEffect | None = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)

        if clip.thumbnail_url:
            self._load_poster(clip.thumbnail_url)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        # Media: poster until playback starts, then the video surface
        self.media_stack = QStackedWidget()
        self.media_stack.setFixedHeight(MEDIA_HEIGHT)
        self.poster_label = QLabel("▶")
        self.poster_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.video_widget = QVideoWidget()
        self.media_stack.addWidget(self.poster_label)
        self.media_stack.addWidget(self.video_widget)
        layout.addWidget(self.media_stack)

        self.play_button = QPushButton("Play")
        layout.addWidget(self.play_button)

        self.title_label = QLabel(self.clip.title)
        self.title_label.setObjectName("clipTitle")
        self.title_label.setWordWrap(True)
        layout.addWidget(self.title_label)

        self.meta_label = QLabel(
            f"🛡️ {self.clip.role}   🏷️ {self.clip.category}   "
            f"📅 {format_date(self.clip.recorded_at)}"
        )
        self.meta_label.setObjectName("clipMeta")
        layout.addWidget(self.meta_label)

        self.notes_label = QLabel()
        self.notes_label.setWordWrap(True)
        if self.clip.notes:
            self.notes_label.setText(self.clip.notes)
        else:
            self.notes_label.setText(NOTES_PLACEHOLDER)
            self.notes_label.setObjectName("clipNotePlaceholder")
        layout.addWidget(self.notes_label)

        tags_row = QHBoxLayout()
        self.tag_labels: list[QLabel] = []
        for tag in self.clip.tags:
            pill = QLabel(tag)
            pill.setObjectName("tagPill")
            tags_row.addWidget(pill)
            self.tag_labels.append(pill)
        tags_row.addStretch()
        layout.addLayout(tags_row)

        actions = QHBoxLayout()
        self.favorite_button = QPushButton(
            FAVORITED_TEXT if self.clip.favorite else NOT_FAVORITED_TEXT
        )
        self.copy_button = QPushButton(COPY_TEXT)
        actions.addWidget(self.favorite_button)
        actions.addWidget(self.copy_button)
        actions.addStretch()
        layout.addLayout(actions)

        self._copy_timer = QTimer(self)
        self._copy_timer.setSingleShot(True)

        self.player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.player.setAudioOutput(self.audio_output)
        self.player.setVideoOutput(self.video_widget)

    def _connect_signals(self) -> None:
        self.play_button.clicked.connect(self.toggle_playback)
        self.favorite_button.clicked.connect(lambda: self.favorite_toggled.emit(self.clip.id))
        self.copy_button.clicked.connect(self.copy_id)
        self._copy_timer.timeout.connect(self._restore_copy_label)
        self.player.playbackStateChanged.connect(self._on_state_changed)
        self.player.errorOccurred.connect(self._on_error)

    # ── Playback ──────────────────────────────────────────────────────

    @Slot()
    def toggle_playback(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def play(self) -> None:
        if not self._source_loaded:
            self.player.setSource(media_url(self.clip.video_url))
            self._source_loaded = True
        self.player.play()

    def pause(self) -> None:
        if self.is_playing:
            self.player.pause()

    def set_muted(self, muted: bool) -> None:
        self.audio_output.setMuted(muted)

    @property
    def is_muted(self) -> bool:
        return self.audio_output.isMuted()

    @property
    def is_playing(self) -> bool:
        return (
            self.player.playbackState()
            == QMediaPlayer.PlaybackState.PlayingState
        )

    @Slot(QMediaPlayer.PlaybackState)
    def _on_state_changed(self, state: QMediaPlayer.PlaybackState) -> None:
        if state == QMediaPlayer.PlaybackState.PlayingState:
            self.play_button.setText("Pause")
            self.media_stack.setCurrentIndex(_VIDEO_PAGE)
            self.playback_started.emit(self.clip.id)
        else:
            self.play_button.setText("Play")

    def _on_error(self, error: QMediaPlayer.Error, message: str) -> None:
        logger.warning("Media player error for clip %s (%s): %s", self.clip.id, error, message)
        self.player.stop()

    def cleanup(self) -> None:
        """Stop playback and release media resources before the card is discarded."""
        self._copy_timer.stop()
        self.player.stop()
        self.player.setSource(QUrl())
        self.player.setVideoOutput(None)
        self.player.setAudioOutput(None)

    # ── Poster ────────────────────────────────────────────────────────

    def _load_poster(self, location: str) -> None:
        url = media_url(location)
        if url.isLocalFile():
            self._set_poster(QPixmap(url.toLocalFile()))
            return
        self._network = QNetworkAccessManager(self)
        reply = self._network.get(QNetworkRequest(url))
        reply.finished.connect(lambda: self._on_poster_reply(reply))

    def _on_poster_reply(self, reply: QNetworkReply) -> None:
        if reply.error() != QNetworkReply.NetworkError.NoError:
            logger.warning("Poster download failed for clip %s: %s", self.clip.id, reply.errorString())
        else:
            pixmap = QPixmap()
            pixmap.loadFromData(reply.readAll())
            self._set_poster(pixmap)
        reply.deleteLater()

    def _set_poster(self, pixmap: QPixmap) -> None:
        if pixmap.isNull():
            return
        self.poster_label.setPixmap(
            pixmap.scaled(
                MEDIA_WIDTH,
                MEDIA_HEIGHT,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )

    @property
    def has_poster(self) -> bool:
        pixmap = self.poster_label.pixmap()
        return pixmap is not None and not pixmap.isNull()

    # ── Actions ───────────────────────────────────────────────────────

    @Slot()
    def copy_id(self) -> None:
        clipboard = _system_clipboard()
        if clipboard is None:
            logger.error("Clipboard copy failed for clip %s: no clipboard available", self.clip.id)
            self.copy_button.setText(COPY_FAILED_TEXT)
        else:
            clipboard.setText(self.clip.id)
            self.copy_button.setText(COPIED_TEXT)
        self._copy_timer.start(COPY_FEEDBACK_MS)

    def _restore_copy_label(self) -> None:
        self.copy_button.setText(COPY_TEXT)

    # ── Reveal ────────────────────────────────────────────────────────

    def reveal(self) -> None:
        """Fade the card in; later calls are no-ops."""
        if self.revealed:
            return
        self.revealed = True
        self._animation = QPropertyAnimation(self._opacity, b"opacity", self)
        self._animation.setDuration(REVEAL_DURATION_MS)
        self._animation.setStartValue(0.0)
        self._animation.setEndValue(1.0)
        self._animation.finished.connect(self._on_reveal_finished)
        self._animation.start()

    def _on_reveal_finished(self) -> None:
        # The opacity effect interferes with the video surface once visible
        self.setGraphicsEffect(None)
        self._opacity = None

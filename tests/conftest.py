"""Shared test fixtures: offscreen Qt, isolated preferences, sample clips."""

import os

import pytest

# Force offscreen rendering for headless CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from clipdeck import config  # noqa: E402
from clipdeck.model.clips import Clip  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_preferences(tmp_path, monkeypatch):
    """Keep preference writes out of the real home directory."""
    path = tmp_path / "preferences.json"
    monkeypatch.setattr(config, "DEFAULT_PREFERENCES_PATH", path)
    return path


def make_clip(
    clip_id="c1",
    title="Pentakill",
    champion="Yasuo",
    role="Mid",
    category="Teamfight",
    tags=None,
    favorite=False,
    recorded_at="2024-03-04T10:00:00.000Z",
    notes="",
    video_url="v.mp4",
    thumbnail_url="",
):
    return Clip(
        id=clip_id,
        title=title,
        champion=champion,
        role=role,
        category=category,
        tags=list(tags or []),
        video_url=video_url,
        thumbnail_url=thumbnail_url,
        favorite=favorite,
        recorded_at=recorded_at,
        notes=notes,
    )


@pytest.fixture()
def sample_clips():
    return [
        make_clip("1", "Pentakill", "Yasuo", "Mid", "Teamfight", ["ace", "clutch"],
                  favorite=True, recorded_at="2024-03-04T10:00:00.000Z",
                  notes="Baron steal into pentakill"),
        make_clip("2", "Flash outplay", "Ahri", "Mid", "Outplay", ["clutch"],
                  recorded_at="2024-01-15T08:30:00.000Z"),
        make_clip("3", "Dragon steal", "Lee Sin", "Jungle", "Objective", ["steal"],
                  favorite=True, recorded_at="2024-02-20T20:00:00.000Z",
                  notes="Smite war"),
        make_clip("4", "Hook into flash", "Thresh", "Support", "Outplay", [],
                  recorded_at="2023-12-01T12:00:00.000Z"),
    ]

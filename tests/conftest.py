"""Shared fixtures for reel-chart tests."""

import pytest

from reel_chart.data.models import ColumnMapping, DataPoint, TextConfig
from reel_chart.timeline.animator import Composition
from reel_chart.timeline.phases import TimelineConfig

DAY_MS = 86_400_000
JAN_1_2024_MS = 1_704_067_200_000


def make_dataset(*pairs: tuple[float | None, float | None]) -> tuple[DataPoint, ...]:
    """Build a daily dataset starting 2024-01-01 from (series_a, series_b) pairs."""
    return tuple(
        DataPoint(
            date_label=f"day-{index}",
            timestamp=JAN_1_2024_MS + index * DAY_MS,
            series_a=a,
            series_b=b,
        )
        for index, (a, b) in enumerate(pairs)
    )


@pytest.fixture
def mapping() -> ColumnMapping:
    return ColumnMapping(date_column="date", series_a_column="series_a", series_b_column="series_b")


@pytest.fixture
def text_config() -> TextConfig:
    return TextConfig(
        label_a="Revenue",
        label_b="Costs",
        hook_text="Revenue is pulling away",
        takeaway_text="Revenue grew 2x faster than costs",
    )


@pytest.fixture
def reference_config() -> TimelineConfig:
    """15 seconds at 30 fps: hook ends at 45, reveal ends at 375."""
    return TimelineConfig()


@pytest.fixture
def small_config() -> TimelineConfig:
    """Tiny canvas and short reel to keep raster tests fast."""
    return TimelineConfig.for_video(
        10,
        20,
        width=108,
        height=192,
        padding_top=10,
        padding_bottom=10,
        padding_left=5,
        padding_right=5,
        header_space=20,
        footer_space=20,
    )


@pytest.fixture
def composition(text_config: TextConfig) -> Composition:
    dataset = make_dataset(
        (100, 120), (110, 115), (130, 118), (None, 121), (150, 125)
    )
    return Composition(dataset=dataset, text=text_config, highlight_index=2)


@pytest.fixture
def build_dataset():
    return make_dataset

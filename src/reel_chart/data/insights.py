"""Narrative picks over a normalized dataset: highlight point and overall change."""

from .models import NormalizedDataset, Series, SeriesDelta, SeriesPair


def find_highlight_point(dataset: NormalizedDataset) -> int:
    """
    Pick the single most interesting index of the dataset.

    The first crossing of the two series wins. A crossing is an index whose
    ``a - b`` sign differs from the previous index, both points having both
    values. Without a crossing, the index of the largest absolute gap between
    the series is used. Returns 0 when no point has both values.
    """
    max_gap = 0.0
    max_gap_index = 0
    previous_diff: float | None = None

    for index, point in enumerate(dataset):
        if point.series_a is None or point.series_b is None:
            previous_diff = None
            continue

        diff = point.series_a - point.series_b
        if previous_diff is not None and previous_diff * diff < 0:
            return index

        if abs(diff) > max_gap:
            max_gap = abs(diff)
            max_gap_index = index
        previous_diff = diff

    return max_gap_index


def calculate_delta(dataset: NormalizedDataset) -> SeriesPair[SeriesDelta]:
    """Compute the first-to-last change of each series, skipping gaps."""
    return SeriesPair.build(lambda series: _series_delta(dataset, series))


def _series_delta(dataset: NormalizedDataset, series: Series) -> SeriesDelta:
    present = [point.value(series) for point in dataset if point.value(series) is not None]
    if len(dataset) < 2 or not present:
        return SeriesDelta(change=0.0, percent=0.0)

    first, last = present[0], present[-1]
    change = last - first
    percent = change / first * 100 if first != 0 else 0.0
    return SeriesDelta(change=change, percent=percent)

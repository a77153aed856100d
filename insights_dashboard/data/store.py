"""
Owned, lock-guarded holder of the campaign working set and its chart series.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from insights_dashboard.data.generator import (
    generate_campaigns,
    generate_channel_shares,
    generate_chart_points,
)
from insights_dashboard.data.models import (
    IDENTITY_COLUMNS,
    CampaignRecord,
    ChannelShare,
    ChartPoint,
    empty_frame,
    frame_to_records,
    normalize_frame,
    records_to_frame,
)

logger = logging.getLogger(__name__)

RecordsInput = Union[pd.DataFrame, Iterable[CampaignRecord]]


def _as_frame(records: RecordsInput) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return normalize_frame(records)
    return records_to_frame(records)


class RecordStore:
    """Canonical mutable collection of campaign records.

    Every read returns an independent copy and every write swaps in a complete
    new frame while holding the lock, so a reader never observes a partially
    replaced or partially mutated collection.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self._lock = threading.RLock()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._frame = empty_frame()
        self._chart_points: Tuple[ChartPoint, ...] = ()
        self._channel_shares: Tuple[ChannelShare, ...] = ()
        self._version = 0

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._frame)

    def load(self, n: int, chart_days: int = 30) -> pd.DataFrame:
        records = generate_campaigns(n, rng=self._rng)
        chart_points = generate_chart_points(chart_days, rng=self._rng)
        self.replace_all(records, chart_points=chart_points, channel_shares=generate_channel_shares())
        return self.snapshot()

    def replace_all(
        self,
        records: RecordsInput,
        chart_points: Optional[Iterable[ChartPoint]] = None,
        channel_shares: Optional[Iterable[ChannelShare]] = None,
    ) -> None:
        frame = _as_frame(records)
        duplicated = frame["id"][frame["id"].duplicated()].unique().tolist()
        if duplicated:
            raise ValueError(f"Duplicate campaign ids: {duplicated}")

        # Materialise the optional series before taking the lock
        points = tuple(chart_points) if chart_points is not None else None
        shares = tuple(channel_shares) if channel_shares is not None else None

        with self._lock:
            self._frame = frame
            if points is not None:
                self._chart_points = points
            if shares is not None:
                self._channel_shares = shares
            self._version += 1
            version = self._version
        logger.debug("Record store replaced: %d records (version %d)", len(frame), version)

    def mutate_in_place(self, fn: Callable[[CampaignRecord], CampaignRecord]) -> None:
        """Apply `fn` to every record independently and swap the result in atomically."""
        with self._lock:
            current = self._frame
            updated = records_to_frame(fn(record) for record in frame_to_records(current))
            self._check_identity(current, updated)
            self._frame = updated

    def perturb(
        self,
        make_deltas: Callable[[int], Dict[str, np.ndarray]],
        floor: Optional[float] = None,
    ) -> int:
        """Add per-record deltas to numeric performance columns.

        `make_deltas(n)` is called under the lock with the current record count
        and maps each column to an array aligned with the row order. Values are
        optionally floored (e.g. at 0) after the addition. Returns the number of
        records updated.
        """
        with self._lock:
            updated = self._frame.copy()
            deltas = make_deltas(len(updated))
            for column, delta in deltas.items():
                if column in IDENTITY_COLUMNS:
                    raise ValueError(f"Column '{column}' is part of the record identity")
                if len(delta) != len(updated):
                    raise ValueError(
                        f"Delta for '{column}' has {len(delta)} values for {len(updated)} records"
                    )
                values = updated[column].to_numpy() + np.asarray(delta)
                if floor is not None:
                    values = np.maximum(values, floor)
                updated[column] = values.astype(updated[column].dtype)
            self._frame = updated
            return len(updated)

    def snapshot(self) -> pd.DataFrame:
        with self._lock:
            return self._frame.copy()

    def read(self) -> Tuple[pd.DataFrame, List[ChartPoint], List[ChannelShare], int]:
        """Records, chart points, channel shares and version taken under one lock."""
        with self._lock:
            return (
                self._frame.copy(),
                list(self._chart_points),
                list(self._channel_shares),
                self._version,
            )

    def records(self) -> List[CampaignRecord]:
        return frame_to_records(self.snapshot())

    def chart_points(self) -> List[ChartPoint]:
        with self._lock:
            return list(self._chart_points)

    def channel_shares(self) -> List[ChannelShare]:
        with self._lock:
            return list(self._channel_shares)

    @staticmethod
    def _check_identity(before: pd.DataFrame, after: pd.DataFrame) -> None:
        if len(before) != len(after):
            raise ValueError(f"Mutation changed record count from {len(before)} to {len(after)}")
        for column in IDENTITY_COLUMNS:
            if not before[column].reset_index(drop=True).equals(after[column].reset_index(drop=True)):
                raise ValueError(f"Mutation must not change '{column}'")

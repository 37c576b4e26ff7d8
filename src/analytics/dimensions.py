from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar

from src.analytics.event_metrics import safe_ratio
from src.models.event_financials import EventMetricsRow
from src.models.event_performance import EventRecord
from src.schemas.analytics import (
    ArtistPerformance,
    GenrePerformance,
    PeriodActivityPoint,
    ProfitTimelinePoint,
)
from src.shared.time import parse_event_datetime


logger = logging.getLogger(__name__)

DEFAULT_GENRE = "Other"
UNKNOWN_ARTIST = "Unknown"
TREND_UP = "↑"
TREND_DOWN = "↓"
TREND_FLAT = "→"


def effective_event_datetime(event: EventRecord) -> datetime:
    performance = event.performance
    if performance is not None and performance.event_date:
        return parse_event_datetime(performance.event_date)
    return parse_event_datetime(event.start_date)


def try_effective_event_datetime(event: EventRecord, view: str) -> Optional[datetime]:
    try:
        return effective_event_datetime(event)
    except ValueError as exc:
        raw_date = event.performance.event_date if event.performance else None
        logger.warning(
            "Excluding event %s from %s: unparseable date (event_date=%r, start_date=%r): %s",
            event.id,
            view,
            raw_date,
            event.start_date,
            exc,
        )
        return None


def period_label(moment: datetime) -> str:
    return f"{moment.month}/{moment.year}"


def genre_key(event: EventRecord) -> str:
    if event.performance is not None and event.performance.genre:
        return event.performance.genre
    return DEFAULT_GENRE


def artist_display_name(event: EventRecord) -> str:
    performance = event.performance
    if performance is not None:
        if performance.artist is not None and performance.artist.name:
            return performance.artist.name
        if performance.event_name:
            return performance.event_name
    return event.artist_name or UNKNOWN_ARTIST


def classify_trend(profits: List[float]) -> str:
    # Only the first and last shows are compared.
    if len(profits) < 2:
        return TREND_FLAT
    if profits[-1] > profits[0]:
        return TREND_UP
    if profits[-1] < profits[0]:
        return TREND_DOWN
    return TREND_FLAT


@dataclass
class PeriodBucket:
    label: str
    count: int = 0
    total_profit: float = 0.0

    def add(self, row: EventMetricsRow) -> None:
        self.count += 1
        self.total_profit += row.metrics.net_event_income

    def merge(self, other: "PeriodBucket") -> None:
        self.count += other.count
        self.total_profit += other.total_profit

    def finalize(self) -> PeriodActivityPoint:
        return PeriodActivityPoint(
            date=self.label,
            count=self.count,
            avg_profit=safe_ratio(self.total_profit, self.count),
        )


@dataclass
class GenreBucket:
    genre: str
    show_count: int = 0
    total_tickets_sold: float = 0.0
    total_capacity: float = 0.0
    total_gross_revenue: float = 0.0
    total_net_profit: float = 0.0

    def add(self, row: EventMetricsRow) -> None:
        self.show_count += 1
        self.total_tickets_sold += row.inputs.tickets_sold
        self.total_capacity += row.inputs.capacity
        self.total_gross_revenue += row.metrics.total_gross_revenue
        self.total_net_profit += row.metrics.net_event_income

    def merge(self, other: "GenreBucket") -> None:
        self.show_count += other.show_count
        self.total_tickets_sold += other.total_tickets_sold
        self.total_capacity += other.total_capacity
        self.total_gross_revenue += other.total_gross_revenue
        self.total_net_profit += other.total_net_profit

    def finalize(self) -> GenrePerformance:
        return GenrePerformance(
            genre=self.genre,
            show_count=self.show_count,
            avg_attendance=safe_ratio(self.total_tickets_sold, self.show_count),
            avg_capacity=safe_ratio(self.total_tickets_sold, self.total_capacity) * 100,
            avg_gross_revenue=safe_ratio(self.total_gross_revenue, self.show_count),
            avg_net_profit=safe_ratio(self.total_net_profit, self.show_count),
            avg_margin=safe_ratio(self.total_net_profit, self.total_gross_revenue) * 100,
            total_net_profit=self.total_net_profit,
        )


@dataclass
class ArtistBucket:
    artist_name: str
    show_count: int = 0
    total_tickets_sold: float = 0.0
    total_capacity: float = 0.0
    total_net_profit: float = 0.0
    profits: List[float] = field(default_factory=list)

    def add(self, row: EventMetricsRow) -> None:
        profit = row.metrics.net_event_income
        self.show_count += 1
        self.total_tickets_sold += row.inputs.tickets_sold
        self.total_capacity += row.inputs.capacity
        self.total_net_profit += profit
        self.profits.append(profit)

    def merge(self, other: "ArtistBucket") -> None:
        # `other` must hold events that come after this bucket's events.
        self.show_count += other.show_count
        self.total_tickets_sold += other.total_tickets_sold
        self.total_capacity += other.total_capacity
        self.total_net_profit += other.total_net_profit
        self.profits.extend(other.profits)

    def finalize(self) -> ArtistPerformance:
        return ArtistPerformance(
            artist_name=self.artist_name,
            show_count=self.show_count,
            avg_attendance=safe_ratio(self.total_tickets_sold, self.show_count),
            avg_capacity=safe_ratio(self.total_tickets_sold, self.total_capacity) * 100,
            avg_net_profit=safe_ratio(self.total_net_profit, self.show_count),
            total_net_profit=self.total_net_profit,
            trend=classify_trend(self.profits),
        )


BucketT = TypeVar("BucketT", PeriodBucket, GenreBucket, ArtistBucket)


def merge_buckets(left: Dict[str, BucketT], right: Dict[str, BucketT]) -> Dict[str, BucketT]:
    """Combine two partial accumulations; `right` covers the later shard.

    Reduce step for callers that accumulate shards of events in parallel.
    The report path accumulates in a single pass and does not call this.

    Keys keep the order in which they were first seen across both shards.
    """
    merged = {key: copy.deepcopy(bucket) for key, bucket in left.items()}
    for key, bucket in right.items():
        if key in merged:
            merged[key].merge(bucket)
        else:
            merged[key] = copy.deepcopy(bucket)
    return merged


def accumulate_periods(rows: Iterable[EventMetricsRow]) -> Dict[str, PeriodBucket]:
    buckets: Dict[str, PeriodBucket] = {}
    for row in rows:
        moment = try_effective_event_datetime(row.event, "period grouping")
        if moment is None:
            continue
        label = period_label(moment)
        if label not in buckets:
            buckets[label] = PeriodBucket(label=label)
        buckets[label].add(row)
    return buckets


def accumulate_genres(rows: Iterable[EventMetricsRow]) -> Dict[str, GenreBucket]:
    buckets: Dict[str, GenreBucket] = {}
    for row in rows:
        genre = genre_key(row.event)
        if genre not in buckets:
            buckets[genre] = GenreBucket(genre=genre)
        buckets[genre].add(row)
    return buckets


def accumulate_artists(rows: Iterable[EventMetricsRow]) -> Dict[str, ArtistBucket]:
    buckets: Dict[str, ArtistBucket] = {}
    for row in rows:
        name = artist_display_name(row.event)
        if name not in buckets:
            buckets[name] = ArtistBucket(artist_name=name)
        buckets[name].add(row)
    return buckets


def build_events_over_time(buckets: Dict[str, PeriodBucket]) -> List[PeriodActivityPoint]:
    return [bucket.finalize() for bucket in buckets.values()]


def build_genre_performance(buckets: Dict[str, GenreBucket]) -> List[GenrePerformance]:
    return [bucket.finalize() for bucket in buckets.values()]


def build_artist_performance(
    buckets: Dict[str, ArtistBucket], limit: int = 10
) -> List[ArtistPerformance]:
    ranked = sorted(
        (bucket.finalize() for bucket in buckets.values()),
        key=lambda artist: artist.total_net_profit,
        reverse=True,
    )
    return ranked[:limit]


def build_profit_timeline(rows: Iterable[EventMetricsRow]) -> List[ProfitTimelinePoint]:
    dated: List[Tuple[datetime, ProfitTimelinePoint]] = []
    for row in rows:
        moment = try_effective_event_datetime(row.event, "profit timeline")
        if moment is None:
            continue
        performance = row.event.performance
        event_name = (performance.event_name if performance else None) or row.event.title or ""
        profit = row.metrics.net_event_income
        dated.append(
            (
                moment,
                ProfitTimelinePoint(
                    date=moment.date().isoformat(),
                    profit=profit,
                    event_name=event_name,
                    is_profitable=profit > 0,
                ),
            )
        )
    dated.sort(key=lambda item: item[0])
    return [point for _, point in dated]

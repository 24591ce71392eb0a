"""
Concurrent read load against a data model.

Worker threads share one model and issue a random mix of lookups, checking
every answer against the model's own indices. A healthy read-only model
reports zero inconsistencies and zero errors; misses on absent ids are
expected and only counted.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

import numpy as np
from loguru import logger

from ..errors import NotFoundError
from ..model import DataModel, Preference, compare_by_user

QUERY_KINDS = ("user", "item", "item_prefs_array", "item_prefs_iter", "counts")


@dataclass(frozen=True)
class LoadConfig:
    """Shape of a load run."""

    num_threads: int = 4
    requests_per_thread: int = 800
    absent_id_fraction: float = 0.1
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.num_threads <= 0:
            raise ValueError("num_threads must be greater than zero.")
        if self.requests_per_thread < 0:
            raise ValueError("requests_per_thread must not be negative.")
        if not 0.0 <= self.absent_id_fraction <= 1.0:
            raise ValueError("absent_id_fraction must lie in [0, 1].")


@dataclass(frozen=True)
class LoadReport:
    requests: int
    not_found: int
    inconsistencies: int
    errors: int
    elapsed_seconds: float
    latency_ms: dict[str, float]

    @property
    def throughput_rps(self) -> float:
        return self.requests / self.elapsed_seconds if self.elapsed_seconds > 0 else 0.0

    @property
    def ok(self) -> bool:
        return self.inconsistencies == 0 and self.errors == 0


@dataclass
class _WorkerStats:
    requests: int = 0
    not_found: int = 0
    inconsistencies: int = 0
    errors: int = 0
    latencies: list[float] = field(default_factory=list)


def check_item_preferences(model: DataModel, item_id: Any, prefs: Sequence[Preference]) -> bool:
    """
    Return True if `prefs` is a well-formed preference list for `item_id`.

    Every preference must target the item, belong to the user the model
    holds under that id, and the list must be strictly ordered by user.
    """
    previous = None
    for pref in prefs:
        if pref.item.id != item_id:
            return False
        owner = pref.user
        if owner is None:
            return False
        try:
            if model.get_user(owner.id) is not owner:
                return False
        except NotFoundError:
            return False
        if owner.get_preference_for(item_id) is not pref:
            return False
        if previous is not None and compare_by_user(previous, pref) >= 0:
            return False
        previous = pref
    return True


class _Worker:
    def __init__(
        self,
        model: DataModel,
        config: LoadConfig,
        user_ids: Sequence[Any],
        item_ids: Sequence[Any],
        rng: np.random.Generator,
    ) -> None:
        self.model = model
        self.config = config
        self.user_ids = user_ids
        self.item_ids = item_ids
        self.rng = rng
        self.num_users = len(user_ids)
        self.num_items = len(item_ids)
        self.stats = _WorkerStats()

    def _pick(self, ids: Sequence[Any]) -> tuple[Any, bool]:
        if not ids or self.rng.random() < self.config.absent_id_fraction:
            return f"__absent_{int(self.rng.integers(0, 1 << 30))}__", False
        return ids[int(self.rng.integers(0, len(ids)))], True

    def _lookup(self, lookup: Callable[[Any], Any], entity_id: Any, present: bool) -> bool:
        try:
            found = lookup(entity_id)
        except NotFoundError:
            if present:
                return False
            self.stats.not_found += 1
            return True
        return present and found.id == entity_id

    def _query(self, kind: str) -> bool:
        model = self.model
        if kind == "user":
            user_id, present = self._pick(self.user_ids)
            return self._lookup(model.get_user, user_id, present)
        if kind == "item":
            item_id, present = self._pick(self.item_ids)
            return self._lookup(model.get_item, item_id, present)
        if kind == "item_prefs_array":
            item_id, present = self._pick(self.item_ids)
            prefs = model.get_preferences_for_item_as_array(item_id)
            if not present:
                return len(prefs) == 0
            return len(prefs) > 0 and check_item_preferences(model, item_id, prefs)
        if kind == "item_prefs_iter":
            item_id, present = self._pick(self.item_ids)
            first = list(model.get_preferences_for_item(item_id))
            second = list(model.get_preferences_for_item(item_id))
            bulk = model.get_preferences_for_item_as_array(item_id)
            if not present and first:
                return False
            return first == second == list(bulk)
        return (
            model.get_num_users() == self.num_users
            and model.get_num_items() == self.num_items
        )

    def run(self) -> _WorkerStats:
        stats = self.stats
        halfway = self.config.requests_per_thread // 2
        for request in range(self.config.requests_per_thread):
            if request == halfway:
                self.model.refresh()
            kind = QUERY_KINDS[int(self.rng.integers(0, len(QUERY_KINDS)))]
            start = time.perf_counter()
            try:
                if not self._query(kind):
                    stats.inconsistencies += 1
                    logger.warning("Inconsistent answer for {} query", kind)
            except Exception as exc:
                stats.errors += 1
                logger.error("{} query failed: {}", kind, exc)
            stats.latencies.append((time.perf_counter() - start) * 1000)
            stats.requests += 1
        return stats


def _summarize_latencies(latencies: np.ndarray) -> dict[str, float]:
    if latencies.size == 0:
        return {}
    return {
        "avg": float(np.mean(latencies)),
        "p50": float(np.percentile(latencies, 50)),
        "p95": float(np.percentile(latencies, 95)),
        "p99": float(np.percentile(latencies, 99)),
        "max": float(np.max(latencies)),
    }


def run_read_load(model: DataModel, config: LoadConfig | None = None) -> LoadReport:
    """
    Hammer `model` from `config.num_threads` threads and report what they saw.

    Each worker calls `refresh()` halfway through its requests, mirroring a
    periodic refresh issued by a serving layer.
    """
    config = config or LoadConfig()
    user_ids = [user.id for user in model.get_users()]
    item_ids = [item.id for item in model.get_items()]
    seeds = np.random.SeedSequence(config.seed).spawn(config.num_threads)
    workers = [
        _Worker(model, config, user_ids, item_ids, np.random.default_rng(seed))
        for seed in seeds
    ]

    logger.info(
        "Starting read load: {} threads x {} requests against {} users / {} items",
        config.num_threads,
        config.requests_per_thread,
        len(user_ids),
        len(item_ids),
    )
    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=config.num_threads) as executor:
        futures = [executor.submit(worker.run) for worker in workers]
        results = [future.result() for future in futures]
    elapsed = time.perf_counter() - start

    latencies = np.asarray(
        [latency for stats in results for latency in stats.latencies], dtype=float
    )
    report = LoadReport(
        requests=sum(stats.requests for stats in results),
        not_found=sum(stats.not_found for stats in results),
        inconsistencies=sum(stats.inconsistencies for stats in results),
        errors=sum(stats.errors for stats in results),
        elapsed_seconds=elapsed,
        latency_ms=_summarize_latencies(latencies),
    )
    logger.info(
        "Load completed in {:.1f}ms | requests={} not_found={} inconsistencies={} errors={}",
        elapsed * 1000,
        report.requests,
        report.not_found,
        report.inconsistencies,
        report.errors,
    )
    return report

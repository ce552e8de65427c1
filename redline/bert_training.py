"""Offline learning of similarity thresholds from historical scores."""

from __future__ import annotations

import json
import math
import statistics
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, fields
from typing import Optional

MIN_TRAINING_SAMPLES = 10
_GMM_MIN_SAMPLES = 50
_ELBOW_MIN_SAMPLES = 30


class TrainingError(ValueError):
    """Raised when parameters cannot be learned from the collected samples."""


@dataclass
class LearnedParameters:
    """Threshold and distribution statistics learned from similarity scores."""

    threshold: float
    mean: float
    std_dev: float
    median: float
    min: float
    max: float
    sample_count: int

    @classmethod
    def default_params(cls) -> "LearnedParameters":
        """Parameters to use when no training data is available."""
        return cls(
            threshold=0.7,
            mean=0.7,
            std_dev=0.15,
            median=0.7,
            min=0.0,
            max=1.0,
            sample_count=0,
        )

    def to_json(self) -> str:
        """Serialize to a JSON object string."""
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, text: str) -> "LearnedParameters":
        """Parse parameters from a JSON object string.

        Raises ValueError if the text is not valid JSON or lacks a field.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Failed to deserialize parameters: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Failed to deserialize parameters: expected a JSON object")

        values = {}
        for spec in fields(cls):
            if spec.name not in data:
                raise ValueError(
                    f"Failed to deserialize parameters: missing field `{spec.name}`"
                )
            value = data[spec.name]
            if isinstance(value, bool):
                raise ValueError(
                    f"Failed to deserialize parameters: invalid value for `{spec.name}`"
                )
            if spec.name == "sample_count":
                if not isinstance(value, int) or value < 0:
                    raise ValueError(
                        "Failed to deserialize parameters: "
                        "`sample_count` must be a non-negative integer"
                    )
                values[spec.name] = value
            else:
                if not isinstance(value, (int, float)):
                    raise ValueError(
                        f"Failed to deserialize parameters: `{spec.name}` must be a number"
                    )
                values[spec.name] = float(value)
        return cls(**values)


class BertSemanticTrainer:
    """Collects similarity scores and learns a classification threshold."""

    def __init__(self, max_history: int = 10000, threshold_percentile: float = 0.5) -> None:
        self._history: deque[float] = deque(maxlen=max_history)
        self.threshold_percentile = min(max(threshold_percentile, 0.0), 1.0)

    @property
    def max_history(self) -> int:
        return self._history.maxlen or 0

    def with_threshold_percentile(self, percentile: float) -> "BertSemanticTrainer":
        """Set the percentile (clamped to [0, 1]) used for the threshold."""
        self.threshold_percentile = min(max(percentile, 0.0), 1.0)
        return self

    def with_max_history(self, size: int) -> "BertSemanticTrainer":
        """Keep at most ``size`` of the most recent samples."""
        if size < 0:
            raise ValueError(f"history size must not be negative, got {size}")
        self._history = deque(self._history, maxlen=size)
        return self

    def add_sample(self, similarity: float) -> None:
        """Record one similarity score, dropping the oldest if full."""
        self._history.append(float(similarity))

    def add_samples(self, similarities: Iterable[float]) -> None:
        """Record several similarity scores in order."""
        for similarity in similarities:
            self.add_sample(similarity)

    def __len__(self) -> int:
        return len(self._history)

    @property
    def samples(self) -> tuple[float, ...]:
        """The recorded samples, oldest first."""
        return tuple(self._history)

    def clear(self) -> None:
        """Forget all recorded samples."""
        self._history.clear()

    def train(self) -> LearnedParameters:
        """Learn parameters from the recorded samples.

        Raises TrainingError with fewer than ten samples or NaN values.
        """
        count = len(self._history)
        if count < MIN_TRAINING_SAMPLES:
            raise TrainingError(
                f"Need at least {MIN_TRAINING_SAMPLES} samples for training, got {count}"
            )
        if any(math.isnan(value) for value in self._history):
            raise TrainingError("Samples must not contain NaN")

        ordered = sorted(self._history)
        mean = math.fsum(ordered) / count
        std_dev = statistics.pstdev(ordered, mu=mean)

        return LearnedParameters(
            threshold=self._learn_threshold(ordered, mean),
            mean=mean,
            std_dev=std_dev,
            median=ordered[count // 2],
            min=ordered[0],
            max=ordered[-1],
            sample_count=count,
        )

    def _learn_threshold(self, ordered: Sequence[float], mean: float) -> float:
        percentile = self._percentile_threshold(ordered)
        gmm = _gmm_threshold(ordered, mean) if len(ordered) >= _GMM_MIN_SAMPLES else None
        elbow = _elbow_threshold(ordered) if len(ordered) >= _ELBOW_MIN_SAMPLES else None

        if gmm is not None and elbow is not None:
            return gmm * 0.4 + elbow * 0.4 + percentile * 0.2
        if gmm is not None:
            return gmm * 0.6 + percentile * 0.4
        if elbow is not None:
            return elbow * 0.6 + percentile * 0.4
        return percentile

    def _percentile_threshold(self, ordered: Sequence[float]) -> float:
        index = int(len(ordered) * self.threshold_percentile)
        return ordered[min(index, len(ordered) - 1)]


def _mean_and_std(values: Sequence[float]) -> tuple[float, float]:
    mean = math.fsum(values) / len(values)
    return mean, statistics.pstdev(values, mu=mean)


def _gmm_threshold(ordered: Sequence[float], mean: float) -> Optional[float]:
    """Split at the mean into two components and weigh their centres."""
    low = [value for value in ordered if value < mean]
    high = [value for value in ordered if value >= mean]
    if not low or not high:
        return None

    low_mean, low_std = _mean_and_std(low)
    high_mean, high_std = _mean_and_std(high)
    weight_low = len(low) / len(ordered)
    weight_high = len(high) / len(ordered)

    threshold = (low_mean * weight_high + high_mean * weight_low) + (high_std - low_std) * 0.1
    return min(max(threshold, 0.0), 1.0)


def _elbow_threshold(ordered: Sequence[float]) -> Optional[float]:
    """The value at the point of greatest second difference."""
    if len(ordered) < 3:
        return None
    max_curvature = 0.0
    elbow_index = len(ordered) // 2
    for index, (before, here, after) in enumerate(
        zip(ordered, ordered[1:], ordered[2:]), start=1
    ):
        curvature = abs(after - 2.0 * here + before)
        if curvature > max_curvature:
            max_curvature = curvature
            elbow_index = index
    return ordered[elbow_index]
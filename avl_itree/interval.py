from dataclasses import dataclass
from typing import Any, Generic, TypeVar

D = TypeVar("D")


class InvalidInterval(ValueError):
    def __init__(self, low: Any, high: Any):
        super().__init__(f"low must not exceed high: [{low}, {high}]")
        self.low = low
        self.high = high


@dataclass(frozen=True)
class Interval:
    low: float
    high: float

    def __post_init__(self):
        if not self.low <= self.high:
            raise InvalidInterval(self.low, self.high)

    def overlaps(self, low: float, high: float) -> bool:
        return self.low <= high and low <= self.high


@dataclass(frozen=True)
class Record(Generic[D]):
    interval: Interval
    data: D

    @property
    def low(self) -> float:
        return self.interval.low

    @property
    def high(self) -> float:
        return self.interval.high

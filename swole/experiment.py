"""Experiment definitions and the results of starting or finishing them."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field


@dataclass
class Alternative:
    """One arm of an experiment; a weight of 0 means the default of 1."""

    name: str
    weight: int = 0


@dataclass
class Experiment:
    """An experiment identified by key with its weighted alternatives."""

    key: str
    alternatives: list[Alternative] = field(default_factory=list)

    def names(self) -> list[str]:
        return [alt.name for alt in self.alternatives]

    def _require_alternatives(self) -> None:
        if not self.alternatives:
            raise ValueError(f"experiment {self.key!r} has no alternatives")

    def first_alternative(self) -> str:
        self._require_alternatives()
        return self.alternatives[0].name

    def choose_alternative(self, rng=None) -> str:
        """Pick an alternative at random, in proportion to the weights."""
        self._require_alternatives()
        point = (rng or random).random() * sum(a.weight for a in self.alternatives)
        for alt in self.alternatives:
            if point <= alt.weight:
                return alt.name
            point -= alt.weight
        return self.alternatives[-1].name

    def cookie_value(self, alternative: str) -> str:
        """JSON text recording that this experiment was assigned ``alternative``."""
        return json.dumps({self.key: alternative}, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class StartExperimentResponse:
    did_start: bool
    did_start_first_time: bool
    alternative: str


@dataclass(frozen=True)
class FinishExperimentResponse:
    did_finish: bool
    did_finish_first_time: bool
    alternative: str
"""Registry of experiments and the cookie-backed start/finish flow."""

from __future__ import annotations

import json
import random
from collections.abc import MutableSequence
from dataclasses import replace

from swole.cookies import Cookie, read_cookie, unique, write_cookie
from swole.errors import ExperimentNotFoundError, InvalidExperimentError
from swole.experiment import (
    Alternative,
    Experiment,
    FinishExperimentResponse,
    StartExperimentResponse,
)

COOKIE_NAME = "swole"
COOKIE_MAX_AGE = 60 * 60 * 24
FINISHED_SUFFIX = ":finished"

Headers = MutableSequence[tuple[str, str]]


def _encode(values: dict[str, str]) -> str:
    return json.dumps(values, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _decode(text: str) -> dict[str, str]:
    data = json.loads(text)
    if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
        raise ValueError("experiment cookie must hold a JSON object of strings")
    return data


class ExperimentManager:
    """Keeps registered experiments and assigns visitors to alternatives."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._experiments: dict[str, Experiment] = {}
        self._rng = rng

    def _cookie(self, value: str) -> Cookie:
        return Cookie(
            name=COOKIE_NAME,
            value=value,
            path="/",
            max_age=COOKIE_MAX_AGE,
            http_only=True,
            secure=True,
            same_site="Lax",
        )

    def _write(self, headers: Headers, value: str) -> None:
        write_cookie(headers, self._cookie(value))

    def register_experiment(self, experiment: Experiment) -> None:
        """Validate and store an experiment; weights of 0 become 1."""
        key = experiment.key
        if not key:
            raise InvalidExperimentError(key, "the key cannot be empty")
        if key in self._experiments:
            raise InvalidExperimentError(key, "each experiment must be registered only once")
        if len(experiment.alternatives) < 2:
            raise InvalidExperimentError(key, "should have at least 2 alternatives")
        if not unique(experiment.names()):
            raise InvalidExperimentError(key, "alternatives must be unique")

        alternatives = [
            Alternative(name=alt.name, weight=alt.weight or 1)
            for alt in experiment.alternatives
        ]
        self._experiments[key] = replace(experiment, alternatives=alternatives)

    def get_experiment(self, key: str) -> Experiment:
        """Return the registered experiment for ``key``."""
        try:
            return self._experiments[key]
        except KeyError:
            raise ExperimentNotFoundError(
                key, "you should register it first via `register_experiment`"
            ) from None

    def start_experiment(
        self, key: str, headers: Headers, cookie_header: str | None
    ) -> StartExperimentResponse:
        """Assign (or recall) the visitor's alternative and refresh the cookie.

        ``cookie_header`` is the request's Cookie header; a Set-Cookie header is
        appended to ``headers``.
        """
        experiment = self.get_experiment(key)
        cookie = read_cookie(cookie_header, COOKIE_NAME)

        if cookie is None:
            alternative = experiment.choose_alternative(self._rng)
            self._write(headers, experiment.cookie_value(alternative))
            return StartExperimentResponse(
                did_start=True, did_start_first_time=True, alternative=alternative
            )

        stored = _decode(cookie.value)

        if key in stored:
            self._write(headers, cookie.value)
            return StartExperimentResponse(
                did_start=True, did_start_first_time=False, alternative=stored[key]
            )

        alternative = experiment.choose_alternative(self._rng)
        stored[key] = alternative
        self._write(headers, _encode(stored))
        return StartExperimentResponse(
            did_start=True, did_start_first_time=True, alternative=alternative
        )

    def finish_experiment(
        self, key: str, headers: Headers, cookie_header: str | None
    ) -> FinishExperimentResponse:
        """Mark the visitor's experiment as finished, once."""
        experiment = self.get_experiment(key)
        cookie = read_cookie(cookie_header, COOKIE_NAME)

        not_started = FinishExperimentResponse(
            did_finish=False,
            did_finish_first_time=False,
            alternative=experiment.first_alternative(),
        )
        if cookie is None:
            return not_started

        stored = _decode(cookie.value)
        alternative = stored.get(key)
        if alternative is None:
            return not_started

        finished_key = key + FINISHED_SUFFIX
        if finished_key in stored:
            return FinishExperimentResponse(
                did_finish=True, did_finish_first_time=False, alternative=alternative
            )

        stored[finished_key] = "true"
        self._write(headers, _encode(stored))
        return FinishExperimentResponse(
            did_finish=True, did_finish_first_time=True, alternative=alternative
        )
"""Declarative weather rules that turn one observation into farming advisories."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple

from app.schemas.weather import AdvisoryTag, WeatherAdvisory, WeatherObservation


class WeatherRule(NamedTuple):
	predicate: Callable[[WeatherObservation], bool]
	tag: AdvisoryTag
	message: str


def _is_optimal_for_tea_and_coffee(obs: WeatherObservation) -> bool:
	return 18 <= obs.temperature <= 25 and 60 <= obs.humidity <= 80


# Evaluation order is the output order.
WEATHER_RULES: tuple[WeatherRule, ...] = (
	WeatherRule(
		predicate=lambda obs: obs.temperature > 28,
		tag=AdvisoryTag.warning,
		message="High temperature detected. Ensure adequate irrigation for crops.",
	),
	WeatherRule(
		predicate=lambda obs: obs.humidity > 80,
		tag=AdvisoryTag.caution,
		message="High humidity levels. Monitor crops for fungal diseases.",
	),
	WeatherRule(
		predicate=lambda obs: obs.rainfall_last_hour > 0,
		tag=AdvisoryTag.info,
		message="Rainfall detected. Good conditions for planting and growth.",
	),
	WeatherRule(
		predicate=_is_optimal_for_tea_and_coffee,
		tag=AdvisoryTag.success,
		message="Optimal conditions for tea and coffee cultivation.",
	),
)


def evaluate_weather(
	observation: WeatherObservation,
	rules: Sequence[WeatherRule] = WEATHER_RULES,
) -> list[WeatherAdvisory]:
	return [
		WeatherAdvisory(tag=rule.tag, message=rule.message)
		for rule in rules
		if rule.predicate(observation)
	]

"""Unit tests for characteristic scoring and the fallback policy."""

from __future__ import annotations

import random

import pytest

from plant_scanner.catalog import Catalog, load_catalog
from plant_scanner.matcher import CharacteristicMatcher
from plant_scanner.types import observations
from plant_scanner.uncertainty import BestGuessPolicy, RandomCatalogPolicy, UncertaintyPolicy

from .fakes import make_entry, rose_catalog


class _PickLast(UncertaintyPolicy):
    def __init__(self) -> None:
        self.calls = 0

    def choose(self, catalog, ranked):
        self.calls += 1
        return catalog.all_entries()[-1]


@pytest.fixture(scope="module")
def catalog() -> Catalog:
    return load_catalog()


def test_full_coverage_scores_base_confidence(catalog):
    matcher = CharacteristicMatcher(catalog, RandomCatalogPolicy(random.Random(0)))
    for entry in catalog.all_entries():
        result = matcher.match(entry.characteristics)
        assert result.entry == entry
        assert result.score == pytest.approx(entry.base_confidence)
        assert result.is_fallback is False


def test_rose_partial_coverage_example():
    matcher = CharacteristicMatcher(rose_catalog())
    result = matcher.match(observations(["red petals", "green stem"]))

    assert result.entry.id == "rose"
    assert result.score == pytest.approx((2 / 3) * 0.92)
    assert result.score == pytest.approx(0.6133, abs=1e-4)
    assert result.is_fallback is False


def test_empty_observations_always_fall_back(catalog):
    matcher = CharacteristicMatcher(catalog, RandomCatalogPolicy(random.Random(7)))
    for _ in range(20):
        result = matcher.match(frozenset())
        assert result.is_fallback is True
        assert result.entry in catalog.all_entries()
        assert result.score == 0.0


def test_empty_observations_with_single_entry_catalog():
    matcher = CharacteristicMatcher(rose_catalog())
    result = matcher.match(frozenset())
    assert result.is_fallback is True
    assert result.entry.id == "rose"


def test_substring_containment_counts_toward_characteristic():
    entry = make_entry("rose", ["green stem", "thorns"])
    assert CharacteristicMatcher.match_count(entry, ["green stem and leaves"]) == 1
    assert CharacteristicMatcher.match_count(entry, ["GREEN STEM texture", "Thorns"]) == 2
    # the characteristic must be inside the observation, not the other way round
    assert CharacteristicMatcher.match_count(entry, ["stem"]) == 0


def test_matching_is_deterministic_above_threshold(catalog):
    policy = _PickLast()
    matcher = CharacteristicMatcher(catalog, policy)
    observed = observations(["metallic", "cylindrical", "reflective"])

    first = matcher.match(observed)
    second = matcher.match(observed)

    assert first == second
    assert first.entry.id == "metal-can"
    assert policy.calls == 0


def test_ties_are_broken_by_catalog_order():
    catalog = Catalog(
        [
            make_entry("first", ["leaf", "stem"], 0.8),
            make_entry("second", ["leaf", "petal"], 0.8),
        ]
    )
    matcher = CharacteristicMatcher(catalog, _PickLast())
    result = matcher.match(observations(["leaf"]))
    assert result.entry.id == "first"
    assert result.score == pytest.approx(0.4)


def test_rank_orders_best_first(catalog):
    matcher = CharacteristicMatcher(catalog)
    ranked = matcher.rank(observations(["petals", "thorns", "green stem"]))
    assert ranked[0][0].id == "rose"
    scores = [score for _, score in ranked]
    assert scores == sorted(scores, reverse=True)
    assert len(ranked) == len(catalog)


def test_low_score_uses_injected_policy(catalog):
    policy = _PickLast()
    matcher = CharacteristicMatcher(catalog, policy)
    # one of five rose traits: 0.2 * 0.92 < 0.3
    result = matcher.match(observations(["thorns"]))
    assert policy.calls == 1
    assert result.is_fallback is True
    assert result.entry.id == "ceramic-pot"
    assert result.score == 0.0


def test_score_exactly_at_threshold_is_accepted():
    catalog = Catalog([make_entry("half", ["a", "b"], 0.6), make_entry("other", ["z"], 0.5)])
    matcher = CharacteristicMatcher(catalog, _PickLast(), threshold=0.3)
    result = matcher.match(observations(["a"]))
    assert result.entry.id == "half"
    assert result.is_fallback is False


def test_threshold_is_configurable(catalog):
    matcher = CharacteristicMatcher(catalog, _PickLast(), threshold=0.1)
    result = matcher.match(observations(["thorns"]))
    assert result.entry.id == "rose"
    assert result.is_fallback is False


def test_best_guess_policy_keeps_top_entry(catalog):
    matcher = CharacteristicMatcher(catalog, BestGuessPolicy())
    result = matcher.match(observations(["thorns"]))
    assert result.entry.id == "rose"
    assert result.is_fallback is True
    assert result.score == pytest.approx(0.2 * 0.92)


def test_seeded_random_policy_is_reproducible(catalog):
    picks_a = [
        CharacteristicMatcher(catalog, RandomCatalogPolicy(random.Random(42))).match(frozenset()).entry.id
        for _ in range(3)
    ]
    picks_b = [
        CharacteristicMatcher(catalog, RandomCatalogPolicy(random.Random(42))).match(frozenset()).entry.id
        for _ in range(3)
    ]
    assert picks_a == picks_b


def test_empty_catalog_is_rejected():
    with pytest.raises(ValueError):
        CharacteristicMatcher(Catalog([]))

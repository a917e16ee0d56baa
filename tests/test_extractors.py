"""Unit tests for characteristic extractors."""

from __future__ import annotations

import random

import pytest

from plant_scanner.catalog import Catalog, load_catalog
from plant_scanner.extractors import (
    FixedCharacteristicExtractor,
    LabelKeywordExtractor,
    RandomCharacteristicExtractor,
)

from . import image_factory as factory
from .fakes import make_entry


@pytest.fixture(scope="module")
def catalog() -> Catalog:
    return load_catalog()


def test_random_extractor_draws_three_to_five_catalog_tags(catalog):
    extractor = RandomCharacteristicExtractor(catalog, rng=random.Random(3))
    universe = set(catalog.characteristic_universe())
    sizes = set()
    for _ in range(200):
        tags = extractor.extract(factory.create_blank_image())
        assert 3 <= len(tags) <= 5
        assert tags <= universe
        sizes.add(len(tags))
    assert sizes == {3, 4, 5}


def test_random_extractor_ignores_the_image(catalog):
    a = RandomCharacteristicExtractor(catalog, rng=random.Random(11))
    b = RandomCharacteristicExtractor(catalog, rng=random.Random(11))
    assert a.extract(factory.create_flower_image()) == b.extract(factory.create_rock_image())


def test_random_extractor_stops_when_universe_is_exhausted():
    catalog = Catalog([make_entry("tiny", ["leaf", "stem"])])
    extractor = RandomCharacteristicExtractor(catalog, min_tags=5, max_tags=5, rng=random.Random(0))
    assert extractor.extract(factory.create_blank_image()) == frozenset({"leaf", "stem"})


def test_random_extractor_rejects_bad_range(catalog):
    with pytest.raises(ValueError):
        RandomCharacteristicExtractor(catalog, min_tags=4, max_tags=2)


def test_fixed_extractor_normalizes_tags():
    extractor = FixedCharacteristicExtractor(["Green Stem ", "petals", ""])
    assert extractor.extract(factory.create_blank_image()) == frozenset({"green stem", "petals"})


def test_label_extractor_uses_classifier_labels():
    seen = []

    def classify(image):
        seen.append(image.shape)
        return ["Pot, flowerpot", "Daisy"]

    extractor = LabelKeywordExtractor(classify)
    tags = extractor.extract(factory.create_flower_image())

    assert tags == frozenset({"pot, flowerpot", "daisy"})
    assert seen == [(480, 320, 3)]
    assert extractor.looks_like_plant(tags)
    assert not extractor.looks_like_plant({"tabby cat"})

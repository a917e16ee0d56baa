"""Where well-known plants are famous and what they are used for."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class PlantFacts:
    famous_for: str
    use: str


PLANT_FACTS: Dict[str, PlantFacts] = {
    "rose": PlantFacts(
        famous_for="Famous in India, France, and England",
        use="Used in perfumes, decorations, and skincare products.",
    ),
    "tulip": PlantFacts(
        famous_for="Famous in the Netherlands",
        use="Popular for gardens and floral gifts.",
    ),
    "sunflower": PlantFacts(
        famous_for="Famous in the USA and India",
        use="Source of sunflower oil and ornamental flower.",
    ),
    "lotus": PlantFacts(
        famous_for="National flower of India, found across Asia",
        use="Used in worship, medicine, and as a food ingredient.",
    ),
    "hibiscus": PlantFacts(
        famous_for="Common in tropical regions worldwide",
        use="Used in hair oils, teas, and skincare.",
    ),
    "lavender": PlantFacts(
        famous_for="Famous in France (Provence region)",
        use="Used in aromatherapy, perfumes, and relaxation oils.",
    ),
    "snake": PlantFacts(
        famous_for="Popular indoor plant worldwide",
        use="Purifies air and easy to maintain indoors.",
    ),
}

DEFAULT_FACTS = PlantFacts(
    famous_for="Common in homes and gardens worldwide",
    use="Used for oxygen and beautification purposes.",
)


def lookup_facts(plant_name: str) -> PlantFacts:
    """Facts for the first known plant whose key appears in ``plant_name``."""

    name = plant_name.lower()
    for key, facts in PLANT_FACTS.items():
        if key in name:
            return facts
    return DEFAULT_FACTS

#!/usr/bin/env python3
"""Batch-scan every image in a folder through the upload path."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, Optional

from plant_scanner.config import load_config
from plant_scanner.facts import lookup_facts
from plant_scanner.factory import build_pipeline
from plant_scanner.logging_config import configure_logging
from plant_scanner.pipeline import AcquisitionPipeline

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".webp"}


def scan_images_in_folder(pipeline: AcquisitionPipeline, folder_path: str) -> dict:
    """Scan every image in ``folder_path``.

    Args:
        pipeline: configured acquisition pipeline
        folder_path: folder holding the images

    Returns:
        Mapping of file name to its detection (or error)
    """
    folder = Path(folder_path)
    if not folder.exists():
        print(f"❌ Folder does not exist: {folder_path}")
        return {}

    image_files = sorted(
        f for f in folder.iterdir() if f.is_file() and f.suffix.lower() in IMAGE_EXTENSIONS
    )
    if not image_files:
        print(f"⚠️  No images found in: {folder_path}")
        return {}

    print(f"📁 Found {len(image_files)} images")
    print("=" * 80)

    all_results: Dict[str, dict] = {}
    for idx, image_file in enumerate(image_files, 1):
        print(f"\n[{idx}/{len(image_files)}] Scanning: {image_file.name}")

        record = pipeline.upload(image_file)
        if record is None:
            error = pipeline.session.error or "Detection failed"
            print(f"  ❌ {error}")
            all_results[image_file.name] = {"error": error}
            continue

        entry = record.to_dict()
        if record.is_plant:
            facts = lookup_facts(record.plant_name or "")
            entry["facts"] = {"famousFor": facts.famous_for, "use": facts.use}
            print(f"  🌿 Plant detected: {record.plant_name} ({record.confidence:.1%})")
            print(f"     {facts.famous_for}. {facts.use}")
        else:
            print(f"  ✗ Not a plant ({record.confidence:.1%})")
        if record.location is not None:
            print(f"  📍 Lat: {record.location.latitude:.4f}  Lon: {record.location.longitude:.4f}")
        all_results[image_file.name] = entry

    print("\n" + "=" * 80)
    return all_results


def summarize(results: dict) -> dict:
    plants = [name for name, data in results.items() if data.get("isPlant")]
    non_plants = [name for name, data in results.items() if "isPlant" in data and not data["isPlant"]]
    errors = [name for name, data in results.items() if "error" in data]

    species_counts: Dict[str, int] = {}
    for name in plants:
        species = results[name].get("plantName", "unknown")
        species_counts[species] = species_counts.get(species, 0) + 1

    return {
        "total": len(results),
        "plant_count": len(plants),
        "non_plant_count": len(non_plants),
        "error_count": len(errors),
        "species": species_counts,
    }


def print_summary(summary: dict) -> None:
    print("\n📊 Summary")
    print("=" * 80)
    print(f"Total images: {summary['total']}")
    print(f"  - plants: {summary['plant_count']}")
    print(f"  - not plants: {summary['non_plant_count']}")
    print(f"  - failed: {summary['error_count']}")
    for species, count in sorted(summary["species"].items(), key=lambda x: x[1], reverse=True):
        print(f"  - {species}: {count}")
    print("=" * 80)


def save_results_to_json(results: dict, output_file: str) -> None:
    payload = {"results": results, "summary": summarize(results)}
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    print(f"💾 Results saved to: {output_file}")


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("folder", nargs="?", default=str(Path(__file__).parent / "test-images"))
    parser.add_argument("--output", default="scan_results.json")
    args = parser.parse_args(argv)

    config = load_config()
    configure_logging(config["DEBUG_MODE"])

    with build_pipeline(config) as pipeline:
        results = scan_images_in_folder(pipeline, args.folder)

    if not results:
        return 1
    print_summary(summarize(results))
    save_results_to_json(results, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

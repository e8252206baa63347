"""Build the postcode -> funding authority mapping from the tabular source.

Usage:
    python -m funding_checker.preprocess path/to/postcode_authorities.csv path/to/postcode_authorities.json
"""
import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, Mapping, Union

from funding_checker.models.learner import normalize_postcode

logger = logging.getLogger(__name__)


def build_postcode_map(rows: Iterable[Mapping[str, str]]) -> Dict[str, str]:
    """
    Build the flat postcode mapping from CSV rows

    Rows with an EffectiveTo date are no longer current and are skipped.
    Labels are formatted as "{Area} ({SourceOfFunding})".
    """
    postcode_map = {}
    skipped = 0
    for row in rows:
        if (row.get("EffectiveTo") or "").strip():
            skipped += 1
            continue
        normalized = normalize_postcode(row.get("Postcode"))
        if not normalized:
            continue
        postcode_map[normalized] = f"{row.get('Area', '')} ({row.get('SourceOfFunding', '')})"

    logger.info(f"Built {len(postcode_map)} postcode entries, skipped {skipped} expired rows")
    return postcode_map


def preprocess_csv(input_path: Union[str, Path], output_path: Union[str, Path]) -> Dict[str, str]:
    """Read the authority CSV and write the JSON mapping the resolver loads"""
    input_path, output_path = Path(input_path), Path(output_path)

    with input_path.open(newline="", encoding="utf-8-sig") as f:
        postcode_map = build_postcode_map(csv.DictReader(f))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(postcode_map, f, indent=2)

    logger.info(f"Output written to {output_path}")
    return postcode_map


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert the postcode authority CSV into the JSON lookup used at runtime"
    )
    parser.add_argument("input_csv", type=Path, help="CSV with Postcode, EffectiveTo, Area, SourceOfFunding columns")
    parser.add_argument("output_json", type=Path, help="Where to write the postcode mapping")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = parse_args(argv)

    try:
        preprocess_csv(args.input_csv, args.output_json)
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e.filename}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

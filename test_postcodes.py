"""
Postcode resolver and preprocessing tests
"""
import json

import pytest

from funding_checker.config import DATA_DIR
from funding_checker.preprocess import build_postcode_map, main, preprocess_csv
from funding_checker.services.postcode_service import PostcodeResolver


@pytest.fixture
def resolver():
    return PostcodeResolver({"SW1A1AA": "Westminster (ESFA)", "M11AE": "Greater Manchester (GMCA)"})


@pytest.mark.parametrize("postcode", ["sw1a 1aa", "SW1A1AA", " Sw1A  1aA ", "sw1a\t1aa"])
def test_resolution_ignores_case_and_whitespace(resolver, postcode):
    assert resolver.resolve_authority(postcode) == "Westminster (ESFA)"


@pytest.mark.parametrize("postcode", [None, "", "   ", "ZZ9 9ZZ"])
def test_unknown_or_empty_postcode_returns_none(resolver, postcode):
    assert resolver.resolve_authority(postcode) is None


def test_build_postcode_map_skips_expired_rows():
    rows = [
        {"Postcode": "b1 1bb", "EffectiveTo": "", "Area": "West Midlands", "SourceOfFunding": "WMCA"},
        {"Postcode": "B2 4QA", "EffectiveTo": "2023-07-31", "Area": "Birmingham", "SourceOfFunding": "ESFA"},
        {"Postcode": "", "EffectiveTo": "", "Area": "Nowhere", "SourceOfFunding": "ESFA"},
    ]
    assert build_postcode_map(rows) == {"B11BB": "West Midlands (WMCA)"}


def test_preprocess_csv_writes_json(tmp_path):
    source = tmp_path / "authorities.csv"
    source.write_text(
        "Postcode,EffectiveTo,Area,SourceOfFunding\n"
        "LS1 1UR,,West Yorkshire,WYCA\n"
        "LS2 7HY,2022-01-01,Leeds,ESFA\n",
        encoding="utf-8"
    )
    output = tmp_path / "out" / "authorities.json"

    mapping = preprocess_csv(source, output)

    assert mapping == {"LS11UR": "West Yorkshire (WYCA)"}
    assert json.loads(output.read_text(encoding="utf-8")) == mapping
    assert PostcodeResolver.from_json_file(output).resolve_authority("ls1 1ur") == "West Yorkshire (WYCA)"


def test_bundled_json_matches_bundled_csv(tmp_path):
    rebuilt = preprocess_csv(DATA_DIR / "postcode_authorities.csv", tmp_path / "rebuilt.json")
    bundled = json.loads((DATA_DIR / "postcode_authorities.json").read_text(encoding="utf-8"))
    assert rebuilt == bundled


def test_cli_reports_missing_input(tmp_path):
    assert main([str(tmp_path / "missing.csv"), str(tmp_path / "out.json")]) == 1


def test_from_json_file_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        PostcodeResolver.from_json_file(path)

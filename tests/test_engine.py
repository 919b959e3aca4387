import json
import logging

import pytest

from shipwright.core.config import PipelineConfig
from shipwright.core.engine import GenerationEngine
from shipwright.core.errors import MalformedIndentationError, NoMatchingFilesError
from shipwright.core.models import RecordKind


def _engine(data_root, output_dir, clock, **overrides):
    config = PipelineConfig(data_root=str(data_root), output_dir=str(output_dir), game_version="0.10.12")
    return GenerationEngine(config.with_overrides(**overrides), clock=clock)


def _load(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_full_generation_run(game_data, tmp_path, fixed_clock, caplog):
    """
    INTEGRATION TEST: Two species, ships and outfits, one invalid ship and
    one variant. Every batch lands in its own artifact.
    """
    caplog.set_level(logging.INFO)
    output = tmp_path / "output"

    report = _engine(game_data, output, fixed_clock).run()

    assert report.total(RecordKind.SHIP) == 3
    assert report.dropped(RecordKind.SHIP) == 1
    assert report.total(RecordKind.OUTFIT) == 2
    assert report.species(RecordKind.SHIP) == ["hai", "human"]
    assert report.files_written == 4

    human = _load(output / "ships" / "ships-human.json")
    assert human["metadata"] == {
        "version": "0.10.12",
        "schemaVersion": "1-0.10.12",
        "species": "human",
        "generatedAt": "2026-10-19T12:00:00.000Z",
        "itemCount": 2,
    }
    sparrow, missile = human["data"]
    assert sparrow["slug"] == "sparrow"
    assert sparrow["attributes"]["gun ports"] == 1
    assert "turret mounts" not in sparrow["attributes"]
    assert sparrow["outfits"] == [{"name": "Beam Laser", "quantity": 2}, {"name": "Hyperdrive", "quantity": 1}]
    assert sparrow["positions"] == [{"type": "gun", "x": 0, "y": -30, "outfit": "Beam Laser"}]
    assert missile["name"] == "Sparrow (Missile)"
    assert missile["outfits"] == [{"name": "Meteor Missile Launcher", "quantity": 1}]
    assert missile["sprite"] == "ship/sparrow"

    beetle = _load(output / "ships" / "ships-hai.json")["data"][0]
    assert beetle["attributes"]["hull"] == 0
    assert beetle["attributes"]["turret mounts"] == 1

    outfit = _load(output / "outfits" / "outfits-human.json")["data"][0]
    assert outfit["cost"] == 12000
    assert outfit["attributes"] == {"weapon": {"velocity": 60}}

    dropped = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(dropped) == 1
    assert '[human] "Broken Hull"' in dropped[0].getMessage()


def test_rerun_leaves_artifacts_untouched(game_data, tmp_path, fixed_clock):
    output = tmp_path / "output"
    _engine(game_data, output, fixed_clock).run()

    report = _engine(game_data, output, fixed_clock).run()
    assert report.files_written == 0


def test_parallel_batches_match_serial(game_data, tmp_path, fixed_clock):
    serial = tmp_path / "serial"
    parallel = tmp_path / "parallel"
    _engine(game_data, serial, fixed_clock).run()
    _engine(game_data, parallel, fixed_clock, workers=4).run()

    for kind in ("ships", "outfits"):
        for path in sorted((serial / kind).glob("*.json")):
            assert _load(path) == _load(parallel / kind / path.name)


def test_dry_build_writes_nothing(game_data, tmp_path, fixed_clock):
    output = tmp_path / "output"
    report = _engine(game_data, output, fixed_clock).run(write=False)

    assert report.total(RecordKind.SHIP) == 3
    assert not output.exists()


def test_bad_indentation_aborts_with_file_and_line(game_data, tmp_path, fixed_clock):
    bad = game_data / "human" / "ships.txt"
    bad.write_text('ship "A"\n\t\t\tmass 5\n', encoding="utf-8")

    with pytest.raises(MalformedIndentationError) as excinfo:
        _engine(game_data, tmp_path / "output", fixed_clock).run()

    assert excinfo.value.line == 2
    assert excinfo.value.path == str(bad)
    assert str(bad) in excinfo.value.message


def test_no_source_files_is_fatal(tmp_path, fixed_clock):
    (tmp_path / "data").mkdir()
    with pytest.raises(NoMatchingFilesError):
        _engine(tmp_path / "data", tmp_path / "output", fixed_clock).run()

import json
from datetime import datetime, timedelta, timezone

import pytest

from shipwright.core.errors import ArtifactError, ConfigurationError
from shipwright.core.config import DEFAULT_FILE_PATTERNS, PipelineConfig, config_from_mapping, load_config
from shipwright.core.models import RecordKind
from shipwright.services.metadata import MetadataService, iso_timestamp
from shipwright.services.writer import ArtifactWriter
from shipwright.utils.slug import slugify

FIXED = datetime(2026, 10, 19, 8, 30, 0, 123456, tzinfo=timezone.utc)


# --- Metadata -----------------------------------------------------------------

def test_metadata_fields():
    service = MetadataService("0.10.12", "1", clock=lambda: FIXED)
    metadata = service.create_metadata("hai", 12)

    assert metadata.to_dict() == {
        "version": "0.10.12",
        "schemaVersion": "1-0.10.12",
        "species": "hai",
        "generatedAt": "2026-10-19T08:30:00.123Z",
        "itemCount": 12,
    }


def test_iso_timestamp_converts_to_utc():
    local = datetime(2026, 10, 19, 10, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert iso_timestamp(local) == "2026-10-19T08:00:00.000Z"


# --- Slug ---------------------------------------------------------------------

@pytest.mark.parametrize("name,slug", [
    ("R01 Skirmish Battery (Advanced)!", "r01-skirmish-battery-advanced"),
    ("  Bactrian  ", "bactrian"),
    ("Star Queen / Sea Serpent", "star-queen-sea-serpent"),
    ("---", ""),
    ("", ""),
])
def test_slugify(name, slug):
    assert slugify(name) == slug
    assert slugify(slug) == slug


# --- Configuration ------------------------------------------------------------

def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "shipwright.yaml"
    path.write_text(
        "gameVersion: \"0.10.12\"\n"
        "schemaVersion: 2\n"
        "dataRoot: game/data\n"
        "workers: 4\n"
        "filePatterns:\n"
        "  outfits: [weapons.txt]\n",
        encoding="utf-8",
    )
    config = load_config(str(path))

    assert config.game_version == "0.10.12"
    assert config.schema_version == "2"
    assert config.data_root == "game/data"
    assert config.workers == 4
    assert config.patterns_for(RecordKind.OUTFIT) == ["weapons.txt"]
    assert config.patterns_for(RecordKind.SHIP) == DEFAULT_FILE_PATTERNS["ships"]


def test_defaults_without_file():
    config = load_config()
    assert config == PipelineConfig()
    assert config.comment_marker == "#"


@pytest.mark.parametrize("data", [
    {"colour": "blue"},
    {"workers": 0},
    {"tabWidth": "wide"},
    {"commentMarker": ""},
    {"filePatterns": {"ships": []}},
])
def test_invalid_config_is_rejected(data):
    with pytest.raises(ConfigurationError):
        config_from_mapping(data)


def test_config_file_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "missing.yaml"))

    broken = tmp_path / "broken.yaml"
    broken.write_text("workers: [1\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(str(broken))


def test_overrides_skip_none():
    config = PipelineConfig().with_overrides(data_root="elsewhere", output_dir=None)
    assert config.data_root == "elsewhere"
    assert config.output_dir == "output"


# --- Artifact writer ----------------------------------------------------------

def _metadata(count, moment=FIXED, species="hai"):
    return MetadataService("0.10.12", "1", clock=lambda: moment).create_metadata(species, count)


def test_write_and_read_artifact(tmp_path):
    writer = ArtifactWriter(tmp_path)
    data = [{"name": "Shield Beetle", "slug": "shield-beetle"}]

    assert writer.write(RecordKind.SHIP, "hai", _metadata(1), data) is True

    path = tmp_path / "ships" / "ships-hai.json"
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["metadata"]["itemCount"] == 1
    assert document["data"] == data
    assert writer.read(path) == document
    assert not list((tmp_path / "ships").glob("*.tmp"))


def test_rewrite_with_only_new_timestamp_is_skipped(tmp_path):
    """
    IDEMPOTENCY TEST: Regenerating identical data leaves the file alone.
    """
    writer = ArtifactWriter(tmp_path)
    data = [{"name": "A"}]
    later = datetime(2027, 1, 1, tzinfo=timezone.utc)

    writer.write(RecordKind.OUTFIT, "human", _metadata(1, species="human"), data)
    assert writer.write(RecordKind.OUTFIT, "human", _metadata(1, later, "human"), data) is False
    assert writer.write(RecordKind.OUTFIT, "human", _metadata(2, later, "human"), data + [{"name": "B"}]) is True


def test_read_rejects_broken_artifacts(tmp_path):
    writer = ArtifactWriter(tmp_path)
    bad = tmp_path / "bad.json"
    bad.write_text('{"data": []}', encoding="utf-8")

    with pytest.raises(ArtifactError):
        writer.read(bad)
    with pytest.raises(ArtifactError):
        writer.read(tmp_path / "absent.json")


def test_validate_tree(tmp_path):
    writer = ArtifactWriter(tmp_path)
    with pytest.raises(ArtifactError):
        writer.validate_tree()

    writer.write(RecordKind.SHIP, "hai", _metadata(2), [{"name": "A"}, {"name": "B"}])
    writer.write(RecordKind.OUTFIT, "hai", _metadata(1), [{"name": "C"}])
    assert writer.validate_tree() == {"ships": 2, "outfits": 1}

    path = writer.path_for(RecordKind.OUTFIT, "hai")
    document = json.loads(path.read_text(encoding="utf-8"))
    document["metadata"]["itemCount"] = 5
    path.write_text(json.dumps(document), encoding="utf-8")
    with pytest.raises(ArtifactError):
        writer.validate_tree()

import io

import pytest
from rich.console import Console

from shipwright.cli.main import ShipwrightCLI


@pytest.fixture
def cli():
    buffer = io.StringIO()
    return ShipwrightCLI(Console(file=buffer, width=160, force_terminal=False)), buffer


def test_generate_then_validate_then_stats(cli, game_data, tmp_path):
    """
    CLI TEST: The three commands chained the way a release build runs them.
    """
    app, buffer = cli
    output = tmp_path / "output"

    assert app.run(["generate", "--data-root", str(game_data), "--output", str(output)]) == 0
    assert (output / "ships" / "ships-human.json").exists()
    assert "Shipwright Generation Report" in buffer.getvalue()

    assert app.run(["validate", "--output", str(output)]) == 0
    assert "Output tree is valid" in buffer.getvalue()

    artifact = output / "ships" / "ships-human.json"
    assert app.run(["stats", str(artifact), "sparrow", "--named"]) == 0
    text = buffer.getvalue()
    assert "Movement: Sparrow" in text
    assert "666.67" in text
    assert "720" in text


def test_config_file_and_overrides(cli, game_data, tmp_path):
    app, _ = cli
    config = tmp_path / "shipwright.yaml"
    config.write_text(f"dataRoot: {tmp_path / 'nowhere'}\noutputDir: {tmp_path / 'ignored'}\n", encoding="utf-8")

    code = app.run([
        "generate", "--config", str(config), "--data-root", str(game_data), "--output", str(tmp_path / "out"),
    ])

    assert code == 0
    assert (tmp_path / "out" / "outfits" / "outfits-hai.json").exists()
    assert not (tmp_path / "ignored").exists()


def test_fatal_error_exits_one(cli, tmp_path):
    app, buffer = cli
    code = app.run(["generate", "--data-root", str(tmp_path / "missing"), "--output", str(tmp_path / "out")])

    assert code == 1
    assert "E4005" in buffer.getvalue()


def test_stats_unknown_ship(cli, game_data, tmp_path):
    app, buffer = cli
    output = tmp_path / "output"
    app.run(["generate", "--data-root", str(game_data), "--output", str(output)])

    assert app.run(["stats", str(output / "ships" / "ships-hai.json"), "Nonexistent"]) == 1
    assert "E4010" in buffer.getvalue()


def test_validate_missing_tree(cli, tmp_path):
    app, _ = cli
    assert app.run(["validate", "--output", str(tmp_path / "empty")]) == 1


def test_no_command_prints_help(cli):
    app, buffer = cli
    assert app.run([]) == 0
    assert "Shipwright v" in buffer.getvalue()


def test_undecodable_source_exits_one(cli, game_data, tmp_path):
    """
    CLI TEST: A non-UTF-8 source file ends in the fatal panel, not a traceback.
    """
    app, buffer = cli
    (game_data / "human" / "ships.txt").write_bytes(b'ship "A"\n\tsprite "\xff\xfe"\n')

    code = app.run(["generate", "--data-root", str(game_data), "--output", str(tmp_path / "out")])

    assert code == 1
    assert "E4005" in buffer.getvalue()

from datetime import datetime, timezone

import pytest

HUMAN_SHIPS = '''\
# Human hulls
ship "Sparrow"
	sprite "ship/sparrow"
	attributes
		category "Interceptor"
		"cost" 225000
		"mass" 50
		"drag" 0.9
		"thrust" 10
		"turn" 200
	outfits
		"Beam Laser" 2
		"Hyperdrive"
	gun 0 -30 "Beam Laser"
	description "A small, fast fighter."

ship "Broken Hull"
	attributes
		category "Transport"
	gun
'''

HUMAN_VARIANTS = '''\
ship "Sparrow" "Sparrow (Missile)"
	outfits
		"Meteor Missile Launcher"
'''

HUMAN_OUTFITS = '''\
outfit "Beam Laser"
	category "Guns"
	cost 12000
	"mass" 3
	weapon
		"velocity" 60
	description "A basic laser."
'''

HAI_SHIPS = '''\
ship "Shield Beetle"
	attributes
		category "Heavy Freighter"
		"mass" 300
		"hull" ""
	turret 0 0
'''

HAI_OUTFITS = '''\
outfit "Hai Tree Cannon"
	category "Guns"
'''


@pytest.fixture
def game_data(tmp_path):
    """A two-species data root in the source game's layout."""
    root = tmp_path / "data"
    (root / "human").mkdir(parents=True)
    (root / "hai").mkdir()
    (root / "human" / "ships.txt").write_text(HUMAN_SHIPS, encoding="utf-8")
    (root / "human" / "variants.txt").write_text(HUMAN_VARIANTS, encoding="utf-8")
    (root / "human" / "outfits.txt").write_text(HUMAN_OUTFITS, encoding="utf-8")
    (root / "hai" / "hai ships.txt").write_text(HAI_SHIPS, encoding="utf-8")
    (root / "hai" / "hai outfits.txt").write_text(HAI_OUTFITS, encoding="utf-8")
    return root


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

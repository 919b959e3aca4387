"""
Record schemas in catalog form.

Each level lists its 'required' keys and a 'fields' map of
{name: {'type': ..., ...}}. Optional fields may be absent (or None);
array fields with a 'default' are filled in when absent.
"""

from shipwright.core.models import PositionKind

STRING = {"type": "string"}
NUMBER = {"type": "number"}

SHIP_NUMERIC_ATTRIBUTES = (
    "cost",
    "shields",
    "hull",
    "required crew",
    "bunks",
    "mass",
    "drag",
    "heat dissipation",
    "fuel capacity",
    "cargo space",
    "outfit space",
    "weapon capacity",
    "engine capacity",
    "gun ports",
    "turret mounts",
)

SHIP_ATTRIBUTES = {
    "type": "object",
    "required": ["category"],
    "fields": {
        "category": STRING,
        "licenses": {"type": "array", "items": STRING},
        "weapon": {
            "type": "object",
            "fields": {
                "blast radius": NUMBER,
                "shield damage": NUMBER,
                "hull damage": NUMBER,
                "hit force": NUMBER,
            },
        },
        **{key: NUMBER for key in SHIP_NUMERIC_ATTRIBUTES},
    },
}

POSITION = {
    "type": "object",
    "required": ["type"],
    "fields": {
        "type": {"type": "string", "enum": [kind.value for kind in PositionKind]},
        "x": NUMBER,
        "y": NUMBER,
        "z": NUMBER,
        "outfit": STRING,
        "bayType": STRING,
        "launchEffect": STRING,
        "effect": STRING,
        "count": NUMBER,
    },
}

# Kinds that place a point on the hull and so need both coordinates
COORDINATE_KINDS = frozenset(k.value for k in (
    PositionKind.ENGINE, PositionKind.GUN, PositionKind.TURRET, PositionKind.BAY, PositionKind.LEAK,
))

SHIP_SCHEMA = {
    "type": "object",
    "required": ["name", "attributes"],
    "fields": {
        "name": {"type": "string", "non_empty": True},
        "plural": STRING,
        "sprite": STRING,
        "thumbnail": STRING,
        "attributes": SHIP_ATTRIBUTES,
        "outfits": {
            "type": "array",
            "default": [],
            "items": {
                "type": "object",
                "required": ["name", "quantity"],
                "fields": {"name": STRING, "quantity": NUMBER},
            },
        },
        "positions": {"type": "array", "default": [], "items": POSITION},
        "descriptions": {"type": "array", "default": [], "items": STRING},
    },
}

OUTFIT_SCHEMA = {
    "type": "object",
    "required": ["name"],
    "fields": {
        "name": {"type": "string", "non_empty": True},
        "plural": STRING,
        "category": STRING,
        "series": STRING,
        "index": NUMBER,
        "cost": NUMBER,
        "thumbnail": STRING,
        "mass": NUMBER,
        "outfit space": NUMBER,
        "attributes": {"type": "object", "default": {}},
        "descriptions": {"type": "array", "default": [], "items": STRING},
    },
}

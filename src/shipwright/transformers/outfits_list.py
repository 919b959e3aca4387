from typing import Any, Dict, List

from shipwright.utils.numbers import is_number


def outfits_to_list(block: Any) -> List[Dict[str, Any]]:
    """
    Converts an 'outfits' block (outfit name -> count or presence marker)
    into an ordered [{name, quantity}] list. Source key order is kept and
    any non-numeric marker counts as one.
    """
    if isinstance(block, list):
        # Several 'outfits' blocks in one record: concatenate in file order
        return [entry for part in block for entry in outfits_to_list(part)]
    if not isinstance(block, dict):
        return []
    return [
        {"name": name, "quantity": value if is_number(value) else 1}
        for name, value in block.items()
    ]


class OutfitsListTransformer:
    """Reshapes a ship's 'outfits' mapping into a list."""

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {**record, "outfits": outfits_to_list(record.get("outfits"))}

"""Multilocation → flat asset id resolution."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

NATIVE_ASSET_ID = "native"


def location_key(location: Any) -> str:
    """Canonical string for a location descriptor: compact, key-sorted JSON."""
    return json.dumps(location, sort_keys=True, separators=(",", ":"), default=str)


def load_location_table(path: str) -> dict[str, str]:
    """Load a {location key: asset id} table from JSON. Empty path → empty table.

    Keys may be given either as canonical key strings or as any JSON string that
    parses to the same descriptor; both are normalized through location_key().
    """
    if not path:
        return {}
    raw = json.loads(Path(path).read_text())
    table: dict[str, str] = {}
    for key, asset_id in raw.items():
        try:
            key = location_key(json.loads(key))
        except json.JSONDecodeError:
            pass
        table[key] = str(asset_id)
    logger.info("Loaded %d multilocation mappings from %s", len(table), path)
    return table


def _variant(value: Any) -> tuple[str, Any] | None:
    """Split a decoded enum value into (variant name, payload).

    Decoders emit unit variants either as a bare string ("Here") or as a
    single-key mapping ({"Here": None}).
    """
    if isinstance(value, str):
        return value, None
    if isinstance(value, dict) and len(value) == 1:
        name, payload = next(iter(value.items()))
        return str(name), payload
    return None


def _lower(name: str) -> str:
    return name[:1].lower() + name[1:]


class MultilocationResolver:
    """Maps a multilocation descriptor to an asset id, or None when unrecognized.

    Never raises: descriptors come straight from chain data and an unknown shape
    only means the asset can't be recorded.
    """

    def __init__(self, table: dict[str, str] | None = None, native_asset_id: str = NATIVE_ASSET_ID) -> None:
        self._table = dict(table or {})
        self._native_asset_id = native_asset_id

    @staticmethod
    def has_interior(location: Any) -> bool:
        return isinstance(location, dict) and "interior" in location

    def resolve(self, location: Any, is_swap_endpoint: bool = False) -> str | None:
        if not self.has_interior(location):
            return None

        mapped = self._table.get(location_key(location))
        if mapped is not None:
            return mapped

        junctions = _variant(location["interior"])
        if junctions is None:
            return None
        kind, payload = junctions

        if _lower(kind) == "here":
            return self._native_asset_id

        try:
            parents = int(location.get("parents", 0))
        except (TypeError, ValueError):
            return None
        if parents != 0:
            # Foreign asset: the location itself is the identity
            return location_key(location)

        asset_id = self._local_asset_id(kind, payload)
        if asset_id is None:
            logger.debug(
                "Unrecognized %s location: %s",
                "swap endpoint" if is_swap_endpoint else "fee asset",
                location_key(location),
            )
        return asset_id

    @staticmethod
    def _local_asset_id(kind: str, payload: Any) -> str | None:
        """X2(PalletInstance, GeneralIndex) → the general index."""
        if _lower(kind) != "x2" or not isinstance(payload, list) or len(payload) != 2:
            return None
        pallet, index = _variant(payload[0]), _variant(payload[1])
        if pallet is None or index is None:
            return None
        if _lower(pallet[0]) != "palletInstance" or _lower(index[0]) != "generalIndex":
            return None
        if isinstance(index[1], bool) or not isinstance(index[1], (int, str)):
            return None
        return str(index[1])

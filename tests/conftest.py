"""
Shared fixtures: a four release wayback configuration and its settings.
"""

import pytest

from wayback_core.config import WaybackSettings


def _release_entry(release_num, title, layer_identifier, item_id, metadata_item_id, metadata_service):
    return {
        "itemID": item_id,
        "itemTitle": title,
        "itemURL": (
            "https://wayback.maptiles.arcgis.com/arcgis/rest/services/World_Imagery/WMTS/1.0.0/"
            f"default028mm/MapServer/tile/{release_num}/{{level}}/{{row}}/{{col}}"
        ),
        "metadataLayerItemID": metadata_item_id,
        "metadataLayerUrl": (
            "https://metadata.maptiles.arcgis.com/arcgis/rest/services/"
            f"{metadata_service}/MapServer"
        ),
        "layerIdentifier": layer_identifier,
    }


@pytest.fixture
def wayback_config():
    """Configuration document with four releases, deliberately out of order."""
    return {
        "3201": _release_entry(
            3201, "World Imagery (Wayback 2018-11-07)", "WB_2018_R15",
            "f1d75d38d15240f7aa51b106cd0c9aae", "6f3b3d80c3f14f4388c544393f31b927",
            "World_Imagery_Metadata_2018_r15",
        ),
        "58924": _release_entry(
            58924, "World Imagery (Wayback 2025-09-25)", "WB_2025_R09",
            "925025d364fa4e49958f4f1dd2362beb", "7882c43daf3d4955bed8b5de18bccd82",
            "World_Imagery_Metadata_2025_r09",
        ),
        "23383": _release_entry(
            23383, "World Imagery (Wayback 2014-12-03)", "WB_2014_R19",
            "408d5b24fc4e4650bc7799dd1e1e606f", "ff7d8be6b25043469feeb7a3b958ef84",
            "World_Imagery_Metadata_2014_r19",
        ),
        "44988": _release_entry(
            44988, "World Imagery (Wayback 2022-10-12)", "WB_2022_R13",
            "dec36821b2a6470cb5359babf5be2755", "3ca7cebafaee45c2b01af8ddfa277491",
            "World_Imagery_Metadata_2022_r13",
        ),
    }


@pytest.fixture
def wayback_settings(wayback_config):
    """Settings carrying the four release configuration."""
    return WaybackSettings(config_data=wayback_config, sub_domains=["wayback"])

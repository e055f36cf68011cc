"""
Unit tests for release models and title date parsing.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from wayback_core.releases import (
    ReleaseRecord, ReleaseDate, extract_release_date, is_valid_release_entry
)


def local_midnight_ms(year, month, day):
    return int(round(datetime(year, month, day).timestamp() * 1000))


class TestExtractReleaseDate:
    """Test release date extraction from titles."""

    def test_standard_title(self):
        """Test a regular wayback title."""
        result = extract_release_date("World Imagery (Wayback 2014-02-20)")

        assert result == ReleaseDate("2014-02-20", local_midnight_ms(2014, 2, 20))
        assert result.label == "2014-02-20"

    def test_bare_date(self):
        """Test a title that is only a date."""
        assert extract_release_date("2018-07-15").label == "2018-07-15"

    @pytest.mark.parametrize("title", [None, "", "   ", "No date here", "World Imagery (Wayback 2014-02)"])
    def test_no_date(self, title):
        """Test titles without a full date."""
        assert extract_release_date(title) == ReleaseDate("", 0)

    def test_first_date_wins(self):
        """Test only the first date of a title is used."""
        result = extract_release_date("Wayback 2019-01-02 replaces 2018-12-31")

        assert result.label == "2019-01-02"
        assert result.timestamp == local_midnight_ms(2019, 1, 2)

    def test_impossible_calendar_date(self):
        """Test a well formed but impossible date yields no date."""
        assert extract_release_date("World Imagery (Wayback 2014-02-30)") == ReleaseDate("", 0)


class TestIsValidReleaseEntry:
    """Test structural validation of configuration entries."""

    @pytest.fixture
    def entry(self, wayback_config):
        return dict(wayback_config["44988"])

    def test_valid_entry(self, entry):
        assert is_valid_release_entry(entry) is True

    @pytest.mark.parametrize("field", [
        "itemTitle", "itemID", "itemURL", "metadataLayerUrl", "metadataLayerItemID", "layerIdentifier"
    ])
    def test_missing_field(self, entry, field):
        """Test every required field must be present."""
        del entry[field]
        assert is_valid_release_entry(entry) is False

    def test_non_string_field(self, entry):
        """Test required fields must be strings."""
        entry["itemID"] = 12345
        assert is_valid_release_entry(entry) is False

    def test_not_a_mapping(self):
        assert is_valid_release_entry(["itemID"]) is False
        assert is_valid_release_entry(None) is False


class TestReleaseRecord:
    """Test ReleaseRecord model."""

    def test_from_config_entry(self, wayback_config):
        """Test building a record from a configuration entry."""
        record = ReleaseRecord.from_config_entry(44988, wayback_config["44988"])

        assert record.release_num == 44988
        assert record.release_date_label == "2022-10-12"
        assert record.release_datetime == local_midnight_ms(2022, 10, 12)
        assert record.item_id == "dec36821b2a6470cb5359babf5be2755"
        assert record.metadata_layer_item_id == "3ca7cebafaee45c2b01af8ddfa277491"
        assert record.item_url.endswith("/tile/44988/{level}/{row}/{col}")
        assert record.item_release_name is None

    def test_extra_keys_ignored(self, wayback_config):
        """Test unknown configuration keys do not break record creation."""
        entry = dict(wayback_config["3201"], somethingNew="value")

        assert ReleaseRecord.from_config_entry(3201, entry).release_num == 3201

    def test_to_dict_uses_configuration_keys(self, wayback_config):
        """Test serialization back to camelCase keys."""
        data = ReleaseRecord.from_config_entry(3201, wayback_config["3201"]).to_dict()

        assert data["releaseNum"] == 3201
        assert data["itemID"] == "f1d75d38d15240f7aa51b106cd0c9aae"
        assert data["releaseDateLabel"] == "2018-11-07"
        assert data["layerIdentifier"] == "WB_2018_R15"

    def test_record_is_frozen(self, wayback_config):
        """Test records cannot be modified."""
        record = ReleaseRecord.from_config_entry(3201, wayback_config["3201"])

        with pytest.raises(ValidationError):
            record.release_num = 1

    def test_populate_by_field_name(self):
        """Test records can be created with snake_case names."""
        record = ReleaseRecord(
            release_num=1,
            item_id="a",
            item_title="World Imagery",
            item_url="https://example.com/{level}/{row}/{col}",
            metadata_layer_item_id="b",
            metadata_layer_url="https://example.com/MapServer",
        )

        assert record.release_datetime == 0
        assert record.layer_identifier is None

"""Tests for scoring equipment/region/state matching utilities."""

import pytest


class TestNormalizeLabel:
    """Test normalize_label."""

    def test_lowercases_and_strips(self):
        """normalize_label should lowercase and trim."""
        from atlas_fit.scoring.matchers import normalize_label

        assert normalize_label("  Dry Van ") == "dry van"

    def test_none_becomes_empty(self):
        """None should normalize to an empty string."""
        from atlas_fit.scoring.matchers import normalize_label

        assert normalize_label(None) == ""


class TestEquipmentMatches:
    """Test the three-pass equipment matcher."""

    def test_missing_load_equipment_never_matches(self):
        """No load equipment means no match."""
        from atlas_fit.scoring.matchers import equipment_matches

        assert equipment_matches(["Dry Van"], None) == (False, None)
        assert equipment_matches(["Dry Van"], "") == (False, None)

    def test_contained_token_matches_first(self):
        """A preferred token inside the load text should match as-is."""
        from atlas_fit.scoring.matchers import equipment_matches

        match = equipment_matches(["Reefer", "Dry Van"], "Dry Van 53ft")

        assert match.hit is True
        assert match.matched == "dry van"

    def test_alias_group_matches_canonical_key(self):
        """Alias patterns should map load text onto canonical driver tokens."""
        from atlas_fit.scoring.matchers import equipment_matches

        match = equipment_matches(["dryvan"], "Van")

        assert match.hit is True
        assert match.matched == "dryvan"

    def test_blank_preferences_are_ignored(self):
        """Blank tokens should never produce a match."""
        from atlas_fit.scoring.matchers import equipment_matches

        assert equipment_matches(["", "   "], "Flatbed") == (False, None)

    def test_unrelated_equipment_does_not_match(self):
        """Different equipment families should not match."""
        from atlas_fit.scoring.matchers import equipment_matches

        assert equipment_matches(["Reefer"], "Flatbed") == (False, None)


class TestRegions:
    """Test state -> region lookups."""

    def test_table_covers_states_and_dc(self):
        """The lookup should cover all 50 states plus DC."""
        from atlas_fit.scoring.matchers import STATE_TO_REGION

        assert len(STATE_TO_REGION) == 51
        assert set(STATE_TO_REGION.values()) == {
            "West Coast",
            "West",
            "Midwest",
            "South",
            "Northeast",
        }

    @pytest.mark.parametrize(
        ("state", "region"),
        [
            ("CA", "West Coast"),
            ("ak", "West Coast"),
            ("AZ", "West Coast"),
            ("CO", "West"),
            ("HI", "West"),
            ("DC", "South"),
            ("MD", "South"),
            ("PA", "Northeast"),
            ("ND", "Midwest"),
            ("XX", None),
            (None, None),
        ],
    )
    def test_region_for_state(self, state, region):
        """region_for_state should follow the fixed table."""
        from atlas_fit.scoring.matchers import region_for_state

        assert region_for_state(state) == region

    def test_derive_load_regions_deduplicates_in_order(self):
        """Tags should be unique and ordered origin first."""
        from atlas_fit.scoring.matchers import derive_load_regions

        assert derive_load_regions("CA", "WA") == ["West Coast"]
        assert derive_load_regions("TX", "IL") == ["South", "Midwest"]
        assert derive_load_regions(None, "NY") == ["Northeast"]
        assert derive_load_regions(None, None) == []


class TestExtractStatesFromText:
    """Test state abbreviation scanning."""

    def test_finds_state_after_city(self):
        """A 'City, ST' string should yield its state."""
        from atlas_fit.scoring.matchers import extract_states_from_text

        assert extract_states_from_text("Sacramento, CA") == ["CA"]

    def test_is_case_insensitive_and_uppercases(self):
        """Lowercase codes should be found and returned upper case."""
        from atlas_fit.scoring.matchers import extract_states_from_text

        assert extract_states_from_text("houston, tx") == ["TX"]

    def test_ignores_codes_inside_words(self):
        """Two-letter runs inside longer words should not count."""
        from atlas_fit.scoring.matchers import extract_states_from_text

        assert extract_states_from_text("Camden") == []

    def test_empty_input(self):
        """None and empty strings yield no states."""
        from atlas_fit.scoring.matchers import extract_states_from_text

        assert extract_states_from_text(None) == []
        assert extract_states_from_text("") == []

"""
Tests for catalog filtering and facets.
"""
import pytest

from lotfinder.models.listing import Listing
from lotfinder.models.query import ListingQuery
from lotfinder.pipeline import facets
from lotfinder.pipeline.filter import (
    ListingFilter,
    build_haystack,
    filter_listings,
    matches_text,
)


def lots(listings: list[Listing]) -> list[str]:
    return [l.lot_number for l in listings]


class TestListingFilter:
    """Tests for ListingFilter."""

    @pytest.fixture
    def sample_listings(self) -> list[Listing]:
        """Create sample listings for testing."""
        return [
            Listing(
                lot_number="111",
                make="BMW",
                model="X5",
                year=2019,
                color="BLACK",
                primary_damage="FRONT END",
                location="DALLAS, TX",
                base_site="copart",
                odometer=30000,  # 48,280 km
                buy_it_now_price=15000,
                transmission="AUTOMATIC",
            ),
            Listing(
                lot_number="222",
                make="TOYOTA",
                model="CAMRY",
                year=2015,
                color="WHITE",
                primary_damage="HAIL",
                location="HOUSTON, TX",
                base_site="copart",
                odometer=100000,  # 160,934 km
            ),
            Listing(
                lot_number="333",
                make="FORD",
                model="F-150",
                year=2012,
                color="BLUE",
                condition="RUNS AND DRIVES",
                primary_damage="WATER/FLOOD",
                location="MIAMI, FL",
                base_site="copart",
                buy_it_now_price=5000,
                transmission="MANUAL",
            ),
            Listing(
                lot_number="444",
                make="Citroën",
                model="C4",
                year=2010,
                location="Paris",
                base_site="iaai",
                odometer=120000,  # 193,121 km
            ),
        ]

    def test_empty_query_returns_everything_in_order(self, sample_listings):
        result = ListingFilter().filter(sample_listings, ListingQuery())

        assert lots(result) == ["111", "222", "333", "444"]

    def test_blank_text_is_no_text_condition(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="   "))

        assert lots(result) == ["111", "222", "333", "444"]

    def test_case_insensitive_make(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="bmw"))

        assert lots(result) == ["111"]

    def test_typo_still_matches(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="bmq"))

        assert lots(result) == ["111"]

    def test_accented_make_matches_plain_query(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="citroen"))

        assert lots(result) == ["444"]

    def test_every_token_must_match(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="toyota houston"))

        assert lots(result) == ["222"]

    def test_shared_token_keeps_order(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="tx"))

        assert lots(result) == ["111", "222"]

    def test_lot_number_search(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="333"))

        assert lots(result) == ["333"]

    def test_brand_filter(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(brand="TOYOTA"))

        assert lots(result) == ["222"]

    def test_company_filter(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(company="iaai"))

        assert lots(result) == ["444"]

    def test_transmission_filter(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(transmission="MANUAL"))

        assert lots(result) == ["333"]

    def test_text_and_filters_are_anded(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(text="tx", brand="TOYOTA"))

        assert lots(result) == ["222"]

    def test_odometer_range_in_km(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(odometer_range="40000-80000"))

        assert lots(result) == ["111"]

    def test_unknown_odometer_counts_as_zero(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(odometer_range="0-40000"))

        assert lots(result) == ["333"]

    def test_open_ended_odometer_range(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(odometer_range="160000-"))

        assert lots(result) == ["222", "444"]

    def test_buy_now_availability(self, sample_listings):
        available = filter_listings(sample_listings, ListingQuery(buy_now="available"))
        not_available = filter_listings(sample_listings, ListingQuery(buy_now="not_available"))

        assert lots(available) == ["111", "333"]
        assert lots(not_available) == ["222", "444"]

    def test_year_bounds_inclusive(self, sample_listings):
        result = filter_listings(sample_listings, ListingQuery(year_from="2012", year_to=2015))

        assert lots(result) == ["222", "333"]

    @pytest.mark.parametrize("query", [
        ListingQuery(text="front"),
        ListingQuery(text="white hail"),
        ListingQuery(color="BLUE"),
        ListingQuery(text="zzzzzzzz"),
        ListingQuery(year_from=2011),
    ])
    def test_result_is_ordered_subsequence(self, sample_listings, query):
        result = filter_listings(sample_listings, query)

        positions = [sample_listings.index(l) for l in result]
        assert positions == sorted(positions)
        assert len(set(positions)) == len(positions)

    def test_empty_catalog(self):
        assert filter_listings([], ListingQuery(text="bmw")) == []


class TestHaystack:
    """Tests for haystack building and the text condition."""

    def test_haystack_skips_empty_fields(self):
        listing = Listing(lot_number="9", make="KIA", model="RIO", year=0, location="")

        assert build_haystack(listing) == "kia rio 9"

    def test_empty_haystack_never_matches(self):
        listing = Listing(lot_number="---", make="", model="")

        assert build_haystack(listing) == ""
        assert not matches_text(listing, "kia", ["kia"])

    def test_full_query_substring(self):
        listing = Listing(lot_number="1", make="LAND ROVER", model="DEFENDER")

        assert matches_text(listing, "rover defender", ["rover", "defender"])


class TestFacets:
    """Tests for filter option lists."""

    @pytest.fixture
    def catalog(self) -> list[Listing]:
        return [
            Listing(lot_number="1", make="FORD", model="FOCUS", year=2014, color="RED", buy_it_now_price=900),
            Listing(lot_number="2", make="BMW", model="X3", year=2019, color="BLACK", base_site=" Copart "),
            Listing(lot_number="3", make="FORD", model="ESCAPE", year=2014, color="RED"),
        ]

    def test_brands_sorted_unique(self, catalog):
        assert facets.brands(catalog) == ["BMW", "FORD"]

    def test_models_require_brand(self, catalog):
        assert facets.models_for_brand(catalog, None) == []
        assert facets.models_for_brand(catalog, "FORD") == ["ESCAPE", "FOCUS"]

    def test_years_newest_first(self, catalog):
        assert facets.available_years(catalog) == [2019, 2014]

    def test_companies_normalized(self, catalog):
        assert facets.companies(catalog) == ["copart"]

    def test_buy_now_options(self, catalog):
        assert [v for v, _ in facets.buy_now_options(catalog)] == ["available", "not_available"]

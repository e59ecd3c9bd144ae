"""
Tests for comparison picks, lot details and favorites.
"""
import pytest

from lotfinder.comparison import (
    ComparisonSet,
    FavoritesStore,
    comparison_rows,
    detail_rows,
    format_auction_date,
)
from lotfinder.models.listing import Listing


@pytest.fixture
def catalog() -> list[Listing]:
    return [Listing(lot_number=str(n), make="FORD") for n in (10, 20, 30)]


class TestComparisonSet:
    """Tests for ComparisonSet."""

    def test_toggle_adds_and_removes(self, catalog):
        comparison = ComparisonSet()

        comparison.toggle(catalog[0])
        comparison.toggle(catalog[1])
        assert [l.lot_number for l in comparison.selected] == ["10", "20"]
        assert comparison.contains("20")

        comparison.toggle(catalog[0])
        assert [l.lot_number for l in comparison.selected] == ["20"]

    def test_swap(self, catalog):
        comparison = ComparisonSet()
        comparison.toggle(catalog[0])
        comparison.toggle(catalog[1])

        comparison.swap()

        assert [l.lot_number for l in comparison.selected] == ["20", "10"]

    def test_swap_needs_two(self, catalog):
        comparison = ComparisonSet()
        comparison.toggle(catalog[2])

        comparison.swap()

        assert [l.lot_number for l in comparison.selected] == ["30"]

    def test_clear(self, catalog):
        comparison = ComparisonSet()
        comparison.toggle(catalog[0])

        comparison.clear()

        assert comparison.selected == []


class TestFavoritesStore:
    """Tests for FavoritesStore."""

    def test_missing_file_is_empty(self, tmp_path):
        assert FavoritesStore(tmp_path / "favorites.json").ids() == []

    def test_add_remove(self, tmp_path):
        store = FavoritesStore(tmp_path / "nested" / "favorites.json")

        store.add("10")
        store.add("20")
        store.add("10")
        assert store.ids() == ["10", "20"]

        store.remove("10")
        assert store.ids() == ["20"]

    def test_toggle_reports_state(self, tmp_path):
        store = FavoritesStore(tmp_path / "favorites.json")

        assert store.toggle("30") is True
        assert store.contains("30")
        assert store.toggle("30") is False
        assert not store.contains("30")

    def test_select_in_catalog_order(self, tmp_path, catalog):
        store = FavoritesStore(tmp_path / "favorites.json")
        store.add("30")
        store.add("10")
        store.add("99")

        assert [l.lot_number for l in store.select(catalog)] == ["10", "30"]

    def test_clear(self, tmp_path):
        store = FavoritesStore(tmp_path / "favorites.json")
        store.add("10")

        store.clear()

        assert store.ids() == []

    @pytest.mark.parametrize("contents", ["{broken", '{"10": true}'])
    def test_unreadable_file_is_empty(self, tmp_path, contents):
        path = tmp_path / "favorites.json"
        path.write_text(contents)

        assert FavoritesStore(path).ids() == []


class TestFavoritesPerUser:
    """Tests for per-user favorites files."""

    def test_users_do_not_share_favorites(self, tmp_path):
        alice = FavoritesStore.for_user(tmp_path, "a1b2c3")
        bob = FavoritesStore.for_user(tmp_path, "d4e5f6")

        alice.add("10")

        assert alice.ids() == ["10"]
        assert bob.ids() == []

    def test_same_user_sees_saved_favorites(self, tmp_path):
        FavoritesStore.for_user(tmp_path, "a1b2c3").add("20")

        assert FavoritesStore.for_user(tmp_path, "a1b2c3").ids() == ["20"]

    def test_user_id_cannot_escape_directory(self, tmp_path):
        store = FavoritesStore.for_user(tmp_path / "favs", "../../etc/passwd")

        assert store.path.parent == tmp_path / "favs"
        assert store.path.name == "etcpasswd.json"

    @pytest.mark.parametrize("user_id", ["", "../..", "   "])
    def test_unusable_user_id(self, tmp_path, user_id):
        with pytest.raises(ValueError):
            FavoritesStore.for_user(tmp_path, user_id)


class TestLotDetails:
    """Tests for detail and comparison rows."""

    @pytest.fixture
    def bmw(self) -> Listing:
        return Listing(
            lot_number="60981234",
            make="BMW",
            model="X5",
            year=2019,
            odometer=31250,
            color="BLACK",
            interior_color="BLACK",
            primary_damage="FRONT END",
            base_site="iaai",
            estimated_retail_value=38900,
            auction_date=1736355600000,  # 2025-01-08T17:00:00Z
            highlights=["Run and Drive", "Keys Available"],
        )

    def test_auction_date_format(self):
        assert format_auction_date(1736355600000) == "January 8, 2025"
        assert format_auction_date(None) == "Not available"
        assert format_auction_date(0) == "Not available"
        assert format_auction_date(1e20) == "Not available"

    def test_detail_rows(self, bmw):
        rows = dict(detail_rows(bmw))

        assert rows["Company"] == "IAAI"
        assert rows["Sale Date"] == "January 8, 2025"
        assert rows["Odometer"] == "50,292 km"
        assert rows["Buy Now Price"] == "Not available"
        assert rows["Est. Retail Value"] == "$38,900"
        assert rows["Highlights"] == "Run and Drive, Keys Available"
        assert rows["Secondary Damage"] == "Not available"

    def test_sparse_listing_fills_every_row(self, bmw):
        sparse = Listing(lot_number="1")

        assert [label for label, _ in detail_rows(sparse)] == [label for label, _ in detail_rows(bmw)]
        rows = dict(detail_rows(sparse))
        assert rows["Company"] == "Copart"
        assert rows["Sale Date"] == "Not available"
        assert rows["Highlights"] == "Not available"
        assert rows["Year"] == "Not available"

    def test_comparison_rows_follow_pick_order(self, bmw):
        ford = Listing(lot_number="71002233", make="FORD", model="F-150", year=2012)

        rows = dict(comparison_rows([ford, bmw]))

        assert rows["Lot Number"] == ["71002233", "60981234"]
        assert rows["Make"] == ["FORD", "BMW"]
        assert rows["Year"] == ["2012", "2019"]

    def test_comparison_rows_empty(self):
        assert comparison_rows([]) == []

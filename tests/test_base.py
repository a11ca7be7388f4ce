"""Tests for query options, records and z-pruning."""

from pubdict.config import Settings
from pubdict.services.dictionary.base import (
    DictInfo,
    Entry,
    Match,
    MatchType,
    QueryOptions,
    items,
    z_prune,
)


def _entry(z=None) -> Entry:
    return Entry(
        id="GO:1",
        dict_id="https://pubdictionaries.org/dictionaries/go",
        description="GO:1",
        terms=("cell", "cellula"),
        z=z,
    )


class TestQueryOptionsFromDict:
    """Tests for QueryOptions.from_dict."""

    def test_empty_options(self):
        """Should treat missing options as nothing given."""
        opts = QueryOptions.from_dict(None)
        assert opts.filter_id is None
        assert opts.filter_dict_id is None
        assert opts.sort is None
        assert opts.sort_dict_id is None
        assert opts.page is None
        assert opts.per_page is None
        assert opts.get_all_results is False

    def test_filters_and_paging(self):
        """Should read filters and paging values."""
        opts = QueryOptions.from_dict(
            {"filter": {"id": ["a"], "dictID": ["d"]}, "page": 2, "perPage": 5}
        )
        assert opts.filter_id == ["a"]
        assert opts.filter_dict_id == ["d"]
        assert opts.page == 2
        assert opts.per_page == 5

    def test_empty_or_malformed_lists_are_absent(self):
        """Should ignore empty lists and lists with non-strings."""
        opts = QueryOptions.from_dict({"filter": {"id": [], "dictID": [1, "x"]}})
        assert opts.filter_id is None
        assert opts.filter_dict_id is None

    def test_invalid_paging_falls_back_to_defaults(self):
        """Should use default page and page size for invalid values."""
        settings = Settings(_env_file=None)
        for page, per_page in [(0, -1), ("2", "5"), (True, 1.5), (None, None)]:
            opts = QueryOptions.from_dict({"page": page, "perPage": per_page})
            assert opts.page_or(settings) == 1
            assert opts.page_size_or(settings) == 15

    def test_sort_string_and_sort_dict_id(self):
        """Should distinguish a sort field from a dictionary preference."""
        assert QueryOptions.from_dict({"sort": "str"}).sort == "str"
        assert QueryOptions.from_dict({"sort": "bogus"}).sort is None
        opts = QueryOptions.from_dict({"sort": {"dictID": ["d1", "d2"]}})
        assert opts.sort is None
        assert opts.sort_dict_id == ["d1", "d2"]

    def test_get_all_results_requires_true(self):
        """Should only enable getAllResults for a literal True."""
        assert QueryOptions.from_dict({"getAllResults": True}).get_all_results is True
        assert QueryOptions.from_dict({"getAllResults": "yes"}).get_all_results is False

    def test_first_page(self):
        """Should report the first page when page is absent or 1."""
        assert QueryOptions.from_dict({}).is_first_page
        assert QueryOptions.from_dict({"page": 1}).is_first_page
        assert not QueryOptions.from_dict({"page": 3}).is_first_page


class TestRecordSerialization:
    """Tests for the VSM record shapes."""

    def test_dict_info(self):
        assert DictInfo(id="x", name="go").to_dict() == {"id": "x", "name": "go"}

    def test_entry(self):
        """Should serialize terms as objects and keep z."""
        assert _entry(z={"dictAbbrev": "go"}).to_dict() == {
            "id": "GO:1",
            "dictID": "https://pubdictionaries.org/dictionaries/go",
            "descr": "GO:1",
            "terms": [{"str": "cell"}, {"str": "cellula"}],
            "z": {"dictAbbrev": "go"},
        }

    def test_entry_without_z(self):
        assert "z" not in _entry().to_dict()

    def test_match_type_codes(self):
        """Should encode prefix matches as S and others as T."""
        match = Match(
            id="GO:1",
            dict_id="d",
            matched_string="cell",
            description="GO:1",
            match_type=MatchType.SUBSTRING,
            terms=("cell",),
        )
        assert match.to_dict()["type"] == "T"
        assert match.to_dict()["str"] == "cell"
        assert MatchType.PREFIX.code == "S"

    def test_items_wrapper(self):
        assert items([DictInfo(id="x", name="go")]) == {"items": [{"id": "x", "name": "go"}]}


class TestZPrune:
    """Tests for z_prune."""

    def test_absent_or_true_keeps_all(self):
        entry = _entry(z={"dictAbbrev": "go", "other": 1})
        assert z_prune([entry], None) == [entry]
        assert z_prune([entry], True) == [entry]

    def test_false_removes_z(self):
        entry = _entry(z={"dictAbbrev": "go"})
        assert z_prune([entry], False)[0].z is None
        assert z_prune([entry], [])[0].z is None

    def test_keeps_named_properties(self):
        """Should keep only the listed z-properties."""
        entry = _entry(z={"dictAbbrev": "go", "other": 1})
        assert z_prune([entry], ["other"])[0].z == {"other": 1}
        assert z_prune([entry], "dictAbbrev")[0].z == {"dictAbbrev": "go"}

    def test_drops_z_when_nothing_left(self):
        entry = _entry(z={"dictAbbrev": "go"})
        assert z_prune([entry], ["missing"])[0].z is None

    def test_records_without_z_untouched(self):
        info = DictInfo(id="x", name="go")
        assert z_prune([info], False) == [info]

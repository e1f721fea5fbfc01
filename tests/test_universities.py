"""Tests for university alias resolution."""
import pytest

from usportstats.errors import UnresolvedAlias
from usportstats.universities import (
    AMBIGUOUS_ALIASES,
    CONFERENCES,
    UNIVERSITIES,
    _canonize,
    _make_reverse_map,
    ambiguous_candidates,
    resolve_university,
    try_resolve_university,
    university_info,
)


class TestResolution:
    """Tests for alias lookup."""

    def test_aliases(self):
        """Test various name formats resolve correctly."""
        assert resolve_university('UBC') == 'University of British Columbia'
        assert resolve_university('Carleton Ravens') == 'Carleton University'
        assert resolve_university('u of t') == 'University of Toronto'
        assert resolve_university('Ryerson') == 'Toronto Metropolitan University'
        assert resolve_university('Rouge et Or') == 'Université Laval'
        assert resolve_university('Gee-Gees') == 'University of Ottawa'

    def test_case_and_punctuation(self):
        assert resolve_university('CARLETON') == 'Carleton University'
        assert resolve_university("Queen's") == "Queen's University"
        assert resolve_university('Queen’s') == "Queen's University"
        assert resolve_university('St. Francis Xavier') == 'St. Francis Xavier University'

    def test_accents(self):
        """Accented and unaccented spellings resolve alike."""
        assert resolve_university('Université de Montréal') == 'Université de Montréal'
        assert resolve_university('Universite de Montreal') == 'Université de Montréal'
        assert resolve_university('UQTR') == 'Université du Québec à Trois-Rivières'

    def test_university_of_forms(self):
        assert resolve_university('Laval University') == 'Université Laval'
        assert resolve_university('University of Guelph') == 'University of Guelph'
        assert resolve_university('The University of Winnipeg') == 'University of Winnipeg'

    def test_canonical_names_resolve_to_themselves(self):
        for name in UNIVERSITIES:
            assert resolve_university(name) == name

    def test_unknown_raises(self):
        with pytest.raises(UnresolvedAlias) as exc:
            resolve_university('Atlantis Tech')
        assert exc.value.raw_name == 'Atlantis Tech'
        assert isinstance(exc.value, LookupError)

    def test_try_resolve(self):
        assert try_resolve_university('Atlantis Tech') is None
        assert try_resolve_university('') is None
        assert try_resolve_university(None) is None
        assert try_resolve_university('guelph') == 'University of Guelph'


class TestReferenceData:
    """Tests for the university table."""

    def test_ambiguous_alias_rejected(self):
        table = {
            'North School': ('North', 'CW', 'AB', ['bears']),
            'South School': ('South', 'CW', 'AB', ['Bears']),
        }
        with pytest.raises(ValueError, match='ambiguous'):
            _make_reverse_map(table)

    def test_info(self):
        info = university_info('Dalhousie University')
        assert info == {
            'university': 'Dalhousie University',
            'short_name': 'Dalhousie',
            'conference': 'AUS',
            'conference_name': 'Atlantic University Sport',
            'province': 'NS',
        }

    def test_every_conference_named(self):
        assert {conf for _short, conf, _prov, _aka in UNIVERSITIES.values()} == set(CONFERENCES)


class TestSharedNames:
    """Nicknames and initials used by more than one member school."""

    @pytest.mark.parametrize('raw', ['Huskies', 'Cougars', 'Thunderbirds', 'U of M', 'U of S', 'U of L', 'Mac'])
    def test_shared_name_does_not_resolve(self, raw):
        assert try_resolve_university(raw) is None
        with pytest.raises(UnresolvedAlias) as exc:
            resolve_university(raw)
        assert len(exc.value.candidates) >= 2
        assert 'Ambiguous' in str(exc.value)

    def test_qualified_nicknames_resolve(self):
        assert resolve_university('SMU Huskies') == "Saint Mary's University"
        assert resolve_university('USask Huskies') == 'University of Saskatchewan'
        assert resolve_university('Regina Cougars') == 'University of Regina'
        assert resolve_university('Mount Royal Cougars') == 'Mount Royal University'
        assert resolve_university('UBC Thunderbirds') == 'University of British Columbia'
        assert resolve_university('Algoma Thunderbirds') == 'Algoma University'

    def test_candidates_are_members(self):
        for key, candidates in AMBIGUOUS_ALIASES.items():
            assert len(candidates) >= 2, key
            assert set(candidates) <= set(UNIVERSITIES), key

    def test_shipped_table_has_no_shared_alias(self):
        """No school in the shipped table claims a shared name for itself."""
        for canonical, (short, _conf, _prov, aka_list) in UNIVERSITIES.items():
            for alias in [canonical, short, *aka_list]:
                assert _canonize(alias) not in AMBIGUOUS_ALIASES, (canonical, alias)

    def test_shared_alias_in_table_rejected(self):
        table = {'North School': ('North', 'CW', 'AB', ['huskies'])}
        with pytest.raises(ValueError, match='ambiguous'):
            _make_reverse_map(table, AMBIGUOUS_ALIASES)

    def test_candidates_lookup(self):
        assert ambiguous_candidates('Cougars') == ('Mount Royal University', 'University of Regina')
        assert ambiguous_candidates('Guelph') == ()
        assert ambiguous_candidates(None) == ()

    def test_ranking_row_with_shared_name_flagged(self):
        from usportstats.normalizer import normalize
        from usportstats.sports import RANKINGS, SPORTS

        records = [{'event': '60m', 'rank': '1', 'athlete': 'A. Runner', 'university': 'Huskies', 'performance': '7.45'}]
        frame = normalize(RANKINGS, SPORTS['track_and_field'], 'w', 2019, records)
        assert not frame.loc[0, 'university_resolved']
        assert frame.loc[0, 'university_raw'] == 'Huskies'
        assert 'university' in frame.loc[0, 'quality']

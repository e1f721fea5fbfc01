"""Tests for the command line interface."""
import pandas as pd
import pytest

from usportstats.cli import build_parser, main
from tests import pages


def run(argv) -> int:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestParser:
    """Tests for argument parsing."""

    def test_repeatable_season(self):
        args = build_parser().parse_args(['schedule', 'hockey', 'm', '--season', '2018', '--season', '2019'])
        assert args.seasons == [2018, 2019]
        assert args.db is False

    def test_facet_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['facet', 'special_teams'])

    def test_universities_takes_no_cache_flag(self):
        """The university list is fetched fresh every time."""
        args = build_parser().parse_args(['universities', '--out', 'unis.csv'])
        assert not hasattr(args, 'no_cache')
        with pytest.raises(SystemExit):
            build_parser().parse_args(['universities', '--no-cache'])


class TestCommands:
    """Tests for command execution against canned pages."""

    def test_schedule_to_csv(self, shared_router, tmp_path, capsys):
        out = tmp_path / 'games.csv'
        assert run(['schedule', 'basketball', 'w', '--season', '2019', '--out', str(out)]) == 0
        frame = pd.read_csv(out)
        assert len(frame) == 3
        assert 'schedule: 3 rows' in capsys.readouterr().out

    def test_box_export(self, shared_router, test_settings, tmp_path, monkeypatch):
        monkeypatch.setattr('usportstats.export.settings', test_settings)
        assert run(['box', 'basketball', 'w', '--season', '2018', '--season', '2019', '--export']) == 0
        root = tmp_path / 'exports' / 'basketball_w_player_box'
        assert (root / 'season=2018' / 'part-000.parquet').exists()
        assert (root / 'season=2019' / 'part-000.parquet').exists()

    def test_rankings(self, shared_router, tmp_path):
        out = tmp_path / 'ranks.parquet'
        code = run(['rankings', 'track_and_field', 'w', '--season', '2019',
                    '--event', '60m', '--event', 'long jump', '--out', str(out)])
        assert code == 0
        assert pd.read_parquet(out)['event'].tolist() == ['60m'] * 3 + ['Long Jump'] * 2

    def test_facet(self, shared_router, capsys):
        assert run(['facet', 'kicking', '--season', '2019']) == 0
        assert 'Kicker Three' in capsys.readouterr().out

    def test_drives(self, shared_router):
        assert run(['drives', '--season', '2019']) == 0

    def test_universities(self, shared_router, capsys):
        assert run(['universities']) == 0
        assert 'Atlantis Tech' in capsys.readouterr().out

    def test_empty_result_exit_code(self, shared_router):
        assert run(['schedule', 'basketball', 'w', '--season', '2020']) == 1

    def test_request_failed(self, shared_router, site):
        site.pages[f'{pages.BKB_2019}/schedule'] = 500
        assert run(['schedule', 'basketball', 'w', '--season', '2019']) == 1

    def test_unsupported_query(self, shared_router):
        assert run(['pbp', 'volleyball', 'w', '--season', '2019']) == 2

"""Entry point tests."""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from sailcrawl.fetcher import BrowserFetcher, HttpFetcher
from sailcrawl.main import app, run
from sailcrawl.sites import get_site

runner = CliRunner()


class TestCli:
    """sailcrawl command line handling."""

    @patch("sailcrawl.main.setup_logging")
    @patch("sailcrawl.main.run")
    def test_dry_run(self, mock_run, mock_logging):
        mock_run.return_value = MagicMock(aborted=False)
        result = runner.invoke(app, ["sailboatdata", "--dry-run"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with("sailboatdata", dry_run=True, browser=False)

    @patch("sailcrawl.main.setup_logging")
    @patch("sailcrawl.main.run")
    def test_browser_flag(self, mock_run, mock_logging):
        mock_run.return_value = MagicMock(aborted=False)
        result = runner.invoke(app, ["yachtworld", "--browser"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with("yachtworld", dry_run=False, browser=True)

    @patch("sailcrawl.main.setup_logging")
    @patch("sailcrawl.main.run")
    def test_misspelled_flag_rejected(self, mock_run, mock_logging):
        """An unknown option is a usage error, never a live crawl."""
        result = runner.invoke(app, ["sailboatdata", "--dryrun"])
        assert result.exit_code == 2
        mock_run.assert_not_called()

    @patch("sailcrawl.main.setup_logging")
    @patch("sailcrawl.main.run")
    def test_aborted_exit_code(self, mock_run, mock_logging):
        mock_run.return_value = MagicMock(aborted=True)
        result = runner.invoke(app, ["yachtworld"])
        assert result.exit_code == 1

    @patch("sailcrawl.main.run")
    def test_unknown_site(self, mock_run):
        result = runner.invoke(app, ["boattrader"])
        assert result.exit_code == 2
        mock_run.assert_not_called()

    @patch("sailcrawl.main.run")
    def test_help(self, mock_run):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "dry-run" in result.output
        mock_run.assert_not_called()


class TestRun:
    """run() wiring."""

    @patch("sailcrawl.main.Crawler")
    def test_transport_choice(self, mock_crawler):
        run("sailboatdata", dry_run=True)
        assert isinstance(mock_crawler.call_args.args[1], HttpFetcher)

        run("sailboatdata", dry_run=True, browser=True)
        assert isinstance(mock_crawler.call_args.args[1], BrowserFetcher)


class TestSites:
    """Site registry."""

    def test_seed_pages(self):
        seeds = get_site("sailboatdata").seed_urls
        assert len(seeds) == 181
        assert seeds[0].endswith("page_number=0")
        assert seeds[-1].endswith("page_number=180")

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_site("boattrader")

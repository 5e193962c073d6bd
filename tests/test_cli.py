"""
Tests for the command-line entry point
"""
import pytest

from courier import cli
from courier.demo import seeded_api
from courier.features.compose import ComposeMode


class TestArgumentParser:
    """Tests for setup_argument_parser"""

    def test_compose_defaults(self):
        args = cli.setup_argument_parser().parse_args(["compose"])
        assert args.command == "compose"
        assert args.mode == "new"
        assert args.log_level is None

    def test_compose_options(self):
        args = cli.setup_argument_parser().parse_args(["compose", "--mode", "reply-all", "--log-level", "debug"])
        assert args.mode == "reply-all"
        assert args.log_level == "DEBUG"

    def test_invalid_mode(self):
        with pytest.raises(SystemExit):
            cli.setup_argument_parser().parse_args(["compose", "--mode", "bounce"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.setup_argument_parser().parse_args([])


class TestMain:
    """Tests for main()"""

    def test_dispatches_compose(self, monkeypatch):
        seen = []
        monkeypatch.setattr(cli, "run_compose", lambda mode, console: seen.append(mode) or 0)

        assert cli.main(["compose", "--mode", "forward"]) == 0
        assert seen == [ComposeMode.FORWARD]


class TestDemoData:
    """Tests for the seeded demo backend"""

    def test_seeded_api(self):
        api, message, draft = seeded_api(latency=0)
        assert draft.id in api.drafts
        assert message.from_
        assert api.sent == []

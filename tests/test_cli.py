"""
Tests for the command line interface.
"""

import json
import logging

import pytest

from succotash.cli import main, parse_arguments, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the handlers and levels setup_logging() installs."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    logging.getLogger("succotash").setLevel(logging.NOTSET)


class TestParseArguments:
    """Test argument parsing."""

    def test_analyze_defaults(self, isolated_user_config):
        args = parse_arguments(['analyze', '/photos'])
        assert args.command == 'analyze'
        assert str(args.directory) == '/photos'
        assert args.threshold == 5
        assert args.workers == 4
        assert not args.sort
        assert not args.group
        assert args.export is None
        assert args.export_format == 'txt'
        assert args.verbose == 0

    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv('SUCCOTASH_THRESHOLD', '9')
        monkeypatch.setenv('SUCCOTASH_WORKERS', '2')
        args = parse_arguments(['analyze', '/photos'])
        assert args.threshold == 9
        assert args.workers == 2

    def test_verbosity_counts(self):
        assert parse_arguments(['-vv', 'analyze', '/photos']).verbose == 2

    def test_lsh_flags_exclusive(self):
        with pytest.raises(SystemExit):
            parse_arguments(['analyze', '/photos', '--lsh', '--no-lsh'])

    def test_unknown_export_format(self):
        with pytest.raises(SystemExit):
            parse_arguments(['analyze', '/photos', '-e', 'out.xml', '--export-format', 'xml'])


class TestSetupLogging:
    """Test verbosity levels."""

    def test_quiet(self):
        setup_logging(0)
        assert logging.getLogger('succotash').getEffectiveLevel() == logging.INFO

    def test_debug(self):
        setup_logging(1)
        assert logging.getLogger('succotash').getEffectiveLevel() == logging.DEBUG
        # Third-party loggers stay at INFO
        assert logging.getLogger().level == logging.INFO


class TestAnalyzeCommand:
    """Test `succotash analyze`."""

    def test_prints_every_image(self, sample_images, temp_dir, capsys):
        assert main(['analyze', str(temp_dir), '--no-progress']) == 0
        out = capsys.readouterr().out
        lines = [line for line in out.splitlines() if line.strip()]
        assert len(lines) == 7
        assert any("red.png" in line and "ffffffffffffffff  hue 0.00" in line for line in lines)
        assert any("halves.png" in line and "ffffffff00000000" in line for line in lines)
        assert any("corrupted.png" in line and "error:" in line for line in lines)
        assert "notes.txt" not in out

    def test_sorted_output_has_buckets(self, sample_images, temp_dir, capsys):
        assert main(['analyze', str(temp_dir), '--sort', '--no-progress']) == 0
        out = capsys.readouterr().out
        assert "# popcount 64 (4 images)" in out
        # Blue (hue 240) follows every red (hue 0) in its bucket
        bucket = out.split("# popcount 64")[1]
        assert bucket.index("blue.png") > bucket.index("red_large.png")

    def test_group_report(self, sample_images, temp_dir, capsys):
        assert main(['analyze', str(temp_dir), '--group', '--no-lsh', '--no-progress']) == 0
        out = capsys.readouterr().out
        assert "NEAR-DUPLICATE GROUPS" in out
        assert "identical" in out

    def test_export_json(self, sample_images, temp_dir):
        output = temp_dir / "out" / "features.json"
        output.parent.mkdir()
        code = main([
            'analyze', str(temp_dir), '--group', '--no-progress',
            '-e', str(output), '--export-format', 'json',
        ])
        assert code == 0
        data = json.loads(output.read_text())
        assert len(data['images']) == 7
        assert data['groups']

    def test_export_unwritable(self, sample_images, temp_dir):
        output = temp_dir / "missing_dir" / "out.txt"
        assert main(['analyze', str(temp_dir), '--no-progress', '-e', str(output)]) == 1

    def test_verbose_logs_heif_support(self, sample_images, temp_dir, capsys):
        assert main(['-v', 'analyze', str(temp_dir), '--no-progress']) == 0
        assert "HEIC/HEIF support:" in capsys.readouterr().err

    def test_missing_directory(self):
        assert main(['analyze', '/nonexistent/photos', '--no-progress']) == 1

    def test_empty_directory(self, temp_dir):
        assert main(['analyze', str(temp_dir), '--no-progress']) == 1

    def test_invalid_threshold(self, sample_images, temp_dir):
        assert main(['analyze', str(temp_dir), '-t', '99', '--no-progress']) == 1

    def test_no_recursive(self, temp_dir, capsys):
        from PIL import Image
        sub = temp_dir / "nested"
        sub.mkdir()
        Image.new('RGB', (8, 8), color='green').save(sub / "deep.png")
        assert main(['analyze', str(temp_dir), '--no-recursive', '--no-progress']) == 1
        assert main(['analyze', str(temp_dir), '--no-progress']) == 0
        assert "deep.png" in capsys.readouterr().out


class TestOtherCommands:
    """Test `succotash config` and the bare command."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_config_show(self, capsys, isolated_user_config):
        assert main(['config']) == 0
        out = capsys.readouterr().out
        assert str(isolated_user_config.config_file_path) in out
        assert "not found" in out
        assert "default_threshold: 5" in out

    def test_config_init(self, capsys, isolated_user_config):
        assert main(['config', '--init']) == 0
        assert isolated_user_config.config_file_path.exists()
        isolated_user_config.reload()
        assert main(['config']) == 0
        assert "Status: found" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['--version'])
        assert exc.value.code == 0
        assert "succotash" in capsys.readouterr().out

"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from propfile.cli import cli

CONTENT = b"# Greeting\ngreeting = Hello\nfarewell:Bye\n"


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def properties_file(tmp_path):
    """Create a properties file."""
    path = tmp_path / "messages.properties"
    path.write_bytes(CONTENT)
    return path


class TestReadCommands:
    """Tests for show and get."""

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_get(self, runner, properties_file):
        """Test printing the value of a key."""
        result = runner.invoke(cli, ["get", str(properties_file), "greeting"])
        assert result.exit_code == 0
        assert result.output == "Hello\n"

    def test_get_missing_key(self, runner, properties_file):
        """Test that a missing key fails."""
        result = runner.invoke(cli, ["get", str(properties_file), "missing"])
        assert result.exit_code == 1
        assert "Key not found: missing" in result.output

    def test_get_with_charset(self, runner, tmp_path):
        """Test reading with the global charset option."""
        path = tmp_path / "latin.properties"
        path.write_bytes("key = Grüße\n".encode("latin-1"))

        result = runner.invoke(cli, ["--charset", "latin-1", "get", str(path), "key"])

        assert result.exit_code == 0
        assert result.output == "Grüße\n"

    def test_get_undecodable_file(self, runner, tmp_path):
        """Test that a decoding error is reported."""
        path = tmp_path / "broken.properties"
        path.write_bytes(b"key = \xff\n")

        result = runner.invoke(cli, ["get", str(path), "key"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_show(self, runner, properties_file):
        """Test listing all entries of a file."""
        result = runner.invoke(cli, ["show", str(properties_file)])
        assert result.exit_code == 0
        assert "3 total, 2 properties" in result.output
        assert "# Greeting" in result.output
        assert "farewell = Bye" in result.output

    def test_show_empty_file(self, runner, tmp_path):
        """Test showing an empty file."""
        path = tmp_path / "empty.properties"
        path.write_bytes(b"")

        result = runner.invoke(cli, ["show", str(path)])

        assert result.exit_code == 0
        assert "No entries found." in result.output


class TestWriteCommands:
    """Tests for set and remove."""

    def test_set_existing_key(self, runner, properties_file):
        """Test changing the value of an existing key."""
        result = runner.invoke(cli, ["set", str(properties_file), "greeting", "Hi there"])
        assert result.exit_code == 0
        assert "Updated greeting" in result.output
        assert properties_file.read_bytes() == b"# Greeting\ngreeting = Hi there\nfarewell:Bye\n"

    def test_set_new_key(self, runner, properties_file):
        """Test adding a new key."""
        result = runner.invoke(cli, ["set", str(properties_file), "new key", "value"])
        assert result.exit_code == 0
        assert "Added new key" in result.output
        assert properties_file.read_bytes() == CONTENT + b"new\\ key = value\n"

    def test_set_with_unicode_escape(self, runner, properties_file):
        """Test writing with escaped unicode."""
        result = runner.invoke(
            cli, ["set", "--unicode", "escape", str(properties_file), "farewell", "Tschüss"]
        )
        assert result.exit_code == 0
        assert b"farewell:Tsch\\u00fcss\n" in properties_file.read_bytes()

    def test_remove(self, runner, properties_file):
        """Test removing a key."""
        result = runner.invoke(cli, ["remove", str(properties_file), "farewell"])
        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"# Greeting\ngreeting = Hello\n"

    def test_remove_missing_key(self, runner, properties_file):
        """Test that removing a missing key fails."""
        result = runner.invoke(cli, ["remove", str(properties_file), "missing"])
        assert result.exit_code == 1
        assert properties_file.read_bytes() == CONTENT


class TestFormatCommands:
    """Tests for reformat and reorder."""

    def test_reformat(self, runner, properties_file):
        """Test reformatting with the default format."""
        result = runner.invoke(cli, ["reformat", str(properties_file)])
        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"# Greeting\ngreeting = Hello\nfarewell = Bye\n"

    def test_reformat_custom_format(self, runner, properties_file):
        """Test reformatting with a custom format."""
        result = runner.invoke(cli, ["reformat", str(properties_file), "--format", "<key>=<value>\\n"])
        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"# Greeting\ngreeting=Hello\nfarewell=Bye\n"

    def test_reformat_invalid_format(self, runner, properties_file):
        """Test that an invalid format leaves the file alone."""
        result = runner.invoke(cli, ["reformat", str(properties_file), "--format", "<key><value>"])
        assert result.exit_code == 1
        assert "invalid format" in result.output
        assert properties_file.read_bytes() == CONTENT

    def test_reorder(self, runner, properties_file):
        """Test reordering by key."""
        result = runner.invoke(cli, ["reorder", str(properties_file)])
        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"farewell:Bye\n# Greeting\ngreeting = Hello\n"

    def test_reorder_original_position(self, runner, properties_file):
        """Test reordering with comments kept in place."""
        result = runner.invoke(
            cli, ["reorder", str(properties_file), "--attach-comments", "original"]
        )
        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"# Greeting\nfarewell:Bye\ngreeting = Hello\n"

    def test_reorder_by_template(self, runner, properties_file, tmp_path):
        """Test reordering by a template file."""
        template = tmp_path / "template.properties"
        template.write_bytes(b"farewell=\n")

        result = runner.invoke(
            cli, ["reorder", str(properties_file), "--template", str(template)]
        )

        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"farewell:Bye\n# Greeting\ngreeting = Hello\n"


class TestMergeCommand:
    """Tests for merge."""

    def test_merge_comment_missing_keys(self, runner, properties_file, tmp_path):
        """Test merging and commenting out missing keys."""
        source = tmp_path / "source.properties"
        source.write_bytes(b"greeting = Hallo\n")

        result = runner.invoke(
            cli, ["merge", str(source), str(properties_file), "--missing-keys", "comment"]
        )

        assert result.exit_code == 0
        assert properties_file.read_bytes() == b"# Greeting\ngreeting = Hallo\n#farewell:Bye\n"

    def test_merge_into_new_file(self, runner, properties_file, tmp_path):
        """Test merging into a file that does not exist yet."""
        target = tmp_path / "out" / "copy.properties"

        result = runner.invoke(cli, ["merge", str(properties_file), str(target)])

        assert result.exit_code == 0
        assert target.read_bytes() == CONTENT

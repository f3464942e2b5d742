"""Unit tests for command extraction from model responses."""

from shellai.extractor import (
    CommandFound,
    NoCommand,
    code_content,
    extract_code_blocks,
    parse_command,
)


class TestParseCommand:
    """Test the extraction cascade."""

    def test_fenced_json(self):
        result = parse_command('```json\n{"command":"echo abc"}\n```')
        assert result == CommandFound("echo abc")

    def test_bare_json(self):
        result = parse_command('{"command": "df -h"}')
        assert result == CommandFound("df -h")

    def test_fenced_shell_without_json(self):
        assert parse_command("```\nls -la\n```") == CommandFound("ls -la")

    def test_fenced_block_with_language(self):
        assert parse_command("```bash\ngit status\n```") == CommandFound("git status")

    def test_inline_code_span(self):
        assert parse_command("`pwd`") == CommandFound("pwd")

    def test_inline_span_inside_prose(self):
        result = parse_command("You can run `du -sh .` to see the size.")
        assert result == CommandFound("du -sh .")

    def test_plain_single_line(self):
        assert parse_command("  uptime  \n") == CommandFound("uptime")

    def test_multiline_plain_text_is_not_a_command(self):
        result = parse_command("First do this.\nThen do that.")
        assert isinstance(result, NoCommand)

    def test_empty_response(self):
        assert isinstance(parse_command(""), NoCommand)
        assert isinstance(parse_command("```\n```"), NoCommand)

    def test_multiline_fence_without_json(self):
        result = parse_command("```\ncd /tmp\nls\n```")
        assert isinstance(result, NoCommand)

    def test_multiline_json_in_fence(self):
        text = '```json\n{\n  "command": "find . -name \'*.py\'"\n}\n```'
        assert parse_command(text) == CommandFound("find . -name '*.py'")

    def test_json_without_command_key_on_one_line(self):
        result = parse_command('{"cmd": "ls"}')
        assert result == CommandFound('{"cmd": "ls"}')

    def test_json_with_empty_command(self):
        result = parse_command('```json\n{\n"command": ""\n}\n```')
        assert isinstance(result, NoCommand)

    def test_non_string_command_value(self):
        assert parse_command('{"command": 42}') == CommandFound("42")

    def test_deeply_nested_json_is_not_a_command(self):
        result = parse_command("[" * 100000)
        assert isinstance(result, NoCommand)
        assert "nests too deeply" in result.reason

    def test_fenced_json_preferred_over_inline_span(self):
        text = 'Use `ls`:\n\n```json\n{"command": "ls -1"}\n```'
        assert parse_command(text) == CommandFound("ls -1")


class TestCodeContent:
    """Test code block collection."""

    def test_blocks_are_concatenated_without_separator(self):
        text = "```\nls\n```\n\nand\n\n```\n-la\n```"
        assert code_content(text) == "ls-la"

    def test_spans_are_concatenated(self):
        assert code_content("Run `ls` then `pwd`") == "lspwd"

    def test_raw_text_when_no_code(self):
        assert code_content("just words") == "just words"

    def test_fence_nested_in_list(self):
        text = "- first\n\n  ```\n  whoami\n  ```\n"
        blocks, spans = extract_code_blocks(text)
        assert blocks == ["whoami"]
        assert spans == []

    def test_span_nested_in_emphasis_and_blockquote(self):
        blocks, spans = extract_code_blocks("> try **`id -u`** here")
        assert blocks == []
        assert spans == ["id -u"]

    def test_indented_code_block(self):
        blocks, _ = extract_code_blocks("Example:\n\n    ls -la\n")
        assert blocks == ["ls -la"]

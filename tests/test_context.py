"""Unit tests for the rolling context buffer."""

import pytest

from shellai.context import MAX_CONTEXT_CHARS, ContextBuffer


class TestContextBuffer:
    """Test the ContextBuffer class."""

    def test_empty_by_default(self):
        buffer = ContextBuffer()

        assert buffer.read() == ""
        assert buffer.capacity == MAX_CONTEXT_CHARS == 1500

    def test_short_chunk_stored_unchanged(self):
        buffer = ContextBuffer(capacity=10)
        buffer.replace("hello")

        assert buffer.read() == "hello"

    def test_long_chunk_keeps_trailing_characters(self):
        buffer = ContextBuffer(capacity=5)
        buffer.replace("0123456789")

        assert buffer.read() == "56789"

    def test_chunk_of_exact_capacity(self):
        buffer = ContextBuffer(capacity=4)
        buffer.replace("abcd")

        assert buffer.read() == "abcd"

    @pytest.mark.parametrize("chunk", ["", "x", "line\n" * 400, "y" * 1500])
    def test_replace_then_read_is_tail(self, chunk):
        buffer = ContextBuffer()
        buffer.replace(chunk)

        expected = chunk[len(chunk) - min(len(chunk), buffer.capacity) :]
        assert buffer.read() == expected

    def test_replace_does_not_accumulate(self):
        buffer = ContextBuffer(capacity=8)
        buffer.replace("first output")
        buffer.replace("two")

        assert buffer.read() == "two"

    def test_replace_with_empty_chunk_clears(self):
        buffer = ContextBuffer()
        buffer.replace("stale")
        buffer.replace("")

        assert buffer.read() == ""

    def test_clear(self):
        buffer = ContextBuffer()
        buffer.replace("something")
        buffer.clear()

        assert buffer.read() == ""
        assert len(buffer) == 0

    def test_len_counts_stored_characters(self):
        buffer = ContextBuffer(capacity=3)
        assert len(buffer) == 0

        buffer.replace("abcdef")

        assert len(buffer) == 3

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            ContextBuffer(capacity=0)

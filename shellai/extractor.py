"""Recover a single shell command from free-form model output."""

import json
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from markdown_it import MarkdownIt
from markdown_it.token import Token

_markdown = MarkdownIt("commonmark")

_BLOCK_TYPES = ("fence", "code_block")
_SPAN_TYPES = ("code_inline",)


@dataclass(frozen=True)
class CommandFound:
    """A usable command was recovered."""

    command: str


@dataclass(frozen=True)
class NoCommand:
    """Nothing in the response looked like a single command."""

    reason: str


ExtractionResult = Union[CommandFound, NoCommand]


def _walk_tokens(
    tokens: Sequence[Token], blocks: List[str], spans: List[str]
) -> None:
    for token in tokens:
        if token.type in _BLOCK_TYPES:
            content = token.content
            if content.endswith("\n"):
                content = content[:-1]
            blocks.append(content)
        elif token.type in _SPAN_TYPES:
            spans.append(token.content)
        if token.children:
            _walk_tokens(token.children, blocks, spans)


def extract_code_blocks(markdown: str) -> Tuple[List[str], List[str]]:
    """Return (code block bodies, inline code spans) in document order."""
    blocks: List[str] = []
    spans: List[str] = []
    _walk_tokens(_markdown.parse(markdown), blocks, spans)
    return blocks, spans


def code_content(markdown: str) -> str:
    """Concatenate code blocks, else inline spans, else return the text."""
    blocks, spans = extract_code_blocks(markdown)
    if blocks:
        return "".join(blocks)
    if spans:
        return "".join(spans)
    return markdown


def parse_command(markdown: str) -> ExtractionResult:
    """Extract the intended command from a model response.

    The response may be bare JSON, JSON inside a fenced block, a fenced
    shell snippet, an inline code span or plain text. A JSON object with
    a ``command`` key wins; otherwise any single non-empty line is taken
    verbatim.
    """
    content = code_content(markdown).strip()

    try:
        parsed = json.loads(content)
    except ValueError:
        parsed = None
    except RecursionError:
        return NoCommand("response nests too deeply to decode")
    if isinstance(parsed, dict) and parsed.get("command"):
        return CommandFound(str(parsed["command"]))

    if content and "\n" not in content:
        return CommandFound(content)

    if not content:
        return NoCommand("response was empty")
    return NoCommand("response spans multiple lines and holds no JSON command")

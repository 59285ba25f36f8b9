"""Comment locator: tree-sitter parse plus a comment query per language.

Spans are built from node positions only. Text that looks like a comment
inside a string literal is a string node, so it is never reported.
"""

from dataclasses import dataclass, field
from typing import Any

from decomment.errors import ParseError
from decomment.languages import LanguageConfig
from decomment.utils.logging import logger


@dataclass(frozen=True)
class CommentSpan:
    """One comment node, in tree-sitter coordinates.

    Rows are 0-based, columns are byte offsets within the row, and the end
    column is exclusive.
    """

    start_row: int
    start_col: int
    end_row: int
    end_col: int
    is_full_line: bool = False
    is_multi_line: bool = False
    text: bytes = field(default=b"", compare=False, repr=False)


def line_lengths(source: bytes) -> list[int]:
    """Content length of every row, excluding the terminator.

    A ``\\r`` directly before ``\\n`` counts as terminator, so CRLF files
    classify full-line comments the same way LF files do.
    """
    lengths = []
    for raw in source.split(b"\n"):
        n = len(raw)
        if n and raw[n - 1] == 0x0D:
            n -= 1
        lengths.append(n)
    return lengths


def classify(
    start_row: int,
    start_col: int,
    end_row: int,
    end_col: int,
    lengths: list[int],
    text: bytes = b"",
) -> CommentSpan:
    """Build a CommentSpan, normalising ends that swallow the newline."""
    if end_row > start_row and end_col == 0:
        # Node ends at the start of the next row: it consumed the terminator.
        end_row -= 1
        end_col = lengths[end_row] if end_row < len(lengths) else 0
        if text.endswith(b"\n"):
            text = text.rstrip(b"\r\n")

    is_multi_line = end_row > start_row
    is_full_line = False
    if not is_multi_line and start_row < len(lengths):
        is_full_line = start_col == 0 and end_col >= lengths[start_row]

    return CommentSpan(
        start_row=start_row,
        start_col=start_col,
        end_row=end_row,
        end_col=end_col,
        is_full_line=is_full_line,
        is_multi_line=is_multi_line,
        text=text,
    )


class CommentLocator:
    """Finds comment spans, holding one parser and one query per language.

    Tree-sitter parsers carry native state and are not re-entrant: give each
    worker thread its own locator and never share one across threads.
    """

    def __init__(self):
        """Initialize empty parser and query caches."""
        self.parsers: dict[str, Any] = {}
        self.queries: dict[str, Any] = {}

    def _parser_for(self, language: LanguageConfig) -> Any:
        """Get or create this locator's parser for a language."""
        parser = self.parsers.get(language.name)
        if parser is None:
            try:
                parser = language.new_parser()
            except Exception as e:
                raise ParseError(
                    f"Failed to load tree-sitter grammar for {language.name}: {e}\n"
                    "Please try: pip install --force-reinstall tree-sitter-language-pack"
                ) from e
            self.parsers[language.name] = parser
        return parser

    def _query_for(self, language: LanguageConfig) -> Any:
        """Get or compile this locator's comment query for a language."""
        query = self.queries.get(language.name)
        if query is None:
            from tree_sitter import Query

            try:
                query = Query(language.load_language(), language.query)
            except Exception as e:
                raise ParseError(
                    f"Comment query failed to compile for {language.name}: {e}"
                ) from e
            self.queries[language.name] = query
        return query

    def parse(self, source: bytes, language: LanguageConfig) -> Any:
        """Parse ``source`` into a tree-sitter Tree, or raise ParseError."""
        parser = self._parser_for(language)
        try:
            tree = parser.parse(source)
        except Exception as e:
            raise ParseError(f"{language.name} parser failed: {e}") from e

        if tree is None or tree.root_node is None:
            raise ParseError(f"{language.name} parser produced no syntax tree")
        return tree

    def locate(self, source: bytes, language: LanguageConfig) -> list[CommentSpan]:
        """Return the comment spans of ``source`` in source order.

        Raises:
            ParseError: grammar could not be loaded, query could not be
                compiled, or the parser returned no tree
        """
        if not source:
            return []

        tree = self.parse(source, language)
        query = self._query_for(language)

        from tree_sitter import QueryCursor

        captures = QueryCursor(query).captures(tree.root_node)

        nodes = {}
        for capture_nodes in captures.values():
            if not isinstance(capture_nodes, list):
                capture_nodes = [capture_nodes]
            for node in capture_nodes:
                if node.start_byte == node.end_byte:
                    continue
                # Patterns for different comment kinds may capture the same node
                nodes[(node.start_byte, node.end_byte)] = node

        if tree.root_node.has_error:
            logger.debug(f"{language.name}: syntax errors present, spans are best-effort")

        lengths = line_lengths(source)
        spans = []
        for key in sorted(nodes):
            node = nodes[key]
            start_row, start_col = node.start_point[0], node.start_point[1]
            end_row, end_col = node.end_point[0], node.end_point[1]
            spans.append(
                classify(
                    start_row,
                    start_col,
                    end_row,
                    end_col,
                    lengths,
                    text=source[node.start_byte : node.end_byte],
                )
            )
        return spans


def locate(source: bytes, language: LanguageConfig) -> list[CommentSpan]:
    """Locate comments with a throwaway, per-call locator."""
    return CommentLocator().locate(source, language)

"""Language registry: one grammar and one comment query per language.

Each entry is a small capability record. The grammar itself is loaded
from tree-sitter-language-pack on demand, so importing this module is
cheap and never touches native code.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from decomment.errors import UnsupportedLanguageError

COMMENT_QUERY = "(comment) @comment"
LINE_AND_BLOCK_QUERY = "(line_comment) @comment (block_comment) @comment"


@dataclass(frozen=True)
class LanguageConfig:
    """Capability record for one language.

    Attributes:
        name: Registry key (also what --lang accepts)
        grammar: Grammar name in tree-sitter-language-pack
        query: Tree-sitter query capturing every comment node kind
        extensions: Lower-cased file extensions, dot included
    """

    name: str
    grammar: str
    query: str
    extensions: tuple[str, ...]

    def load_language(self) -> Any:
        """Return the tree-sitter Language object for this grammar."""
        from tree_sitter_language_pack import get_language

        return get_language(self.grammar)

    def new_parser(self) -> Any:
        """Return a fresh tree-sitter Parser. Parsers are not thread-safe."""
        from tree_sitter_language_pack import get_parser

        return get_parser(self.grammar)


_CONFIGS = (
    LanguageConfig("javascript", "javascript", COMMENT_QUERY, (".js", ".mjs", ".cjs", ".jsx")),
    LanguageConfig("typescript", "typescript", COMMENT_QUERY, (".ts", ".mts", ".cts")),
    LanguageConfig("tsx", "tsx", COMMENT_QUERY, (".tsx",)),
    LanguageConfig("python", "python", COMMENT_QUERY, (".py", ".pyi")),
    LanguageConfig("go", "go", COMMENT_QUERY, (".go",)),
    LanguageConfig("java", "java", LINE_AND_BLOCK_QUERY, (".java",)),
    LanguageConfig("c", "c", COMMENT_QUERY, (".c", ".h")),
    LanguageConfig("cpp", "cpp", COMMENT_QUERY, (".cpp", ".cc", ".cxx", ".hpp", ".hh", ".hxx")),
    LanguageConfig("rust", "rust", LINE_AND_BLOCK_QUERY, (".rs",)),
    LanguageConfig("lua", "lua", COMMENT_QUERY, (".lua",)),
    LanguageConfig("html", "html", COMMENT_QUERY, (".html", ".htm")),
    LanguageConfig("css", "css", COMMENT_QUERY, (".css",)),
    LanguageConfig("yaml", "yaml", COMMENT_QUERY, (".yaml", ".yml")),
    LanguageConfig("toml", "toml", COMMENT_QUERY, (".toml",)),
    LanguageConfig("bash", "bash", COMMENT_QUERY, (".sh", ".bash")),
    LanguageConfig(
        "dart",
        "dart",
        "(comment) @comment (documentation_comment) @comment",
        (".dart",),
    ),
)

LANGUAGES: dict[str, LanguageConfig] = {cfg.name: cfg for cfg in _CONFIGS}

EXTENSION_MAP: dict[str, LanguageConfig] = {
    ext: cfg for cfg in _CONFIGS for ext in cfg.extensions
}


def get_language(name: str) -> LanguageConfig:
    """Look up a language by registry key."""
    try:
        return LANGUAGES[name]
    except KeyError:
        raise UnsupportedLanguageError(
            f"Unsupported language '{name}'. Supported: {', '.join(supported_languages())}"
        ) from None


def language_for_path(path: str | Path) -> LanguageConfig | None:
    """Detect language from file extension. None when no locator is registered."""
    return EXTENSION_MAP.get(Path(path).suffix.lower())


def supported_languages() -> list[str]:
    """Get sorted list of registry keys."""
    return sorted(LANGUAGES)


def supported_extensions(language: str | None = None) -> list[str]:
    """Extensions the walker should allow, optionally for one language only."""
    if language is None:
        return sorted(EXTENSION_MAP)
    return sorted(get_language(language).extensions)

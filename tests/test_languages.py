"""Tests for the language registry."""

import pytest

from decomment.errors import UnsupportedLanguageError
from decomment.languages import (
    EXTENSION_MAP,
    LANGUAGES,
    get_language,
    language_for_path,
    supported_extensions,
    supported_languages,
)


class TestRegistry:
    """Lookups by name and by path."""

    def test_every_extension_maps_back_to_its_language(self):
        for name, config in LANGUAGES.items():
            assert config.name == name
            for ext in config.extensions:
                assert ext.startswith(".")
                assert ext == ext.lower()
                assert EXTENSION_MAP[ext] is config

    def test_extensions_are_not_shared(self):
        seen = [ext for config in LANGUAGES.values() for ext in config.extensions]
        assert len(seen) == len(set(seen))

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("main.go", "go"),
            ("src/app.tsx", "tsx"),
            ("lib/index.mjs", "javascript"),
            ("types.d.ts", "typescript"),
            ("stub.pyi", "python"),
            ("include/vec.hpp", "cpp"),
            ("inc/list.h", "c"),
            ("ci.yml", "yaml"),
            ("Cargo.toml", "toml"),
            ("run.bash", "bash"),
            ("widget.dart", "dart"),
            ("README.MD", None),
            ("Makefile", None),
        ],
    )
    def test_language_for_path(self, path, expected):
        config = language_for_path(path)
        assert (config.name if config else None) == expected

    def test_extension_lookup_is_case_insensitive(self):
        assert language_for_path("Main.GO").name == "go"

    def test_get_language_unknown(self):
        with pytest.raises(UnsupportedLanguageError) as exc:
            get_language("cobol")
        assert "cobol" in str(exc.value)
        assert "python" in str(exc.value)

    def test_supported_lists(self):
        assert supported_languages() == sorted(LANGUAGES)
        assert supported_extensions("rust") == [".rs"]
        assert ".go" in supported_extensions()

    def test_java_and_rust_capture_both_comment_kinds(self):
        for name in ("java", "rust"):
            query = get_language(name).query
            assert "line_comment" in query
            assert "block_comment" in query

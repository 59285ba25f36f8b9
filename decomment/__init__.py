"""decomment - tree-sitter based comment stripper for mixed-language codebases."""

__version__ = "0.3.0"

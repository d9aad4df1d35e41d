from functools import cache
from pathlib import Path

from tree_sitter import Language, Parser, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

LANGUAGE_NAME: SupportedLanguage = "c"

_QUERIES_DIR = Path(__file__).parent.parent / "queries"


@cache
def c_language() -> Language:
    return get_language(LANGUAGE_NAME)


def c_parser() -> Parser:
    return get_parser(LANGUAGE_NAME)


def parse_c(code: bytes) -> Tree:
    return c_parser().parse(code)


@cache
def load_query_source(name: str) -> str:
    """Return the text of the bundled query file ``queries/<name>.scm``."""
    query_path = _QUERIES_DIR / f"{name}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    return query_path.read_text(encoding="utf-8")


def has_syntax_errors(tree: Tree) -> bool:
    return tree.root_node.has_error

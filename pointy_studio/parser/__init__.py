from .diagnostics import Diagnostic, Severity
from .validator import lint_code, validate_code
from .lexer import PointyLexer
from .layout import GridLayout
from .grammar import PointyParser, ParseResult, parse_pointy

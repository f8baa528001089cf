import typing

from ply import lex
from ply.lex import LexToken

from pointy_studio.constants import IDENTIFIER_PATTERN


class PointyLexer:
    """
    Tokenizes one line of pointy text. Characters that are not part of the
    pointy vocabulary come out as ``error`` tokens instead of raising, so
    callers can decide to ignore the line. A ``//`` comment runs to the end
    of the line and comes out as a single ``COMMENT`` token.
    """

    tokens = (
        "IDENTIFIER",
        "LCURLY_BRACKET",
        "RCURLY_BRACKET",
        "POINTER",
        "COMMENT",
    )

    t_ignore = " \t\r"

    t_COMMENT = r"//.*"

    t_LCURLY_BRACKET = r"\{"
    t_RCURLY_BRACKET = r"\}"
    t_POINTER = r"->"
    t_IDENTIFIER = IDENTIFIER_PATTERN

    def __init__(self, **kwargs):
        self.lexer = lex.lex(module=self, **kwargs)

    def t_error(self, t):
        t.value = t.value[0]
        t.lexer.skip(1)
        return t

    def tokenize(self, line: str) -> typing.List[LexToken]:
        # each call lexes on its own clone so one instance can be shared
        lexer = self.lexer.clone()
        lexer.input(line)
        return list(iter(lexer.token, None))

    def token_types(self, line: str) -> typing.Tuple[str, ...]:
        return tuple(tok.type for tok in self.tokenize(line))

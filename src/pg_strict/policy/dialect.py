"""Postgres dialect extension: positioned `WHERE CURRENT OF <cursor>`."""

from __future__ import annotations

from sqlglot import exp
from sqlglot.dialects.postgres import Postgres
from sqlglot.tokens import TokenType

DEFAULT_DIALECT = "postgres"


class CurrentOf(exp.Expression):
    """Cursor-positioned predicate; `this` is the cursor name."""

    arg_types = {"this": True}


class StrictPostgres(Postgres):
    class Tokenizer(Postgres.Tokenizer):
        pass

    class Parser(Postgres.Parser):
        def _parse_where(self, skip_where_token: bool = False) -> exp.Where | None:
            index = self._index
            if (skip_where_token or self._match(TokenType.WHERE)) and self._match_text_seq(
                "CURRENT", "OF"
            ):
                # Nodes constructed directly; Parser.expression() differs across sqlglot releases.
                return exp.Where(this=CurrentOf(this=self._parse_id_var()))

            self._retreat(index)
            return super()._parse_where(skip_where_token)

    class Generator(Postgres.Generator):
        def currentof_sql(self, expression: CurrentOf) -> str:
            return f"CURRENT OF {self.sql(expression, 'this')}"


def resolve_dialect(dialect: str | None) -> str | type[Postgres]:
    """Map a user-facing dialect name to what sqlglot should parse with."""
    if dialect is None or dialect.lower() in (DEFAULT_DIALECT, "postgresql"):
        return StrictPostgres
    return dialect

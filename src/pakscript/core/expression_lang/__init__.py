"""
pakscript expression language.

Parser for the predicate/value expressions embedded in ``jump_if``, ``gset``
and ``receive_money`` instructions. Evaluation belongs to the runtime
interpreter, not to this package.

Usage:
    from pakscript.core.expression_lang import parse_expr

    expr = parse_expr("has_item(key) and gold >= 10")
"""

from pakscript.core.expression_lang.parser import (
    ExpressionParseError,
    parse_expr,
    parse_expression_at,
)

__all__ = ["ExpressionParseError", "parse_expr", "parse_expression_at"]

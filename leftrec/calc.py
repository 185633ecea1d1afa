"""Arithmetic on a left-recursive grammar.

    expr:   expr '+' term | expr '-' term | term
    term:   term '*' factor | term '/' factor | term '%' factor | factor
    factor: '-' factor | '(' expr ')' | NUMBER

Whitespace is allowed before every token.
"""

import operator

from typing import Any, Callable, Optional, Union

from leftrec.combinators import Parser, Result, alt, char, delimited, mapped, multispace0
from leftrec.combinators import pattern, preceded, sequence
from leftrec.parser import parse_string, recursive_parser
from leftrec.registry import RecursiveIndexes
from leftrec.span import Span

Number = Union[int, float]


def token(parser: Parser[Any]) -> Parser[Any]:
    return preceded(multispace0, parser)


def binary(
    left: Parser[Number], op: str, right: Parser[Number], func: Callable[[Number, Number], Number]
) -> Parser[Number]:
    return mapped(sequence(left, token(char(op)), right), lambda values: func(values[0], values[2]))


number = token(mapped(pattern(r"[0-9]+(\.[0-9]*)?"), lambda text: float(text) if "." in text else int(text)))


@recursive_parser
def expr(s: Span) -> Result[Number]:
    return alt(
        binary(expr, "+", term, operator.add),
        binary(expr, "-", term, operator.sub),
        term,
    )(s)


@recursive_parser
def term(s: Span) -> Result[Number]:
    return alt(
        binary(term, "*", factor, operator.mul),
        binary(term, "/", factor, operator.truediv),
        binary(term, "%", factor, operator.mod),
        factor,
    )(s)


def factor(s: Span) -> Result[Number]:
    return alt(
        mapped(preceded(token(char("-")), factor), operator.neg),
        delimited(token(char("(")), expr, token(char(")"))),
        number,
    )(s)


start = mapped(sequence(expr, multispace0), lambda values: values[0])


def evaluate(source: str, *, registry: Optional[RecursiveIndexes] = None) -> Number:
    return parse_string(start, source, registry=registry)

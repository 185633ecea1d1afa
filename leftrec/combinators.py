"""Primitive parsers.

A parser takes a Span and returns either None (no match) or a tuple
(rest, value).  Nothing here raises on a failed match.
"""

import re

from typing import Any, Callable, List, Optional, Tuple, TypeVar, Union

from leftrec.span import Span

T = TypeVar("T")
U = TypeVar("U")

Result = Optional[Tuple[Span, T]]
Parser = Callable[[Span], Result[T]]


def char(c: str) -> Parser[str]:
    assert len(c) == 1, c

    def char_parser(s: Span) -> Result[str]:
        if s.fragment[:1] != c:
            return None
        rest, _ = s.take_split(1)
        return rest, c

    return char_parser


def tag(text: str) -> Parser[str]:
    def tag_parser(s: Span) -> Result[str]:
        if not s.fragment.startswith(text):
            return None
        rest, _ = s.take_split(len(text))
        return rest, text

    return tag_parser


def pattern(regex: Union[str, "re.Pattern[str]"], flags: int = 0) -> Parser[str]:
    """Match a regular expression at the start of the input."""
    compiled = re.compile(regex, flags)

    def pattern_parser(s: Span) -> Result[str]:
        match = compiled.match(s.fragment)
        if match is None:
            return None
        rest, taken = s.take_split(match.end())
        return rest, taken.fragment

    return pattern_parser


digit1 = pattern(r"[0-9]+")
multispace0 = pattern(r"\s*")


def eof(s: Span) -> Result[str]:
    if s.fragment:
        return None
    return s, ""


def alt(*parsers: Parser[Any]) -> Parser[Any]:
    """Try each parser on the same input; return the first match."""

    def alt_parser(s: Span) -> Result[Any]:
        for parser in parsers:
            result = parser(s)
            if result is not None:
                return result
        return None

    return alt_parser


def sequence(*parsers: Parser[Any]) -> Parser[Tuple[Any, ...]]:
    def sequence_parser(s: Span) -> Result[Tuple[Any, ...]]:
        values = []
        for parser in parsers:
            result = parser(s)
            if result is None:
                return None
            s, value = result
            values.append(value)
        return s, tuple(values)

    return sequence_parser


def mapped(parser: Parser[T], func: Callable[[T], U]) -> Parser[U]:
    def mapped_parser(s: Span) -> Result[U]:
        result = parser(s)
        if result is None:
            return None
        rest, value = result
        return rest, func(value)

    return mapped_parser


def opt(parser: Parser[T]) -> Parser[Optional[T]]:
    def opt_parser(s: Span) -> Result[Optional[T]]:
        result = parser(s)
        if result is None:
            return s, None
        return result

    return opt_parser


def many0(parser: Parser[T]) -> Parser[List[T]]:
    def many0_parser(s: Span) -> Result[List[T]]:
        values = []
        while True:
            result = parser(s)
            if result is None:
                break
            rest, value = result
            if rest.offset == s.offset:
                # A zero-length match would repeat forever.
                break
            values.append(value)
            s = rest
        return s, values

    return many0_parser


def preceded(first: Parser[Any], second: Parser[T]) -> Parser[T]:
    return mapped(sequence(first, second), lambda values: values[1])


def delimited(left: Parser[Any], parser: Parser[T], right: Parser[Any]) -> Parser[T]:
    return mapped(sequence(left, parser, right), lambda values: values[1])

from __future__ import annotations  # Requires Python 3.7 or later

from typing import Any, Callable, Dict, Hashable, NamedTuple, Optional, Tuple, TypeVar, cast

from leftrec.registry import RecursiveIndexes, current_registry, use_registry
from leftrec.span import Span

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


class Frame:
    """A guarded rule being evaluated at one position."""

    __slots__ = ("name", "index", "position", "best", "length", "reentered")

    def __init__(self, name: Hashable, index: int, position: int):
        self.name = name
        self.index = index
        self.position = position
        self.best: Optional[Tuple[Any, Any]] = None
        self.length = 0
        self.reentered = False

    def consumed(self, result: Tuple[Any, Any]) -> int:
        return self.position - len(result[0].get_value())

    def __repr__(self) -> str:
        return f"Frame({self.name!r}, {self.index}, {self.position}, length={self.length})"


class Anchor(NamedTuple):
    """Carried value of the flags: where they were set and by which frames.

    position is the length of the remaining input, which identifies a
    position within one parse.
    """

    position: int
    frames: Dict[int, Frame]


def _enter(info: Any, position: int) -> Tuple[Any, Anchor]:
    anchor = info.get_copy()
    if not isinstance(anchor, Anchor) or anchor.position != position:
        # Flags set at another position say nothing about this one.
        anchor = Anchor(position, {})
        info = info.clear_all().set_copy(anchor)
    return info, anchor


def _leave(result: Optional[Tuple[Any, T]], index: int) -> Optional[Tuple[Any, T]]:
    if result is None:
        return None
    rest, value = result
    info = rest.get_recursive_info()
    anchor = info.get_copy()
    if isinstance(anchor, Anchor) and index in anchor.frames:
        frames = {key: frame for key, frame in anchor.frames.items() if key != index}
        info = info.set_copy(Anchor(anchor.position, frames))
    return rest.set_recursive_info(info.clear_flag(index)), value


def guard(
    name: Hashable,
    body: Callable[[Any], Optional[Tuple[Any, T]]],
    registry: Optional[RecursiveIndexes] = None,
) -> Callable[[Any], Optional[Tuple[Any, T]]]:
    """Wrap a rule body so that it may call itself at the same position.

    The first call at a position sets the rule's flag and evaluates the
    body.  A call that finds the flag already set does not recurse; it
    returns the best result found so far, which starts out as a failure.
    If that happened, the body is evaluated again and again, each time
    with the previous result as the best, for as long as the match grows.
    For an explanation why this works, see
    https://github.com/PhilippeSigaud/Pegged/wiki/Left-Recursion

    The input must implement HasRecursiveInfo and HasRecursiveType.
    """

    def recursive_parser_wrapper(s: Any) -> Optional[Tuple[Any, T]]:
        indexes = registry if registry is not None else current_registry()
        index = indexes.get(name)
        position = len(s.get_value())
        info, anchor = _enter(s.get_recursive_info(), position)
        verbose = indexes.verbose
        fill = "  " * indexes.level

        if info.check_flag(index):
            active = anchor.frames.get(index)
            if active is None:
                return None
            active.reentered = True
            if verbose:
                print(f"{fill}{name} -> {active.best and active.best[1]!s:.200} [seed]")
            return active.best

        frame = Frame(name, index, position)
        info = info.set_flag(index).set_copy(Anchor(position, {**anchor.frames, index: frame}))
        s = s.set_recursive_info(info)
        if verbose:
            print(f"{fill}{name} ... (looking at {s.get_value()!r:.30})")
        indexes.level += 1
        try:
            result = body(s)
            depth = 1
            while frame.reentered:
                if verbose:
                    print(f"{fill}Recursive {name} at {position} depth {depth}: {result and result[1]!s:.200}")
                if result is None:
                    if verbose:
                        print(f"{fill}Fail with {frame.best and frame.best[1]!s:.200}")
                    result = frame.best
                    break
                length = frame.consumed(result)
                if length <= frame.length:
                    if verbose:
                        print(f"{fill}Bailing with {frame.best and frame.best[1]!s:.200}")
                    result = frame.best
                    break
                frame.best, frame.length = result, length
                result = body(s)
                depth += 1
        finally:
            indexes.level -= 1
        if verbose:
            print(f"{fill}... {name} -> {result and result[1]!s:.200}")
        return _leave(result, index)

    recursive_parser_wrapper.__wrapped__ = body  # type: ignore
    recursive_parser_wrapper.rule_name = name  # type: ignore
    return recursive_parser_wrapper


def recursive_parser(
    func: Optional[F] = None,
    *,
    name: Optional[Hashable] = None,
    registry: Optional[RecursiveIndexes] = None,
) -> Any:
    """Decorator form of guard().

    Use bare (@recursive_parser) or with arguments
    (@recursive_parser(name="expr")).  The rule's identity defaults to the
    function's module and qualified name.
    """
    if func is None:
        return lambda func: recursive_parser(func, name=name, registry=registry)
    if name is None:
        name = f"{func.__module__}.{func.__qualname__}"
    return cast(F, guard(name, func, registry))


def make_syntax_error(source: str, span: Span, filename: str = "<string>") -> SyntaxError:
    lines = source.splitlines()
    text = lines[span.line - 1] if span.line <= len(lines) else ""
    return SyntaxError("leftrec parse failure", (filename, span.line, span.column, text))


def parse_string(
    rule: Callable[[Span], Optional[Tuple[Span, T]]],
    source: str,
    *,
    registry: Optional[RecursiveIndexes] = None,
    complete: bool = True,
    filename: str = "<string>",
) -> T:
    """Run a rule on a string with fresh flags; raise SyntaxError on failure."""
    with use_registry(registry if registry is not None else current_registry()) as indexes:
        span = Span.new_extra(source, indexes.new_info())
        result = rule(span)
    if result is None:
        raise make_syntax_error(source, span, filename)
    rest, value = result
    if complete and rest.fragment:
        raise make_syntax_error(source, rest, filename)
    return value

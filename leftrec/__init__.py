from leftrec.info import DEFAULT_CAPACITY
from leftrec.info import HasRecursiveInfo
from leftrec.info import HasRecursiveType
from leftrec.info import RecursiveInfo
from leftrec.parser import guard
from leftrec.parser import parse_string
from leftrec.parser import recursive_parser
from leftrec.registry import CapacityError
from leftrec.registry import RecursiveIndexes
from leftrec.registry import current_registry
from leftrec.registry import use_registry
from leftrec.span import Span

__all__ = [
    "DEFAULT_CAPACITY",
    "HasRecursiveInfo",
    "HasRecursiveType",
    "RecursiveInfo",
    "guard",
    "parse_string",
    "recursive_parser",
    "CapacityError",
    "RecursiveIndexes",
    "current_registry",
    "use_registry",
    "Span",
]

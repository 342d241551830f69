"""
Directive vocabulary shared by coordinate format and parse templates.

A template such as "%latd°%latm'%.02lats\"%lath" is split once into an ordered tuple
of segments: Literal text and Directives (name plus optional '+' sign flag and '.NN'
precision flag). Formatting and parsing then walk the segments.
"""

__all__ = ['Directive', 'Literal', 'Segment', 'tokenize']

from functools import lru_cache
import re
from typing import NamedTuple, Optional, Tuple, Union


# Longer names first, so '%latds' isn't read as '%latd' followed by 's'
DIRECTIVE_NAMES = (
    'latds', 'latd', 'latm', 'lats', 'lath', 'lat',
    'lngds', 'lngd', 'lngm', 'lngs', 'lngh', 'lng',
)

_RE_DIRECTIVE = re.compile(
    r'%(?P<sign>\+)?(?:\.(?P<precision>\d+))?(?P<name>' + '|'.join(DIRECTIVE_NAMES) + r')'
)


class Literal(NamedTuple):
    """Verbatim template text"""
    text: str


class Directive(NamedTuple):
    """A placeholder for one coordinate component"""
    name: str
    sign: bool
    precision: Optional[int]
    text: str

    @property
    def has_flags(self) -> bool:
        return self.sign or self.precision is not None


Segment = Union[Literal, Directive]


@lru_cache(maxsize=256)
def tokenize(template: str) -> Tuple[Segment, ...]:
    """
    Splits a template into literal and directive segments.

    Args:
        template:
            The template string, e.g. '%lat, %lng'

    Returns:
        Tuple of Literal and Directive segments, in template order
    """
    segments: list = []
    pos = 0
    for match in _RE_DIRECTIVE.finditer(template):
        if match.start() > pos:
            segments.append(Literal(template[pos:match.start()]))

        precision = match.group('precision')
        segments.append(
            Directive(
                match.group('name'),
                match.group('sign') is not None,
                int(precision) if precision is not None else None,
                match.group(),
            )
        )
        pos = match.end()

    if pos < len(template):
        segments.append(Literal(template[pos:]))

    return tuple(segments)

"""Module for parsing strings into Coordinates"""

__all__ = [
    'parse', 'parse_dms', 'parse_ll', 'parse_template'
]

from functools import lru_cache
import re
from typing import Dict, Optional, Type, Union

from geocoord._template import Directive, tokenize
from geocoord.coordinates import Coordinate
from geocoord.globes import Globe, WGS84


_INT = r'[-+]?\d+'
_UINT = r'\d+'
_FLOAT = r'[-+]?\d+(?:\.\d*)?'
_UFLOAT = r'\d+(?:\.\d*)?'

_DEG = r'[ °d]'
_MIN = r"['′’m]"
_SEC = r'["″s]'

# '50.004444, 36.231389', '50.004444;36.231389', '-50.004444 +36.231389'
_RE_LL = re.compile(
    r'^(' + _FLOAT + r')\s*[,; ]\s*(' + _FLOAT + r')$'
)


def _dms_pattern(prefix: str, hemispheres: str) -> str:
    """Degrees, then optional minutes, seconds and hemisphere"""
    return (
        rf'(?P<{prefix}d>{_INT}){_DEG}\s*'
        rf'(?:(?P<{prefix}m>{_UINT}){_MIN}\s*)?'
        rf'(?:(?P<{prefix}s>{_UFLOAT}){_SEC}\s*)?'
        rf'(?P<{prefix}h>[{hemispheres}])?'
    )


# '50 0' 16" N, 36 13' 53" E', '50°0′16″N 36°13′53″E'
_RE_DMS = re.compile(
    r'^' + _dms_pattern('lat', 'NS') + r'\s*[,; ]\s*' + _dms_pattern('lng', 'EW') + r'$'
)

_TEMPLATE_PATTERNS: Dict[str, str] = {
    'lat': _FLOAT,
    'latd': _INT,
    'latm': _UINT,
    'lats': _UFLOAT,
    'lath': '[NS]',
    'lng': _FLOAT,
    'lngd': _INT,
    'lngm': _UINT,
    'lngs': _UFLOAT,
    'lngh': '[EW]',
}
_WHOLE_DIRECTIVES = {'lat', 'lng'}


def _from_groups(
    groups: Dict[str, Optional[str]], globe: Globe, cls: Type[Coordinate]
) -> Coordinate:
    """Creates a coordinate from named match groups; hemispheres stay strings"""
    kwargs: Dict[str, Union[str, float]] = {
        k: v if k.endswith('h') else float(v)
        for k, v in groups.items()
        if v is not None
    }
    return cls(**kwargs, globe=globe)  # type: ignore


def parse_ll(text: str, globe: Globe = WGS84, cls: Type[Coordinate] = Coordinate) -> Coordinate:
    """
    Parses a string containing a float latitude and longitude, separated by a
    comma, semicolon or space (e.g. '-50.004444 +36.231389').

    Args:
        text:
            The string to parse

        globe:
            (Default WGS84) The globe of the resulting coordinate

    Returns:
        Coordinate
    """
    match = _RE_LL.match(text.strip())
    if match is None:
        raise ValueError(f"Can't parse {text!r} as lat, lng")

    return cls(float(match.group(1)), float(match.group(2)), globe=globe)


def parse_dms(text: str, globe: Globe = WGS84, cls: Type[Coordinate] = Coordinate) -> Coordinate:
    """
    Parses a string containing latitude and longitude in degrees-minutes-seconds-hemisphere
    form, e.g. 50°0′16″N 36°13′53″E or 50 0' 16" N, 36 13' 53" E.

    Several degree (space, °, d), minute (', ′, ’, m) and second (", ″, s) marks
    are understood. Minutes, seconds and hemispheres are optional; without a
    hemisphere the sign of the degrees is used.

    Args:
        text:
            The string to parse

        globe:
            (Default WGS84) The globe of the resulting coordinate

    Returns:
        Coordinate
    """
    match = _RE_DMS.match(text.strip())
    if match is None:
        raise ValueError(f"Can't parse {text!r} as degrees-minutes-seconds")

    return _from_groups(match.groupdict(), globe, cls)


def parse(
    text: str, globe: Globe = WGS84, cls: Type[Coordinate] = Coordinate
) -> Optional[Coordinate]:
    """
    Tries to parse a coordinate from a string in any known form (see parse_ll and
    parse_dms).

    Args:
        text:
            The string to parse

        globe:
            (Default WGS84) The globe of the resulting coordinate

    Returns:
        Coordinate, or None if the string couldn't be parsed
    """
    for parser in (parse_ll, parse_dms):
        try:
            return parser(text, globe=globe, cls=cls)
        except ValueError:
            continue

    return None


@lru_cache(maxsize=256)
def _compile_template(template: str) -> re.Pattern:
    """Converts a parse template into a regular expression"""
    parts, seen = [], set()
    for segment in tokenize(template):
        if (
            isinstance(segment, Directive) and
            segment.name in _TEMPLATE_PATTERNS and
            not segment.has_flags
        ):
            if segment.name in seen:
                raise ValueError(
                    f'Directive %{segment.name} appears more than once in {template!r}'
                )
            seen.add(segment.name)
            parts.append(f'(?P<{segment.name}>{_TEMPLATE_PATTERNS[segment.name]})')
            continue

        parts.append(re.escape(segment.text))

    if not seen:
        raise ValueError(f'Template {template!r} contains no coordinate directives')

    if seen & _WHOLE_DIRECTIVES and seen - _WHOLE_DIRECTIVES:
        raise ValueError(
            f'Template {template!r} mixes whole values (%lat, %lng) with '
            'degree/minute/second directives'
        )

    return re.compile(''.join(parts))


def parse_template(
    text: str,
    template: str,
    globe: Globe = WGS84,
    cls: Type[Coordinate] = Coordinate,
) -> Coordinate:
    """
    Parses a string with a user-supplied template (strpcoord). The template must match
    from the start of the string; anything after the match is ignored.

    Directives:

        %lat    Full latitude, float, may be signed
        %latd   Latitude degrees, integer, may be signed (instead of a hemisphere)
        %latm   Latitude minutes, integer, unsigned
        %lats   Latitude seconds, float, unsigned
        %lath   Latitude hemisphere, 'N' or 'S'
        %lng, %lngd, %lngm, %lngs, %lngh
                Longitude equivalents; hemisphere is 'E' or 'W'

    Example:
        >>> parse_template('-50.004444/+36.231389', '%lat/%lng')
        <Coordinate(-50.004444, 36.231389)>

    Args:
        text:
            The string to parse

        template:
            The template, e.g. '%lat, %lng'

        globe:
            (Default WGS84) The globe of the resulting coordinate

    Returns:
        Coordinate
    """
    pattern = _compile_template(template)
    match = pattern.match(text)
    if match is None:
        raise ValueError(
            f"Coordinates string {text!r} can't be parsed by pattern {pattern.pattern!r}"
        )

    return _from_groups(match.groupdict(), globe, cls)

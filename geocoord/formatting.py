"""
Template-driven rendering of coordinates (strfcoord)
"""

__all__ = ['DEFAULT_DMS_TEMPLATE', 'DEFAULT_FLOAT_TEMPLATE', 'format_coordinate']

from functools import lru_cache
from typing import Dict, Tuple, TYPE_CHECKING, Union

from geocoord._template import Directive, Literal, Segment, tokenize
from geocoord.utils.functions import round_half_up

if TYPE_CHECKING:  # pragma: no cover
    from geocoord.coordinates import Coordinate


DEFAULT_DMS_TEMPLATE = '%latd°%latm\'%lats"%lath %lngd°%lngm\'%lngs"%lngh'
DEFAULT_FLOAT_TEMPLATE = '%lat,%lng'

# Directives accepting the '+' flag and the '.NN' flag, respectively
_SIGNED = {'lat', 'latds', 'lng', 'lngds'}
_FLOATS = {'lat', 'lats', 'lng', 'lngs'}

_DEFAULT_PRECISION = {'lat': 6, 'lng': 6, 'lats': 0, 'lngs': 0}


@lru_cache(maxsize=256)
def _compile(template: str) -> Tuple[Segment, ...]:
    """Tokenizes a template, demoting directives with unsupported flags to literals"""
    segments = []
    for segment in tokenize(template):
        if isinstance(segment, Directive) and (
            (segment.sign and segment.name not in _SIGNED) or
            (segment.precision is not None and segment.name not in _FLOATS)
        ):
            segment = Literal(segment.text)
        segments.append(segment)

    return tuple(segments)


def _dms_components(
    dms: tuple, segments: Tuple[Segment, ...], seconds_directive: str
) -> Tuple[int, int, float]:
    """
    Degrees, minutes and seconds of a latdms()/lngdms() tuple, as they will be displayed.

    Seconds that round up to 60 at the precision of the template's first seconds
    directive are carried into the minutes (and minutes into the degrees). Templates
    that don't render seconds get no carry; their minutes are truncated.
    """
    degrees, minutes, seconds = dms[:3]

    directive = next(
        (
            x for x in segments
            if isinstance(x, Directive) and x.name == seconds_directive
        ),
        None
    )
    if directive is None:
        return degrees, minutes, seconds

    precision = directive.precision
    if precision is None:
        precision = _DEFAULT_PRECISION[seconds_directive]

    if round_half_up(seconds, precision) >= 60:
        seconds = 0.
        minutes += 1
        if minutes == 60:
            minutes = 0
            degrees += 1

    return degrees, minutes, seconds


def _component_values(
    coord: 'Coordinate', segments: Tuple[Segment, ...]
) -> Dict[str, Union[float, int, str]]:
    lat_d, lat_m, lat_s = _dms_components(coord.latdms(), segments, 'lats')
    lng_d, lng_m, lng_s = _dms_components(coord.lngdms(), segments, 'lngs')

    return {
        'lat': coord.lat,
        'latd': lat_d,
        'latds': lat_d if coord.lat >= 0 else -lat_d,
        'latm': lat_m,
        'lats': lat_s,
        'lath': coord.lath,
        'lng': coord.lng,
        'lngd': lng_d,
        'lngds': lng_d if coord.lng >= 0 else -lng_d,
        'lngm': lng_m,
        'lngs': lng_s,
        'lngh': coord.lngh,
    }


def _render(directive: Directive, value: Union[float, int, str]) -> str:
    if directive.name in ('lath', 'lngh'):
        return str(value)

    sign = '+' if directive.sign else ''
    if directive.name in _FLOATS:
        precision = directive.precision
        if precision is None:
            precision = _DEFAULT_PRECISION[directive.name]
        if directive.name in ('lats', 'lngs'):
            value = round_half_up(value, precision)  # type: ignore

        return f'{value:{sign}.{precision}f}'

    return f'{value:{sign}d}'


def format_coordinate(coord: 'Coordinate', template: str) -> str:
    """
    Formats a coordinate according to the directives in a template.

    Each directive starts with '%' and may carry flags before its name:

        * signed directives accept '+' for a mandatory sign
        * float directives accept a number of digits, e.g. '.04'

    Directives:

        %lat    Full latitude, float, signed (default 6 digits)
        %latds  Latitude degrees, integer, signed
        %latd   Latitude degrees, integer, unsigned
        %latm   Latitude minutes, integer, unsigned
        %lats   Latitude seconds, float, unsigned (default 0 digits)
        %lath   Latitude hemisphere, 'N' or 'S'
        %lng, %lngds, %lngd, %lngm, %lngs, %lngh
                Longitude equivalents; hemisphere is 'E' or 'W'

    Unknown directives are left as-is.

    Args:
        coord:
            The coordinate to format

        template:
            The format template, e.g. "%latd°%latm'%lath"

    Returns:
        str
    """
    segments = _compile(template)
    values = _component_values(coord, segments)

    return ''.join(
        _render(segment, values[segment.name]) if isinstance(segment, Directive)
        else segment.text
        for segment in segments
    )


from geocoord._version import __version__  # noqa: F401
from geocoord.utils.logging import LOGGER
from geocoord.globes import EarthGlobe, Globe, SphericalGlobe, EARTH_SPHERE, WGS84
from geocoord.coordinates import Coordinate
from geocoord.formatting import format_coordinate
from geocoord.parsers import parse, parse_dms, parse_ll, parse_template


__all__ = [
    'Coordinate',
    'EarthGlobe',
    'Globe',
    'SphericalGlobe',
    'EARTH_SPHERE',
    'WGS84',
    'format_coordinate',
    'parse',
    'parse_dms',
    'parse_ll',
    'parse_template',
    'LOGGER',
]

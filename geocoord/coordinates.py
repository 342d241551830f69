"""
Representation of a specific point on earth
"""

__all__ = ['Coordinate']

import math
from typing import Any, Dict, Hashable, Mapping, Optional, Tuple, Union
from typing_extensions import Self

from geocoord.formatting import DEFAULT_DMS_TEMPLATE, DEFAULT_FLOAT_TEMPLATE, format_coordinate
from geocoord.globes import Globe, WGS84
from geocoord.utils.logging import warn_once


_LAT_KEYS = ('lat', 'latitude')
_LNG_KEYS = ('lng', 'lon', 'long', 'longitude')

_LAT_HEMISPHERES = {'N': 1, 'S': -1}
_LNG_HEMISPHERES = {'E': 1, 'W': -1}

_DMS_TYPE = Tuple[int, int, float, str]
_NUMBER = Union[float, int, str]


def _dms(value: float) -> Tuple[int, int, float]:
    """Converts a decimal degree to unsigned (degrees, minutes, seconds)"""
    minutes, seconds = divmod(abs(value) * 3600, 60)
    degrees, minutes = divmod(int(minutes), 60)
    return degrees, minutes, seconds


def _from_dms(
    degrees: Optional[_NUMBER],
    minutes: Optional[_NUMBER],
    seconds: Optional[_NUMBER],
    hemisphere: Optional[str],
    hemispheres: Dict[str, int],
) -> float:
    """
    Combines degree/minute/second components into a decimal degree.

    Without a hemisphere, the sign of the degrees decides the sign of the result.
    """
    deg = float(degrees) if degrees is not None else 0.
    magnitude = abs(deg)
    if minutes is not None:
        magnitude += float(minutes) / 60
    if seconds is not None:
        magnitude += float(seconds) / 3600

    if hemisphere is None:
        return math.copysign(magnitude, deg)

    if hemisphere not in hemispheres:
        raise ValueError(
            f'Unidentified hemisphere: {hemisphere!r}, expected one of {", ".join(hemispheres)}'
        )

    return magnitude * hemispheres[hemisphere]


class Coordinate:
    """
    Representation of a coordinate on the globe (i.e., a lat/lng pair), in decimal degrees.

    There are three ways to create a Coordinate:

        Coordinate(50.004444, 36.231389)
        Coordinate(lat=50.004444, lng=36.231389)
        Coordinate(latd=50, latm=0, lats=16, lath='N', lngd=36, lngm=13, lngs=53, lngh='E')

    In the keyword forms any omitted component is zero, but whole values (lat/lng) can't
    be mixed with components (latd, lngm, ...). Without a hemisphere, the sign of the
    degrees is used.

    Coordinates are immutable. Equality compares latitude and longitude exactly, so two
    "almost equal" coordinates computed in different ways will rarely compare equal.
    No ordering is defined.

    Args:
        lat:
            The latitude, within [-90, 90]

        lng:
            The longitude, within [-180, 180]

    Keyword Args:
        latd, latm, lats, lath:
            Latitude degrees, minutes, seconds and hemisphere ('N' or 'S')

        lngd, lngm, lngs, lngh:
            Longitude degrees, minutes, seconds and hemisphere ('E' or 'W')

        globe: (Globe)
            (Default WGS84) The globe used for distance, azimuth and endpoint
            calculations
    """

    __slots__ = ('_lat', '_lng', '_globe')

    def __init__(
        self,
        lat: Optional[_NUMBER] = None,
        lng: Optional[_NUMBER] = None,
        *,
        latd: Optional[_NUMBER] = None,
        latm: Optional[_NUMBER] = None,
        lats: Optional[_NUMBER] = None,
        lath: Optional[str] = None,
        lngd: Optional[_NUMBER] = None,
        lngm: Optional[_NUMBER] = None,
        lngs: Optional[_NUMBER] = None,
        lngh: Optional[str] = None,
        globe: Globe = WGS84,
    ):
        has_whole = lat is not None or lng is not None
        has_parts = any(
            x is not None for x in (latd, latm, lats, lath, lngd, lngm, lngs, lngh)
        )

        if has_whole and has_parts:
            raise TypeError(
                f"Can't create {self.__class__.__name__} from both lat/lng and "
                "degree/minute/second components"
            )

        if has_whole:
            _lat = float(lat) if lat is not None else 0.
            _lng = float(lng) if lng is not None else 0.
        elif has_parts:
            _lat = _from_dms(latd, latm, lats, lath, _LAT_HEMISPHERES)
            _lng = _from_dms(lngd, lngm, lngs, lngh, _LNG_HEMISPHERES)
        else:
            raise TypeError(f"Can't create {self.__class__.__name__} by provided data")

        if not -90 <= _lat <= 90:
            raise ValueError(f'Expected latitude to be between -90 and 90, {_lat} received')

        if not -180 <= _lng <= 180:
            raise ValueError(f'Expected longitude to be between -180 and 180, {_lng} received')

        object.__setattr__(self, '_lat', _lat)
        object.__setattr__(self, '_lng', _lng)
        object.__setattr__(self, '_globe', globe)

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, name):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False

        return self._lat == other._lat and self._lng == other._lng

    def __hash__(self):
        return hash((self._lat, self._lng))

    def __repr__(self):
        return f'<Coordinate({self._lat}, {self._lng})>'

    def __str__(self):
        return self.to_str()

    def __reduce__(self):
        return _restore, (self.__class__, self._lat, self._lng, self._globe)

    @property
    def latitude(self) -> float:
        return self._lat

    @property
    def longitude(self) -> float:
        return self._lng

    lat = latitude
    lng = longitude
    lon = longitude

    @property
    def globe(self) -> Globe:
        return self._globe

    @property
    def phi(self) -> float:
        """Latitude, in radians"""
        return math.radians(self._lat)

    @property
    def lam(self) -> float:
        """Longitude, in radians"""
        return math.radians(self._lng)

    @property
    def latd(self) -> int:
        """Latitude degrees (unsigned integer)"""
        return _dms(self._lat)[0]

    @property
    def latm(self) -> int:
        """Latitude minutes (unsigned integer)"""
        return _dms(self._lat)[1]

    @property
    def lats(self) -> float:
        """Latitude seconds (unsigned float)"""
        return _dms(self._lat)[2]

    @property
    def lath(self) -> str:
        """Latitude hemisphere, 'N' or 'S'"""
        return 'N' if self._lat >= 0 else 'S'

    @property
    def latds(self) -> int:
        """Latitude degrees (signed integer)"""
        return self.latd if self._lat >= 0 else -self.latd

    @property
    def lngd(self) -> int:
        """Longitude degrees (unsigned integer)"""
        return _dms(self._lng)[0]

    @property
    def lngm(self) -> int:
        """Longitude minutes (unsigned integer)"""
        return _dms(self._lng)[1]

    @property
    def lngs(self) -> float:
        """Longitude seconds (unsigned float)"""
        return _dms(self._lng)[2]

    @property
    def lngh(self) -> str:
        """Longitude hemisphere, 'E' or 'W'"""
        return 'E' if self._lng >= 0 else 'W'

    @property
    def lngds(self) -> int:
        """Longitude degrees (signed integer)"""
        return self.lngd if self._lng >= 0 else -self.lngd

    def latdms(self, hemisphere: bool = True) -> tuple:
        """
        Latitude components.

        Args:
            hemisphere: (bool)
                (Default True) If False, the hemisphere is dropped and the degrees
                are signed instead

        Returns:
            (degrees, minutes, seconds, hemisphere) or (signed degrees, minutes, seconds)
        """
        degrees, minutes, seconds = _dms(self._lat)
        if not hemisphere:
            return self.latds, minutes, seconds

        return degrees, minutes, seconds, self.lath

    def lngdms(self, hemisphere: bool = True) -> tuple:
        """
        Longitude components.

        Args:
            hemisphere: (bool)
                (Default True) If False, the hemisphere is dropped and the degrees
                are signed instead

        Returns:
            (degrees, minutes, seconds, hemisphere) or (signed degrees, minutes, seconds)
        """
        degrees, minutes, seconds = _dms(self._lng)
        if not hemisphere:
            return self.lngds, minutes, seconds

        return degrees, minutes, seconds, self.lngh

    @classmethod
    def from_dict(cls, data: Mapping[Hashable, Any], globe: Globe = WGS84) -> Self:
        """
        Creates a Coordinate from a mapping containing latitude and longitude, e.g. an
        API response or a database row.

        Keys are matched regardless of type (str() is applied) and letter case, and
        synonyms are understood: 'lat'/'latitude' and 'lng'/'lon'/'long'/'longitude'.
        Keys holding None are ignored.

        Args:
            data:
                The mapping, e.g. {'LAT': 50.004444, 'lon': 36.231389}

            globe:
                (Default WGS84) The globe of the resulting coordinate

        Returns:
            Coordinate
        """
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            if value is not None:
                normalized.setdefault(str(key).lower(), value)

        def pick(keys: Tuple[str, ...], name: str):
            found = [normalized[x] for x in keys if x in normalized]
            if not found:
                raise ValueError(f'No {name} value found in {data!r}')
            if len(found) > 1:
                warn_once(
                    f'Multiple {name} keys found; using the first of {", ".join(keys)}. '
                    '(this warning will not repeat)'
                )
            return found[0]

        return cls(pick(_LAT_KEYS, 'latitude'), pick(_LNG_KEYS, 'longitude'), globe=globe)

    @classmethod
    def from_rad(cls, phi: float, lam: float, globe: Globe = WGS84) -> Self:
        """Creates a Coordinate from latitude and longitude in radians"""
        return cls(math.degrees(phi), math.degrees(lam), globe=globe)

    @classmethod
    def from_dms(cls, lat: _DMS_TYPE, lng: _DMS_TYPE, globe: Globe = WGS84) -> Self:
        """
        Creates a Coordinate from a Degree Minutes Seconds (lat, lng) pair.

        The hemisphere value should consist of either 'N'/'S' (latitude) or 'E'/'W' (longitude)

        Args:
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (int),  <minutes> (int), <seconds> (float), <hemisphere> (str) )
            lng:
                Longitude, as a 4-tuple of
                ( <degrees> (int),  <minutes> (int), <seconds> (float), <hemisphere> (str) )

        Returns:
            Coordinate
        """
        return cls(
            latd=lat[0], latm=lat[1], lats=lat[2], lath=lat[3],
            lngd=lng[0], lngm=lng[1], lngs=lng[2], lngh=lng[3],
            globe=globe,
        )

    @classmethod
    def parse_ll(cls, text: str, globe: Globe = WGS84) -> Self:
        """Parses a '<lat>, <lng>' string, see geocoord.parsers.parse_ll"""
        from geocoord.parsers import parse_ll  # pylint: disable=import-outside-toplevel
        return parse_ll(text, globe=globe, cls=cls)

    @classmethod
    def parse_dms(cls, text: str, globe: Globe = WGS84) -> Self:
        """Parses a degrees/minutes/seconds string, see geocoord.parsers.parse_dms"""
        from geocoord.parsers import parse_dms  # pylint: disable=import-outside-toplevel
        return parse_dms(text, globe=globe, cls=cls)

    @classmethod
    def parse(cls, text: str, globe: Globe = WGS84) -> Optional[Self]:
        """Best-effort parsing; returns None if nothing matches. See geocoord.parsers.parse"""
        from geocoord.parsers import parse  # pylint: disable=import-outside-toplevel
        return parse(text, globe=globe, cls=cls)

    @classmethod
    def strpcoord(cls, text: str, template: str, globe: Globe = WGS84) -> Self:
        """Parses a string with a template, see geocoord.parsers.parse_template"""
        from geocoord.parsers import parse_template  # pylint: disable=import-outside-toplevel
        return parse_template(text, template, globe=globe, cls=cls)

    def to_dms(self) -> Tuple[_DMS_TYPE, _DMS_TYPE]:
        """
        Converts the coordinate to a pair of (degrees, minutes, seconds, hemisphere)

        Returns:
            (latitude dms, longitude dms)
        """
        return self.latdms(), self.lngdms()

    def to_float(self, reverse: bool = False) -> Tuple[float, float]:
        """
        Converts the coordinate to a tuple of floats (latitude, longitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (longitude, latitude)

        Returns:
            Tuple of (latitude, longitude)
        """
        if reverse:
            return self._lng, self._lat

        return self._lat, self._lng

    def to_dict(self, lat: Hashable = 'lat', lng: Hashable = 'lng') -> Dict[Hashable, float]:
        """
        Converts the coordinate to a dict, with configurable keys.

        Args:
            lat:
                (Default 'lat') The latitude key

            lng:
                (Default 'lng') The longitude key

        Returns:
            dict
        """
        return {lat: self._lat, lng: self._lng}

    def to_str(self, dms: bool = True) -> str:
        """
        Converts the coordinate to a string, either 50°0'16"N 36°13'53"E (default)
        or 50.004444,36.231389 (dms=False)
        """
        return self.strfcoord(DEFAULT_DMS_TEMPLATE if dms else DEFAULT_FLOAT_TEMPLATE)

    def strfcoord(self, template: str) -> str:
        """Formats the coordinate with a template, see geocoord.formatting.format_coordinate"""
        return format_coordinate(self, template)

    def distance(self, other: 'Coordinate') -> float:
        """
        The distance to another coordinate, in meters (for the shipped Earth globes)

        Args:
            other:
                The destination Coordinate

        Returns:
            float
        """
        return self._globe.inverse(self.phi, self.lam, other.phi, other.lam)[0]

    def azimuth(self, other: 'Coordinate') -> float:
        """
        The initial bearing towards another coordinate

        Args:
            other:
                The destination Coordinate

        Returns:
            (float) degrees clockwise from north, within [0, 360)
        """
        bearing = self._globe.inverse(self.phi, self.lam, other.phi, other.lam)[1]
        return (math.degrees(bearing) + 360) % 360

    def endpoint(self, distance: float, azimuth: float) -> 'Coordinate':
        """
        The point reached when travelling a distance along an initial azimuth.

        Args:
            distance:
                Distance, in meters (for the shipped Earth globes)

            azimuth:
                Initial bearing, in degrees clockwise from north

        Returns:
            A new Coordinate on the same globe
        """
        phi2, lam2 = self._globe.direct(self.phi, self.lam, distance, math.radians(azimuth))
        return self.from_rad(phi2, lam2, globe=self._globe)


def _restore(cls, lat: float, lng: float, globe: Globe) -> Coordinate:
    """Unpickles a Coordinate (or subclass)"""
    return cls(lat, lng, globe=globe)

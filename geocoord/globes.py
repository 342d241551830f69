"""
Geodesic models of a planet.

Each globe solves the two main geodetic problems:

    * inverse: given two points, the distance between them and the initial bearing
    * direct: given a start point, a distance and an initial bearing, the end point

All angles are in radians; distances are in the unit of the globe's axes/radius
(meters for the shipped Earth models).

Formulae follow http://www.movable-type.co.uk/scripts/latlong.html (sphere) and
http://www.movable-type.co.uk/scripts/latlong-vincenty.html (ellipsoid).
"""

__all__ = [
    'EarthGlobe', 'Globe', 'SphericalGlobe',
    'EARTH_SPHERE', 'WGS84',
]

from abc import ABC, abstractmethod
import math
from typing import Optional, Tuple

from geocoord._const import (
    EARTH_RADIUS_METERS, EARTH_SPHERE_RADIUS, VINCENTY_DIRECT_MAX_ITERATIONS,
    VINCENTY_MAX_ITERATIONS, VINCENTY_TOLERANCE, WGS84_A, WGS84_B
)
from geocoord.utils.logging import LOGGER


def _normalize_longitude(lam: float) -> float:
    """Wraps a longitude (radians) into [-pi, pi)"""
    return (lam + 3 * math.pi) % (2 * math.pi) - math.pi


class Globe(ABC):
    """Base class for the geodesic models"""

    @abstractmethod
    def inverse(
        self, phi1: float, lam1: float, phi2: float, lam2: float
    ) -> Tuple[float, float]:
        """
        Solves the inverse geodetic problem.

        Args:
            phi1, lam1:
                Latitude and longitude of the start point, in radians

            phi2, lam2:
                Latitude and longitude of the end point, in radians

        Returns:
            (distance, initial bearing in radians)
        """

    @abstractmethod
    def direct(
        self, phi1: float, lam1: float, distance: float, bearing: float
    ) -> Tuple[float, float]:
        """
        Solves the direct geodetic problem.

        Args:
            phi1, lam1:
                Latitude and longitude of the start point, in radians

            distance:
                Distance to travel

            bearing:
                Initial bearing, in radians clockwise from north

        Returns:
            (latitude, longitude) of the end point, in radians
        """


class SphericalGlobe(Globe):
    """
    A perfectly spherical planet.

    Args:
        radius:
            The radius of the sphere; distances are returned in the same unit
    """

    def __init__(self, radius: float = EARTH_RADIUS_METERS):
        self._radius = float(radius)

    def __repr__(self):
        return f'<SphericalGlobe(radius={self._radius})>'

    @property
    def radius(self) -> float:
        return self._radius

    def inverse(
        self, phi1: float, lam1: float, phi2: float, lam2: float
    ) -> Tuple[float, float]:
        """Haversine distance and initial bearing"""
        d_phi = phi2 - phi1
        d_lam = lam2 - lam1

        a = (
            math.sin(d_phi / 2) ** 2 +
            math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
        )
        if a > 1:
            a = 1.0  # Rounding on antipodal pairs
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        y = math.sin(d_lam) * math.cos(phi1)
        x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lam)

        return self._radius * c, math.atan2(y, x)

    def direct(
        self, phi1: float, lam1: float, distance: float, bearing: float
    ) -> Tuple[float, float]:
        """Destination point along a great circle"""
        ang_dist = distance / self._radius

        sin_phi2 = (
            math.sin(phi1) * math.cos(ang_dist) +
            math.cos(phi1) * math.sin(ang_dist) * math.cos(bearing)
        )
        if abs(sin_phi2) > 1:
            # Rounding at the poles; NaN passes through untouched
            sin_phi2 = math.copysign(1.0, sin_phi2)
        phi2 = math.asin(sin_phi2)
        lam2 = lam1 + math.atan2(
            math.sin(bearing) * math.sin(ang_dist) * math.cos(phi1),
            math.cos(ang_dist) - math.sin(phi1) * math.sin(phi2)
        )

        return phi2, _normalize_longitude(lam2)


class EarthGlobe(Globe):
    """
    An oblate ellipsoid, solved with Vincenty's formulae.

    Vincenty's inverse formula does not converge for (nearly) antipodal points; in
    that case the result of the fallback sphere is returned instead.

    Args:
        major_axis:
            The semi-major (equatorial) axis

        minor_axis:
            The semi-minor (polar) axis

        fallback:
            (Optional) The sphere used when the inverse formula fails to converge.
            Defaults to a sphere of radius 6378135.
    """

    def __init__(
        self,
        major_axis: float = WGS84_A,
        minor_axis: float = WGS84_B,
        fallback: Optional[SphericalGlobe] = None,
    ):
        if not 0 < minor_axis <= major_axis:
            raise ValueError(
                f'Minor axis must be positive and no larger than the major axis, '
                f'received {minor_axis} and {major_axis}'
            )

        self._major_axis = float(major_axis)
        self._minor_axis = float(minor_axis)
        self._f = (self._major_axis - self._minor_axis) / self._major_axis
        self._fallback = fallback or SphericalGlobe(EARTH_SPHERE_RADIUS)

    def __repr__(self):
        return f'<EarthGlobe(major_axis={self._major_axis}, minor_axis={self._minor_axis})>'

    @property
    def major_axis(self) -> float:
        return self._major_axis

    @property
    def minor_axis(self) -> float:
        return self._minor_axis

    @property
    def flattening(self) -> float:
        return self._f

    @property
    def fallback(self) -> SphericalGlobe:
        return self._fallback

    def _series_coefficients(self, cos_sq_alpha: float) -> Tuple[float, float]:
        """Vincenty's A and B series coefficients (eq. 3 and 4)"""
        u_sq = cos_sq_alpha * (self._major_axis ** 2 - self._minor_axis ** 2) / (self._minor_axis ** 2)
        big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
        big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
        return big_a, big_b

    @staticmethod
    def _delta_sigma(
        big_b: float, sin_sigma: float, cos_sigma: float, cos_2sigma_m: float
    ) -> float:
        """Vincenty's eq. 6"""
        return big_b * sin_sigma * (
            cos_2sigma_m + big_b / 4 * (
                cos_sigma * (-1 + 2 * cos_2sigma_m ** 2) -
                big_b / 6 * cos_2sigma_m * (-3 + 4 * sin_sigma ** 2) * (-3 + 4 * cos_2sigma_m ** 2)
            )
        )

    def inverse(
        self, phi1: float, lam1: float, phi2: float, lam2: float
    ) -> Tuple[float, float]:
        """Vincenty distance and initial bearing, falling back to the sphere"""
        f = self._f
        U1 = math.atan((1 - f) * math.tan(phi1))
        U2 = math.atan((1 - f) * math.tan(phi2))
        L = lam2 - lam1
        Lambda = L

        sinU1, cosU1 = math.sin(U1), math.cos(U1)
        sinU2, cosU2 = math.sin(U2), math.cos(U2)

        for _ in range(VINCENTY_MAX_ITERATIONS):
            sinLambda, cosLambda = math.sin(Lambda), math.cos(Lambda)

            # eq. 14
            sinSigma = math.sqrt(
                (cosU2 * sinLambda) ** 2 +
                (cosU1 * sinU2 - sinU1 * cosU2 * cosLambda) ** 2
            )
            if sinSigma == 0:
                return 0.0, 0.0  # Coincident points

            # eq. 15, 16
            cosSigma = sinU1 * sinU2 + cosU1 * cosU2 * cosLambda
            sigma = math.atan2(sinSigma, cosSigma)

            # eq. 17
            sinAlpha = cosU1 * cosU2 * sinLambda / sinSigma
            cosSqAlpha = 1 - sinAlpha ** 2

            # eq. 18
            try:
                cos2SigmaM = cosSigma - 2 * sinU1 * sinU2 / cosSqAlpha
            except ZeroDivisionError:
                cos2SigmaM = 0  # Equatorial line

            # eq. 10, 11
            C = f / 16 * cosSqAlpha * (4 + f * (4 - 3 * cosSqAlpha))
            Lambda_prev = Lambda
            Lambda = L + (1 - C) * f * sinAlpha * (
                sigma + C * sinSigma * (cos2SigmaM + C * cosSigma * (-1 + 2 * cos2SigmaM ** 2))
            )

            if abs(Lambda - Lambda_prev) < VINCENTY_TOLERANCE:
                break
        else:
            # Convergence failure (usually antipodal points)
            LOGGER.debug(
                'Vincenty inverse formula failed to converge after %s iterations; '
                'using spherical solution',
                VINCENTY_MAX_ITERATIONS
            )
            return self._fallback.inverse(phi1, lam1, phi2, lam2)

        big_a, big_b = self._series_coefficients(cosSqAlpha)
        deltaSigma = self._delta_sigma(big_b, sinSigma, cosSigma, cos2SigmaM)
        distance = self._minor_axis * big_a * (sigma - deltaSigma)

        # eq. 20
        alpha1 = math.atan2(
            cosU2 * math.sin(Lambda),
            cosU1 * sinU2 - sinU1 * cosU2 * math.cos(Lambda)
        )

        return distance, alpha1

    def direct(
        self, phi1: float, lam1: float, distance: float, bearing: float
    ) -> Tuple[float, float]:
        """Vincenty destination point"""
        if distance == 0:
            return phi1, lam1

        f = self._f
        sinAlpha1, cosAlpha1 = math.sin(bearing), math.cos(bearing)

        tanU1 = (1 - f) * math.tan(phi1)
        cosU1 = 1 / math.sqrt(1 + tanU1 ** 2)
        sinU1 = tanU1 * cosU1

        sigma1 = math.atan2(tanU1, cosAlpha1)
        sinAlpha = cosU1 * sinAlpha1
        cosSqAlpha = 1 - sinAlpha ** 2
        big_a, big_b = self._series_coefficients(cosSqAlpha)

        sigma = distance / (self._minor_axis * big_a)
        for _ in range(VINCENTY_DIRECT_MAX_ITERATIONS):
            cos2SigmaM = math.cos(2 * sigma1 + sigma)
            deltaSigma = self._delta_sigma(big_b, math.sin(sigma), math.cos(sigma), cos2SigmaM)
            sigma_prev = sigma
            sigma = distance / (self._minor_axis * big_a) + deltaSigma
            if not abs(sigma - sigma_prev) > VINCENTY_TOLERANCE:
                break

        sinSigma, cosSigma = math.sin(sigma), math.cos(sigma)
        cos2SigmaM = math.cos(2 * sigma1 + sigma)

        tmp = sinU1 * sinSigma - cosU1 * cosSigma * cosAlpha1
        phi2 = math.atan2(
            sinU1 * cosSigma + cosU1 * sinSigma * cosAlpha1,
            (1 - f) * math.sqrt(sinAlpha ** 2 + tmp ** 2)
        )
        lambda_val = math.atan2(
            sinSigma * sinAlpha1,
            cosU1 * cosSigma - sinU1 * sinSigma * cosAlpha1
        )
        C = f / 16 * cosSqAlpha * (4 + f * (4 - 3 * cosSqAlpha))
        L = lambda_val - (1 - C) * f * sinAlpha * (
            sigma + C * sinSigma * (cos2SigmaM + C * cosSigma * (-1 + 2 * cos2SigmaM ** 2))
        )

        return phi2, _normalize_longitude(lam1 + L)


# Shared, read-only instances
WGS84 = EarthGlobe()
EARTH_SPHERE = SphericalGlobe(EARTH_RADIUS_METERS)

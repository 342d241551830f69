import pytest

from geocoord import Coordinate, EARTH_SPHERE, WGS84
from geocoord.parsers import parse, parse_dms, parse_ll, parse_template
from tests.functions import assert_coordinates_equal


KHARKIV = Coordinate(50.004444, 36.231389)
KHARKIV_DMS = Coordinate(latd=50, latm=0, lats=16, lath='N', lngd=36, lngm=13, lngs=53, lngh='E')


def test_parse_ll():
    assert parse_ll('50.004444, 36.231389') == KHARKIV
    assert parse_ll('50.004444,36.231389') == KHARKIV
    assert parse_ll('50.004444;36.231389') == KHARKIV
    assert parse_ll('50.004444 36.231389') == KHARKIV
    assert parse_ll('  50.004444 , 36.231389 ') == KHARKIV
    assert parse_ll('-50.004444 +36.231389') == Coordinate(-50.004444, 36.231389)
    assert parse_ll('50 36') == Coordinate(50, 36)
    assert parse_ll('50. 36.') == Coordinate(50, 36)


def test_parse_ll_errors():
    with pytest.raises(ValueError, match="Can't parse"):
        parse_ll('50 36 80')

    with pytest.raises(ValueError, match="Can't parse"):
        parse_ll('50.04444')

    with pytest.raises(ValueError, match="Can't parse"):
        parse_ll('.5, .5')

    # Parsed, but out of range
    with pytest.raises(ValueError, match='latitude'):
        parse_ll('95, 36')


def test_parse_dms():
    assert parse_dms('50 0\' 16" N, 36 13\' 53" E') == KHARKIV_DMS
    assert parse_dms('50°0′16″N 36°13′53″E') == KHARKIV_DMS
    assert parse_dms('50°0’16″N 36°13′53″E') == KHARKIV_DMS
    assert parse_dms('50d0m16sN 36d13m53sE') == KHARKIV_DMS
    assert parse_dms('50°0\'16"N;36°13\'53"E') == KHARKIV_DMS

    assert_coordinates_equal(parse_dms('50°0′16″N 36°13′53″E'), KHARKIV, abs_tol=1e-4)


def test_parse_dms_optional_parts():
    assert parse_dms('22°12\'00" 33°18\'00"') == Coordinate(latd=22, latm=12, lngd=33, lngm=18)
    assert parse_dms('50°S 36°W') == Coordinate(-50, -36)
    assert parse_dms('50°30\'S, 36°15\'E') == Coordinate(-50.5, 36.25)

    # Signed degrees instead of hemispheres
    assert parse_dms('-50°30\' -36°15\'') == Coordinate(-50.5, -36.25)


def test_parse_dms_errors():
    with pytest.raises(ValueError, match="Can't parse"):
        parse_dms('50 36 80')

    with pytest.raises(ValueError, match="Can't parse"):
        parse_dms('50°0′16″E 36°13′53″N')

    with pytest.raises(ValueError, match="Can't parse"):
        parse_dms('50°0′16″n 36°13′53″e')


def test_parse():
    assert parse('50.004444, 36.231389') == KHARKIV
    assert parse('50 36') == Coordinate(50, 36)
    assert parse('50 0\' 16" N, 36 13\' 53" E') == KHARKIV_DMS

    assert parse('50') is None
    assert parse('') is None
    assert parse('somewhere in Kharkiv') is None


def test_parse_globe():
    assert parse_ll('50, 36').globe is WGS84
    assert parse_ll('50, 36', globe=EARTH_SPHERE).globe is EARTH_SPHERE
    assert parse_dms('50°N 36°E', globe=EARTH_SPHERE).globe is EARTH_SPHERE
    assert parse('50, 36', globe=EARTH_SPHERE).globe is EARTH_SPHERE
    assert parse_template('50/36', '%lat/%lng', globe=EARTH_SPHERE).globe is EARTH_SPHERE


def test_parse_template():
    assert parse_template('50.004444, 36.231389', '%lat, %lng') == KHARKIV

    assert parse_template(
        '50 0\' 16" N, 36 13\' 53" E',
        '%latd %latm\' %lats" %lath, %lngd %lngm\' %lngs" %lngh',
    ) == Coordinate(latd=50, latm=0, lats=16, lngd=36, lngm=13, lngs=53)

    assert parse_template('50.004444', '%lat') == Coordinate(lat=50.004444, lng=0)
    assert parse_template('36.231389', '%lng') == Coordinate(lng=36.231389)

    # Directives in any order
    assert parse_template('36.231389 50.004444', '%lng %lat') == KHARKIV
    assert parse_template('S 50 W 36', '%lath %latd %lngh %lngd') == Coordinate(-50, -36)


def test_parse_template_trailing_text():
    parsed = parse_template('50.004444, 36.231389 is somewhere in Kharkiv', '%lat, %lng')
    assert parsed == KHARKIV


def test_parse_template_no_match():
    with pytest.raises(ValueError, match="can't be parsed"):
        parse_template('50.004444, 36.231389', '%lat; %lng')

    # Must match from the start
    with pytest.raises(ValueError, match="can't be parsed"):
        parse_template('Kharkiv: 50.004444, 36.231389', '%lat, %lng')


def test_parse_template_escapes_literals():
    assert parse_template('(50.5|36.25)', '(%lat|%lng)') == Coordinate(50.5, 36.25)
    assert parse_template('50.5.*36.25', '%lat.*%lng') == Coordinate(50.5, 36.25)

    with pytest.raises(ValueError):
        parse_template('50.5xx36.25', '%lat.*%lng')


def test_parse_template_invalid():
    with pytest.raises(ValueError, match='more than once'):
        parse_template('50, 50', '%lat, %lat')

    with pytest.raises(ValueError, match='no coordinate directives'):
        parse_template('50, 36', 'lat, lng')

    # Mixed whole values and components
    with pytest.raises(ValueError, match='mixes whole values'):
        parse_template('50 36', '%lat %lngd')

    with pytest.raises(ValueError, match='mixes whole values'):
        Coordinate.strpcoord('50.5 N 36', '%lat %lath %lng')


def test_strpcoord():
    assert Coordinate.strpcoord('50.004444, 36.231389', '%lat, %lng') == KHARKIV
    parsed = Coordinate.strpcoord('50/36', '%lat/%lng', globe=EARTH_SPHERE)
    assert parsed.globe is EARTH_SPHERE

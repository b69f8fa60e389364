"""
Unit tests for flag decoding (CalcConfig) and the error taxonomy.
"""

import pytest

from ephemcore.config import CalcConfig, EphemerisSource, FrameEpoch, ReferenceCenter
from ephemcore.constants import *
from ephemcore.exceptions import (
    EclipseSearchError,
    EphemerisError,
    EphemerisUnavailableError,
    UnsupportedCombinationError,
)


@pytest.mark.unit
class TestFlagDecoding:
    def test_defaults(self):
        config = CalcConfig.from_flags(0)
        assert config.source is EphemerisSource.SWISS
        assert config.center is ReferenceCenter.GEO
        assert config.epoch is FrameEpoch.OF_DATE
        assert config.aberration and config.light_deflection and config.nutation
        assert not config.speed

    def test_ephemeris_source(self):
        assert CalcConfig.from_flags(SEFLG_JPLEPH).source is EphemerisSource.JPL
        assert CalcConfig.from_flags(SEFLG_MOSEPH).source is EphemerisSource.MOSHIER

    def test_two_sources_rejected(self):
        with pytest.raises(UnsupportedCombinationError):
            CalcConfig.from_flags(SEFLG_JPLEPH | SEFLG_MOSEPH)

    def test_helio_and_bary_rejected(self):
        with pytest.raises(UnsupportedCombinationError):
            CalcConfig.from_flags(SEFLG_HELCTR | SEFLG_BARYCTR)

    def test_heliocentric_is_geometric(self):
        config = CalcConfig.from_flags(SEFLG_HELCTR)
        assert config.center is ReferenceCenter.HELIO
        assert not config.aberration
        assert not config.light_deflection

    def test_truepos_is_geometric(self):
        config = CalcConfig.from_flags(SEFLG_TRUEPOS)
        assert config.true_position
        assert not config.aberration
        assert not config.light_deflection

    def test_topocentric_wins_over_heliocentric(self):
        config = CalcConfig.from_flags(SEFLG_TOPOCTR | SEFLG_HELCTR)
        assert config.center is ReferenceCenter.TOPO

    def test_j2000_switches_off_nutation(self):
        config = CalcConfig.from_flags(SEFLG_J2000)
        assert config.j2000
        assert not config.nutation

    def test_speed3_counts_as_speed(self):
        assert CalcConfig.from_flags(SEFLG_SPEED3).speed


@pytest.mark.unit
class TestFlagEncoding:
    def test_implied_bits_made_explicit(self):
        iflag = CalcConfig.from_flags(SEFLG_HELCTR).to_flags()
        assert iflag & SEFLG_HELCTR
        assert iflag & SEFLG_NOABERR
        assert iflag & SEFLG_NOGDEFL
        assert iflag & SEFLG_SWIEPH

    def test_j2000_does_not_report_nonut(self):
        iflag = CalcConfig.from_flags(SEFLG_J2000).to_flags()
        assert iflag & SEFLG_J2000
        assert not iflag & SEFLG_NONUT

    def test_stable_round_trip(self):
        flags = SEFLG_MOSEPH | SEFLG_SPEED | SEFLG_EQUATORIAL | SEFLG_RADIANS | SEFLG_SIDEREAL
        once = CalcConfig.from_flags(flags).to_flags()
        assert CalcConfig.from_flags(once).to_flags() == once

    def test_with_source(self):
        config = CalcConfig.from_flags(SEFLG_SPEED)
        other = config.with_source(EphemerisSource.MOSHIER)
        assert other.source is EphemerisSource.MOSHIER
        assert other.speed
        assert config.source is EphemerisSource.SWISS


@pytest.mark.unit
class TestErrors:
    def test_hierarchy(self):
        assert issubclass(EphemerisUnavailableError, EphemerisError)
        assert issubclass(UnsupportedCombinationError, ValueError)
        assert issubclass(EclipseSearchError, RuntimeError)

    def test_context_in_message(self):
        err = EphemerisUnavailableError("no provider", body=SE_MARS, jd=2451545.0)
        assert err.context == {"body": SE_MARS, "jd": 2451545.0}
        assert "body=4" in str(err)
        assert str(err).startswith("no provider")

    def test_plain_message(self):
        assert str(EphemerisError("boom")) == "boom"

"""
Tests for ayanamsha computation and the sidereal mode setting.
"""

import math

import pytest

import ephemcore as ephem
from ephemcore.config import EphemerisSource
from ephemcore.constants import *
from ephemcore.exceptions import UnsupportedCombinationError
import ephemcore.sidereal as sidereal_module
from ephemcore.sidereal import (
    KM_S_TO_AU_CTY,
    PARSEC_TO_AUNIT,
    STAR_NO_PARALLAX_DIST,
    STARS,
    ayanamsa_with_speed,
    get_ayanamsa,
    get_ayanamsa_ex,
    is_star_anchored,
    mean_ayanamsa,
    precession_offset_correction,
    star_longitude,
    star_space_motion,
)
from ephemcore.utils import difdeg2n
from ephemcore.vectors import dot, norm

# General precession in longitude, degrees per day
PRECESSION_RATE = 50.29 / 3600.0 / 365.25


@pytest.mark.unit
class TestTraditionalAyanamsha:
    @pytest.mark.parametrize(
        "mode,expected",
        [
            (SE_SIDM_FAGAN_BRADLEY, 24.7403),
            (SE_SIDM_LAHIRI, 23.8571),
            (SE_SIDM_RAMAN, 22.4108),
            (SE_SIDM_KRISHNAMURTI, 23.7602),
        ],
    )
    def test_values_at_j2000(self, ctx, standard_jd, mode, expected):
        ctx.set_sid_mode(mode)
        assert get_ayanamsa(ctx, standard_jd) == pytest.approx(expected, abs=0.02)

    def test_j2000_mode_vanishes_at_j2000(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_J2000)
        assert get_ayanamsa(ctx, standard_jd) == pytest.approx(0.0, abs=1e-9)

    def test_j1900_mode_vanishes_at_j1900(self, ctx):
        ctx.set_sid_mode(SE_SIDM_J1900)
        ayan = get_ayanamsa(ctx, 2415020.0)
        assert min(ayan, 360.0 - ayan) < 1e-8

    def test_grows_with_precession(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_LAHIRI)
        ayan, speed = ayanamsa_with_speed(ctx, standard_jd, nutation=False)
        assert speed == pytest.approx(PRECESSION_RATE, rel=0.01)
        later = get_ayanamsa(ctx, standard_jd + 36525.0)
        assert later - ayan == pytest.approx(1.397, abs=0.01)

    def test_no_offset_for_same_model(self, ctx):
        ctx.set_astro_models(prec_model=SEMOD_PREC_NEWCOMB)
        assert precession_offset_correction(ctx, 2433282.42346, SEMOD_PREC_NEWCOMB) == 0.0

    def test_offset_disabled_by_bit(self, ctx):
        ctx.set_sid_mode(SE_SIDM_FAGAN_BRADLEY | SE_SIDBIT_NO_PREC_OFFSET)
        assert precession_offset_correction(ctx, 2433282.42346, SEMOD_PREC_NEWCOMB) == 0.0

    def test_offset_is_small(self, ctx):
        corr = precession_offset_correction(ctx, 2433282.42346, SEMOD_PREC_NEWCOMB)
        assert abs(corr) < 0.01


@pytest.mark.unit
class TestUserAyanamsha:
    def test_value_at_epoch(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_USER, standard_jd, 24.0)
        assert get_ayanamsa(ctx, standard_jd) == pytest.approx(24.0, abs=1e-9)

    def test_precesses_from_epoch(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_USER, standard_jd, 24.0)
        after = get_ayanamsa(ctx, standard_jd + 365.25)
        assert after - 24.0 == pytest.approx(50.29 / 3600.0, abs=2e-4)

    def test_ecliptic_of_date_variant(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_USER | SE_SIDBIT_ECL_DATE, standard_jd, 24.0)
        assert get_ayanamsa(ctx, standard_jd) == pytest.approx(24.0, abs=1e-9)
        assert get_ayanamsa(ctx, standard_jd + 3652.5) == pytest.approx(24.1397, abs=0.002)

    def test_projection_onto_t0_ecliptic_rejected(self, ctx):
        with pytest.raises(UnsupportedCombinationError):
            ctx.set_sid_mode(SE_SIDM_USER | SE_SIDBIT_ECL_T0, 2451545.0, 24.0)


@pytest.mark.unit
class TestStarAnchored:
    def test_anchor_modes(self):
        assert is_star_anchored(SE_SIDM_TRUE_CITRA)
        assert is_star_anchored(SE_SIDM_GALEQU_IAU1958)
        assert not is_star_anchored(SE_SIDM_LAHIRI)

    def test_true_citra_near_lahiri(self, ctx, standard_jd):
        """Spica at 180 degrees sidereal is the idea behind Lahiri."""
        ctx.set_sid_mode(SE_SIDM_TRUE_CITRA)
        assert mean_ayanamsa(ctx, standard_jd) == pytest.approx(23.84, abs=0.1)

    def test_galactic_center_zero_sagittarius(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_GALCENT_0SAG)
        assert mean_ayanamsa(ctx, standard_jd) == pytest.approx(26.85, abs=0.1)

    def test_galactic_equator(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_GALEQU_TRUE)
        ayan = mean_ayanamsa(ctx, standard_jd)
        assert 0.0 < ayan < 40.0


@pytest.mark.unit
class TestApparentStar:
    def test_distance_from_parallax(self):
        x = star_space_motion(STARS["SPICA"])
        assert norm(x[0:3]) == pytest.approx(PARSEC_TO_AUNIT / 0.01306, rel=1e-12)

    def test_no_parallax(self):
        x = star_space_motion(STARS["GAL_POLE"])
        assert norm(x[0:3]) == pytest.approx(STAR_NO_PARALLAX_DIST)
        assert x[3:6] == pytest.approx([0.0, 0.0, 0.0])

    def test_radial_velocity(self):
        x = star_space_motion(STARS["PUSHYA"])
        radial = dot(x[0:3], x[3:6]) / norm(x[0:3])
        assert radial == pytest.approx(17.14 * KM_S_TO_AU_CTY / 36525.0, rel=1e-9)

    def test_proper_motion(self):
        """Revati moves about 0.15 arcsec/year, mostly in RA."""
        star = STARS["REVATI"]
        x0 = star_space_motion(star)
        x1 = [x0[i] + 36525.0 * x0[i + 3] for i in range(3)]
        shift = math.degrees(math.acos(dot(x0[0:3], x1) / norm(x0[0:3]) / norm(x1))) * 3600.0
        assert shift == pytest.approx(math.hypot(145.0, 55.69) / 10.0, rel=0.01)

    def test_annual_aberration(self, ctx, monkeypatch):
        """Spica in conjunction with the Sun is shifted by the full constant."""
        jd = 2451833.5  # 2000-10-17, Sun near 204 degrees
        star = STARS["SPICA"]
        apparent = star_longitude(ctx, star, jd, EphemerisSource.MOSHIER)
        monkeypatch.setattr(sidereal_module, "aberr_light", lambda xx, xobs, speed: xx)
        geometric = star_longitude(ctx, star, jd, EphemerisSource.MOSHIER)
        shift = difdeg2n(apparent, geometric) * 3600.0
        assert -21.5 < shift < -18.0

    def test_aberration_cycles_over_year(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_TRUE_CITRA)
        values = [
            mean_ayanamsa(ctx, standard_jd + d, EphemerisSource.MOSHIER)
            for d in range(0, 366, 30)
        ]
        wobble = [v - PRECESSION_RATE * 30 * i for i, v in enumerate(values)]
        assert (max(wobble) - min(wobble)) * 3600.0 == pytest.approx(41.0, abs=6.0)

    def test_retflag_reports_earth_source(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_TRUE_PUSHYA)
        retflag, ayan = get_ayanamsa_ex(ctx, standard_jd, SEFLG_MOSEPH)
        assert retflag & SEFLG_MOSEPH
        assert 0.0 < ayan < 40.0


@pytest.mark.unit
class TestAyanamshaEx:
    def test_nutation_included_by_default(self, ctx, standard_jd):
        ctx.set_sid_mode(SE_SIDM_LAHIRI)
        _, with_nut = get_ayanamsa_ex(ctx, standard_jd, SEFLG_MOSEPH)
        _, without = get_ayanamsa_ex(ctx, standard_jd, SEFLG_MOSEPH | SEFLG_NONUT)
        dpsi = ctx.nutation(standard_jd).dpsi * RADTODEG
        assert without == pytest.approx(get_ayanamsa(ctx, standard_jd))
        assert with_nut - without == pytest.approx(dpsi, abs=1e-12)

    def test_flag_reports_source(self, ctx, standard_jd):
        retflag, _ = get_ayanamsa_ex(ctx, standard_jd, SEFLG_MOSEPH)
        assert retflag & SEFLG_MOSEPH
        assert not retflag & SEFLG_SWIEPH

    def test_conflicting_flags_rejected(self, ctx, standard_jd):
        with pytest.raises(UnsupportedCombinationError):
            get_ayanamsa_ex(ctx, standard_jd, SEFLG_MOSEPH | SEFLG_HELCTR | SEFLG_BARYCTR)


@pytest.mark.unit
class TestModuleApi:
    def test_names(self):
        assert ephem.swe_get_ayanamsa_name(SE_SIDM_LAHIRI) == "Lahiri"
        assert ephem.swe_get_ayanamsa_name(SE_SIDM_FAGAN_BRADLEY | SE_SIDBIT_ECL_DATE) == "Fagan/Bradley"
        assert ephem.swe_get_ayanamsa_name(SE_SIDM_USER) == "User-defined"
        assert ephem.swe_get_ayanamsa_name(150) is None

    def test_default_context(self, standard_jd):
        ephem.swe_set_sid_mode(SE_SIDM_LAHIRI)
        assert ephem.swe_get_ayanamsa(standard_jd) == pytest.approx(23.8571, abs=0.02)

    def test_ut_variant(self, standard_jd):
        ephem.swe_set_sid_mode(SE_SIDM_LAHIRI)
        tt = standard_jd + ephem.swe_deltat(standard_jd)
        assert ephem.swe_get_ayanamsa_ut(standard_jd) == pytest.approx(ephem.swe_get_ayanamsa(tt))
        _, a = ephem.swe_get_ayanamsa_ex_ut(standard_jd, SEFLG_MOSEPH)
        _, b = ephem.swe_get_ayanamsa_ex(tt, SEFLG_MOSEPH)
        assert a == pytest.approx(b)

    def test_sidereal_longitude_stays_in_range(self, standard_jd):
        ephem.swe_set_sid_mode(SE_SIDM_LAHIRI)
        pos, _ = ephem.swe_calc_ut(standard_jd, SE_SUN, SEFLG_MOSEPH | SEFLG_SIDEREAL)
        assert 0.0 <= pos[0] < 360.0
        assert pos[0] == pytest.approx(math.fmod(280.37 - 23.86 + 360.0, 360.0), abs=0.05)


@pytest.mark.integration
class TestAgainstSwisseph:
    @pytest.mark.parametrize("mode", [SE_SIDM_FAGAN_BRADLEY, SE_SIDM_LAHIRI, SE_SIDM_RAMAN])
    def test_traditional_modes(self, swe, test_dates, mode):
        swe.set_sid_mode(mode)
        ctx = ephem.ComputationContext()
        ctx.set_sid_mode(mode)
        for year, month, day, hour, _ in test_dates:
            jd = ephem.swe_julday(year, month, day, hour)
            assert get_ayanamsa(ctx, jd) == pytest.approx(swe.get_ayanamsa(jd), abs=0.005)

    @pytest.mark.parametrize(
        "mode",
        [SE_SIDM_GALCENT_0SAG, SE_SIDM_TRUE_CITRA, SE_SIDM_TRUE_REVATI, SE_SIDM_TRUE_PUSHYA],
    )
    def test_star_anchored_modes(self, swe, test_dates, mode):
        swe.set_sid_mode(mode)
        ctx = ephem.ComputationContext()
        ctx.set_sid_mode(mode)
        for year, month, day, hour, _ in test_dates:
            jd = ephem.swe_julday(year, month, day, hour)
            _, expected = swe.get_ayanamsa_ex(jd, swe.FLG_MOSEPH | swe.FLG_NONUT)
            _, ayan = get_ayanamsa_ex(ctx, jd, SEFLG_MOSEPH | SEFLG_NONUT)
            assert difdeg2n(ayan, expected) * 3600.0 == pytest.approx(0.0, abs=2.0)

    def test_star_anchored_with_nutation(self, swe, standard_jd):
        swe.set_sid_mode(SE_SIDM_TRUE_CITRA)
        ctx = ephem.ComputationContext()
        ctx.set_sid_mode(SE_SIDM_TRUE_CITRA)
        _, expected = swe.get_ayanamsa_ex(standard_jd, swe.FLG_MOSEPH)
        _, ayan = get_ayanamsa_ex(ctx, standard_jd, SEFLG_MOSEPH)
        assert difdeg2n(ayan, expected) * 3600.0 == pytest.approx(0.0, abs=2.0)

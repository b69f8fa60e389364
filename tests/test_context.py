"""
Tests for ComputationContext: isolation between contexts, memoization and
provider selection.
"""

import concurrent.futures

import pytest

import ephemcore as ephem
from ephemcore.config import EphemerisSource
from ephemcore.constants import *
from ephemcore.context import ComputationContext, EphemerisContext
from ephemcore.exceptions import EphemerisUnavailableError, UnsupportedCombinationError
from ephemcore.providers import EphemerisProvider
import ephemcore.state as state_module
from ephemcore.state import get_default_context


class FixedProvider(EphemerisProvider):
    """Provider serving a fixed state per body for a date window."""

    frame = "J2000"
    flag = SEFLG_MOSEPH

    def __init__(self, name, start, end):
        self.name = name
        self.start = start
        self.end = end
        self.calls = 0

    def supports(self, body, jd_tt):
        return self.start <= jd_tt <= self.end

    def state(self, body, jd_tt):
        self.calls += 1
        return [1.0 + body, 0.5 * body, 0.1, 0.0, 0.0, 0.0]


@pytest.mark.unit
class TestContextState:
    def test_alias(self):
        assert EphemerisContext is ComputationContext

    def test_topo(self, ctx):
        assert ctx.get_topo() is None
        ctx.set_topo(12.5, 41.9, 100)
        assert ctx.get_topo() == (12.5, 41.9, 100.0)

    def test_topo_latitude_range(self, ctx):
        with pytest.raises(UnsupportedCombinationError):
            ctx.set_topo(0.0, 91.0, 0.0)

    def test_sid_mode(self, ctx):
        ctx.set_sid_mode(SE_SIDM_USER, 2451545.0, 23.5)
        assert ctx.get_sid_mode() == SE_SIDM_USER
        assert ctx.get_sid_mode(full=True) == (SE_SIDM_USER, 2451545.0, 23.5)

    def test_unknown_sid_mode(self, ctx):
        with pytest.raises(UnsupportedCombinationError):
            ctx.set_sid_mode(200)

    def test_unsupported_projection(self, ctx):
        with pytest.raises(UnsupportedCombinationError):
            ctx.set_sid_mode(SE_SIDM_LAHIRI | SE_SIDBIT_SSY_PLANE)

    def test_unknown_model(self, ctx):
        with pytest.raises(UnsupportedCombinationError):
            ctx.set_astro_models(prec_model=999)

    def test_contexts_are_independent(self):
        a = ComputationContext()
        b = ComputationContext()
        a.set_topo(10.0, 20.0, 0.0)
        a.set_sid_mode(SE_SIDM_LAHIRI)
        assert b.get_topo() is None
        assert b.get_sid_mode() == SE_SIDM_FAGAN_BRADLEY

    def test_module_functions_use_default_context(self):
        ephem.swe_set_topo(5.0, 45.0, 10.0)
        assert get_default_context().get_topo() == (5.0, 45.0, 10.0)
        assert ComputationContext().get_topo() is None


@pytest.mark.unit
class TestDefaultState:
    def test_default_context_reused_until_reset(self):
        first = get_default_context()
        assert get_default_context() is first
        state_module.reset_default_context()
        assert get_default_context() is not first

    def test_sid_mode_wrappers(self):
        state_module.set_sid_mode(SE_SIDM_USER, 2451545.0, 24.0)
        assert state_module.get_sid_mode() == SE_SIDM_USER
        assert state_module.get_sid_mode(full=True) == (SE_SIDM_USER, 2451545.0, 24.0)
        assert get_default_context().get_sid_mode() == SE_SIDM_USER

    def test_data_dir_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv(state_module.DATA_DIR_ENV, str(tmp_path))
        assert state_module.get_data_dir() == str(tmp_path)

    def test_ephe_path_rebuilds_default_providers(self, monkeypatch, tmp_path):
        monkeypatch.setattr(state_module, "_EPHEMERIS_PATH", None)
        monkeypatch.setattr(state_module, "_PLANETS", state_module._PLANETS)
        ctx = get_default_context()
        custom = FixedProvider("custom", 2451000.0, 2452000.0)
        ctx.set_providers(EphemerisSource.MOSHIER, [custom])
        state_module.set_ephe_path(str(tmp_path))
        assert state_module._PLANETS is None
        assert ctx.providers(EphemerisSource.MOSHIER)[0] is not custom

    def test_ephemeris_file_switch(self, monkeypatch):
        monkeypatch.setattr(state_module, "_EPHEMERIS_FILE", state_module._EPHEMERIS_FILE)
        monkeypatch.setattr(state_module, "_PLANETS", state_module._PLANETS)
        state_module.set_ephemeris_file("de440.bsp")
        assert state_module.get_ephemeris_file() == "de440.bsp"
        assert state_module._PLANETS is None

    def test_missing_kernel_without_download(self, monkeypatch, tmp_path):
        monkeypatch.setenv(state_module.DATA_DIR_ENV, str(tmp_path))
        monkeypatch.setattr(state_module, "_EPHEMERIS_PATH", None)
        monkeypatch.setattr(state_module, "_EPHEMERIS_FILE", "missing.bsp")
        with pytest.raises(FileNotFoundError):
            state_module._load_kernel(state_module.get_loader(), download=False)


@pytest.mark.unit
class TestMemo:
    def test_obliquity_memoized(self, ctx):
        first = ctx.obliquity(2451545.0)
        assert ctx.obliquity(2451545.0) is first

    def test_model_change_clears_memo(self, ctx):
        first = ctx.obliquity(2451545.0)
        ctx.set_astro_models(obliq_model=SEMOD_PREC_IAU_1976)
        second = ctx.obliquity(2451545.0)
        assert second is not first
        assert second.eps != first.eps

    def test_bounded_cache(self):
        ctx = ComputationContext(cache_size=4)
        for i in range(10):
            ctx.obliquity(2451545.0 + i)
        assert len(ctx._obliquity_cache) == 4


@pytest.mark.unit
class TestProviderSelection:
    def test_first_capable_provider_wins(self, ctx):
        p1 = FixedProvider("first", 2400000.0, 2500000.0)
        p2 = FixedProvider("second", 0.0, 5000000.0)
        ctx.set_providers(EphemerisSource.MOSHIER, [p1, p2])
        assert ctx.select_provider(EphemerisSource.MOSHIER, SE_MARS, 2451545.0) is p1
        assert ctx.select_provider(EphemerisSource.MOSHIER, SE_MARS, 2600000.0) is p2

    def test_no_capable_provider(self, ctx):
        ctx.set_providers(EphemerisSource.MOSHIER, [FixedProvider("only", 0.0, 1.0)])
        with pytest.raises(EphemerisUnavailableError):
            ctx.select_provider(EphemerisSource.MOSHIER, SE_MARS, 2451545.0)

    def test_calc_reports_provider_flag(self, ctx):
        ctx.set_providers(EphemerisSource.JPL, [FixedProvider("fake", 0.0, 5000000.0)])
        _, retflag = ctx.calc(2451545.0, SE_MARS, SEFLG_JPLEPH | SEFLG_TRUEPOS)
        assert retflag & SEFLG_MOSEPH
        assert not retflag & SEFLG_JPLEPH


@pytest.mark.integration
class TestThreadSafety:
    """Separate contexts used from several threads do not interfere."""

    def test_concurrent_contexts(self):
        def calculate_for_location(worker_id, lon, lat):
            ctx = ComputationContext()
            ctx.set_topo(lon, lat, 0)
            jd = 2451545.0
            moon_pos, _ = ctx.calc_ut(jd, SE_MOON, SEFLG_MOSEPH | SEFLG_TOPOCTR)
            return worker_id, lon, lat, moon_pos[0]

        locations = [
            (0, 0.0, 0.0),  # Equator
            (1, 12.5, 41.9),  # Rome
            (2, -0.1, 51.5),  # London
            (3, 139.7, 35.7),  # Tokyo
            (4, -74.0, 40.7),  # New York
            (5, 151.2, -33.9),  # Sydney
        ]

        with concurrent.futures.ThreadPoolExecutor(max_workers=6) as executor:
            futures = [
                executor.submit(calculate_for_location, wid, lon, lat)
                for wid, lon, lat in locations
            ]
            results = [f.result() for f in futures]

        # Each thread must see its own observer: recompute serially and compare
        for wid, lon, lat, moon_lon in results:
            ctx = ComputationContext(topo=(lon, lat, 0))
            expected, _ = ctx.calc_ut(2451545.0, SE_MOON, SEFLG_MOSEPH | SEFLG_TOPOCTR)
            assert moon_lon == pytest.approx(expected[0], abs=1e-10), f"worker {wid}"

        # Topocentric parallax of the Moon differs between locations
        assert len(set(round(r[3], 4) for r in results)) > 1

"""
Typed calculation configuration.

The SEFLG_* bitmask accepted by the swe_* functions is decoded exactly once,
at the API boundary, into an immutable CalcConfig. Implications between flags
are resolved here (topocentric clears helio/barycentric, helio/barycentric and
TRUEPOS switch off aberration and deflection) and contradictory requests are
rejected with UnsupportedCombinationError before anything is computed.
"""

import enum
from dataclasses import dataclass, replace

from .constants import (
    SEFLG_BARYCTR,
    SEFLG_EPHMASK,
    SEFLG_EQUATORIAL,
    SEFLG_HELCTR,
    SEFLG_ICRS,
    SEFLG_J2000,
    SEFLG_JPLEPH,
    SEFLG_MOSEPH,
    SEFLG_NOABERR,
    SEFLG_NOGDEFL,
    SEFLG_NONUT,
    SEFLG_RADIANS,
    SEFLG_SIDEREAL,
    SEFLG_SPEED,
    SEFLG_SPEED3,
    SEFLG_SWIEPH,
    SEFLG_TOPOCTR,
    SEFLG_TRUEPOS,
    SEFLG_XYZ,
)
from .exceptions import UnsupportedCombinationError


class EphemerisSource(enum.IntEnum):
    JPL = SEFLG_JPLEPH
    SWISS = SEFLG_SWIEPH
    MOSHIER = SEFLG_MOSEPH


class ReferenceCenter(enum.Enum):
    GEO = "geocentric"
    HELIO = "heliocentric"
    BARY = "barycentric"
    TOPO = "topocentric"


class FrameEpoch(enum.Enum):
    OF_DATE = "of_date"
    J2000 = "j2000"


@dataclass(frozen=True)
class CalcConfig:
    """
    Decoded calculation flags.

    Attributes:
        source: Ephemeris family whose provider list is consulted
        center: Origin of the output vector
        epoch: Equinox of the output (date or J2000)
        speed: Velocities requested
        true_position: Geometric position, no light-time
        light_deflection: Apply gravitational deflection by the Sun
        aberration: Apply annual aberration
        nutation: Apply nutation (false for NONUT and for J2000 output)
        equatorial: Equatorial instead of ecliptic output
        cartesian: Cartesian instead of polar output
        radians: Angles in radians instead of degrees
        sidereal: Subtract the ayanamsha from the ecliptic longitude
        icrs: Stay in ICRS, no frame bias
    """

    source: EphemerisSource = EphemerisSource.SWISS
    center: ReferenceCenter = ReferenceCenter.GEO
    epoch: FrameEpoch = FrameEpoch.OF_DATE
    speed: bool = False
    true_position: bool = False
    light_deflection: bool = True
    aberration: bool = True
    nutation: bool = True
    equatorial: bool = False
    cartesian: bool = False
    radians: bool = False
    sidereal: bool = False
    icrs: bool = False

    @property
    def j2000(self) -> bool:
        return self.epoch is FrameEpoch.J2000

    @classmethod
    def from_flags(cls, iflag: int) -> "CalcConfig":
        """
        Decode and validate a SEFLG_* bitmask.

        Args:
            iflag: Calculation flags

        Returns:
            CalcConfig with all implications applied

        Raises:
            UnsupportedCombinationError: HELCTR together with BARYCTR, or
                more than one ephemeris source.
        """
        iflag = int(iflag)

        eph = iflag & SEFLG_EPHMASK
        if eph == 0:
            source = EphemerisSource.SWISS
        elif eph in (SEFLG_JPLEPH, SEFLG_SWIEPH, SEFLG_MOSEPH):
            source = EphemerisSource(eph)
        else:
            raise UnsupportedCombinationError(
                "more than one ephemeris source requested", flags=iflag
            )

        if iflag & SEFLG_HELCTR and iflag & SEFLG_BARYCTR:
            raise UnsupportedCombinationError(
                "SEFLG_HELCTR and SEFLG_BARYCTR are mutually exclusive", flags=iflag
            )

        if iflag & SEFLG_TOPOCTR:
            center = ReferenceCenter.TOPO
        elif iflag & SEFLG_HELCTR:
            center = ReferenceCenter.HELIO
        elif iflag & SEFLG_BARYCTR:
            center = ReferenceCenter.BARY
        else:
            center = ReferenceCenter.GEO

        j2000 = bool(iflag & SEFLG_J2000)
        sidereal = bool(iflag & SEFLG_SIDEREAL)
        true_position = bool(iflag & SEFLG_TRUEPOS)
        geometric = true_position or center in (ReferenceCenter.HELIO, ReferenceCenter.BARY)

        return cls(
            source=source,
            center=center,
            epoch=FrameEpoch.J2000 if j2000 else FrameEpoch.OF_DATE,
            speed=bool(iflag & (SEFLG_SPEED | SEFLG_SPEED3)),
            true_position=true_position,
            light_deflection=not (geometric or iflag & SEFLG_NOGDEFL),
            aberration=not (geometric or iflag & SEFLG_NOABERR),
            nutation=not (j2000 or iflag & SEFLG_NONUT),
            equatorial=bool(iflag & SEFLG_EQUATORIAL),
            cartesian=bool(iflag & SEFLG_XYZ),
            radians=bool(iflag & SEFLG_RADIANS),
            sidereal=sidereal,
            icrs=bool(iflag & SEFLG_ICRS),
        )

    def to_flags(self) -> int:
        """Re-encode as a SEFLG_* bitmask, with implied bits made explicit."""
        iflag = int(self.source)
        if self.center is ReferenceCenter.TOPO:
            iflag |= SEFLG_TOPOCTR
        elif self.center is ReferenceCenter.HELIO:
            iflag |= SEFLG_HELCTR
        elif self.center is ReferenceCenter.BARY:
            iflag |= SEFLG_BARYCTR
        if self.j2000:
            iflag |= SEFLG_J2000
        if self.speed:
            iflag |= SEFLG_SPEED
        if self.true_position:
            iflag |= SEFLG_TRUEPOS
        if not self.light_deflection:
            iflag |= SEFLG_NOGDEFL
        if not self.aberration:
            iflag |= SEFLG_NOABERR
        if not self.nutation and not self.j2000:
            iflag |= SEFLG_NONUT
        if self.equatorial:
            iflag |= SEFLG_EQUATORIAL
        if self.cartesian:
            iflag |= SEFLG_XYZ
        if self.radians:
            iflag |= SEFLG_RADIANS
        if self.sidereal:
            iflag |= SEFLG_SIDEREAL
        if self.icrs:
            iflag |= SEFLG_ICRS
        return iflag

    def with_source(self, source: EphemerisSource) -> "CalcConfig":
        return replace(self, source=source)

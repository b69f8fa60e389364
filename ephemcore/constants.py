"""
Constants for ephemcore.

Body identifiers, calculation flags, sidereal modes, eclipse bits and the
physical constants used throughout the apparent-position pipeline. Names and
numeric values follow the Swiss Ephemeris / pyswisseph conventions so that
client code written against pyswisseph keeps working.
"""

import math

# =============================================================================
# CALENDAR
# =============================================================================

SE_JUL_CAL = 0
SE_GREG_CAL = 1

J2000 = 2451545.0
J1900 = 2415020.0
B1950 = 2433282.42345905

# =============================================================================
# BODIES
# =============================================================================

SE_ECL_NUT = -1
SE_SUN = 0
SE_MOON = 1
SE_MERCURY = 2
SE_VENUS = 3
SE_MARS = 4
SE_JUPITER = 5
SE_SATURN = 6
SE_URANUS = 7
SE_NEPTUNE = 8
SE_PLUTO = 9
SE_MEAN_NODE = 10
SE_TRUE_NODE = 11
SE_MEAN_APOG = 12
SE_OSCU_APOG = 13
SE_EARTH = 14

SE_NPLANETS = 15

# =============================================================================
# CALCULATION FLAGS
# =============================================================================

SEFLG_JPLEPH = 1
SEFLG_SWIEPH = 2
SEFLG_MOSEPH = 4
SEFLG_HELCTR = 8
SEFLG_TRUEPOS = 16
SEFLG_J2000 = 32
SEFLG_NONUT = 64
SEFLG_SPEED3 = 128
SEFLG_SPEED = 256
SEFLG_NOGDEFL = 512
SEFLG_NOABERR = 1024
SEFLG_ASTROMETRIC = SEFLG_NOABERR | SEFLG_NOGDEFL
SEFLG_EQUATORIAL = 2048
SEFLG_XYZ = 4096
SEFLG_RADIANS = 8192
SEFLG_BARYCTR = 16384
SEFLG_TOPOCTR = 32768
SEFLG_SIDEREAL = 65536
SEFLG_ICRS = 131072

SEFLG_EPHMASK = SEFLG_JPLEPH | SEFLG_SWIEPH | SEFLG_MOSEPH
SEFLG_DEFAULTEPH = SEFLG_SWIEPH

# =============================================================================
# NODES AND APSIDES METHODS
# =============================================================================

SE_NODBIT_MEAN = 1
SE_NODBIT_OSCU = 2
SE_NODBIT_OSCU_BAR = 4
SE_NODBIT_FOPOINT = 256

# =============================================================================
# ECLIPSE TYPES AND VISIBILITY BITS
# =============================================================================

SE_ECL_CENTRAL = 1
SE_ECL_NONCENTRAL = 2
SE_ECL_TOTAL = 4
SE_ECL_ANNULAR = 8
SE_ECL_PARTIAL = 16
SE_ECL_ANNULAR_TOTAL = 32
SE_ECL_HYBRID = SE_ECL_ANNULAR_TOTAL
SE_ECL_PENUMBRAL = 64
SE_ECL_ALLTYPES_SOLAR = (
    SE_ECL_CENTRAL
    | SE_ECL_NONCENTRAL
    | SE_ECL_TOTAL
    | SE_ECL_ANNULAR
    | SE_ECL_PARTIAL
    | SE_ECL_ANNULAR_TOTAL
)
SE_ECL_ALLTYPES_LUNAR = SE_ECL_TOTAL | SE_ECL_PARTIAL | SE_ECL_PENUMBRAL
SE_ECL_VISIBLE = 128
SE_ECL_MAX_VISIBLE = 256
SE_ECL_1ST_VISIBLE = 512
SE_ECL_PARTBEG_VISIBLE = SE_ECL_1ST_VISIBLE
SE_ECL_2ND_VISIBLE = 1024
SE_ECL_TOTBEG_VISIBLE = SE_ECL_2ND_VISIBLE
SE_ECL_3RD_VISIBLE = 2048
SE_ECL_TOTEND_VISIBLE = SE_ECL_3RD_VISIBLE
SE_ECL_4TH_VISIBLE = 4096
SE_ECL_PARTEND_VISIBLE = SE_ECL_4TH_VISIBLE
SE_ECL_PENUMBBEG_VISIBLE = 8192
SE_ECL_PENUMBEND_VISIBLE = 16384
SE_ECL_ONE_TRY = 32768

# =============================================================================
# HORIZON
# =============================================================================

SE_ECL2HOR = 0
SE_EQU2HOR = 1
SE_TRUE_TO_APP = 0
SE_APP_TO_TRUE = 1
SE_HOR2ECL = 0
SE_HOR2EQU = 1

# Atmospheric lapse rate, K/m
SE_LAPSE_RATE = 0.0065

# Standard pressure at sea level, hPa
STANDARD_PRESSURE = 1013.25

# =============================================================================
# SIDEREAL MODES
# =============================================================================

SE_SIDM_FAGAN_BRADLEY = 0
SE_SIDM_LAHIRI = 1
SE_SIDM_DELUCE = 2
SE_SIDM_RAMAN = 3
SE_SIDM_USHASHASHI = 4
SE_SIDM_KRISHNAMURTI = 5
SE_SIDM_DJWHAL_KHUL = 6
SE_SIDM_YUKTESHWAR = 7
SE_SIDM_JN_BHASIN = 8
SE_SIDM_BABYL_KUGLER1 = 9
SE_SIDM_BABYL_KUGLER2 = 10
SE_SIDM_BABYL_KUGLER3 = 11
SE_SIDM_BABYL_HUBER = 12
SE_SIDM_BABYL_ETPSC = 13
SE_SIDM_ALDEBARAN_15TAU = 14
SE_SIDM_HIPPARCHOS = 15
SE_SIDM_SASSANIAN = 16
SE_SIDM_GALCENT_0SAG = 17
SE_SIDM_J2000 = 18
SE_SIDM_J1900 = 19
SE_SIDM_B1950 = 20
SE_SIDM_SURYASIDDHANTA = 21
SE_SIDM_SURYASIDDHANTA_MSUN = 22
SE_SIDM_ARYABHATA = 23
SE_SIDM_ARYABHATA_MSUN = 24
SE_SIDM_SS_REVATI = 25
SE_SIDM_SS_CITRA = 26
SE_SIDM_TRUE_CITRA = 27
SE_SIDM_TRUE_REVATI = 28
SE_SIDM_TRUE_PUSHYA = 29
SE_SIDM_GALCENT_RGILBRAND = 30
SE_SIDM_GALEQU_IAU1958 = 31
SE_SIDM_GALEQU_TRUE = 32
SE_SIDM_GALEQU_MULA = 33
SE_SIDM_GALALIGN_MARDYKS = 34
SE_SIDM_TRUE_MULA = 35
SE_SIDM_GALCENT_MULA_WILHELM = 36
SE_SIDM_ARYABHATA_522 = 37
SE_SIDM_BABYL_BRITTON = 38
SE_SIDM_TRUE_SHEORAN = 39
SE_SIDM_GALCENT_COCHRANE = 40
SE_SIDM_GALEQU_FIORENZA = 41
SE_SIDM_VALENS_MOON = 42
SE_SIDM_LAHIRI_1940 = 43
SE_SIDM_LAHIRI_VP285 = 44
SE_SIDM_KRISHNAMURTI_VP291 = 45
SE_SIDM_LAHIRI_ICRC = 46
SE_SIDM_USER = 255

SE_NSIDM_PREDEF = 47

SE_SIDBITS = 256
SE_SIDBIT_ECL_T0 = 256
SE_SIDBIT_SSY_PLANE = 512
SE_SIDBIT_USER_UT = 1024
SE_SIDBIT_ECL_DATE = 2048
SE_SIDBIT_NO_PREC_OFFSET = 4096

# =============================================================================
# PRECESSION, OBLIQUITY, NUTATION AND BIAS MODELS
# =============================================================================

SEMOD_PREC_IAU_1976 = 1
SEMOD_PREC_LASKAR_1986 = 2
SEMOD_PREC_WILL_EPS_LASK = 3
SEMOD_PREC_WILLIAMS_1994 = 4
SEMOD_PREC_SIMON_1994 = 5
SEMOD_PREC_IAU_2000 = 6
SEMOD_PREC_BRETAGNON_2003 = 7
SEMOD_PREC_IAU_2006 = 8
SEMOD_PREC_VONDRAK_2011 = 9
SEMOD_PREC_OWEN_1990 = 10
SEMOD_PREC_NEWCOMB = 11
SEMOD_PREC_DEFAULT = SEMOD_PREC_IAU_2006

SEMOD_OBLIQ_DEFAULT = SEMOD_PREC_VONDRAK_2011

SEMOD_NUT_IAU_2000A = 2
SEMOD_NUT_IAU_2000B = 3
SEMOD_NUT_DEFAULT = SEMOD_NUT_IAU_2000B

SEMOD_BIAS_NONE = 1
SEMOD_BIAS_IAU2000 = 2
SEMOD_BIAS_IAU2006 = 3
SEMOD_BIAS_DEFAULT = SEMOD_BIAS_IAU2006

# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

AUNIT = 1.49597870700e11  # m
CLIGHT = 2.99792458e8  # m/s
HELGRAVCONST = 1.32712440017987e20  # G * M(sun), m^3/s^2
GEOGCONST = 3.98600448e14  # G * M(earth), m^3/s^2
EARTH_MOON_MRAT = 81.30056907419062
EARTH_RADIUS = 6378136.6  # m
EARTH_OBLATENESS = 1.0 / 298.25642

SUN_RADIUS = 959.63 / 3600.0 * math.pi / 180.0  # rad, angular radius at 1 AU

DEGTORAD = math.pi / 180.0
RADTODEG = 180.0 / math.pi

# Sun / planet mass ratios, indexed Mercury..Neptune then Pluto
PLANET_MASS_RATIOS = (
    6023600.0,
    408523.719,
    328900.5,
    3098703.59,
    1047.348644,
    3497.9018,
    22902.98,
    19412.26,
    136566000.0,
)

# =============================================================================
# ITERATION COUNTS AND NUMERICAL INTERVALS
# =============================================================================

LIGHT_TIME_ITERATIONS = 2

DEFL_SPEED_INTV = 0.0000005  # days
PLAN_SPEED_INTV = 0.0001  # days
NUT_SPEED_INTV = 0.0001  # days
NODE_CALC_INTV = 0.0001  # days
MEAN_NODE_SPEED_INTV = 0.001  # days

# Smallest vector magnitude treated as non-zero
VECTOR_EPSILON = 1e-30

# Floor for the z-velocity in the node extrapolation (scaled by dt for planets)
NODE_DZ_MIN = 1e-15

# Date window of the Moshier mean lunar node / apogee
MOSHNDEPH_START = -3100015.5
MOSHNDEPH_END = 8000016.5

# Date window on which the mean lunar node correction table was fitted
JPL_DE431_START = -3027215.5
JPL_DE431_END = 7930192.5

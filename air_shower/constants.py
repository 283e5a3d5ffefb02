# =========================== World Geometry =========================== # scene units, roughly km
FLOOR_Y = -20.0  # particles below this height have reached the ground
GROUND_PLANE_Y = -20.1  # height of the visible ground plane
HIT_LIFT = 0.15  # hit markers sit slightly above the ground plane
PRIMARY_ALTITUDE = 70.0  # base altitude where primaries enter the volume
PRIMARY_VERTICAL_JITTER = 3.0  # +/- jitter around PRIMARY_ALTITUDE
PRIMARY_HORIZONTAL_JITTER = 3.0  # +/- jitter on X and Z

# =========================== Kinematics ===========================
GRAVITY = 3.8  # downward acceleration (units/s^2)
GAMMA_DRAG = 0.995  # per-tick velocity damping applied to photons
ENERGY_LOSS_RATE = 0.08  # continuous energy dissipation (TeV/s)
ENERGY_EXPIRY = 0.0005  # particles below this energy are dropped
CREATION_ENERGY_FLOOR = 0.08  # no particle is created with less energy than this
SPEED_PER_ENERGY = 5.0  # extra speed per unit of energy

# =========================== Emission Defaults ===========================
DEFAULT_SCATTER = 0.45
DEFAULT_UPWARD_BIAS = 0.0
DEFAULT_SPEED = 16.0
PAIR_ENERGY_SHARE = 0.45  # each pair product gets this fraction of the parent energy

# =========================== Branching Gates ===========================
DRIVE_RATE = 0.02  # rate gate contribution per unit of drive factor
ENERGY_RATE = 0.015  # rate gate contribution per unit of energy
ENERGY_RATE_CAP = 3.0  # energy above this does not raise the branching rate
ALTITUDE_OFFSET = 20.0
ALTITUDE_SPAN = 90.0
ALTITUDE_BASE_CHANCE = 0.7  # chance at (or below) the floor
ALTITUDE_EXTRA_CHANCE = 0.3  # added on top at full height

# =========================== Brightness ===========================
BRIGHTNESS_MIN = 0.35
BRIGHTNESS_RANGE = 0.65
PRIMARY_ENERGY_FLOOR = 0.5  # normalisation never divides by less than this

# =========================== Engine Limits ===========================
MAX_PARTICLES = 20000
MAX_HITS = 16000
MAX_DT = 0.045  # longest tick the engine will integrate in one step
MIN_SPAWN_RATE = 0.1  # primaries/s; lower rates are clamped to this
EVENT_LOG_SIZE = 14

# -- Physical Constants for the Heron's Fountain Engine -- #

'''
Physical and numerical constants for the fountain simulation.

Vessel levels are dimensionless fractions of capacity. Lengths used
by the jet subsystem are in scene units (the renderer's world units),
times in simulated seconds.

Tunable rates and thresholds that a caller may want to change live
in FountainConfig; the values here describe the device itself.

Sean Bowman [02/12/2026]
'''

#--------------------------------------------------------------------#
# -- Vessel Identifiers -- #
#--------------------------------------------------------------------#

# Internal vessel roles, in registration order
TOP: str = 'Top'
BASIN: str = 'Basin'
RESERVOIR: str = 'Reservoir'

VESSELS: tuple[str, ...] = (TOP, BASIN, RESERVOIR)

# Canonical device fill state: open bowl, donor, air chamber
defaultTopLevel: float = 0.75
defaultBasinLevel: float = 1.0
defaultReservoirLevel: float = 0.26

#--------------------------------------------------------------------#
# -- Jet Kinematics -- #
#--------------------------------------------------------------------#

# Gravitational acceleration [scene units / s^2]
gravity: float = 9.8

# Jet launch speed: v = (jetBaseSpeed + pressure * jetPressureSpeed) * (1 + U[0, jetSpeedJitter])
jetBaseSpeed: float = 1.6
jetPressureSpeed: float = 4.2
jetSpeedJitter: float = 0.3

# Jet count: max(jetMinCount, floor((jetIntensityOffset + intensity) * pressure * jetCountGain))
jetMinCount: int = 25
jetIntensityOffset: float = 0.5
jetCountGain: float = 120.0

# Fraction of the way from nozzle tip toward the basin center where droplets spawn
jetCenterBias: float = 0.22

# Lateral jitter half-widths for spawn position and launch velocity
jetSpawnJitter: float = 0.005
jetLateralVelocityJitter: float = 0.01
jetVerticalVelocityJitter: float = 0.02

# Droplet lifetime: jetMinLife + U[0, jetLifeSpread] [s]
jetMinLife: float = 0.9
jetLifeSpread: float = 0.8

#--------------------------------------------------------------------#
# -- Splash Burst -- #
#--------------------------------------------------------------------#

# Splash count is splashMinCount + randint(0, splashCountSpread), i.e. 6-11
splashMinCount: int = 6
splashCountSpread: int = 5

splashSpawnJitter: float = 0.1
splashLift: float = 0.02
splashRadialSpeed: float = 0.3
splashMinUpSpeed: float = 0.8
splashUpSpeedSpread: float = 0.6
splashMinLife: float = 0.3
splashLifeSpread: float = 0.4

#--------------------------------------------------------------------#
# -- Basin Collision Margins -- #
#--------------------------------------------------------------------#

# Droplets below (bottomY - floorMargin) inside the basin are stopped
floorMargin: float = 0.2

# Cull radius = innerRadius + cullRadiusMargin; applies below absorbY + cullHeightMargin
cullRadiusMargin: float = 0.15
cullHeightMargin: float = 0.2

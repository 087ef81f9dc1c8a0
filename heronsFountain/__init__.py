# -- Heron's Fountain Package -- #

'''
Simulation engine for a three-vessel Heron's fountain.

Conserves water across vessels, derives air pressure from vessel heads,
drives a droplet jet against the basin surface and cycles the device
through flip/reset. Rendering and UI are left to the caller.

Sean Bowman [02/12/2026]
'''

__version__ = '0.1.0'

from heronsFountain.config import ConfigError, FountainConfig
from heronsFountain.core.engine import EngineStatus, FountainEngine
from heronsFountain.jet.basin import BasinGeometry

# -- Fountain Core Package -- #

'''
Vessel state, flow topology, transfer, pressure and cycle control,
plus the FountainEngine that runs them once per frame.

Sean Bowman [02/12/2026]
'''

from heronsFountain.core.vessels import VesselState, DISPLAY_LABELS, clamp01
from heronsFountain.core.topology import FlowPath, FlowTopology, CANONICAL_PATHS
from heronsFountain.core.transfer import TransferEngine, TransferReport
from heronsFountain.core.pressure import PressureModel, computePressure
from heronsFountain.core.cycle import CycleController, CycleState
from heronsFountain.core.engine import FountainEngine, EngineStatus, TickReport

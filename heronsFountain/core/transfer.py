# -- Transfer Engine -- #

'''
Per-tick volume transfer between vessels.

The open bowl (Top) is treated as a pass-through: water the riser jets
into it leaves through the drain within the same tick, so its displayed
level stays where the configuration put it. The canonical drain therefore
debits Basin and credits Reservoir directly, which keeps the total
volume of the three vessels constant.

The riser moves no level volume of its own. It reports the jet flow it
would carry so renderers and the runner can show it.

User paths are moved generically in registration order. Each move is
clamped independently against what is available and what room is left,
so two paths sharing a vessel can see different results depending on
their order. That order dependence is accepted as-is.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass, field

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.topology import FlowPath, FlowTopology
from heronsFountain.core.vessels import VesselState, clamp01


def sanitizeStep(dt: float, maxTimeStep: float) -> float:
    '''Clamp a frame delta into [0, maxTimeStep]; NaN and negatives map to 0.'''
    if dt is None or math.isnan(dt) or dt <= 0.0:
        return 0.0
    return min(float(dt), maxTimeStep)


######################################################################
# -- Transfer Report -- #
######################################################################

@dataclass
class TransferReport:
    '''
    Volumes moved during one tick.

    Parameters:
    -----------
    drained : float
        Volume moved Basin -> Reservoir by the canonical drain
    jetFlow : float
        Flow carried up the riser to the nozzle (diagnostic)
    pathFlows : dict[int, float]
        Volume moved by each user path, keyed by pathId
    '''

    drained: float = 0.0
    jetFlow: float = 0.0
    pathFlows: dict[int, float] = field(default_factory=dict)

    @property
    def totalMoved(self) -> float:
        return self.drained + sum(self.pathFlows.values())


######################################################################
# -- Transfer Engine -- #
######################################################################

class TransferEngine:
    '''
    Moves volume between vessels according to the registered paths.

    Parameters:
    -----------
    config : FountainConfig
        Rate constants and multipliers
    '''

    def __init__(self, config: FountainConfig) -> None:
        self._config = config

    def baseRate(self, flowIntensity: float, dt: float) -> float:
        '''Volume a path may move this tick before its own multipliers.'''
        return self._config.rateConstant * flowIntensity * dt

    def pathRate(self, path: FlowPath, flowIntensity: float, dt: float) -> float:
        '''Rate for a user path, including the bottom-pickup boost.'''
        rate = self._config.userPathFactor * self.baseRate(flowIntensity, dt)
        if path.isBottomPickup:
            rate *= self._config.bottomPickupBoost
        return rate

    def advance(
        self,
        vessels: VesselState,
        topology: FlowTopology,
        dt: float,
        flowIntensity: float,
    ) -> TransferReport:
        '''
        Mutate vessel levels for one tick.

        Parameters:
        -----------
        vessels : VesselState
            Levels to update in place
        topology : FlowTopology
            Registered paths
        dt : float
            Elapsed time [s]; clamped to [0, maxTimeStep]
        flowIntensity : float
            Flow scalar; clamped to [0, 1]

        Returns:
        --------
        TransferReport : Volumes moved this tick
        '''
        dt = sanitizeStep(dt, self._config.maxTimeStep)
        flowIntensity = clamp01(flowIntensity)
        report = TransferReport()
        if dt == 0.0 or flowIntensity == 0.0:
            return report

        for path in topology.waterPaths():
            if path.kind == 'drain':
                amount = self._config.drainFactor * self.baseRate(flowIntensity, dt)
                report.drained += vessels.move(const.BASIN, const.RESERVOIR, amount)
            elif path.kind == 'riser':
                report.jetFlow = self.jetFlow(vessels, topology, dt, flowIntensity)
            else:
                moved = vessels.move(path.source, path.target, self.pathRate(path, flowIntensity, dt))
                report.pathFlows[path.pathId] = moved

        return report

    def jetFlow(
        self,
        vessels: VesselState,
        topology: FlowTopology,
        dt: float,
        flowIntensity: float,
    ) -> float:
        '''
        Pressure-driven flow up the riser for this tick.

        Zero unless the riser is connected and the pressure exceeds the
        jet threshold. Never larger than what Basin holds.
        '''
        pressure = vessels.airPressure
        if not topology.riserConnected or pressure <= self._config.jetThreshold:
            return 0.0
        flow = self._config.riserFactor * self.baseRate(flowIntensity, dt) * pressure
        return max(0.0, min(flow, vessels.level(const.BASIN)))

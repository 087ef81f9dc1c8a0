# -- Pressure Model -- #

'''
Air pressure derived from vessel heads and the air-line connection.

    sealFactor   = sealedFactor if air line connected else leakFactor
    head         = max(0, level[Reservoir] - level[Basin])
    inflowFactor = clamp01((1 - level[Top]) + level[Reservoir])
    pressure     = clamp01(sealFactor * (head * headGain + inflowGain * inflowFactor))

Pressure rises as the reservoir fills relative to the donor and only
meaningfully when the system is sealed. The inflow term keeps the jet
from visibly lagging behind the drain.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.topology import FlowTopology
from heronsFountain.core.vessels import VesselState, clamp01


def computePressure(
    levels: dict[str, float],
    airLineConnected: bool,
    config: FountainConfig | None = None,
) -> float:
    '''
    Pure pressure computation.

    Parameters:
    -----------
    levels : dict[str, float]
        Vessel levels keyed by identifier
    airLineConnected : bool
        Whether the canonical air line is registered
    config : FountainConfig | None
        Coefficients (canonical values when None)

    Returns:
    --------
    float : Pressure in [0, 1]
    '''
    config = config or FountainConfig()
    sealFactor = config.sealedFactor if airLineConnected else config.leakFactor
    head = max(0.0, levels[const.RESERVOIR] - levels[const.BASIN])
    inflowFactor = clamp01((1.0 - levels[const.TOP]) + levels[const.RESERVOIR])
    return clamp01(sealFactor * (head * config.headGain + config.inflowGain * inflowFactor))


class PressureModel:
    '''Writes the derived pressure back into the vessel state each tick.'''

    def __init__(self, config: FountainConfig) -> None:
        self._config = config

    def computePressure(self, vessels: VesselState, topology: FlowTopology) -> float:
        return computePressure(vessels.levels, topology.airLineConnected, self._config)

    def update(self, vessels: VesselState, topology: FlowTopology) -> float:
        vessels.airPressure = self.computePressure(vessels, topology)
        return vessels.airPressure

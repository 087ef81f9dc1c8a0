# -- Pressure Model Tests -- #

'''
Sean Bowman [02/12/2026]
'''

import pytest

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.pressure import PressureModel, computePressure
from heronsFountain.core.topology import FlowTopology
from heronsFountain.core.vessels import VesselState


CANONICAL_LEVELS = {const.TOP: 0.75, const.BASIN: 1.0, const.RESERVOIR: 0.26}


def testCanonicalSealedPressure():
    # No head (Reservoir below Basin); inflow = 0.25 + 0.26
    assert computePressure(CANONICAL_LEVELS, airLineConnected=True) == pytest.approx(0.255)


def testLeakyPressureWithoutAirLine():
    assert computePressure(CANONICAL_LEVELS, airLineConnected=False) == pytest.approx(0.051)


def testHeadTermWhenReservoirAboveBasin():
    levels = {const.TOP: 1.0, const.BASIN: 0.2, const.RESERVOIR: 0.4}
    # head = 0.2, inflow = 0.4  ->  0.2 * 2.0 + 0.5 * 0.4
    assert computePressure(levels, True) == pytest.approx(0.6)


def testPressureIsClampedToUnitRange():
    levels = {const.TOP: 0.0, const.BASIN: 0.0, const.RESERVOIR: 1.0}
    assert computePressure(levels, True) == 1.0

    config = FountainConfig(inflowGain=-5.0)
    assert computePressure(CANONICAL_LEVELS, True, config) == 0.0


def testModelWritesPressureIntoVesselState():
    vessels = VesselState.fromLevels(CANONICAL_LEVELS)
    topology = FlowTopology()
    topology.seedCanonical()
    model = PressureModel(FountainConfig())

    assert model.update(vessels, topology) == pytest.approx(0.255)
    assert vessels.airPressure == pytest.approx(0.255)

    topology.disconnectPathsFor(const.TOP)
    model.update(vessels, topology)
    assert vessels.airPressure == pytest.approx(0.051)

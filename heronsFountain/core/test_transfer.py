# -- Transfer Engine Tests -- #

'''
Drain, user-path and riser transfer: rates, clamping, conservation
and registration-order processing.

Sean Bowman [02/12/2026]
'''

import pytest

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.topology import FlowTopology
from heronsFountain.core.transfer import TransferEngine, sanitizeStep
from heronsFountain.core.vessels import VesselState


def canonicalState() -> VesselState:
    return VesselState.fromLevels(FountainConfig().initialLevels)


def testSanitizeStep():
    assert sanitizeStep(-0.5, 0.1) == 0.0
    assert sanitizeStep(float('nan'), 0.1) == 0.0
    assert sanitizeStep(float('inf'), 0.1) == 0.1
    assert sanitizeStep(0.05, 0.1) == 0.05


def testDrainMovesBasinToReservoir():
    vessels = canonicalState()
    topology = FlowTopology()
    topology.connect(const.BASIN, const.RESERVOIR, kind='drain')

    report = TransferEngine(FountainConfig()).advance(vessels, topology, dt=0.1, flowIntensity=1.0)

    # 0.6 * 0.05 * 1.0 * 0.1
    assert report.drained == pytest.approx(0.003)
    assert vessels.level(const.BASIN) == pytest.approx(0.997)
    assert vessels.level(const.RESERVOIR) == pytest.approx(0.263)
    assert vessels.level(const.TOP) == pytest.approx(0.75)


def testDrainNeverOverfillsReservoir():
    vessels = canonicalState()
    vessels.setLevel(const.RESERVOIR, 0.999)
    topology = FlowTopology()
    topology.connect(const.BASIN, const.RESERVOIR, kind='drain')

    report = TransferEngine(FountainConfig(rateConstant=100.0)).advance(vessels, topology, 0.1, 1.0)

    assert report.drained == pytest.approx(0.001)
    assert vessels.level(const.RESERVOIR) == pytest.approx(1.0)
    assert vessels.level(const.BASIN) == pytest.approx(0.999)


def testAirLineCarriesNoWater():
    vessels = canonicalState()
    topology = FlowTopology()
    topology.connect(const.RESERVOIR, const.TOP, kind='airLine')
    before = vessels.snapshot()

    report = TransferEngine(FountainConfig()).advance(vessels, topology, 0.1, 1.0)

    assert report.totalMoved == 0.0
    assert vessels.snapshot() == before


def testUserPathRateAndBottomPickupBoost():
    config = FountainConfig()
    engine = TransferEngine(config)

    vessels = canonicalState()
    topology = FlowTopology()
    normal = topology.connect(const.TOP, const.RESERVOIR)
    report = engine.advance(vessels, topology, 0.1, 1.0)
    # 0.9 * 0.05 * 1.0 * 0.1
    assert report.pathFlows[normal.pathId] == pytest.approx(0.0045)

    vessels = canonicalState()
    topology = FlowTopology()
    boosted = topology.connect(const.TOP, const.RESERVOIR, 'bottomPickup')
    report = engine.advance(vessels, topology, 0.1, 1.0)
    assert report.pathFlows[boosted.pathId] == pytest.approx(0.0045 * 1.6)


def testPathsAreProcessedInRegistrationOrder():
    vessels = canonicalState()
    vessels.setLevel(const.BASIN, 0.003)
    topology = FlowTopology()
    first = topology.connect(const.BASIN, const.TOP)
    second = topology.connect(const.BASIN, const.RESERVOIR)

    report = TransferEngine(FountainConfig()).advance(vessels, topology, 0.1, 1.0)

    assert report.pathFlows[first.pathId] == pytest.approx(0.003)
    assert report.pathFlows[second.pathId] == 0.0
    assert vessels.level(const.BASIN) == 0.0


def testRiserReportsJetFlowWithoutMovingLevels():
    vessels = canonicalState()
    vessels.airPressure = 0.5
    topology = FlowTopology()
    topology.connect(const.BASIN, const.TOP, 'bottomPickup', kind='riser')
    before = vessels.snapshot()

    report = TransferEngine(FountainConfig()).advance(vessels, topology, 0.1, 1.0)

    # 1.25 * 0.05 * 1.0 * 0.1 * 0.5
    assert report.jetFlow == pytest.approx(0.003125)
    assert vessels.snapshot() == before


def testRiserIsIdleBelowJetThreshold():
    vessels = canonicalState()
    vessels.airPressure = 0.05
    topology = FlowTopology()
    topology.seedCanonical()
    report = TransferEngine(FountainConfig()).advance(vessels, topology, 0.1, 1.0)
    assert report.jetFlow == 0.0


def testConservationAcrossManyTicks():
    vessels = canonicalState()
    topology = FlowTopology()
    topology.seedCanonical()
    topology.connect(const.TOP, const.RESERVOIR, 'bottomPickup')
    topology.connect(const.RESERVOIR, const.BASIN)
    engine = TransferEngine(FountainConfig())
    total = vessels.totalVolume

    for _ in range(2000):
        engine.advance(vessels, topology, 1.0 / 60.0, 0.8)

    assert vessels.totalVolume == pytest.approx(total, abs=1e-9)


def testInvalidInputLeavesLevelsUntouched():
    vessels = canonicalState()
    topology = FlowTopology()
    topology.seedCanonical()
    engine = TransferEngine(FountainConfig())
    before = vessels.snapshot()

    engine.advance(vessels, topology, -1.0, 1.0)
    engine.advance(vessels, topology, float('nan'), 1.0)
    engine.advance(vessels, topology, 0.1, -3.0)
    engine.advance(vessels, topology, 0.1, float('nan'))

    assert vessels.snapshot() == before

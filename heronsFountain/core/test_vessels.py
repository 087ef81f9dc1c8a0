# -- Vessel State Tests -- #

'''
Clamping, bounded moves and the display mapping of VesselState.

Sean Bowman [02/12/2026]
'''

import math

import pytest

from heronsFountain import constants as const
from heronsFountain.core.vessels import DISPLAY_LABELS, VesselState, clamp01, displayLevels, toPercent


def canonicalState() -> VesselState:
    return VesselState.fromLevels({const.TOP: 0.75, const.BASIN: 1.0, const.RESERVOIR: 0.26})


def testClamp01HandlesOutOfRangeAndNan():
    assert clamp01(-0.5) == 0.0
    assert clamp01(1.7) == 1.0
    assert clamp01(0.42) == 0.42
    assert clamp01(float('nan')) == 0.0
    assert clamp01(float('inf')) == 1.0


def testConstructionClampsLevels():
    state = VesselState.fromLevels({const.TOP: 1.5, const.BASIN: -0.2, const.RESERVOIR: float('nan')})
    assert state.level(const.TOP) == 1.0
    assert state.level(const.BASIN) == 0.0
    assert state.level(const.RESERVOIR) == 0.0


def testMoveIsLimitedByAvailableVolume():
    state = canonicalState()
    state.setLevel(const.BASIN, 0.1)
    moved = state.move(const.BASIN, const.RESERVOIR, 0.5)
    assert moved == pytest.approx(0.1)
    assert state.level(const.BASIN) == 0.0
    assert state.level(const.RESERVOIR) == pytest.approx(0.36)


def testMoveIsLimitedByRemainingCapacity():
    state = canonicalState()
    state.setLevel(const.RESERVOIR, 0.95)
    total = state.totalVolume
    moved = state.move(const.BASIN, const.RESERVOIR, 0.5)
    assert moved == pytest.approx(0.05)
    assert state.level(const.RESERVOIR) == pytest.approx(1.0)
    assert state.totalVolume == pytest.approx(total)


def testNegativeMoveDoesNothing():
    state = canonicalState()
    before = state.snapshot()
    assert state.move(const.BASIN, const.RESERVOIR, -1.0) == 0.0
    assert state.snapshot() == before


def testSwapAndRestore():
    state = canonicalState()
    state.swap(const.BASIN, const.RESERVOIR)
    assert state.level(const.BASIN) == pytest.approx(0.26)
    assert state.level(const.RESERVOIR) == pytest.approx(1.0)

    state.airPressure = 0.8
    state.restore({const.TOP: 0.75, const.BASIN: 1.0, const.RESERVOIR: 0.26})
    assert state.level(const.BASIN) == 1.0
    assert state.airPressure == 0.0


def testSetLevelRejectsUnknownVessel():
    state = canonicalState()
    with pytest.raises(KeyError):
        state.setLevel('Bucket', 0.5)


def testDisplayMappingUsesHistoricalLabels():
    state = canonicalState()
    assert DISPLAY_LABELS['displayA'] == const.BASIN
    assert displayLevels(state) == {'displayA': 100, 'displayB': 75, 'displayC': 26}


def testToPercentRoundsHalfUp():
    assert toPercent(0.125) == 13
    assert toPercent(0.994) == 99
    assert toPercent(2.0) == 100
    assert not math.isnan(toPercent(float('nan')))

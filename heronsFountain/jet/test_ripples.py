# -- Ripple Buffer and Basin Geometry Tests -- #

'''
Sean Bowman [02/12/2026]
'''

import pytest

from heronsFountain.jet.basin import BasinGeometry
from heronsFountain.jet.ripples import RippleBuffer


def testBufferIsNewestFirstAndBounded():
    buffer = RippleBuffer(capacity=6, lifetime=4.0)
    for i in range(10):
        buffer.record((0.0, 0.0), startTime=float(i))

    starts = [e.startTime for e in buffer.events()]
    assert starts == [9.0, 8.0, 7.0, 6.0, 5.0, 4.0]


def testPruneDropsEventsAtLifetime():
    buffer = RippleBuffer(capacity=6, lifetime=4.0)
    buffer.record((0.1, -0.2), startTime=0.0)
    buffer.record((0.3, 0.4), startTime=2.0)

    assert buffer.prune(3.5) == 0
    assert buffer.prune(4.0) == 1
    assert [e.startTime for e in buffer.events()] == [2.0]

    buffer.clear()
    assert len(buffer) == 0


def testSurfaceHeightFollowsFill():
    geometry = BasinGeometry()
    assert geometry.surfaceHeight(0.0) == pytest.approx(3.35)
    assert geometry.surfaceHeight(0.75) == pytest.approx(4.4)
    assert geometry.surfaceHeight(2.0) == pytest.approx(4.75)

    moved = geometry.atWaterLevel(0.75)
    assert moved.absorbY == pytest.approx(4.4)
    assert moved.cullHeight == pytest.approx(4.6)
    assert geometry.absorbY == pytest.approx(3.6)


def testSurfaceUvIsClamped():
    geometry = BasinGeometry()
    assert geometry.toSurfaceUv(0.75, -0.3) == pytest.approx((0.5, -0.2))
    assert geometry.toSurfaceUv(3.0, -3.0) == (1.0, -1.0)

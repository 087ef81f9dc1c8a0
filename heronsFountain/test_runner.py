# -- Headless Runner Tests -- #

'''
Full-cycle runs through FountainRunner, host pauses, and the CLI.

Sean Bowman [02/12/2026]
'''

import sys

import numpy as np
import pytest

from heronsFountain.config import FountainConfig
from heronsFountain.runner import FountainRunner, SteppedClock, buildParser, main


def testSteppedClockOnlyMovesForward():
    clock = SteppedClock(1.0)
    clock.tick(0.5)
    clock.tick(-3.0)
    assert clock() == pytest.approx(1.5)


def testQuickCycleFlipsAndRestarts():
    config = FountainConfig.quickCycle()
    config.rngSeed = 0
    results = FountainRunner(config, verbose=False).run(durationS=12.0, fps=60.0)

    assert results['flipCount'] >= 1
    # 0.72 of capacity at 0.6 * 0.25 per second
    assert 4.5 < results['flipTimes'][0] < 5.1

    history = results['history']
    assert len(history['times']) == len(history['basin']) > 100
    assert np.all((history['reservoir'] >= 0.0) & (history['reservoir'] <= 1.0))
    assert np.allclose(history['basin'] + history['reservoir'], 1.26, atol=1e-9)
    assert np.allclose(history['top'], 0.75)
    assert history['flipping'].max() == 1.0
    assert history['aliveParticles'].max() <= config.maxParticles
    assert history['ripples'].max() <= config.maxRipples


def testFlipFinishesAfterPause():
    config = FountainConfig.quickCycle()
    config.rngSeed = 0
    results = FountainRunner(config, verbose=False).run(
        durationS=8.0, fps=60.0, pauseWindows=[(5.0, 7.0)],
    )

    assert 119 <= results['skippedFrames'] <= 121
    history = results['history']
    afterPause = history['times'] >= 7.0
    assert history['flipping'][afterPause][0] == 0.0
    assert results['flipCount'] == 1


def testCanonicalRunDoesNotFlipInAMinute(capsys):
    results = FountainRunner(FountainConfig(rngSeed=0)).run(durationS=60.0, fps=30.0)
    assert results['flipCount'] == 0
    assert results['finalStatus'].levelReservoir > 26
    assert 'SIMULATION SUMMARY' in capsys.readouterr().out


def testParserDefaults():
    args = buildParser().parse_args([])
    assert args.preset == 'canonical'
    assert args.duration == 60.0
    assert args.plot is None


def testMainWritesPlot(tmp_path, monkeypatch):
    plotPath = tmp_path / 'levels.html'
    monkeypatch.setattr(sys, 'argv', [
        'herons-fountain', '--preset', 'quickCycle', '--duration', '2',
        '--seed', '1', '--plot', str(plotPath),
    ])
    main()
    assert plotPath.exists()

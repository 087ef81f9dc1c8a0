# -- Fountain Simulation Runner -- #

'''
Headless tick driver for the fountain engine.

Steps the engine at a fixed frame rate for a set duration, prints
a progress table, and returns the level/pressure history so it can be
plotted or checked in tests.

The flip transition is timed by a clock that the runner advances with
simulated time, so a headless run flips exactly as a real-time host
would, only faster.

Usage:
    python -m heronsFountain                              # Canonical device, 60 s
    python -m heronsFountain --preset quickCycle          # Fast demo cycle
    python -m heronsFountain --config heronsFountain/configs/canonical.json
    python -m heronsFountain --plot levels.html           # Save plotly history

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import argparse
import logging
import time as timeModule

import numpy as np

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.engine import FountainEngine
from heronsFountain.logConfig import setupLogging

logger = logging.getLogger(__name__)


#--------------------------------------------------------------------#
# -- Simulated Clock -- #
#--------------------------------------------------------------------#

class SteppedClock:
    '''Monotonic clock advanced explicitly by the driver.'''

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, dt: float) -> None:
        self.now += max(0.0, dt)


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description="heronsFountain -- headless Heron's fountain simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file',
    )
    parser.add_argument(
        '--preset', type=str, default='canonical',
        choices=['canonical', 'quickCycle'],
        help='Configuration preset (default: canonical)',
    )
    parser.add_argument(
        '--duration', type=float, default=60.0,
        help='Simulated duration in seconds (default: 60)',
    )
    parser.add_argument(
        '--fps', type=float, default=60.0,
        help='Frames per simulated second (default: 60)',
    )
    parser.add_argument(
        '--flow', type=float, default=None,
        help='Flow intensity 0-1 (default: from configuration)',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for the jet',
    )
    parser.add_argument(
        '--plot', type=str, default=None,
        help='Write an HTML plot of the level history to this path',
    )
    parser.add_argument(
        '--log-level', type=str, default='WARNING',
        help='Logging level (default: WARNING)',
    )
    parser.add_argument(
        '--log-file', type=str, default=None,
        help='Also write log records to this file',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class FountainRunner:
    '''
    Runs a FountainEngine headless and records its history.

    Parameters:
    -----------
    config : FountainConfig | None
        Engine configuration (canonical device when None)
    verbose : bool
        Print the banner and progress table
    '''

    def __init__(self, config: FountainConfig | None = None, verbose: bool = True) -> None:
        self.config = config or FountainConfig()
        self.clock = SteppedClock()
        self.engine = FountainEngine(self.config, clock=self.clock)
        self.verbose = verbose

    def _print(self, text: str = '') -> None:
        if self.verbose:
            print(text)

    def run(
        self,
        durationS: float = 60.0,
        fps: float = 60.0,
        flowIntensity: float | None = None,
        pauseWindows: list[tuple[float, float]] | None = None,
        sampleEveryS: float = 0.1,
    ) -> dict:
        '''
        Step the engine for durationS seconds of simulated time.

        Parameters:
        -----------
        durationS : float
            Simulated duration [s]
        fps : float
            Frame rate; dt = 1 / fps
        flowIntensity : float | None
            Flow intensity to apply before the first frame
        pauseWindows : list[tuple[float, float]] | None
            (start, end) simulated-time windows during which the host is
            paused: the clock keeps running but advance() is not called
        sampleEveryS : float
            History sampling interval [s]

        Returns:
        --------
        dict : Summary with final status, flip count and history arrays
        '''
        engine = self.engine
        if flowIntensity is not None:
            engine.setFlowIntensity(flowIntensity)
        pauseWindows = pauseWindows or []

        dt = 1.0 / max(1.0, fps)
        totalFrames = int(round(durationS / dt))
        sampleInterval = max(1, int(round(sampleEveryS / dt)))
        printInterval = max(1, totalFrames // 20)

        self._printSetup(durationS, fps)
        logger.info('Running %d frames (%.1f s at %.0f fps)', totalFrames + 1, durationS, fps)

        history: dict[str, list[float]] = {
            'times': [], 'top': [], 'basin': [], 'reservoir': [],
            'pressure': [], 'aliveParticles': [], 'ripples': [], 'flipping': [],
        }
        flipTimes: list[float] = []
        skippedFrames = 0

        self._print(f'  {"Time":>8}  {"Top":>6}  {"Basin":>6}  {"Resv":>6}  {"Press":>6}  {"Drops":>6}  {"Rippl":>5}  {"Phase":>9}')
        self._print(f'  {"(s)":>8}  {"(%)":>6}  {"(%)":>6}  {"(%)":>6}  {"(%)":>6}  {"":>6}  {"":>5}  {"":>9}')
        self._print('  ' + '-' * 67)

        wallClockStart = timeModule.time()

        for frame in range(totalFrames + 1):
            t = frame * dt
            if frame > 0:
                self.clock.tick(dt)

            if any(start <= t < end for start, end in pauseWindows):
                skippedFrames += 1
                continue

            report = engine.advance(dt if frame > 0 else 0.0)
            if report.flipStarted:
                flipTimes.append(t)

            if frame % sampleInterval == 0 or frame == totalFrames:
                self._sample(history, t)

            if frame % printInterval == 0 or report.flipStarted:
                status = engine.getStatus()
                self._print(
                    f'  {t:8.2f}  {status.levelTop:6d}  {status.levelBasin:6d}  '
                    f'{status.levelReservoir:6d}  {status.pressure:6d}  '
                    f'{engine.jet.nAlive:6d}  {len(engine.jet.ripples):5d}  {engine.phase:>9}'
                )

        wallClockSeconds = timeModule.time() - wallClockStart
        status = engine.getStatus()

        self._print()
        self._print('=' * 62)
        self._print('  SIMULATION SUMMARY')
        self._print('=' * 62)
        self._print(f'  Frames run:        {totalFrames + 1 - skippedFrames:8d}')
        self._print(f'  Frames paused:     {skippedFrames:8d}')
        self._print(f'  Flips started:     {len(flipTimes):8d}')
        self._print(f'  Flips completed:   {engine.flipCount:8d}')
        self._print(f'  Final Basin:       {status.levelBasin:8d} %')
        self._print(f'  Final Reservoir:   {status.levelReservoir:8d} %')
        self._print(f'  Final Pressure:    {status.pressure:8d} %')
        self._print(f'  Wall-clock time:   {wallClockSeconds:8.2f} s')
        if engine.flipCount > 0:
            self._print('  System completed a cycle and restarted.')
        self._print('=' * 62)
        self._print()

        return {
            'finalStatus': status,
            'flipTimes': flipTimes,
            'flipCount': engine.flipCount,
            'skippedFrames': skippedFrames,
            'wallClockSeconds': wallClockSeconds,
            'history': {key: np.asarray(values) for key, values in history.items()},
        }

    def _sample(self, history: dict[str, list[float]], t: float) -> None:
        engine = self.engine
        history['times'].append(t)
        history['top'].append(engine.level(const.TOP))
        history['basin'].append(engine.level(const.BASIN))
        history['reservoir'].append(engine.level(const.RESERVOIR))
        history['pressure'].append(engine.pressure)
        history['aliveParticles'].append(engine.jet.nAlive)
        history['ripples'].append(len(engine.consumeRippleEvents()))
        history['flipping'].append(1.0 if engine.flipping else 0.0)

    def _printSetup(self, durationS: float, fps: float) -> None:
        cfg = self.config
        self._print()
        self._print('=' * 62)
        self._print("  HERON'S FOUNTAIN -- HEADLESS SIMULATION")
        self._print('=' * 62)
        self._print()
        self._print('-' * 62)
        self._print('  SCENARIO SETUP')
        self._print('-' * 62)
        self._print(f'  Top Level:         {cfg.topLevel:8.2f}')
        self._print(f'  Basin Level:       {cfg.basinLevel:8.2f}')
        self._print(f'  Reservoir Level:   {cfg.reservoirLevel:8.2f}')
        self._print(f'  Rate Constant:     {cfg.rateConstant:8.3f} 1/s')
        self._print(f'  Flow Intensity:    {self.engine.flowIntensity:8.2f}')
        self._print(f'  Particle Pool:     {cfg.maxParticles:8d}')
        self._print(f'  Flip Duration:     {cfg.flipDuration:8.2f} s')
        self._print(f'  Duration:          {durationS:8.2f} s')
        self._print(f'  Frame Rate:        {fps:8.1f} fps')
        self._print()


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main() -> None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args()

    setupLogging(args.log_level, args.log_file)

    if args.config:
        config = FountainConfig.fromJson(args.config)
    else:
        presets = {
            'canonical': FountainConfig.canonical,
            'quickCycle': FountainConfig.quickCycle,
        }
        config = presets[args.preset]()
    if args.seed is not None:
        config.rngSeed = args.seed

    runner = FountainRunner(config)
    results = runner.run(
        durationS=args.duration,
        fps=args.fps,
        flowIntensity=args.flow,
    )

    if args.plot:
        from heronsFountain.visualization.historyPlots import plotLevelHistory
        fig = plotLevelHistory(results['history'])
        fig.write_html(args.plot)
        print(f'  Level history written to: {args.plot}')


if __name__ == '__main__':
    main()

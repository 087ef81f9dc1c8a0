# -- Cycle Controller -- #

'''
Flip/reset state machine.

    running  --(Reservoir full or Basin empty, or flip())-->  flipping
    flipping --(progress reaches 1)-->                        running
    any      --(reset())--> idle --> running

Flip progress is recomputed from the absolute start time and the
current clock reading on every update, so a host that stops calling
advance() for a while resumes the transition where wall time says it
should be rather than where the accumulated frame deltas would put it.

The swap of Basin and Reservoir happens when the transition completes.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Literal

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.vessels import VesselState

logger = logging.getLogger(__name__)

CyclePhase = Literal['running', 'flipping', 'idle']

Clock = Callable[[], float]


######################################################################
# -- Cycle State -- #
######################################################################

@dataclass
class CycleState:
    '''
    Externally visible cycle state.

    Parameters:
    -----------
    phase : CyclePhase
        'running', 'flipping' or 'idle'
    active : bool
        False while a flip is in progress
    flipStartTime : float | None
        Clock reading when the current flip started
    flipProgress : float
        Transition progress [0-1]; 0 when not flipping
    flipCount : int
        Completed flips since construction or the last reset
    '''

    phase: CyclePhase = 'running'
    active: bool = True
    flipStartTime: float | None = None
    flipProgress: float = 0.0
    flipCount: int = 0

    @property
    def flipping(self) -> bool:
        return self.phase == 'flipping'


######################################################################
# -- Cycle Controller -- #
######################################################################

class CycleController:
    '''
    Detects terminal vessel configurations and runs the flip transition.

    Parameters:
    -----------
    config : FountainConfig
        Thresholds and flip duration
    clock : Clock | None
        Monotonic time source [s]; time.monotonic when None
    '''

    def __init__(self, config: FountainConfig, clock: Clock | None = None) -> None:
        self._config = config
        self._clock = clock or time.monotonic
        self.state = CycleState()

    @property
    def phase(self) -> CyclePhase:
        return self.state.phase

    @property
    def flipping(self) -> bool:
        return self.state.flipping

    @property
    def duration(self) -> float:
        return self._config.flipDuration

    def shouldFlip(self, vessels: VesselState) -> bool:
        '''True when the reservoir is full or the basin is empty.'''
        reservoirFull = vessels.level(const.RESERVOIR) >= self._config.flipFullLevel
        basinEmpty = vessels.level(const.BASIN) <= self._config.flipEmptyLevel
        return reservoirFull or basinEmpty

    def check(self, vessels: VesselState) -> bool:
        '''
        Once-per-tick terminal check.

        Returns:
        --------
        bool : True if a flip was started
        '''
        if self.flipping or not self.shouldFlip(vessels):
            return False
        logger.info(
            'Terminal state reached (Basin=%.3f, Reservoir=%.3f); flipping',
            vessels.level(const.BASIN), vessels.level(const.RESERVOIR),
        )
        return self.beginFlip()

    def beginFlip(self) -> bool:
        '''Start the flip transition. No-op while already flipping.'''
        if self.flipping:
            return False
        self.state.phase = 'flipping'
        self.state.active = False
        self.state.flipStartTime = self._clock()
        self.state.flipProgress = 0.0
        return True

    def progress(self) -> float:
        '''Flip progress [0-1] from the absolute start time.'''
        if not self.flipping or self.state.flipStartTime is None:
            return 0.0
        elapsed = self._clock() - self.state.flipStartTime
        return min(1.0, max(0.0, elapsed / self._config.flipDuration))

    def update(self, vessels: VesselState) -> bool:
        '''
        Advance the transition; completes the flip when progress hits 1.

        Returns:
        --------
        bool : True if the flip completed during this call
        '''
        if not self.flipping:
            return False
        self.state.flipProgress = self.progress()
        if self.state.flipProgress < 1.0:
            return False

        vessels.swap(const.BASIN, const.RESERVOIR)
        vessels.airPressure = 0.0
        self.state.phase = 'running'
        self.state.active = True
        self.state.flipStartTime = None
        self.state.flipProgress = 0.0
        self.state.flipCount += 1
        logger.info(
            'Flip %d complete (Basin=%.3f, Reservoir=%.3f)',
            self.state.flipCount, vessels.level(const.BASIN), vessels.level(const.RESERVOIR),
        )
        return True

    def reset(self) -> None:
        '''Abandon any flip and return to running through idle.'''
        if self.flipping:
            logger.info('Reset abandoned flip at %.0f%%', self.progress() * 100.0)
        self.state = CycleState(phase='idle', active=False)
        self._resume()

    def _resume(self) -> None:
        # idle is transient
        self.state.phase = 'running'
        self.state.active = True

# -- Fountain Engine -- #

'''
Public face of the simulation: the object a renderer or headless driver
holds and calls once per frame.

One advance(dt) call runs, in order:

    0. Cycle controller  (finishes a flip whose time is up)
    1. Transfer engine   (moves volume between vessels)
    2. Pressure model    (rederives air pressure)
    3. Jet subsystem     (emits, integrates and retires droplets)
    4. Cycle controller  (starts a flip on a terminal state)

While a flip is in progress the device is being turned over, so no
volume moves and no new jet droplets are emitted; droplets already in
flight keep falling.

Nothing in advance() raises. Out-of-range input is clamped and levels
are clamped after every mutation.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.cycle import Clock, CycleController, CyclePhase
from heronsFountain.core.pressure import PressureModel
from heronsFountain.core.topology import FlowPath, FlowTopology
from heronsFountain.core.transfer import TransferEngine, TransferReport, sanitizeStep
from heronsFountain.core.vessels import VesselState, clamp01, displayLevels, toPercent
from heronsFountain.jet.basin import BasinGeometry
from heronsFountain.jet.jetSystem import JetSubsystem, JetTickReport
from heronsFountain.jet.particles import ParticleSnapshot
from heronsFountain.jet.ripples import RippleEvent

logger = logging.getLogger(__name__)


######################################################################
# -- Status Record -- #
######################################################################

@dataclass(frozen=True)
class EngineStatus:
    '''
    Display-ready status.

    Levels and pressure are rounded percentages [0-100]. Field names
    follow internal roles; DISPLAY_LABELS in core.vessels maps them to
    the labels the reference UI shows.
    '''

    levelTop: int
    levelBasin: int
    levelReservoir: int
    pressure: int
    active: bool

    def asDict(self) -> dict:
        return {
            'levelTop': self.levelTop,
            'levelBasin': self.levelBasin,
            'levelReservoir': self.levelReservoir,
            'pressure': self.pressure,
            'active': self.active,
        }


@dataclass
class TickReport:
    '''Everything that happened during one advance() call.'''

    dt: float
    phase: CyclePhase
    transfer: TransferReport
    jet: JetTickReport
    jetSpawned: int = 0
    flipStarted: bool = False
    flipCompleted: bool = False


######################################################################
# -- Fountain Engine -- #
######################################################################

class FountainEngine:
    '''
    Three-vessel fountain simulation.

    Parameters:
    -----------
    config : FountainConfig | None
        Engine configuration (canonical device when None)
    basinGeometry : BasinGeometry | None
        Bowl geometry supplied by the renderer
    clock : Clock | None
        Monotonic time source for the flip transition
    '''

    def __init__(
        self,
        config: FountainConfig | None = None,
        basinGeometry: BasinGeometry | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = (config or FountainConfig()).validate()
        self.vessels = VesselState.fromLevels(self.config.initialLevels)
        self.topology = FlowTopology()
        self.transfer = TransferEngine(self.config)
        self.pressureModel = PressureModel(self.config)
        self.cycle = CycleController(self.config, clock=clock)
        self.jet = JetSubsystem(
            self.config,
            self.topology,
            geometry=(basinGeometry or BasinGeometry()),
            rng=np.random.default_rng(self.config.rngSeed),
        )
        self._flowIntensity = clamp01(self.config.initialFlowIntensity)
        self.time = 0.0
        self.lastReport: TickReport | None = None

        if self.config.seedCanonicalPaths:
            self.topology.seedCanonical()
        self._syncGeometry()
        logger.debug('Engine created with levels %s', self.vessels.snapshot())

    #--------------------------------------------------------------------#
    # -- Read-only State -- #
    #--------------------------------------------------------------------#

    @property
    def flowIntensity(self) -> float:
        return self._flowIntensity

    @property
    def pressure(self) -> float:
        return self.vessels.airPressure

    @property
    def phase(self) -> CyclePhase:
        return self.cycle.phase

    @property
    def active(self) -> bool:
        return self.cycle.state.active

    @property
    def flipping(self) -> bool:
        return self.cycle.flipping

    @property
    def flipProgress(self) -> float:
        return self.cycle.progress()

    @property
    def flipCount(self) -> int:
        return self.cycle.state.flipCount

    def level(self, vessel: str) -> float:
        return self.vessels.level(vessel)

    def getStatus(self) -> EngineStatus:
        '''Rounded percentages for display.'''
        return EngineStatus(
            levelTop=toPercent(self.vessels.level(const.TOP)),
            levelBasin=toPercent(self.vessels.level(const.BASIN)),
            levelReservoir=toPercent(self.vessels.level(const.RESERVOIR)),
            pressure=toPercent(self.vessels.airPressure),
            active=self.active,
        )

    def getDisplayStatus(self) -> dict:
        '''Status keyed by the reference device's display labels.'''
        status = displayLevels(self.vessels)
        status['pressure'] = toPercent(self.vessels.airPressure)
        status['active'] = self.active
        return status

    def consumeRippleEvents(self) -> tuple[RippleEvent, ...]:
        '''Current ripple events, newest first. Does not clear the buffer.'''
        return self.jet.ripples.events()

    def consumeParticleSnapshots(self) -> list[ParticleSnapshot]:
        '''One snapshot per pool slot.'''
        return self.jet.pool.snapshots()

    def getRuntimeStats(self) -> dict:
        '''Diagnostics for headless runs and debugging.'''
        report = self.lastReport
        return {
            'time': self.time,
            'phase': self.phase,
            'levels': self.vessels.snapshot(),
            'totalVolume': self.vessels.totalVolume,
            'pressure': self.pressure,
            'flowIntensity': self._flowIntensity,
            'aliveParticles': self.jet.nAlive,
            'rippleCount': len(self.jet.ripples),
            'flipCount': self.flipCount,
            'lastSprayTime': self.jet.lastSprayTime,
            'jetFlow': report.transfer.jetFlow if report else 0.0,
            'paths': [p.name for p in self.topology],
        }

    #--------------------------------------------------------------------#
    # -- Commands -- #
    #--------------------------------------------------------------------#

    def setFlowIntensity(self, value: float) -> None:
        '''Store a flow intensity for later ticks, clamped to [0, 1].'''
        self._flowIntensity = clamp01(float(value))

    def connect(self, source: str, target: str, pickupMode: str = 'normal') -> FlowPath | None:
        '''
        Register a user path. Self-loops and duplicates are ignored.

        Returns:
        --------
        FlowPath | None : Handle for the path, or None for a no-op
        '''
        return self.topology.connect(source, target, pickupMode)

    def disconnectPathsFor(self, vessel: str) -> None:
        '''Remove every path attached to a vessel.'''
        self.topology.disconnectPathsFor(vessel)

    disconnectAll = disconnectPathsFor

    def seedCanonicalPaths(self) -> list[FlowPath]:
        '''Register drain, air line and riser if missing.'''
        return self.topology.seedCanonical()

    def setBasinGeometry(self, geometry: BasinGeometry) -> None:
        '''
        Replace the bowl geometry supplied by the renderer.

        Radius, floor and nozzle are taken as given; absorbY is always
        rederived from the Top level.
        '''
        self.jet.geometry = geometry
        self._syncGeometry()

    def flip(self) -> None:
        '''Start a flip transition. No-op while one is in progress.'''
        if self.cycle.beginFlip():
            logger.info('Manual flip started')

    def reset(self) -> None:
        '''
        Restore the configured levels, zero pressure, abandon any flip
        and remove every path.

        Canonical paths come back only when config.reseedOnReset is set;
        otherwise the caller re-seeds them.
        '''
        self.vessels.restore(self.config.initialLevels)
        self.cycle.reset()
        self.topology.clear()
        self.jet.clear()
        if self.config.reseedOnReset:
            self.topology.seedCanonical()
        self._syncGeometry()
        logger.info('System reset')

    #--------------------------------------------------------------------#
    # -- Tick -- #
    #--------------------------------------------------------------------#

    def advance(self, dt: float, basinGeometry: BasinGeometry | None = None) -> TickReport:
        '''
        Run one frame of the simulation.

        Parameters:
        -----------
        dt : float
            Elapsed time since the previous frame [s]; negative or NaN
            values count as 0, large values are clamped to maxTimeStep
        basinGeometry : BasinGeometry | None
            Bowl geometry for this frame, as in setBasinGeometry()

        Returns:
        --------
        TickReport : Summary of the tick
        '''
        if basinGeometry is not None:
            self.setBasinGeometry(basinGeometry)

        dt = sanitizeStep(dt, self.config.maxTimeStep)
        self.time += dt
        intensity = self._flowIntensity

        flipCompleted = self.cycle.update(self.vessels)

        if self.cycle.flipping:
            transferReport = TransferReport()
            jetSpawned = 0
        else:
            transferReport = self.transfer.advance(self.vessels, self.topology, dt, intensity)
            self.pressureModel.update(self.vessels, self.topology)
            jetSpawned = 0
            if dt > 0.0 and transferReport.jetFlow > 0.0:
                jetSpawned = self.jet.spawnJet(self.vessels.airPressure, intensity)

        self._syncGeometry()
        jetReport = self.jet.advanceParticles(dt)

        flipStarted = self.cycle.check(self.vessels)

        self._guardInvariants()
        self.lastReport = TickReport(
            dt=dt,
            phase=self.cycle.phase,
            transfer=transferReport,
            jet=jetReport,
            jetSpawned=jetSpawned,
            flipStarted=flipStarted,
            flipCompleted=flipCompleted,
        )
        return self.lastReport

    def _syncGeometry(self) -> None:
        # Absorption height follows the bowl's fill level
        self.jet.geometry = self.jet.geometry.atWaterLevel(self.vessels.level(const.TOP))

    def _guardInvariants(self) -> None:
        for vessel in const.VESSELS:
            value = self.vessels.level(vessel)
            if math.isnan(value) or not (0.0 <= value <= 1.0):
                logger.warning('Level for %s drifted to %r; clamping', vessel, value)
                self.vessels.setLevel(vessel, value)
        self.vessels.airPressure = clamp01(self.vessels.airPressure)

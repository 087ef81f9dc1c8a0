# -- Fountain Jet Subsystem -- #

'''
Spawns, integrates and retires the droplets of the fountain jet.

Integration is explicit Euler:

    x(t+dt) = x(t) + v(t) * dt
    v(t+dt) = v(t) - g * dt * y_hat

Each tick, alive droplets are tested against the basin in priority order:

    (a) below the bowl floor inside the bowl      -> retire silently
    (b) outside the cull radius, near the surface -> retire silently
    (c) at/below the water surface inside the bowl -> retire, splash, ripple
    (d) age >= maxAge                              -> retire

A splash droplet that falls back into the water splashes again. Every
burst draws from the same fixed pool, so a full pool ends the chain.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from heronsFountain import constants as const
from heronsFountain.config import FountainConfig
from heronsFountain.core.topology import FlowTopology
from heronsFountain.jet.basin import BasinGeometry
from heronsFountain.jet.particles import ParticlePool
from heronsFountain.jet.ripples import RippleBuffer


@dataclass
class JetTickReport:
    '''
    Droplet bookkeeping for one advanceParticles() call.

    Parameters:
    -----------
    floorHits : int
        Retired by (a)
    culled : int
        Retired by (b)
    absorbed : int
        Retired by (c)
    expired : int
        Retired by (d)
    splashSpawned : int
        Droplets created by splash bursts
    '''

    floorHits: int = 0
    culled: int = 0
    absorbed: int = 0
    expired: int = 0
    splashSpawned: int = 0


class JetSubsystem:
    '''
    Droplet pool, emitter and ripple recorder for the fountain jet.

    Parameters:
    -----------
    config : FountainConfig
        Pool size, ripple buffer size and jet threshold
    topology : FlowTopology
        Consulted for the riser and air-line gate
    geometry : BasinGeometry | None
        Bowl geometry (reference device when None)
    rng : np.random.Generator | None
        Random source; seeded from config.rngSeed when None
    '''

    def __init__(
        self,
        config: FountainConfig,
        topology: FlowTopology,
        geometry: BasinGeometry | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._config = config
        self._topology = topology
        self.geometry = geometry or BasinGeometry()
        self._rng = rng if rng is not None else np.random.default_rng(config.rngSeed)
        self.pool = ParticlePool.createEmpty(config.maxParticles)
        self.ripples = RippleBuffer(config.maxRipples, config.rippleLifetime)
        self.time = 0.0
        self.lastSprayTime: float | None = None

    @property
    def nAlive(self) -> int:
        return self.pool.nAlive

    def canSpawn(self, pressure: float) -> bool:
        '''Jet gate: riser and air line connected and pressure above threshold.'''
        return (
            self._topology.riserConnected
            and self._topology.airLineConnected
            and pressure > self._config.jetThreshold
        )

    @staticmethod
    def jetCount(pressure: float, flowIntensity: float) -> int:
        '''Droplets requested per jet emission.'''
        requested = math.floor((const.jetIntensityOffset + flowIntensity) * pressure * const.jetCountGain)
        return max(const.jetMinCount, int(requested))

    @staticmethod
    def jetSpeed(pressure: float) -> float:
        '''Nominal launch speed before jitter.'''
        return const.jetBaseSpeed + pressure * const.jetPressureSpeed

    def spawnJet(self, pressure: float, flowIntensity: float) -> int:
        '''
        Emit one burst of jet droplets from the nozzle.

        Parameters:
        -----------
        pressure : float
            Current air pressure [0-1]
        flowIntensity : float
            Current flow intensity [0-1]

        Returns:
        --------
        int : Droplets actually spawned (requests past pool capacity are dropped)
        '''
        if not self.canSpawn(pressure):
            return 0

        slots = self.pool.freeSlots(self.jetCount(pressure, flowIntensity))
        n = len(slots)
        if n == 0:
            return 0

        rng = self._rng
        tip = np.asarray(self.geometry.nozzleTip, dtype=float)
        spawn = tip + const.jetCenterBias * (self.geometry.surfaceCenter - tip)

        positions = np.tile(spawn, (n, 1))
        positions[:, 0] += rng.uniform(-const.jetSpawnJitter, const.jetSpawnJitter, n)
        positions[:, 2] += rng.uniform(-const.jetSpawnJitter, const.jetSpawnJitter, n)

        speeds = self.jetSpeed(pressure) * (1.0 + rng.uniform(0.0, const.jetSpeedJitter, n))
        velocities = np.zeros((n, 3))
        velocities[:, 0] = rng.uniform(-const.jetLateralVelocityJitter, const.jetLateralVelocityJitter, n)
        velocities[:, 1] = -speeds + rng.uniform(-const.jetVerticalVelocityJitter, const.jetVerticalVelocityJitter, n)
        velocities[:, 2] = rng.uniform(-const.jetLateralVelocityJitter, const.jetLateralVelocityJitter, n)

        maxAges = const.jetMinLife + rng.uniform(0.0, const.jetLifeSpread, n)

        self.pool.activate(slots, positions, velocities, maxAges)
        self.lastSprayTime = self.time
        return n

    def spawnSplash(self, impact: np.ndarray) -> int:
        '''
        Burst of 6-11 short-lived droplets thrown up from an impact point.

        Returns:
        --------
        int : Droplets actually spawned
        '''
        rng = self._rng
        requested = const.splashMinCount + int(rng.integers(0, const.splashCountSpread + 1))
        slots = self.pool.freeSlots(requested)
        n = len(slots)
        if n == 0:
            return 0

        positions = np.tile(np.asarray(impact, dtype=float), (n, 1))
        positions[:, 0] += rng.uniform(-const.splashSpawnJitter, const.splashSpawnJitter, n)
        positions[:, 1] += const.splashLift
        positions[:, 2] += rng.uniform(-const.splashSpawnJitter, const.splashSpawnJitter, n)

        angles = rng.uniform(0.0, 2.0 * np.pi, n)
        velocities = np.column_stack([
            np.cos(angles) * const.splashRadialSpeed,
            const.splashMinUpSpeed + rng.uniform(0.0, const.splashUpSpeedSpread, n),
            np.sin(angles) * const.splashRadialSpeed,
        ])
        maxAges = const.splashMinLife + rng.uniform(0.0, const.splashLifeSpread, n)

        self.pool.activate(slots, positions, velocities, maxAges)
        return n

    def advanceParticles(self, dt: float, basinGeometry: BasinGeometry | None = None) -> JetTickReport:
        '''
        Integrate every alive droplet and apply the basin tests.

        Parameters:
        -----------
        dt : float
            Elapsed time [s], assumed already clamped by the caller
        basinGeometry : BasinGeometry | None
            Geometry for this tick; replaces the stored geometry when given

        Returns:
        --------
        JetTickReport : Counts of retired and spawned droplets
        '''
        if basinGeometry is not None:
            self.geometry = basinGeometry
        geometry = self.geometry
        report = JetTickReport()

        self.time += dt
        self.ripples.prune(self.time)

        pool = self.pool
        idx = np.flatnonzero(pool.alive)
        if len(idx) == 0:
            return report

        # Euler step: drift with the current velocity, then apply gravity
        pool.positions[idx] += pool.velocities[idx] * dt
        pool.velocities[idx, 1] -= const.gravity * dt
        pool.ages[idx] += dt

        pos = pool.positions[idx]
        radialSq = pos[:, 0] ** 2 + pos[:, 2] ** 2
        y = pos[:, 1]
        withinRadius = radialSq <= geometry.innerRadius ** 2

        floorHit = withinRadius & (y <= geometry.floorY)
        culled = ~floorHit & (radialSq > geometry.cullRadius ** 2) & (y <= geometry.cullHeight)
        absorbed = ~floorHit & ~culled & withinRadius & (y <= geometry.absorbY)
        expired = ~floorHit & ~culled & ~absorbed & (pool.ages[idx] >= pool.maxAges[idx])

        floorIdx = idx[floorHit]
        pool.velocities[floorIdx] = 0.0

        impacts = pool.positions[idx[absorbed]].copy()

        pool.retire(idx[floorHit | culled | absorbed | expired])

        report.floorHits = int(np.count_nonzero(floorHit))
        report.culled = int(np.count_nonzero(culled))
        report.absorbed = int(np.count_nonzero(absorbed))
        report.expired = int(np.count_nonzero(expired))

        for impact in impacts:
            report.splashSpawned += self.spawnSplash(impact)
            self.ripples.record(geometry.toSurfaceUv(impact[0], impact[2]), self.time)

        return report

    def clear(self) -> None:
        '''Free the pool and forget every ripple.'''
        self.pool.clear()
        self.ripples.clear()
        self.lastSprayTime = None

# -- Droplet Particle Pool -- #

'''
Fixed-capacity droplet pool for the fountain jet and splash bursts.

State is stored as contiguous NumPy arrays for vectorized integration.
Slots are never created or destroyed after construction; a droplet is
"allocated" by flipping the alive flag of the first free slot, so at
most `capacity` droplets can ever be alive at once.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ParticleSnapshot:
    '''Read-only view of one pool slot for renderers.'''

    position: tuple[float, float, float]
    velocity: tuple[float, float, float]
    ageFraction: float
    alive: bool


@dataclass
class ParticlePool:
    '''
    Droplet pool state.

    All arrays have shape (capacity, 3) for vector quantities and
    (capacity,) for scalar quantities.

    Parameters:
    -----------
    positions : np.ndarray
        Droplet positions [scene units]
    velocities : np.ndarray
        Droplet velocities [scene units / s]
    ages : np.ndarray
        Time since spawn [s]
    maxAges : np.ndarray
        Lifetime [s]
    alive : np.ndarray
        Boolean mask of occupied slots
    '''

    positions: np.ndarray
    velocities: np.ndarray
    ages: np.ndarray
    maxAges: np.ndarray
    alive: np.ndarray

    @classmethod
    def createEmpty(cls, capacity: int) -> ParticlePool:
        '''Pool with every slot free.'''
        return cls(
            positions=np.zeros((capacity, 3)),
            velocities=np.zeros((capacity, 3)),
            ages=np.zeros(capacity),
            maxAges=np.ones(capacity),
            alive=np.zeros(capacity, dtype=bool),
        )

    @property
    def capacity(self) -> int:
        return self.alive.shape[0]

    @property
    def nAlive(self) -> int:
        return int(np.count_nonzero(self.alive))

    @property
    def nFree(self) -> int:
        return self.capacity - self.nAlive

    def freeSlots(self, count: int) -> np.ndarray:
        '''
        Indices of up to `count` free slots, lowest index first.

        Fewer indices than requested are returned when the pool is
        nearly exhausted; none when it is full.
        '''
        if count <= 0:
            return np.empty(0, dtype=int)
        return np.flatnonzero(~self.alive)[:count]

    def activate(
        self,
        slots: np.ndarray,
        positions: np.ndarray,
        velocities: np.ndarray,
        maxAges: np.ndarray,
    ) -> None:
        '''Occupy the given slots with fresh droplets.'''
        self.positions[slots] = positions
        self.velocities[slots] = velocities
        self.ages[slots] = 0.0
        self.maxAges[slots] = maxAges
        self.alive[slots] = True

    def retire(self, slots: np.ndarray) -> None:
        self.alive[slots] = False

    def clear(self) -> None:
        '''Free every slot.'''
        self.alive[:] = False
        self.velocities[:] = 0.0
        self.ages[:] = 0.0

    def ageFractions(self) -> np.ndarray:
        '''age / maxAge per slot, clipped to [0, 1].'''
        return np.clip(self.ages / np.maximum(self.maxAges, 1e-9), 0.0, 1.0)

    def snapshots(self) -> list[ParticleSnapshot]:
        '''One snapshot per slot (length == capacity).'''
        fractions = self.ageFractions()
        return [
            ParticleSnapshot(
                position=tuple(float(c) for c in self.positions[i]),
                velocity=tuple(float(c) for c in self.velocities[i]),
                ageFraction=float(fractions[i]),
                alive=bool(self.alive[i]),
            )
            for i in range(self.capacity)
        ]

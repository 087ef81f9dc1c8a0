# -- Basin Geometry -- #

'''
Geometry contract the renderer supplies for the open bowl.

The jet subsystem never reads scene transforms; it only needs the bowl's
floor, inner radius, current water-surface (absorption) height and the
world position of the nozzle tip. The bowl is centered on the vertical
axis (x = z = 0).

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np

from heronsFountain import constants as const


@dataclass(frozen=True)
class BasinGeometry:
    '''
    Bowl dimensions in scene units.

    Parameters:
    -----------
    bottomY : float
        Height of the bowl floor
    height : float
        Depth of the bowl from floor to rim
    innerRadius : float
        Inner radius at the water surface
    absorbY : float
        Water-surface height at which droplets are absorbed
    nozzleTip : np.ndarray
        World position of the nozzle tip, shape (3,)
    '''

    bottomY: float = 3.35
    height: float = 1.4
    innerRadius: float = 1.5
    absorbY: float = 3.6
    nozzleTip: np.ndarray = field(default_factory=lambda: np.array([0.05, 5.25, 0.0]))

    @property
    def floorY(self) -> float:
        '''Height below which droplets inside the bowl are stopped.'''
        return self.bottomY - const.floorMargin

    @property
    def cullRadius(self) -> float:
        return self.innerRadius + const.cullRadiusMargin

    @property
    def cullHeight(self) -> float:
        return self.absorbY + const.cullHeightMargin

    @property
    def surfaceCenter(self) -> np.ndarray:
        '''Center of the water surface, shape (3,).'''
        return np.array([0.0, self.absorbY, 0.0])

    def surfaceHeight(self, level: float) -> float:
        '''Water-surface height for a bowl fill fraction.'''
        return self.bottomY + self.height * min(1.0, max(0.0, level))

    def atWaterLevel(self, level: float) -> BasinGeometry:
        '''Copy with absorbY moved to the surface for the given fill fraction.'''
        return replace(self, absorbY=self.surfaceHeight(level))

    def toSurfaceUv(self, x: float, z: float) -> tuple[float, float]:
        '''Project a world (x, z) point into basin-radius units, clamped to [-1, 1].'''
        u = float(np.clip(x / self.innerRadius, -1.0, 1.0))
        v = float(np.clip(z / self.innerRadius, -1.0, 1.0))
        return (u, v)

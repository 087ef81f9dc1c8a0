# -- Vessel State -- #

'''
Fill levels of the three vessels and the derived air pressure.

Levels are fractions of a normalized capacity of 1.0. Every mutation
goes through _store(), which clamps into [0, 1] and maps NaN to 0, so
floating-point drift can never push a level out of range.

The display mapping at the bottom of this module is the only place
internal roles are translated to the labels a UI shows.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from heronsFountain import constants as const

VesselId = Literal['Top', 'Basin', 'Reservoir']


def clamp01(value: float) -> float:
    '''Clamp into [0, 1]; NaN maps to 0.'''
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


######################################################################
# -- Vessel State -- #
######################################################################

@dataclass
class VesselState:
    '''
    Levels of Top, Basin and Reservoir plus the current air pressure.

    Parameters:
    -----------
    levels : dict[str, float]
        Fill fraction keyed by vessel identifier
    airPressure : float
        Scalar pressure [0-1], rewritten every tick by the pressure model
    '''

    levels: dict[str, float] = field(default_factory=dict)
    airPressure: float = 0.0

    def __post_init__(self) -> None:
        for vessel in const.VESSELS:
            self._store(vessel, self.levels.get(vessel, 0.0))
        self.airPressure = clamp01(self.airPressure)

    @classmethod
    def fromLevels(cls, initialLevels: dict[str, float]) -> VesselState:
        '''Build a state from a {vessel: level} mapping.'''
        return cls(levels=dict(initialLevels))

    def level(self, vessel: str) -> float:
        '''Current fill fraction of a vessel.'''
        return self.levels[vessel]

    def setLevel(self, vessel: str, value: float) -> None:
        '''Overwrite a vessel level (clamped).'''
        self._requireVessel(vessel)
        self._store(vessel, value)

    def capacity(self, vessel: str) -> float:
        '''Remaining room in a vessel.'''
        return 1.0 - self.levels[vessel]

    def move(self, source: str, target: str, amount: float) -> float:
        '''
        Move volume from source to target, limited by what is available
        in source and the room left in target.

        Returns:
        --------
        float : Volume actually moved
        '''
        moved = max(0.0, min(amount, self.levels[source], self.capacity(target)))
        if moved > 0.0:
            self._store(source, self.levels[source] - moved)
            self._store(target, self.levels[target] + moved)
        return moved

    def swap(self, first: str, second: str) -> None:
        '''Exchange two vessel levels.'''
        self.levels[first], self.levels[second] = self.levels[second], self.levels[first]

    def restore(self, initialLevels: dict[str, float]) -> None:
        '''Reset every level and zero the pressure.'''
        for vessel in const.VESSELS:
            self._store(vessel, initialLevels[vessel])
        self.airPressure = 0.0

    @property
    def totalVolume(self) -> float:
        '''Sum of all three levels.'''
        return sum(self.levels[v] for v in const.VESSELS)

    def snapshot(self) -> dict[str, float]:
        '''Copy of the current levels.'''
        return dict(self.levels)

    def _store(self, vessel: str, value: float) -> None:
        self.levels[vessel] = clamp01(float(value))

    @staticmethod
    def _requireVessel(vessel: str) -> None:
        if vessel not in const.VESSELS:
            raise KeyError(f'Unknown vessel: {vessel!r}')


######################################################################
# -- Display Mapping -- #
######################################################################

# The reference device labels its donor tank "A" and its bowl "B".
# Status consumers read these labels; engine logic only uses roles.
DISPLAY_LABELS: dict[str, str] = {
    'displayA': const.BASIN,
    'displayB': const.TOP,
    'displayC': const.RESERVOIR,
}


def toPercent(value: float) -> int:
    '''Fraction [0-1] to a rounded display percentage.'''
    return int(math.floor(clamp01(value) * 100.0 + 0.5))


def displayLevels(state: VesselState) -> dict[str, int]:
    '''Levels keyed by display label, as rounded percentages.'''
    return {label: toPercent(state.level(vessel)) for label, vessel in DISPLAY_LABELS.items()}

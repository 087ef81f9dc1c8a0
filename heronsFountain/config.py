# -- Fountain Engine Configuration -- #

'''
Explicit configuration record for the fountain engine.

Everything the engine would otherwise hard-code (initial levels,
rate constants, pressure coefficients, pool and buffer sizes, cycle
thresholds) is collected here and passed in at construction.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass

from heronsFountain import constants as const


class ConfigError(ValueError):
    '''Raised when a FountainConfig is structurally invalid.'''


######################################################################
# -- Fountain Configuration -- #
######################################################################

@dataclass
class FountainConfig:
    '''
    Configuration for a FountainEngine.

    Parameters:
    -----------
    topLevel, basinLevel, reservoirLevel : float
        Initial (and reset) vessel fill fractions [0-1]
    rateConstant : float
        Base volume rate [capacity fraction / s] at full intensity
    drainFactor : float
        Multiplier on rateConstant for the canonical drain
    userPathFactor : float
        Multiplier on rateConstant for user-created paths
    riserFactor : float
        Multiplier on rateConstant for the reported jet flow
    bottomPickupBoost : float
        Rate multiplier for paths drawing from a submerged intake
    sealedFactor, leakFactor : float
        Pressure coupling with and without the air line
    headGain, inflowGain : float
        Pressure coefficients on head and inflow terms
    jetThreshold : float
        Pressure the jet needs to exceed before droplets are emitted
    maxParticles : int
        Fixed particle pool size
    maxRipples : int
        Ripple buffer capacity
    rippleLifetime : float
        Age [s] past which ripple events are dropped
    flipDuration : float
        Length of the flip transition [s]
    flipFullLevel, flipEmptyLevel : float
        Reservoir-full and basin-empty thresholds for the auto-flip
    maxTimeStep : float
        Upper clamp on a single advance() step [s]
    initialFlowIntensity : float
        Flow intensity [0-1] until setFlowIntensity is called
    seedCanonicalPaths : bool
        Register drain, air line and riser at construction
    reseedOnReset : bool
        Register the canonical paths again after reset()
    rngSeed : int | None
        Seed for the jet's random generator (None for nondeterministic)
    '''

    topLevel: float = const.defaultTopLevel
    basinLevel: float = const.defaultBasinLevel
    reservoirLevel: float = const.defaultReservoirLevel
    rateConstant: float = 0.05
    drainFactor: float = 0.6
    userPathFactor: float = 0.9
    riserFactor: float = 1.25
    bottomPickupBoost: float = 1.6
    sealedFactor: float = 1.0
    leakFactor: float = 0.2
    headGain: float = 2.0
    inflowGain: float = 0.5
    jetThreshold: float = 0.05
    maxParticles: int = 400
    maxRipples: int = 6
    rippleLifetime: float = 4.0
    flipDuration: float = 1.0
    flipFullLevel: float = 0.98
    flipEmptyLevel: float = 0.02
    maxTimeStep: float = 0.1
    initialFlowIntensity: float = 0.25
    seedCanonicalPaths: bool = True
    reseedOnReset: bool = False
    rngSeed: int | None = None

    @property
    def initialLevels(self) -> dict[str, float]:
        '''Initial levels keyed by internal vessel identifier.'''
        return {
            const.TOP: self.topLevel,
            const.BASIN: self.basinLevel,
            const.RESERVOIR: self.reservoirLevel,
        }

    @classmethod
    def canonical(cls) -> FountainConfig:
        '''The physical reference device: Top 75%, Basin 100%, Reservoir 26%.'''
        return cls()

    @classmethod
    def quickCycle(cls) -> FountainConfig:
        '''
        Faster rates for demos.

        Reaches the auto-flip in roughly five seconds at full intensity.
        '''
        return cls(
            rateConstant=0.25,
            initialFlowIntensity=1.0,
            flipDuration=0.5,
            reseedOnReset=True,
        )

    def validate(self) -> FountainConfig:
        '''
        Check the configuration for values the engine cannot work with.

        Returns:
        --------
        FountainConfig : self, for chaining

        Raises:
        -------
        ConfigError : On the first invalid field found
        '''
        for name, level in self.initialLevels.items():
            if not (0.0 <= level <= 1.0):
                raise ConfigError(f'Initial level for {name} must be in [0, 1], got {level}')

        positive = {
            'rateConstant': self.rateConstant,
            'flipDuration': self.flipDuration,
            'rippleLifetime': self.rippleLifetime,
            'maxTimeStep': self.maxTimeStep,
        }
        for name, value in positive.items():
            if not (math.isfinite(value) and value > 0.0):
                raise ConfigError(f'{name} must be a positive finite number, got {value}')

        if self.maxParticles < 1:
            raise ConfigError(f'maxParticles must be at least 1, got {self.maxParticles}')
        if self.maxRipples < 1:
            raise ConfigError(f'maxRipples must be at least 1, got {self.maxRipples}')
        if not (0.0 < self.flipEmptyLevel < self.flipFullLevel < 1.0):
            raise ConfigError(
                f'Flip thresholds must satisfy 0 < empty < full < 1, '
                f'got empty={self.flipEmptyLevel}, full={self.flipFullLevel}'
            )
        return self

    def toDict(self) -> dict:
        '''Plain dict of every field.'''
        return asdict(self)

    @classmethod
    def fromJson(cls, configPath: str) -> FountainConfig:
        '''
        Load configuration from a JSON file.

        Reads the 'levels', 'rates', 'pressure', 'jet' and 'cycle'
        sections; anything missing falls back to the canonical value.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        FountainConfig : Loaded and validated configuration
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        levels = data.get('levels', {})
        rates = data.get('rates', {})
        pressure = data.get('pressure', {})
        jet = data.get('jet', {})
        cycle = data.get('cycle', {})
        base = cls()

        config = cls(
            topLevel=levels.get('top', base.topLevel),
            basinLevel=levels.get('basin', base.basinLevel),
            reservoirLevel=levels.get('reservoir', base.reservoirLevel),
            rateConstant=rates.get('rateConstant', base.rateConstant),
            drainFactor=rates.get('drainFactor', base.drainFactor),
            userPathFactor=rates.get('userPathFactor', base.userPathFactor),
            riserFactor=rates.get('riserFactor', base.riserFactor),
            bottomPickupBoost=rates.get('bottomPickupBoost', base.bottomPickupBoost),
            initialFlowIntensity=rates.get('flowIntensity', base.initialFlowIntensity),
            sealedFactor=pressure.get('sealedFactor', base.sealedFactor),
            leakFactor=pressure.get('leakFactor', base.leakFactor),
            headGain=pressure.get('headGain', base.headGain),
            inflowGain=pressure.get('inflowGain', base.inflowGain),
            jetThreshold=jet.get('threshold', base.jetThreshold),
            maxParticles=jet.get('maxParticles', base.maxParticles),
            maxRipples=jet.get('maxRipples', base.maxRipples),
            rippleLifetime=jet.get('rippleLifetime', base.rippleLifetime),
            rngSeed=jet.get('seed', base.rngSeed),
            flipDuration=cycle.get('flipDuration', base.flipDuration),
            flipFullLevel=cycle.get('fullLevel', base.flipFullLevel),
            flipEmptyLevel=cycle.get('emptyLevel', base.flipEmptyLevel),
            maxTimeStep=cycle.get('maxTimeStep', base.maxTimeStep),
            seedCanonicalPaths=cycle.get('seedCanonicalPaths', base.seedCanonicalPaths),
            reseedOnReset=cycle.get('reseedOnReset', base.reseedOnReset),
        )
        return config.validate()

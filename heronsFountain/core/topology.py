# -- Flow Topology -- #

'''
Registry of the connections ("hoses") that currently exist between vessels.

A path is either registered or absent; there are no partial or weighted
connections. Three canonical paths describe the device plumbing:

    drain  : Basin -> Reservoir                 (water, evaluated specially)
    airLine: Reservoir -> Top                   (air only, never carries water)
    riser  : Basin (bottom pickup) -> Top nozzle (feeds the jet)

Any number of user paths may be added on top. Paths keep their
registration order, which is also the order the transfer engine
processes them in.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Iterator, Literal

from heronsFountain import constants as const

logger = logging.getLogger(__name__)

PickupMode = Literal['normal', 'bottomPickup']
PathKind = Literal['drain', 'airLine', 'riser', 'user']

PICKUP_MODES: tuple[str, ...] = ('normal', 'bottomPickup')

# Fixed endpoints and intake of each canonical path
CANONICAL_PATHS: dict[str, tuple[str, str, str]] = {
    'drain': (const.BASIN, const.RESERVOIR, 'normal'),
    'airLine': (const.RESERVOIR, const.TOP, 'normal'),
    'riser': (const.BASIN, const.TOP, 'bottomPickup'),
}


######################################################################
# -- Flow Path -- #
######################################################################

@dataclass(frozen=True)
class FlowPath:
    '''
    A registered connection between two vessels.

    Instances double as the handle returned by FlowTopology.connect().

    Parameters:
    -----------
    pathId : int
        Registration counter, unique for the lifetime of the topology
    source : str
        Vessel water is drawn from
    target : str
        Vessel water is delivered to
    pickupMode : PickupMode
        'bottomPickup' for a submerged intake, otherwise 'normal'
    kind : PathKind
        'drain', 'airLine', 'riser' or 'user'
    '''

    pathId: int
    source: str
    target: str
    pickupMode: PickupMode = 'normal'
    kind: PathKind = 'user'

    @property
    def isAirOnly(self) -> bool:
        '''True for the air line, which never transfers water.'''
        return self.kind == 'airLine'

    @property
    def isBottomPickup(self) -> bool:
        return self.pickupMode == 'bottomPickup'

    @property
    def isCanonical(self) -> bool:
        return self.kind in CANONICAL_PATHS

    @property
    def name(self) -> str:
        '''Canonical kind, or "source->target" for user paths.'''
        if self.isCanonical:
            return self.kind
        return f'{self.source}->{self.target}'

    def touches(self, vessel: str) -> bool:
        '''True if either end of the path is attached to vessel.'''
        return self.source == vessel or self.target == vessel

    def signature(self) -> tuple[str, str, str, str]:
        return (self.source, self.target, self.pickupMode, self.kind)


######################################################################
# -- Flow Topology -- #
######################################################################

class FlowTopology:
    '''
    Ordered set of registered flow paths.

    Invalid commands (self-loops, unknown vessels, duplicates,
    canonical kinds with the wrong endpoints) are silently ignored
    and return None.
    '''

    def __init__(self) -> None:
        self._paths: list[FlowPath] = []
        self._ids = itertools.count(1)

    def __iter__(self) -> Iterator[FlowPath]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    @property
    def paths(self) -> tuple[FlowPath, ...]:
        '''Registered paths in registration order.'''
        return tuple(self._paths)

    def connect(
        self,
        source: str,
        target: str,
        pickupMode: str = 'normal',
        kind: str = 'user',
    ) -> FlowPath | None:
        '''
        Register a path from source to target.

        Parameters:
        -----------
        source : str
            Vessel the path draws from
        target : str
            Vessel the path delivers to
        pickupMode : str
            'normal' or 'bottomPickup'
        kind : str
            'user' for arbitrary paths, or one of the canonical kinds

        Returns:
        --------
        FlowPath | None : Handle for the new path, or None if the
            command was a no-op
        '''
        if source not in const.VESSELS or target not in const.VESSELS:
            logger.debug('Ignoring connect between unknown vessels %r -> %r', source, target)
            return None
        if source == target:
            logger.debug('Ignoring self-connection on %s', source)
            return None
        if pickupMode not in PICKUP_MODES:
            logger.debug('Ignoring connect with unknown pickup mode %r', pickupMode)
            return None

        if kind != 'user':
            expected = CANONICAL_PATHS.get(kind)
            if expected is None or expected != (source, target, pickupMode):
                logger.debug('Ignoring %s path with non-canonical endpoints %s -> %s', kind, source, target)
                return None
            if self.hasKind(kind):
                logger.debug('Ignoring second %s path', kind)
                return None

        signature = (source, target, pickupMode, kind)
        if any(p.signature() == signature for p in self._paths):
            logger.debug('Ignoring duplicate path %s -> %s (%s)', source, target, pickupMode)
            return None

        path = FlowPath(
            pathId=next(self._ids),
            source=source,
            target=target,
            pickupMode=pickupMode,
            kind=kind,
        )
        self._paths.append(path)
        logger.debug('Connected %s path #%d: %s -> %s (%s)', kind, path.pathId, source, target, pickupMode)
        return path

    def seedCanonical(self) -> list[FlowPath]:
        '''Register drain, air line and riser (skipping any already present).'''
        created = []
        for kind, (source, target, pickupMode) in CANONICAL_PATHS.items():
            path = self.connect(source, target, pickupMode, kind=kind)
            if path is not None:
                created.append(path)
        return created

    def disconnect(self, handle: FlowPath) -> bool:
        '''Remove one path by handle. Returns False if it was not registered.'''
        before = len(self._paths)
        self._paths = [p for p in self._paths if p.pathId != handle.pathId]
        return len(self._paths) != before

    def disconnectPathsFor(self, vessel: str) -> int:
        '''
        Remove every path attached to a vessel, canonical ones included.

        Returns:
        --------
        int : Number of paths removed
        '''
        before = len(self._paths)
        self._paths = [p for p in self._paths if not p.touches(vessel)]
        removed = before - len(self._paths)
        if removed:
            logger.info('Disconnected %d path(s) attached to %s', removed, vessel)
        return removed

    # Name used by some callers for the same command
    disconnectAll = disconnectPathsFor

    def clear(self) -> None:
        '''Remove every path and restart handle numbering.'''
        self._paths = []
        self._ids = itertools.count(1)

    def hasKind(self, kind: str) -> bool:
        '''True if a path of the given kind is registered.'''
        return any(p.kind == kind for p in self._paths)

    def find(self, kind: str) -> FlowPath | None:
        for path in self._paths:
            if path.kind == kind:
                return path
        return None

    @property
    def airLineConnected(self) -> bool:
        return self.hasKind('airLine')

    @property
    def riserConnected(self) -> bool:
        return self.hasKind('riser')

    @property
    def drainConnected(self) -> bool:
        return self.hasKind('drain')

    def waterPaths(self) -> list[FlowPath]:
        '''Paths that may carry water, in registration order.'''
        return [p for p in self._paths if not p.isAirOnly]

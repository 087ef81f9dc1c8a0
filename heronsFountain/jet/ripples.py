# -- Ripple Event Buffer -- #

'''
Bounded, newest-first record of droplet impacts on the basin surface.

Renderers read the buffer to drive the surface ripple animation.
Entries are evicted by capacity when a new impact arrives and by age
on every tick.

Sean Bowman [02/12/2026]
'''

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RippleEvent:
    '''
    One impact.

    Parameters:
    -----------
    impactPoint : tuple[float, float]
        (u, v) in basin-radius units, each in [-1, 1]
    startTime : float
        Simulated time of the impact [s]
    '''

    impactPoint: tuple[float, float]
    startTime: float

    def age(self, now: float) -> float:
        return now - self.startTime


class RippleBuffer:
    '''
    Newest-first ring of RippleEvents.

    Parameters:
    -----------
    capacity : int
        Maximum number of events kept
    lifetime : float
        Events at least this old [s] are dropped by prune()
    '''

    def __init__(self, capacity: int, lifetime: float) -> None:
        self._capacity = capacity
        self._lifetime = lifetime
        self._events: list[RippleEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, impactPoint: tuple[float, float], startTime: float) -> RippleEvent:
        '''Push an impact to the front, dropping the oldest past capacity.'''
        event = RippleEvent(impactPoint=impactPoint, startTime=startTime)
        self._events.insert(0, event)
        del self._events[self._capacity:]
        return event

    def prune(self, now: float) -> int:
        '''Drop events older than the lifetime. Returns how many were dropped.'''
        before = len(self._events)
        self._events = [e for e in self._events if e.age(now) < self._lifetime]
        return before - len(self._events)

    def events(self) -> tuple[RippleEvent, ...]:
        '''Current events, newest first.'''
        return tuple(self._events)

    def clear(self) -> None:
        self._events = []

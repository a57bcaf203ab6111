#!/usr/bin/env python3
"""Point-in-time simulator snapshot"""

from dataclasses import dataclass

from mcp_xcode.domain.enums import Platform, SimulatorState


@dataclass(frozen=True)
class SimulatorInfo:
    id: str
    name: str
    state: SimulatorState
    platform: Platform
    runtime: str

    @property
    def is_booted(self) -> bool:
        return self.state is SimulatorState.BOOTED

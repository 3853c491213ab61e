"""Module with a data class object which represents a normalized MC particle.

This is the schema shared by the flat particle collections found in the input
events and by the collection of selected particles produced by the selector.
"""

from dataclasses import dataclass, replace
from enum import IntFlag

import numpy as np

from .base import KinematicsBase

__all__ = ["MCParticleFlag", "MCParticle"]


class MCParticleFlag(IntFlag):
    """Enumerates the bits of the MC particle classification bitfield."""

    PRIMARY = 1 << 0
    PHYSICAL_PRIMARY = 1 << 1
    SECONDARY_FROM_WEAK_DECAY = 1 << 2
    SECONDARY_FROM_MATERIAL = 1 << 3


@dataclass(eq=False)
class MCParticle(KinematicsBase):
    """Normalized MC truth particle.

    Attributes
    ----------
    label : int
        Index of the particle in its original truth record
    pdg_code : int
        Particle PDG code
    charge : int
        Electric charge in units of |e|/3
    energy : float
        Total energy in GeV
    momentum : np.ndarray
        3-momentum at the production point in GeV/c
    position : np.ndarray
        Location of the production vertex in cm
    t : float
        Production time in s
    mother_id : int
        Index of the mother particle in the truth record (-1 if none)
    first_daughter : int
        Index of the first daughter particle (-1 if none)
    last_daughter : int
        Index of the last daughter particle (-1 if none)
    generator_index : int
        Index of the generator which produced the particle
    status_code : int
        Generator status code
    mc_process_code : int
        Code of the physics process which created the particle
    flags : int
        Bitfield of :class:`MCParticleFlag` values
    """

    label: int = -1
    pdg_code: int = 0
    charge: int = 0
    energy: float = 0.0
    momentum: np.ndarray = None
    position: np.ndarray = None
    t: float = 0.0
    mother_id: int = -1
    first_daughter: int = -1
    last_daughter: int = -1
    generator_index: int = 0
    status_code: int = 0
    mc_process_code: int = 0
    flags: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (
        ("momentum", (3, np.float64)),
        ("position", (3, np.float64)),
    )

    def __post_init__(self):
        """Store the flags as a plain integer."""
        super().__post_init__()
        self.flags = int(self.flags)

    @property
    def is_primary(self):
        """Whether the particle is one of the generator primaries."""
        return bool(self.flags & MCParticleFlag.PRIMARY)

    @property
    def is_physical_primary(self):
        """Whether the particle is a physical primary."""
        return bool(self.flags & MCParticleFlag.PHYSICAL_PRIMARY)

    @property
    def is_secondary_from_weak_decay(self):
        """Whether the particle is produced in the weak decay of a strange
        hadron."""
        return bool(self.flags & MCParticleFlag.SECONDARY_FROM_WEAK_DECAY)

    @property
    def is_secondary_from_material(self):
        """Whether the particle is produced in an interaction with material."""
        return bool(self.flags & MCParticleFlag.SECONDARY_FROM_MATERIAL)

    @classmethod
    def from_track(cls, track, label, flags=0):
        """Builds a particle from a simulation truth track.

        The generator index, the status code and the process code of the
        track are propagated as is.

        Parameters
        ----------
        track : MCTrack
            Truth track to convert
        label : int
            Index of the track in the truth record
        flags : int, default 0
            Bitfield of :class:`MCParticleFlag` values

        Returns
        -------
        MCParticle
            Converted particle
        """
        return cls(
            label=label,
            pdg_code=track.pdg_code,
            charge=track.charge,
            energy=track.energy,
            momentum=track.momentum.copy(),
            position=track.position.copy(),
            t=track.t,
            mother_id=track.mother_id,
            first_daughter=track.first_daughter,
            last_daughter=track.last_daughter,
            generator_index=track.generator_index,
            status_code=track.status_code,
            mc_process_code=track.process_code,
            flags=flags,
        )

    def copy(self):
        """Returns an independant copy of the particle.

        Returns
        -------
        MCParticle
            Copy of the particle
        """
        return replace(
            self, momentum=self.momentum.copy(), position=self.position.copy()
        )

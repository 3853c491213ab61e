"""Module with a data class object which represents a simulation truth track.

This mirrors the content of one entry of the particle stack produced by the
event generator and the transport code.
"""

from dataclasses import dataclass

import numpy as np

from .base import KinematicsBase

__all__ = ["MCTrack"]


@dataclass(eq=False)
class MCTrack(KinematicsBase):
    """Simulation truth track.

    Attributes
    ----------
    id : int
        Index of the track in the stack
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
        Index of the mother track in the stack (-1 if none)
    first_daughter : int
        Index of the first daughter track (-1 if none)
    last_daughter : int
        Index of the last daughter track (-1 if none)
    generator_index : int
        Index of the generator which produced the track (0 is the primary
        generator of an embedded simulation)
    status_code : int
        Generator status code
    process_code : int
        Code of the physics process which created the track
    """

    id: int = -1
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
    process_code: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (
        ("momentum", (3, np.float64)),
        ("position", (3, np.float64)),
    )

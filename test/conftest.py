"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import numpy as np
import pytest

from mcselect.data import MCParticle, MCParticleFlag, MCTrack
from mcselect.event import TruthEvent


def momentum_at(eta, pt=1.0):
    """Builds a 3-momentum with a given pseudorapidity.

    Parameters
    ----------
    eta : float
        Pseudorapidity of the momentum
    pt : float, default 1.0
        Transverse momentum

    Returns
    -------
    np.ndarray
        (3) Momentum vector
    """
    return np.array([pt, 0.0, pt * np.sinh(eta)])


@pytest.fixture(name="make_track")
def fixture_make_track():
    """Returns a function which builds a charged, final-state pion track."""

    def make_track(track_id=0, eta=0.0, **kwargs):
        params = {
            "id": track_id,
            "pdg_code": 211,
            "charge": 3,
            "energy": 1.0,
            "momentum": momentum_at(eta),
            "status_code": 1,
        }
        params.update(kwargs)
        return MCTrack(**params)

    return make_track


@pytest.fixture(name="make_particle")
def fixture_make_particle():
    """Returns a function which builds a charged, physical primary pion."""

    def make_particle(label=0, eta=0.0, **kwargs):
        params = {
            "label": label,
            "pdg_code": 211,
            "charge": 3,
            "energy": 1.0,
            "momentum": momentum_at(eta),
            "status_code": 1,
            "flags": MCParticleFlag.PRIMARY | MCParticleFlag.PHYSICAL_PRIMARY,
        }
        params.update(kwargs)
        return MCParticle(**params)

    return make_particle


@pytest.fixture(name="truth_event")
def fixture_truth_event(make_track):
    """Five primary tracks, tracks 1 and 3 are not physical primaries."""
    tracks = [make_track(i) for i in range(5)]
    physical_primary = np.array([True, False, True, False, True])

    return TruthEvent(tracks, 5, physical_primary=physical_primary)


@pytest.fixture(name="flat_particles")
def fixture_flat_particles(make_particle):
    """Five primary particles, particles 1 and 3 are not physical primaries."""
    particles = []
    for i in range(5):
        flags = MCParticleFlag.PRIMARY
        if i % 2 == 0:
            flags |= MCParticleFlag.PHYSICAL_PRIMARY
        particles.append(make_particle(i, flags=flags))

    return particles

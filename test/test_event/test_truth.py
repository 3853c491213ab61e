"""Test the simulation truth record and its classification."""

import numpy as np
import pytest

from mcselect.data import MCParticleFlag
from mcselect.event import TruthEvent


class TestTruthEvent:
    """Test the access to the tracks of the stack."""

    def test_access(self, truth_event):
        """Test that tracks are addressed by their index."""
        assert truth_event.num_tracks == 5
        assert truth_event.num_primaries == 5
        assert truth_event.get_track(2).id == 2
        assert truth_event.get_track(5) is None
        assert truth_event.get_track(-1) is None

    def test_provided_classification(self, truth_event):
        """Test that a provided classification is used as is."""
        phys = [truth_event.is_physical_primary(i) for i in range(5)]
        assert phys == [True, False, True, False, True]

    def test_num_primaries_range(self, make_track):
        """Test that the number of primaries must fit in the stack."""
        with pytest.raises(AssertionError):
            TruthEvent([make_track(0)], 2)
        with pytest.raises(AssertionError):
            TruthEvent([make_track(0)], -1)

    def test_classification_length(self, make_track):
        """Test that the classification must cover every track."""
        with pytest.raises(AssertionError):
            TruthEvent([make_track(0)], 1, physical_primary=[True, False])


class TestClassification:
    """Test the classification derived from the stack content."""

    def test_primaries(self, make_track):
        """Test that only final-state primaries are physical primaries."""
        tracks = [make_track(0), make_track(1, status_code=2), make_track(2)]
        truth_event = TruthEvent(tracks, 3)

        phys = [truth_event.is_physical_primary(i) for i in range(3)]
        assert phys == [True, False, True]
        for i in range(3):
            assert not truth_event.is_secondary_from_weak_decay(i)
            assert not truth_event.is_secondary_from_material(i)

    def test_secondaries(self, make_track):
        """Test the classification of the transport products."""
        tracks = [
            make_track(0, pdg_code=211),
            make_track(1, pdg_code=3122, charge=0),
            make_track(2, pdg_code=22, charge=0, mother_id=0, process_code=4),
            make_track(3, pdg_code=2212, mother_id=1, process_code=4),
            make_track(4, pdg_code=11, mother_id=0, process_code=13),
            make_track(5, pdg_code=11, mother_id=2, process_code=4),
        ]
        truth_event = TruthEvent(tracks, 2)

        # Decay of a final-state pion, not a weak decay of a strange hadron
        assert truth_event.is_physical_primary(2)

        # Decay product of a Lambda
        assert not truth_event.is_physical_primary(3)
        assert truth_event.is_secondary_from_weak_decay(3)
        assert not truth_event.is_secondary_from_material(3)

        # Hadronic interaction in the material
        assert not truth_event.is_physical_primary(4)
        assert not truth_event.is_secondary_from_weak_decay(4)
        assert truth_event.is_secondary_from_material(4)

        # Decay of a secondary is neither of the above
        assert not truth_event.is_physical_primary(5)
        assert not truth_event.is_secondary_from_weak_decay(5)
        assert not truth_event.is_secondary_from_material(5)

    def test_missing_mother(self, make_track):
        """Test that tracks with no mother in the stack are not primaries."""
        tracks = [make_track(0), make_track(1, mother_id=7, process_code=4)]
        truth_event = TruthEvent(tracks, 1)
        assert not truth_event.is_physical_primary(1)
        assert not truth_event.is_secondary_from_weak_decay(1)

    def test_missing_track(self, make_track):
        """Test that missing tracks carry no classification."""
        truth_event = TruthEvent([make_track(0), None], 1)
        assert truth_event.num_tracks == 2
        assert truth_event.get_track(1) is None
        assert not truth_event.is_physical_primary(1)
        assert not truth_event.is_secondary_from_material(1)


class TestFromParticles:
    """Test the truth record built out of a flat particle collection."""

    def test_flags(self, make_particle):
        """Test that the classification is read from the flags."""
        primary = MCParticleFlag.PRIMARY
        particles = [
            make_particle(0, flags=primary | MCParticleFlag.PHYSICAL_PRIMARY),
            make_particle(1, flags=primary),
            make_particle(2, flags=MCParticleFlag.SECONDARY_FROM_WEAK_DECAY),
            make_particle(3, flags=primary | MCParticleFlag.SECONDARY_FROM_MATERIAL),
        ]
        truth_event = TruthEvent.from_particles(particles)

        # Only the leading primaries are counted
        assert truth_event.num_primaries == 2
        assert truth_event.num_tracks == 4
        assert truth_event.is_physical_primary(0)
        assert not truth_event.is_physical_primary(1)
        assert truth_event.is_secondary_from_weak_decay(2)
        assert truth_event.is_secondary_from_material(3)

    def test_content(self, make_particle):
        """Test that the particle content is carried by the tracks."""
        part = make_particle(0, eta=0.4, pdg_code=-11, charge=3, mc_process_code=4)
        track = TruthEvent.from_particles([part]).get_track(0)

        assert track.id == 0
        assert track.pdg_code == -11
        assert track.process_code == 4
        assert np.allclose(track.momentum, part.momentum)
        assert track.eta == pytest.approx(part.eta)

    def test_empty(self):
        """Test that an empty collection yields an empty record."""
        truth_event = TruthEvent.from_particles([])
        assert truth_event.num_tracks == 0
        assert truth_event.num_primaries == 0

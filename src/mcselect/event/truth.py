"""Module with the truth event, which gives access to the simulation stack."""

import numpy as np

from mcselect.data import MCParticleFlag, MCTrack
from mcselect.utils.globals import (
    DECAY_PROCESS,
    FINAL_STATE_STATUS,
    PRIMARY_PROCESS,
    WEAK_DECAY_PDGS,
)

__all__ = ["TruthEvent"]


class TruthEvent:
    """Simulation truth record of one event.

    Tracks are addressed by their dense index in the stack. The first
    `num_primaries` tracks are the particles produced by the generator, the
    rest are produced during the transport.

    Attributes
    ----------
    num_primaries : int
        Number of generator primaries at the front of the stack
    """

    def __init__(
        self,
        tracks,
        num_primaries,
        physical_primary=None,
        secondary_from_weak_decay=None,
        secondary_from_material=None,
    ):
        """Initialize the truth event.

        The classification arrays are derived from the stack content when
        they are not provided.

        Parameters
        ----------
        tracks : List[MCTrack]
            Tracks in the stack (`None` for tracks which cannot be loaded)
        num_primaries : int
            Number of generator primaries at the front of the stack
        physical_primary : np.ndarray, optional
            (N) Whether each track is a physical primary
        secondary_from_weak_decay : np.ndarray, optional
            (N) Whether each track is produced in a weak decay
        secondary_from_material : np.ndarray, optional
            (N) Whether each track is produced in the material
        """
        assert 0 <= num_primaries <= len(tracks), (
            f"The number of primaries ({num_primaries}) must be in "
            f"[0, {len(tracks)}]."
        )
        self._tracks = list(tracks)
        self.num_primaries = int(num_primaries)

        # Use the provided classification, derive whatever is missing
        num_tracks = len(self._tracks)
        if physical_primary is None:
            physical_primary = self._physical_primary()
        if secondary_from_weak_decay is None:
            secondary_from_weak_decay = self._weak_decay(physical_primary)
        if secondary_from_material is None:
            secondary_from_material = self._material(
                physical_primary, secondary_from_weak_decay
            )

        self._phys = np.asarray(physical_primary, dtype=bool)
        self._weak = np.asarray(secondary_from_weak_decay, dtype=bool)
        self._mat = np.asarray(secondary_from_material, dtype=bool)
        for key, arr in (
            ("physical_primary", self._phys),
            ("secondary_from_weak_decay", self._weak),
            ("secondary_from_material", self._mat),
        ):
            assert len(arr) == num_tracks, (
                f"The `{key}` array ({len(arr)}) must have one value per "
                f"track ({num_tracks})."
            )

    @classmethod
    def from_particles(cls, particles):
        """Builds a truth event out of a flat MC particle collection.

        The classification is read from the particle flags. The leading
        particles flagged as primary make up the primaries.

        Parameters
        ----------
        particles : List[MCParticle]
            Flat MC particle collection

        Returns
        -------
        TruthEvent
            Truth event wrapping the collection
        """
        tracks, flags = [], []
        for i, part in enumerate(particles):
            if part is None:
                tracks.append(None)
                flags.append(0)
                continue

            tracks.append(
                MCTrack(
                    id=i,
                    pdg_code=part.pdg_code,
                    charge=part.charge,
                    energy=part.energy,
                    momentum=part.momentum.copy(),
                    position=part.position.copy(),
                    t=part.t,
                    mother_id=part.mother_id,
                    first_daughter=part.first_daughter,
                    last_daughter=part.last_daughter,
                    generator_index=part.generator_index,
                    status_code=part.status_code,
                    process_code=part.mc_process_code,
                )
            )
            flags.append(part.flags)

        flags = np.asarray(flags, dtype=np.int64)
        num_primaries = 0
        while num_primaries < len(flags) and (
            flags[num_primaries] & MCParticleFlag.PRIMARY
        ):
            num_primaries += 1

        weak = (flags & MCParticleFlag.SECONDARY_FROM_WEAK_DECAY) > 0
        material = (flags & MCParticleFlag.SECONDARY_FROM_MATERIAL) > 0

        return cls(
            tracks,
            num_primaries,
            physical_primary=(flags & MCParticleFlag.PHYSICAL_PRIMARY) > 0,
            secondary_from_weak_decay=weak,
            secondary_from_material=material,
        )

    @property
    def num_tracks(self):
        """Number of tracks in the stack."""
        return len(self._tracks)

    def get_track(self, track_id):
        """Fetches one track from the stack.

        Parameters
        ----------
        track_id : int
            Index of the track in the stack

        Returns
        -------
        MCTrack
            Track, `None` if it cannot be found
        """
        if track_id < 0 or track_id >= len(self._tracks):
            return None

        return self._tracks[track_id]

    def is_physical_primary(self, track_id):
        """Whether a track is a physical primary."""
        return bool(self._phys[track_id])

    def is_secondary_from_weak_decay(self, track_id):
        """Whether a track is produced in the weak decay of a strange hadron."""
        return bool(self._weak[track_id])

    def is_secondary_from_material(self, track_id):
        """Whether a track is produced in an interaction with material."""
        return bool(self._mat[track_id])

    def _mother(self, track):
        """Returns the mother of a track, if it is in the stack."""
        if track is None or track.mother_id < 0:
            return None

        return self.get_track(track.mother_id)

    def _physical_primary(self):
        """Physical primaries are the final-state generator particles and the
        decay products of final-state primaries which do not decay weakly.

        Returns
        -------
        np.ndarray
            (N) Physical primary flag of each track
        """
        result = np.zeros(len(self._tracks), dtype=bool)
        for i, track in enumerate(self._tracks):
            if track is None:
                continue

            if i < self.num_primaries:
                result[i] = track.status_code == FINAL_STATE_STATUS
                continue

            mother = self._mother(track)
            result[i] = (
                mother is not None
                and track.mother_id < self.num_primaries
                and mother.status_code == FINAL_STATE_STATUS
                and track.process_code == DECAY_PROCESS
                and abs(mother.pdg_code) not in WEAK_DECAY_PDGS
            )

        return result

    def _weak_decay(self, physical_primary):
        """Weak decay secondaries are decay products of strange hadrons.

        Parameters
        ----------
        physical_primary : np.ndarray
            (N) Physical primary flag of each track

        Returns
        -------
        np.ndarray
            (N) Weak decay flag of each track
        """
        result = np.zeros(len(self._tracks), dtype=bool)
        for i, track in enumerate(self._tracks):
            if track is None or physical_primary[i]:
                continue

            mother = self._mother(track)
            result[i] = (
                mother is not None
                and track.process_code == DECAY_PROCESS
                and abs(mother.pdg_code) in WEAK_DECAY_PDGS
            )

        return result

    def _material(self, physical_primary, weak_decay):
        """Material secondaries are all the other transport products.

        Parameters
        ----------
        physical_primary : np.ndarray
            (N) Physical primary flag of each track
        weak_decay : np.ndarray
            (N) Weak decay flag of each track

        Returns
        -------
        np.ndarray
            (N) Material flag of each track
        """
        result = np.zeros(len(self._tracks), dtype=bool)
        for i, track in enumerate(self._tracks):
            if track is None or i < self.num_primaries:
                continue

            result[i] = (
                not physical_primary[i]
                and not weak_decay[i]
                and track.process_code not in (PRIMARY_PROCESS, DECAY_PROCESS)
            )

        return result

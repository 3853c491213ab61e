"""Strategies used to fill the selected particle collection.

Both strategies apply the same cuts and fill the output in the same way: a
selected element is appended at the next free position of the output and the
correspondence between its input index and its output index is recorded.
"""

from abc import ABC, abstractmethod

from mcselect.data import MCParticle, MCParticleFlag

__all__ = ["TruthTrackConverter", "FlatParticleCopier"]


class SelectionStrategy(ABC):
    """Base class of the selection strategies.

    Attributes
    ----------
    cuts : ParticleCuts
        Cuts applied to each particle
    output : NamedObjectList
        Collection of selected particles
    index_map : IndexMap
        Map from input indexes to output indexes
    """

    def __init__(self, cuts, output, index_map):
        """Store the cuts and the output objects.

        Parameters
        ----------
        cuts : ParticleCuts
            Cuts applied to each particle
        output : NamedObjectList
            Collection of selected particles
        index_map : IndexMap
            Map from input indexes to output indexes
        """
        self.cuts = cuts
        self.output = output
        self.index_map = index_map

    def reset(self, num_inputs=None):
        """Clears the output objects at the start of an event.

        Parameters
        ----------
        num_inputs : int, optional
            Number of input elements, used to grow the index map
        """
        self.output.clear()
        self.index_map.clear()
        if num_inputs is not None:
            self.index_map.reserve(num_inputs)

    def record(self, index, particle):
        """Append a selected particle to the output, map its index.

        Parameters
        ----------
        index : int
            Index of the particle in the input
        particle : MCParticle
            Particle to append
        """
        self.index_map.set(index, len(self.output))
        self.output.append(particle)

    @abstractmethod
    def process(self, source):
        """Fill the output objects from one event worth of input.

        Parameters
        ----------
        source : object
            Input of the strategy for one event
        """
        raise NotImplementedError


class TruthTrackConverter(SelectionStrategy):
    """Converts the tracks of a simulation truth stack into MC particles."""

    name = "truth"

    def process(self, mc_event):
        """Convert the selected tracks of a truth event.

        Parameters
        ----------
        mc_event : TruthEvent
            Simulation truth record of the event
        """
        num_tracks = mc_event.num_tracks
        num_primaries = mc_event.num_primaries
        self.reset(num_tracks)

        for track_id in range(num_tracks):
            track = mc_event.get_track(track_id)
            if track is None:
                continue

            phys_prim = mc_event.is_physical_primary(track_id)
            if not self.cuts.accept(
                track.eta,
                track.pdg_code,
                track.charge,
                track.generator_index,
                phys_prim,
            ):
                continue

            # Primaries are the leading tracks of the stack
            flags = 0
            if track_id < num_primaries:
                flags |= MCParticleFlag.PRIMARY
            if phys_prim:
                flags |= MCParticleFlag.PHYSICAL_PRIMARY
            if mc_event.is_secondary_from_weak_decay(track_id):
                flags |= MCParticleFlag.SECONDARY_FROM_WEAK_DECAY
            if mc_event.is_secondary_from_material(track_id):
                flags |= MCParticleFlag.SECONDARY_FROM_MATERIAL

            self.record(track_id, MCParticle.from_track(track, track_id, flags))


class FlatParticleCopier(SelectionStrategy):
    """Copies the selected particles of a flat MC particle collection.

    The particles are copied as is: the primary flag is inherited from the
    input particle, it is not recomputed.
    """

    name = "flat"

    def process(self, particles):
        """Copy the selected particles of a flat collection.

        Parameters
        ----------
        particles : List[MCParticle]
            Flat MC particle collection of the event
        """
        if particles is None:
            return

        self.reset(len(particles))
        for index, part in enumerate(particles):
            if part is None:
                continue

            if not self.cuts.accept(
                part.eta,
                part.pdg_code,
                part.charge,
                part.generator_index,
                part.is_physical_primary,
            ):
                continue

            self.record(index, part.copy())

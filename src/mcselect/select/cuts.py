"""Particle-level selection criteria shared by all the selection strategies."""

from dataclasses import dataclass

from mcselect.utils.globals import NEUTRAL_HADRON_PDGS, PRIMARY_GENERATOR

__all__ = ["ParticleCuts"]


@dataclass(frozen=True)
class ParticleCuts:
    """Set of cuts applied to one MC particle at a time.

    The cuts are applied in the order of the attributes below and the
    evaluation stops at the first failing cut.

    Attributes
    ----------
    eta_max : float, default 1.0
        Maximum absolute pseudorapidity. The cut is disabled if not positive
    reject_k0l_neutron : bool, default False
        Reject K0L and neutrons
    charged_only : bool, default False
        Reject neutral particles
    only_primary_generator : bool, default False
        Reject particles not produced by the primary generator
    only_physical_primary : bool, default True
        Reject particles which are not physical primaries
    """

    eta_max: float = 1.0
    reject_k0l_neutron: bool = False
    charged_only: bool = False
    only_primary_generator: bool = False
    only_physical_primary: bool = True

    def first_failure(self, eta, pdg_code, charge, generator_index, physical_primary):
        """Evaluates the cuts in order, returns the first one to fail.

        Parameters
        ----------
        eta : float
            Pseudorapidity of the particle
        pdg_code : int
            PDG code of the particle
        charge : int
            Electric charge of the particle
        generator_index : int
            Index of the generator which produced the particle
        physical_primary : bool
            Whether the particle is a physical primary

        Returns
        -------
        str
            Name of the first failing cut, `None` if the particle passes
        """
        if self.eta_max > 0.0 and abs(eta) > self.eta_max:
            return "eta"

        if self.reject_k0l_neutron and pdg_code in NEUTRAL_HADRON_PDGS:
            return "k0l_neutron"

        if self.charged_only and charge == 0:
            return "charge"

        if self.only_primary_generator and generator_index != PRIMARY_GENERATOR:
            return "generator"

        if self.only_physical_primary and not physical_primary:
            return "physical_primary"

        return None

    def accept(self, eta, pdg_code, charge, generator_index, physical_primary):
        """Checks whether a particle passes all the cuts.

        See :meth:`first_failure` for the parameters.

        Returns
        -------
        bool
            `True` if the particle passes all the cuts
        """
        return (
            self.first_failure(
                eta, pdg_code, charge, generator_index, physical_primary
            )
            is None
        )

"""Module with a parent class of all data structures."""

from dataclasses import dataclass

import numpy as np

__all__ = ["DataBase", "KinematicsBase"]


@dataclass(eq=False)
class DataBase:
    """Base class of all data structures.

    Defines basic methods shared by all data structures.
    """

    # Fixed-length attributes as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    def __post_init__(self):
        """Immediately called after building the class attributes.

        Gives default values to array-like attributes. If a default value was
        provided in the attribute definition, all instances of this class
        would point to the same memory location. Provided values are cast to
        arrays of the expected type.
        """
        # Provide default values to the fixed-length array attributes
        for attr, size in self._fixed_length_attrs:
            dtype = np.float32
            if isinstance(size, tuple):
                size, dtype = size
            if getattr(self, attr) is None:
                setattr(self, attr, np.zeros(size, dtype=dtype))
            else:
                setattr(self, attr, np.asarray(getattr(self, attr), dtype=dtype))

    def __eq__(self, other):
        """Checks that all attributes of two class instances are the same.

        This overloads the default dataclass `__eq__` method to include an
        appopriate check for vector (numpy) attributes.

        Parameters
        ----------
        other : obj
            Other instance of the same object class

        Returns
        -------
        bool
            `True` if all attributes of both objects are identical
        """
        if self.__class__ != other.__class__:
            return False

        for k, v in self.__dict__.items():
            v_other = getattr(other, k)
            if np.isscalar(v):
                if v_other != v:
                    return False

            elif v.shape != v_other.shape or (v_other != v).any():
                return False

        return True


@dataclass(eq=False)
class KinematicsBase(DataBase):
    """Base class of the data structures which carry a 3-momentum.

    Provides the usual derived kinematic quantities. Subclasses must define
    a `momentum` fixed-length attribute.
    """

    @property
    def p(self):
        """Magnitude of the momentum.

        Returns
        -------
        float
            Norm of the momentum vector
        """
        return float(np.linalg.norm(self.momentum))

    @property
    def pt(self):
        """Momentum transverse to the beam (z) axis.

        Returns
        -------
        float
            Transverse momentum
        """
        return float(np.hypot(self.momentum[0], self.momentum[1]))

    @property
    def eta(self):
        """Pseudorapidity of the particle.

        Particles travelling along the beam axis (or at rest) are assigned a
        very large value carrying the sign of the longitudinal momentum.

        Returns
        -------
        float
            Pseudorapidity
        """
        p, pz = self.p, float(self.momentum[2])
        if p == abs(pz):
            return float(np.copysign(1.0e30, pz))

        return 0.5 * float(np.log((p + pz) / (p - pz)))

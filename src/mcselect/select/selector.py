"""Selection of Monte-Carlo truth particles."""

from mcselect.data import IndexMap, MCParticle, NamedObjectList
from mcselect.errors import InputTypeError, MissingInputError, SetupError
from mcselect.event import EventFormat
from mcselect.task.base import TaskBase
from mcselect.utils.globals import DEFAULT_OUTPUT_NAME, MAP_SUFFIX, STD_PARTICLE_NAME
from mcselect.utils.logger import logger

from .cuts import ParticleCuts
from .strategy import FlatParticleCopier, TruthTrackConverter

__all__ = ["MCTrackSelector"]


class MCTrackSelector(TaskBase):
    """Selects MC truth particles and publishes them under a common schema.

    On the first event, the selector detects the format of the truth
    information, creates its output collection and index map and publishes
    them in the event. On every event, it fills them with the particles which
    pass the cuts:
    - truth events: the tracks of the simulation stack are converted;
    - flat events: the particles of the standard collection are copied.

    Typical configuration should look like:

    .. code-block:: yaml

        tasks:
          mc_track_selector:
            output_name: MCParticlesSelected
            eta_max: 0.9
            charged_only: true
    """

    # Name of the task (as specified in the configuration)
    name = "mc_track_selector"

    # Alternative allowed names of the task
    aliases = ("mc_selector",)

    # The event and the truth record are checked explicitly at setup
    _keys = (("event", False), ("mc_event", False))

    def __init__(
        self,
        output_name=DEFAULT_OUTPUT_NAME,
        only_physical_primary=True,
        reject_k0l_neutron=False,
        charged_only=False,
        only_primary_generator=False,
        eta_max=1.0,
    ):
        """Initialize the selection parameters.

        Parameters
        ----------
        output_name : str, default 'MCParticlesSelected'
            Name of the selected particle collection. The index map is
            published under the same name with a `_Map` suffix
        only_physical_primary : bool, default True
            Only keep physical primaries
        reject_k0l_neutron : bool, default False
            Reject K0L and neutrons
        charged_only : bool, default False
            Only keep charged particles
        only_primary_generator : bool, default False
            Only keep particles produced by the primary generator
        eta_max : float, default 1.0
            Maximum absolute pseudorapidity (disabled if not positive)
        """
        self.output_name = output_name
        self.map_name = output_name + MAP_SUFFIX
        self.cuts = ParticleCuts(
            eta_max=eta_max,
            reject_k0l_neutron=reject_k0l_neutron,
            charged_only=charged_only,
            only_primary_generator=only_primary_generator,
            only_physical_primary=only_physical_primary,
        )

        # Run-level state, set on the first event
        self.initialized = False
        self.format = None
        self.strategy = None
        self.particles_in = None
        self.particles_out = None
        self.particles_map = None

    def process(self, data):
        """Select the MC particles of one event.

        Parameters
        ----------
        data : dict
            Dictionary of data products

        Returns
        -------
        dict
            Selected particles and index map, under their published names
        """
        if not self.initialized:
            self.initialize(data)

        # The truth record is provided by the host for each event
        if self.format is EventFormat.TRUTH:
            mc_event = data.get("mc_event")
            if mc_event is None:
                raise SetupError("Could not retrieve MC event!")
            self.strategy.process(mc_event)
        else:
            self.strategy.process(self.particles_in)

        logger.debug(
            "Selected %d MC particles in %s.", len(self.particles_out), self.output_name
        )

        return {self.output_name: self.particles_out, self.map_name: self.particles_map}

    def initialize(self, data):
        """Detect the input format, create and publish the output objects.

        Parameters
        ----------
        data : dict
            Dictionary of data products of the first event

        Raises
        ------
        FatalError
            If any of the inputs are missing or the output cannot be published
        """
        event = data.get("event")
        if event is None:
            raise SetupError("Could not retrieve event!")

        self.format = event.format

        # The output array must not already be in the event
        self.particles_out = NamedObjectList(self.output_name, MCParticle)
        self.particles_map = IndexMap(self.map_name)
        event.add_object(self.particles_out)
        event.add_object(self.particles_map)

        # In flat events, the particles are copied from the standard collection
        if self.format is EventFormat.FLAT:
            particles = event.find_object(STD_PARTICLE_NAME)
            if particles is None:
                raise MissingInputError(
                    f"Could not retrieve the MC particle collection "
                    f"`{STD_PARTICLE_NAME}`!"
                )

            cls = getattr(particles, "element_class", None)
            if cls is None or not issubclass(cls, MCParticle):
                raise InputTypeError(
                    f"{self.name}: Collection {STD_PARTICLE_NAME} does not "
                    "contain MCParticle!"
                )

            self.particles_in = particles
            self.strategy = FlatParticleCopier(
                self.cuts, self.particles_out, self.particles_map
            )

        else:
            self.strategy = TruthTrackConverter(
                self.cuts, self.particles_out, self.particles_map
            )

        if data.get("mc_event") is None:
            raise SetupError("Could not retrieve MC event!")

        self.initialized = True
        logger.info(
            "MC particle selector initialized on %s events, publishing `%s` "
            "and `%s`.",
            self.format.value,
            self.output_name,
            self.map_name,
        )

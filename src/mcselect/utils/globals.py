"""Constants shared across the package."""

# Default name of the selected particle collection
DEFAULT_OUTPUT_NAME = "MCParticlesSelected"

# Suffix appended to the output collection name to name its index map
MAP_SUFFIX = "_Map"

# Name of the standard flat MC particle collection in an event
STD_PARTICLE_NAME = "mcparticles"

# Default initial size of an index map
DEFAULT_MAP_SIZE = 99999

# Value of an unmapped entry in an index map
INVAL_IDX = -1

# PDG codes
K0L_PDG = 130
K0S_PDG = 310
KPLUS_PDG = 321
NEUTRON_PDG = 2112
LAMBDA_PDG = 3122
SIGMAP_PDG = 3222
SIGMAM_PDG = 3112
XIM_PDG = 3312
XI0_PDG = 3322
OMEGAM_PDG = 3334

# PDG codes rejected by the K0L/neutron cut
NEUTRAL_HADRON_PDGS = (K0L_PDG, NEUTRON_PDG)

# Absolute PDG codes of the weakly decaying strange hadrons
WEAK_DECAY_PDGS = (
    K0L_PDG,
    K0S_PDG,
    KPLUS_PDG,
    LAMBDA_PDG,
    SIGMAP_PDG,
    SIGMAM_PDG,
    XIM_PDG,
    XI0_PDG,
    OMEGAM_PDG,
)

# Generator status code of a final-state particle
FINAL_STATE_STATUS = 1

# Simulation process codes
PRIMARY_PROCESS = 0
DECAY_PROCESS = 4

# Index of the primary generator in embedded simulations
PRIMARY_GENERATOR = 0

from enum import Enum


class Metric(Enum):
    """ Information loss metrics offered by the engine """

    AECS = "AECS"
    DM = "DM"
    DMSTAR = "DMSTAR"
    ENTROPY = "ENTROPY"
    HEIGHT = "HEIGHT"
    NMENTROPY = "NMENTROPY"
    PREC = "PREC"
    NMPREC = "NMPREC"

from __future__ import annotations

from enum import IntEnum


class ActiveSelect(IntEnum):
    """
    Policies for picking the next active node to discharge.
    """

    #: Node with the highest distance label; ties go to the earliest active node.
    HIGHEST_LABEL = 1
    #: Earliest active node, in the order nodes acquired excess.
    FIFO = 2
    #: Use a user-defined function for node selection logic.
    USER_DEFINED = 99


class AdmissibleSelect(IntEnum):
    """
    Policies for picking the admissible successor to push flow to.
    """

    #: First successor, in arc insertion order, that forms an admissible arc.
    FIRST_ADMISSIBLE = 1
    #: Uniformly random admissible successor from a seeded generator.
    RANDOM_ADMISSIBLE = 2
    #: Use a user-defined function for neighbor selection logic.
    USER_DEFINED = 99

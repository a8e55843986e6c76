"""Stats shared by every entity."""

from __future__ import annotations

from typing import Annotated

from contract.markers import Exposed, map_comment, map_node
from contract.tags import MapTag


@map_node("StatsManager", MapTag.MANAGER | MapTag.GAMEPLAY)
@map_comment("Stats that are used by any entities")
class StatsManager:
    pv: Annotated[int, Exposed()]
    pm: Annotated[int, Exposed()]
    sp: Annotated[int, Exposed()]
    actions: Annotated[int, Exposed()]


class StatBlock:
    """Plain helper without a node marker."""

    manager: StatsManager

"""
Vassalage forest.

Every town has at most one master and any number of vassals. Links are kept
in both directions by town identifier. Hierarchy walks use an explicit stack
with a visited set, so a corrupted (cyclic) hierarchy raises
VassalageCycleError instead of recursing forever.
"""

from typing import Dict, List, Optional

import structlog

from ..exceptions import VassalageCycleError
from .towns import NO_TOWNID, NO_VALUE, TownID, TownStore

logger = structlog.get_logger()


class VassalageForest:
    """Master/vassal links between the towns of a store."""

    def __init__(self, store: TownStore, cycle_guard: bool = True, tax_share: float = 0.1):
        self.store = store
        self.cycle_guard = cycle_guard
        self.tax_share = tax_share
        self.masters: Dict[TownID, TownID] = {}
        self.vassals: Dict[TownID, List[TownID]] = {}

    def master_of(self, town_id: TownID) -> Optional[TownID]:
        return self.masters.get(town_id)

    def attach(self, vassal_id: TownID, master_id: TownID) -> bool:
        """
        Make ``vassal_id`` a vassal of ``master_id``.

        Fails without mutation if either town is unknown or the vassal
        already has a master. With the cycle guard on, also fails when the
        vassal is the master itself or one of the master's ancestors.
        """
        if vassal_id not in self.store or master_id not in self.store:
            logger.debug(
                "Vassalship rejected",
                vassal_id=vassal_id,
                master_id=master_id,
                reason="unknown town",
            )
            return False

        if vassal_id in self.masters:
            logger.debug(
                "Vassalship rejected",
                vassal_id=vassal_id,
                master_id=master_id,
                reason="vassal already has a master",
            )
            return False

        if self.cycle_guard and vassal_id in self._walk_up(master_id):
            logger.debug(
                "Vassalship rejected",
                vassal_id=vassal_id,
                master_id=master_id,
                reason="would create a cycle",
            )
            return False

        self.masters[vassal_id] = master_id
        self.vassals.setdefault(master_id, []).append(vassal_id)
        logger.debug("Vassalship added", vassal_id=vassal_id, master_id=master_id)
        return True

    def children_of(self, town_id: TownID) -> List[TownID]:
        if town_id not in self.store:
            return [NO_TOWNID]
        return list(self.vassals.get(town_id, []))

    def ancestor_chain(self, town_id: TownID) -> List[TownID]:
        """The town followed by its master, its master's master, up to the root."""
        if town_id not in self.store:
            return [NO_TOWNID]
        return self._walk_up(town_id)

    def _walk_up(self, town_id: TownID) -> List[TownID]:
        chain = [town_id]
        seen = {town_id}
        current = self.masters.get(town_id)
        while current is not None:
            if current in seen:
                raise VassalageCycleError(current)
            chain.append(current)
            seen.add(current)
            current = self.masters.get(current)
        return chain

    def detach(self, town_id: TownID) -> None:
        """
        Unlink a town that is about to be removed.

        Its vassals move to its own master (appended after the master's
        existing vassals), or become roots when it has none.
        """
        orphans = [v for v in self.vassals.pop(town_id, []) if v != town_id]
        master_id = self.masters.pop(town_id, None)
        if master_id == town_id:
            master_id = None

        if master_id is None:
            for vassal_id in orphans:
                del self.masters[vassal_id]
        else:
            siblings = self.vassals[master_id]
            for vassal_id in orphans:
                self.masters[vassal_id] = master_id
                siblings.append(vassal_id)
            siblings.remove(town_id)
            if not siblings:
                del self.vassals[master_id]

        logger.debug(
            "Town detached from vassalage",
            town_id=town_id,
            master_id=master_id,
            reparented=len(orphans),
        )

    def clear(self) -> None:
        self.masters.clear()
        self.vassals.clear()

    def deepest_chain(self, town_id: TownID) -> List[TownID]:
        """
        Longest path from ``town_id`` down to a leaf vassal, root first.

        Among equally long chains the one under the earliest added vassal wins.
        """
        if town_id not in self.store:
            return [NO_TOWNID]

        # node -> (chain length, vassal the chain continues through)
        depth: Dict[TownID, int] = {}
        next_vassal: Dict[TownID, Optional[TownID]] = {}
        for node in self._post_order(town_id):
            longest, through = 0, None
            for child in self.vassals.get(node, []):
                if depth[child] > longest:
                    longest, through = depth[child], child
            depth[node] = longest + 1
            next_vassal[node] = through

        chain = []
        current: Optional[TownID] = town_id
        while current is not None:
            chain.append(current)
            current = next_vassal[current]
        return chain

    def aggregate_tax(self, town_id: TownID) -> int:
        """
        Net tax collected by ``town_id``.

        A town keeps its own tax plus a share of each vassal's aggregate. If
        the town has a master, its share is subtracted from the result.
        """
        if town_id not in self.store:
            return NO_VALUE

        totals: Dict[TownID, int] = {}
        for node in self._post_order(town_id):
            total = self.store.get(node).tax
            for child in self.vassals.get(node, []):
                total += int(totals[child] * self.tax_share)
            totals[node] = total

        net = totals[town_id]
        if town_id in self.masters:
            net -= int(net * self.tax_share)
        return net

    def _post_order(self, root: TownID) -> List[TownID]:
        """Subtree of ``root`` with every vassal listed before its master."""
        order: List[TownID] = []
        seen = {root}
        stack = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                order.append(node)
                continue
            stack.append((node, True))
            for child in reversed(self.vassals.get(node, [])):
                if child in seen:
                    raise VassalageCycleError(child)
                seen.add(child)
                stack.append((child, False))
        return order

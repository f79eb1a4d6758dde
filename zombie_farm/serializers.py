"""Serializers for converting farm snapshots to plain dictionaries.

The host's save layer stores whatever JSON it likes; these helpers give it a
stable, JSON-safe shape. Decimals are written as strings so balances come
back exact, and enums are written by value.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from zombie_farm.enums import QualityTier, ZombieMood, ZombieStatus, ZombieTier, ZombieType
from zombie_farm.models import (
    Caretaker,
    Coordinates,
    DecayState,
    EmptyPlot,
    FarmSnapshot,
    GrowingZombie,
    OccupiedPlot,
    Plot,
    RaisedZombie,
    StatBlock,
)


def _coords_to_dict(coords: Optional[Coordinates]) -> Optional[Dict[str, float]]:
    if coords is None:
        return None
    return {"x": coords.x, "y": coords.y}


def _coords_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Coordinates]:
    if data is None:
        return None
    return Coordinates(x=data["x"], y=data["y"])


def _stats_to_dict(stats: Optional[StatBlock]) -> Optional[Dict[str, int]]:
    if stats is None:
        return None
    return {"max_hp": stats.max_hp, "attack": stats.attack, "defense": stats.defense}


def _stats_from_dict(data: Optional[Dict[str, Any]]) -> Optional[StatBlock]:
    if data is None:
        return None
    return StatBlock(max_hp=data["max_hp"], attack=data["attack"], defense=data["defense"])


class PlotSerializer:
    """Serializer for plots and the zombies growing in them."""

    @staticmethod
    def to_dict(plot: Plot) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": plot.id,
            "coordinates": _coords_to_dict(plot.coordinates),
        }
        if isinstance(plot, OccupiedPlot):
            growing = plot.zombie
            data["care_level"] = plot.care_level
            data["zombie"] = {
                "id": growing.id,
                "zombie_type": growing.zombie_type.value,
                "buried_at": growing.buried_at,
                "happiness": growing.happiness,
                "boosted_time": growing.boosted_time,
            }
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Plot:
        coordinates = _coords_from_dict(data.get("coordinates"))
        zombie_data = data.get("zombie")
        if zombie_data is None:
            return EmptyPlot(id=data["id"], coordinates=coordinates)

        growing = GrowingZombie(
            id=zombie_data["id"],
            zombie_type=ZombieType(zombie_data["zombie_type"]),
            buried_at=zombie_data["buried_at"],
            happiness=zombie_data.get("happiness", 50),
            boosted_time=zombie_data.get("boosted_time", 0.0),
        )
        return OccupiedPlot(
            id=data["id"],
            coordinates=coordinates,
            zombie=growing,
            care_level=data.get("care_level", 50),
        )


class ZombieSerializer:
    """Serializer for raised zombies."""

    @staticmethod
    def to_dict(zombie: RaisedZombie) -> Dict[str, Any]:
        state = zombie.decay
        return {
            "id": zombie.id,
            "zombie_type": zombie.zombie_type.value,
            "tier": zombie.tier.value,
            "quality": zombie.quality.value,
            "planted_at": zombie.planted_at,
            "matured_at": zombie.matured_at,
            "harvested_at": zombie.harvested_at,
            "position": _coords_to_dict(zombie.position),
            "target_position": _coords_to_dict(zombie.target_position),
            "max_hp": zombie.max_hp,
            "current_hp": zombie.current_hp,
            "attack": zombie.attack,
            "defense": zombie.defense,
            "speed": zombie.speed,
            "decay": {
                "last_evaluated_at": state.last_evaluated_at,
                "last_fed_at": state.last_fed_at,
                "last_pet_at": state.last_pet_at,
                "condition": state.condition,
                "sheltered": state.sheltered,
                "contained": state.contained,
            },
            "happiness": zombie.happiness,
            "level": zombie.level,
            "experience": zombie.experience,
            "permanent_injuries": sorted(zombie.permanent_injuries),
            "battle_scars": zombie.battle_scars,
            "combat_refusal_chance": zombie.combat_refusal_chance,
            "status": zombie.status.value,
            "mood": zombie.mood.value,
            "is_wandering": zombie.is_wandering,
            "mutations": dict(zombie.mutations),
            "raised_stats": _stats_to_dict(zombie.raised_stats),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> RaisedZombie:
        state = data["decay"]
        return RaisedZombie(
            id=data["id"],
            zombie_type=ZombieType(data["zombie_type"]),
            tier=ZombieTier(data["tier"]),
            quality=QualityTier(data["quality"]),
            planted_at=data["planted_at"],
            matured_at=data["matured_at"],
            harvested_at=data["harvested_at"],
            position=_coords_from_dict(data["position"]),
            target_position=_coords_from_dict(data["target_position"]),
            max_hp=data["max_hp"],
            current_hp=data["current_hp"],
            attack=data["attack"],
            defense=data["defense"],
            speed=data["speed"],
            decay=DecayState(
                last_evaluated_at=state["last_evaluated_at"],
                last_fed_at=state.get("last_fed_at"),
                last_pet_at=state.get("last_pet_at"),
                condition=state.get("condition", 1.0),
                sheltered=state.get("sheltered", False),
                contained=state.get("contained", False),
            ),
            happiness=data.get("happiness", 50),
            level=data.get("level", 1),
            experience=data.get("experience", 0),
            permanent_injuries=frozenset(data.get("permanent_injuries", ())),
            battle_scars=data.get("battle_scars", 0),
            combat_refusal_chance=data.get("combat_refusal_chance", 0.0),
            status=ZombieStatus(data.get("status", ZombieStatus.WANDERING.value)),
            mood=ZombieMood(data.get("mood", ZombieMood.HAPPY.value)),
            is_wandering=data.get("is_wandering", True),
            mutations=dict(data.get("mutations", {})),
            raised_stats=_stats_from_dict(data.get("raised_stats")),
        )


class SnapshotSerializer:
    """Serializer for whole farm snapshots."""

    @staticmethod
    def to_dict(snapshot: FarmSnapshot) -> Dict[str, Any]:
        """Convert a snapshot to a JSON-safe dictionary.

        Returns:
            Dictionary with plots, zombies, inventory (amounts as strings),
            caretaker (or None) and activity counters
        """
        caretaker = None
        if snapshot.caretaker is not None:
            caretaker = {"experience": snapshot.caretaker.experience}
        return {
            "plots": {pid: PlotSerializer.to_dict(p) for pid, p in snapshot.plots.items()},
            "zombies": {zid: ZombieSerializer.to_dict(z) for zid, z in snapshot.zombies.items()},
            "inventory": {name: str(amount) for name, amount in snapshot.inventory.items()},
            "caretaker": caretaker,
            "activity": dict(snapshot.activity),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> FarmSnapshot:
        caretaker_data = data.get("caretaker")
        caretaker = None
        if caretaker_data is not None:
            caretaker = Caretaker(experience=caretaker_data.get("experience", 0))
        return FarmSnapshot(
            plots={pid: PlotSerializer.from_dict(p) for pid, p in data.get("plots", {}).items()},
            zombies={
                zid: ZombieSerializer.from_dict(z) for zid, z in data.get("zombies", {}).items()
            },
            inventory={name: Decimal(amount) for name, amount in data.get("inventory", {}).items()},
            caretaker=caretaker,
            activity=dict(data.get("activity", {})),
        )

"""Tests for snapshot serialization."""

import json
from decimal import Decimal

from zombie_farm.enums import QualityTier, ZombieStatus, ZombieType
from zombie_farm.models import (
    Caretaker,
    Coordinates,
    EmptyPlot,
    FarmSnapshot,
    GrowingZombie,
    OccupiedPlot,
    StatBlock,
)
from zombie_farm.serializers import SnapshotSerializer


class TestSnapshotSerializer:
    """Snapshots survive a trip through JSON."""

    def test_full_snapshot_through_json(self, make_zombie):
        zombie = make_zombie(
            "z1",
            quality=QualityTier.GOLD,
            decay={"last_fed_at": 5.0, "condition": 0.93, "sheltered": True},
            permanent_injuries=frozenset({"missing arm"}),
            mutations={"glow": 0.3},
            raised_stats=StatBlock(120, 12, 5),
        )
        snapshot = FarmSnapshot(
            plots={
                "p1": EmptyPlot("p1"),
                "p2": OccupiedPlot(
                    "p2",
                    Coordinates(3, 4),
                    GrowingZombie("g1", ZombieType.CUPID, buried_at=7.0, happiness=60),
                    care_level=70,
                ),
            },
            zombies={"z1": zombie},
            inventory={"Brains": Decimal("2.5")},
            caretaker=Caretaker(experience=40),
            activity={"Zombie Raised": 3},
        )

        data = json.loads(json.dumps(SnapshotSerializer.to_dict(snapshot)))
        restored = SnapshotSerializer.from_dict(data)

        assert restored == snapshot

    def test_shape(self, make_zombie):
        snapshot = FarmSnapshot(zombies={"z1": make_zombie("z1")}, inventory={"Brains": Decimal(1)})
        data = SnapshotSerializer.to_dict(snapshot)

        assert data["inventory"] == {"Brains": "1"}
        assert data["caretaker"] is None
        assert data["zombies"]["z1"]["status"] == ZombieStatus.WANDERING.value
        assert data["zombies"]["z1"]["zombie_type"] == "Normal Zombie"
        assert data["zombies"]["z1"]["raised_stats"] is None

    def test_empty_dict(self):
        assert SnapshotSerializer.from_dict({}) == FarmSnapshot()

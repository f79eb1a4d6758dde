"""Action payloads accepted by the engine.

Hosts send plain dicts such as ``{"type": "plant", "plotId": "p1",
"resource": "Dark Seed", "newEntityId": "z1"}``. ``parse_action`` validates
them into one of the models below, discriminated on ``type``. Python
callers may also build the models directly using snake_case names.

Every action carries an optional ``timestamp``; when it is omitted the
engine uses the current time.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from zombie_farm.exceptions import InvalidActionError


class FarmAction(BaseModel):
    """Fields shared by every action."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamp: Optional[float] = None


class PlantAction(FarmAction):
    type: Literal["plant"] = "plant"
    plot_id: str = Field(alias="plotId")
    resource: str
    new_entity_id: str = Field(alias="newEntityId")


class RaiseAction(FarmAction):
    type: Literal["raise"] = "raise"
    plot_id: str = Field(alias="plotId")


class FeedAction(FarmAction):
    type: Literal["feed"] = "feed"
    entity_id: str = Field(alias="entityId")


class PetAction(FarmAction):
    type: Literal["pet"] = "pet"
    entity_id: str = Field(alias="entityId")


class EvaluateDecayAction(FarmAction):
    type: Literal["evaluateDecay"] = "evaluateDecay"
    now: Optional[float] = None


class ContainAction(FarmAction):
    type: Literal["contain"] = "contain"
    entity_id: str = Field(alias="entityId")


class ReleaseAction(FarmAction):
    type: Literal["release"] = "release"
    entity_id: str = Field(alias="entityId")


class ShelterAction(FarmAction):
    type: Literal["shelter"] = "shelter"
    entity_id: str = Field(alias="entityId")
    sheltered: bool = True


class FeedPriorityAction(FarmAction):
    type: Literal["feedPriority"] = "feedPriority"
    entity_ids: Optional[List[str]] = Field(default=None, alias="entityIds")


Action = Annotated[
    Union[
        PlantAction,
        RaiseAction,
        FeedAction,
        PetAction,
        EvaluateDecayAction,
        ContainAction,
        ReleaseAction,
        ShelterAction,
        FeedPriorityAction,
    ],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter = TypeAdapter(Action)


def parse_action(payload: Union[FarmAction, Mapping[str, Any]]) -> FarmAction:
    """Validate a raw payload into an action model.

    Raises:
        InvalidActionError: unknown ``type`` or missing/invalid fields
    """
    if isinstance(payload, FarmAction):
        return payload
    try:
        return _action_adapter.validate_python(dict(payload))
    except ValidationError as e:
        raise InvalidActionError(f"Invalid action payload: {e}") from e

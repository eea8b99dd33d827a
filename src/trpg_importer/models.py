"""
Canonical data models for imported TRPG characters and campaigns.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from shortuuid import random


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return random(length=8)


# Canonical ability keys, in the order most character sheets list them
ABILITY_KEYS = ("STR", "DEX", "CON", "INT", "WIS", "CHA")


class CanonicalModel(BaseModel):
    """Base model serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CharacterType(str, Enum):
    """Role of a character in a campaign."""
    PC = "PC"
    NPC = "NPC"
    ENEMY = "Enemy"


class AbilityScores(CanonicalModel):
    """The six core ability scores. Every score is always present."""
    strength: int = Field(default=10, alias="STR")
    dexterity: int = Field(default=10, alias="DEX")
    constitution: int = Field(default=10, alias="CON")
    intelligence: int = Field(default=10, alias="INT")
    wisdom: int = Field(default=10, alias="WIS")
    charisma: int = Field(default=10, alias="CHA")

    def by_key(self) -> dict[str, int]:
        """Return the scores keyed by their short names (STR, DEX, ...)."""
        return self.model_dump(by_alias=True)


class PointPool(CanonicalModel):
    """A current/max resource such as hit points or mana."""
    current: int = 10
    max: int = 10


class Skill(CanonicalModel):
    """A named skill with a numeric rank."""
    name: str
    level: int = 0
    description: str = ""


class EquipmentItem(CanonicalModel):
    """An inventory entry."""
    name: str
    type: str = "misc"
    description: str = ""
    quantity: int = 1


class CharacterAbility(CanonicalModel):
    """A feat, spell, or special ability."""
    name: str
    description: str = ""
    kind: str = "ability"


class Character(CanonicalModel):
    """Normalized character record produced by every importer."""
    # Identity
    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    level: int = Field(default=1, ge=1)
    character_type: CharacterType = CharacterType.PC
    race: str = "Human"
    character_class: str = Field(default="Warrior", alias="class")

    # Stats
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
    hit_points: PointPool = Field(default_factory=PointPool)
    mana_points: PointPool = Field(default_factory=PointPool)

    # Lists
    skills: list[Skill] = Field(default_factory=list)
    equipment: list[EquipmentItem] = Field(default_factory=list)
    abilities: list[CharacterAbility] = Field(default_factory=list)

    # Narrative
    backstory: str = ""
    personality: str = ""
    goals: str = ""
    notes: str = ""
    image_url: str | None = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape, dropping an absent image URL."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class Campaign(CanonicalModel):
    """Imported campaign document.

    Only the fields the importer validates are modelled; every other key of the
    source document is kept as an extra field and survives a round trip.
    """
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    id: str = Field(default_factory=new_id)
    title: str = Field(min_length=1)
    game_system: str = Field(min_length=1)
    characters: list[Any] = Field(default_factory=list)
    sessions: list[Any] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize back to the camelCase document shape."""
        return self.model_dump(by_alias=True, mode="json")

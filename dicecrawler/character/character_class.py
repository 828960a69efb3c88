from pydantic import BaseModel, Field

from dicecrawler.core.constants import CharacterClassType


class CharacterClass(BaseModel):
    """
    Represents a playable character class with its base stats and starting
    equipment.
    """

    class_type: CharacterClassType = Field(
        description="The class identifier.",
    )
    name: str = Field(
        description="The display name of the character class.",
    )
    emoji: str = Field(
        "❔",
        description="The emoji shown for the class.",
    )
    description: str = Field(
        "",
        description="A short description of the class.",
    )
    base_hp: int = Field(
        description="The starting (and maximum) HP for this class.",
        gt=0,
    )
    base_mp: int = Field(
        description="The starting (and maximum) MP for this class.",
        ge=0,
    )
    starting_gold: int = Field(
        default=0,
        description="The gold the character starts a run with.",
        ge=0,
    )
    starting_items: list[str] = Field(
        default_factory=list,
        description="The catalog ids of the items the character starts with.",
    )

    def __hash__(self) -> int:
        """
        Hash the character class based on its identifier.

        Returns:
            int:
                The hash value of the character class.

        """
        return hash(self.class_type)

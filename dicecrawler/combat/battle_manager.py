"""
Battle manager module for the dice crawler.

Resolves a battle between the player and a single monster, one hand at a
time: the player's dice effects are applied first, then the monster
counter-attacks, until one side is defeated.
"""

import random

from catchery import log_warning
from pydantic import BaseModel, Field

from dicecrawler.character.monster import Monster
from dicecrawler.character.player import Player
from dicecrawler.core.constants import EffectKind, NiceEnum
from dicecrawler.core.logging import log_debug, log_info
from dicecrawler.dice.dice_manager import DiceEffects

from .battle_context import BattleContext


class BattleState(NiceEnum):
    """The phases of a battle."""

    AWAITING_PLAY = "AWAITING_PLAY"
    RESOLVING_PLAYER_EFFECTS = "RESOLVING_PLAYER_EFFECTS"
    RESOLVING_MONSTER_TURN = "RESOLVING_MONSTER_TURN"
    MONSTER_DEFEATED = "MONSTER_DEFEATED"
    PLAYER_DEFEATED = "PLAYER_DEFEATED"

    @property
    def is_terminal(self) -> bool:
        return self in (BattleState.MONSTER_DEFEATED, BattleState.PLAYER_DEFEATED)


class ActionType(NiceEnum):
    """The player actions a hand can resolve into."""

    DAMAGE = "DAMAGE"
    MAGIC_DAMAGE = "MAGIC_DAMAGE"
    HEALING = "HEALING"


class MagicOutcome(NiceEnum):
    """What happened to the magic part of a hand."""

    NONE = "NONE"
    CAST = "CAST"
    SKIPPED = "SKIPPED"


class AppliedAction(BaseModel):
    """A single effect applied during the player's turn."""

    action_type: ActionType = Field(
        description="The kind of action applied.",
    )
    value: int = Field(
        description="The amount of damage dealt or HP healed.",
    )


class PlayerTurnResult(BaseModel):
    """The outcome of the player's half of a round."""

    applied_actions: list[AppliedAction] = Field(
        default_factory=list,
        description="The actions applied, in resolution order.",
    )
    monster_defeated: bool = Field(
        default=False,
        description="Whether the monster reached 0 HP.",
    )
    magic_outcome: MagicOutcome = Field(
        default=MagicOutcome.NONE,
        description="Whether magic was cast, skipped for lack of MP, or absent.",
    )

    def get_value(self, action_type: ActionType) -> int:
        """Returns the total value applied for an action type."""
        return sum(
            action.value
            for action in self.applied_actions
            if action.action_type == action_type
        )


class MonsterTurnResult(BaseModel):
    """The outcome of the monster's counter-attack."""

    damage_dealt: int = Field(
        description="The damage the player took.",
        ge=0,
    )
    next_monster_attack: int | None = Field(
        default=None,
        description="The attack previewed for the next round; None if the player fell.",
    )
    player_defeated: bool = Field(
        default=False,
        description="Whether the player reached 0 HP.",
    )


class BattleRewards(BaseModel):
    """The rewards granted for a victory."""

    experience: int = Field(description="The experience gained.")
    gold: int = Field(description="The gold gained.")
    leveled_up: bool = Field(description="Whether the player leveled up.")


class BattleRoundResult(BaseModel):
    """Everything that happened when a hand was played."""

    effects: DiceEffects = Field(
        description="The effects of the hand, equipment bonuses included.",
    )
    player_turn: PlayerTurnResult = Field(
        description="The player's half of the round.",
    )
    monster_turn: MonsterTurnResult | None = Field(
        default=None,
        description="The monster's half of the round, if it got to act.",
    )
    rewards: BattleRewards | None = Field(
        default=None,
        description="The rewards, if the monster was defeated.",
    )
    state: BattleState = Field(
        description="The battle state after the round.",
    )


def apply_equipment_bonuses(effects: DiceEffects, player: Player) -> DiceEffects:
    """
    Layer the player's equipped damage and defense bonuses onto a hand.

    A bonus only strengthens an effect the hand already triggers, and the
    immunity value is left untouched.

    Args:
        effects (DiceEffects): The raw effects of the hand.
        player (Player): The player whose equipment applies.

    Returns:
        DiceEffects: A new bundle with the bonuses applied.

    """
    damage = effects.damage
    if damage > 0:
        damage += player.get_bonus_for_type(EffectKind.DAMAGE)
    defense = effects.defense
    if defense > 0 and not effects.is_immune:
        defense += player.get_bonus_for_type(EffectKind.DEFENSE)
    return effects.model_copy(update={"damage": damage, "defense": defense})


class BattleManager:
    """
    Manages the flow of a single battle against one monster.

    The battle starts in AWAITING_PLAY with a freshly rolled hand and the
    monster's first attack already previewed.
    """

    def __init__(
        self,
        player: Player,
        monster: Monster,
        rng: random.Random | None = None,
        context: BattleContext | None = None,
    ) -> None:
        """
        Initialize the BattleManager.

        Args:
            player (Player): The player fighting the battle.
            monster (Monster): The monster being fought.
            rng (random.Random | None): The random source for dice and
                monster attacks.
            context (BattleContext | None): An existing per-battle context;
                a new one is created when omitted.

        """
        self.player = player
        self.monster = monster
        self.rng = rng or random.Random()
        self.context = context or BattleContext(
            self.rng, player.get_bonus_for_type(EffectKind.REROLL)
        )
        self.state = BattleState.AWAITING_PLAY
        self.turn_number = 1
        self.rewards: BattleRewards | None = None

        self.context.next_monster_attack = self.monster.calculate_attack(self.rng)
        self.context.dice.roll()
        log_debug(
            f"Battle started against {monster.name}",
            {"monster_hp": monster.hp, "next_attack": self.context.next_monster_attack},
        )

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal

    @property
    def rerolls_left(self) -> int:
        return self.context.rerolls_left

    @property
    def next_monster_attack(self) -> int | None:
        return self.context.next_monster_attack

    def current_effects(self) -> DiceEffects:
        """Returns the effects of the current hand with equipment bonuses."""
        return apply_equipment_bonuses(self.context.dice.calculate_effects(), self.player)

    # ============================================================================
    # DICE HANDLING
    # ============================================================================

    def reroll(self) -> bool:
        """
        Reroll the unlocked dice, spending one reroll of the round.

        Returns:
            bool: True if the dice were rerolled; False when the budget is
            exhausted or the player cannot act.

        """
        if self.state != BattleState.AWAITING_PLAY:
            return False
        if not self.context.consume_reroll():
            log_debug("No rerolls left", {"turn": self.turn_number})
            return False
        self.context.dice.roll()
        return True

    def toggle_lock(self, index: int) -> bool:
        """
        Lock or unlock a die. Ignored once no rerolls are left.

        Args:
            index (int): The die index, 0 to 4.

        Returns:
            bool: True if the lock was toggled.

        """
        if self.state != BattleState.AWAITING_PLAY or not self.context.can_reroll():
            return False
        before = self.context.dice.get_locks()
        self.context.dice.toggle_lock(index)
        return before != self.context.dice.get_locks()

    # ============================================================================
    # TURN RESOLUTION
    # ============================================================================

    def play_hand(self) -> BattleRoundResult | None:
        """
        Play the current hand and resolve a full round.

        Returns:
            BattleRoundResult | None: The outcome of the round, or None if the
            battle is not waiting for the player.

        """
        if self.state != BattleState.AWAITING_PLAY:
            log_warning(
                "Cannot play a hand right now",
                {"state": str(self.state), "context": "play_hand"},
            )
            return None

        effects = self.current_effects()
        log_debug(f"Playing hand on turn {self.turn_number}", {"effects": effects})

        player_turn = self.process_player_turn(effects)
        assert player_turn is not None

        if player_turn.monster_defeated:
            rewards = self.get_rewards()
            return BattleRoundResult(
                effects=effects,
                player_turn=player_turn,
                rewards=rewards,
                state=self.state,
            )

        attack = self.context.next_monster_attack
        if attack is None:
            attack = self.monster.calculate_attack(self.rng)
        monster_turn = self.process_monster_turn(effects.defense, attack)
        assert monster_turn is not None

        return BattleRoundResult(
            effects=effects,
            player_turn=player_turn,
            monster_turn=monster_turn,
            state=self.state,
        )

    def process_player_turn(self, effects: DiceEffects) -> PlayerTurnResult | None:
        """
        Apply a hand's effects: damage and magic to the monster, healing to
        the player. Magic that cannot be paid for is skipped without
        spending MP.

        Args:
            effects (DiceEffects): The effects to apply.

        Returns:
            PlayerTurnResult | None: What was applied, or None if the battle
            is not waiting for a hand.

        """
        if self.state != BattleState.AWAITING_PLAY:
            log_debug("Player turn out of order", {"state": str(self.state)})
            return None
        self.state = BattleState.RESOLVING_PLAYER_EFFECTS
        result = PlayerTurnResult()

        if effects.damage > 0:
            self.monster.take_damage(effects.damage)
            result.applied_actions.append(
                AppliedAction(action_type=ActionType.DAMAGE, value=effects.damage)
            )

        if effects.magic_damage > 0 and effects.magic_cost > 0:
            if self.player.use_mp(effects.magic_cost):
                self.monster.take_damage(effects.magic_damage)
                result.applied_actions.append(
                    AppliedAction(
                        action_type=ActionType.MAGIC_DAMAGE, value=effects.magic_damage
                    )
                )
                result.magic_outcome = MagicOutcome.CAST
            else:
                result.magic_outcome = MagicOutcome.SKIPPED
                log_debug(
                    "Magic skipped: not enough MP",
                    {"mp": self.player.mp, "cost": effects.magic_cost},
                )

        if effects.healing != 0:
            amount = (
                self.player.max_hp - self.player.hp
                if effects.is_full_heal
                else effects.healing
            )
            if amount > 0:
                healed = self.player.heal(amount)
                result.applied_actions.append(
                    AppliedAction(action_type=ActionType.HEALING, value=healed)
                )

        self.context.dice.reset_locks()

        result.monster_defeated = self.monster.is_dead()
        if result.monster_defeated:
            self.state = BattleState.MONSTER_DEFEATED
            log_info(f"{self.monster.name} was defeated", {"turn": self.turn_number})
        else:
            self.state = BattleState.RESOLVING_MONSTER_TURN
        return result

    def process_monster_turn(
        self, player_defense: int, monster_attack: int
    ) -> MonsterTurnResult | None:
        """
        Resolve the monster's counter-attack against the hand's defense.

        When the player survives, the next attack is previewed, the reroll
        budget is reset and a fresh hand is rolled.

        Args:
            player_defense (int): The defense of the hand just played.
            monster_attack (int): The attack value of the monster.

        Returns:
            MonsterTurnResult | None: The outcome, or None unless the
            player's effects were just resolved.

        """
        if self.state != BattleState.RESOLVING_MONSTER_TURN:
            log_debug("Monster turn out of order", {"state": str(self.state)})
            return None

        damage = max(0, monster_attack - player_defense)
        if damage > 0:
            self.player.take_damage(damage)
        log_debug(
            f"{self.monster.name} attacks",
            {"attack": monster_attack, "defense": player_defense, "damage": damage},
        )

        if self.player.is_dead():
            self.state = BattleState.PLAYER_DEFEATED
            self.context.next_monster_attack = None
            log_info("The player was defeated", {"monster": self.monster.name})
            return MonsterTurnResult(damage_dealt=damage, player_defeated=True)

        next_attack = self.monster.calculate_attack(self.rng)
        self.context.next_monster_attack = next_attack
        self.context.reset_rerolls()
        self.context.dice.reset_locks()
        self.context.dice.roll()
        self.turn_number += 1
        self.state = BattleState.AWAITING_PLAY
        return MonsterTurnResult(damage_dealt=damage, next_monster_attack=next_attack)

    def get_rewards(self) -> BattleRewards | None:
        """
        Grant the monster's gold and experience to the player, once.

        Returns:
            BattleRewards | None: The rewards, or None if the monster has not
            been defeated.

        """
        if self.state != BattleState.MONSTER_DEFEATED:
            return None
        if self.rewards is not None:
            return self.rewards

        gold = self.monster.gold_reward
        experience = self.monster.experience_reward
        self.player.add_gold(gold)
        leveled_up = self.player.gain_experience(experience)
        self.rewards = BattleRewards(
            experience=experience, gold=gold, leveled_up=leveled_up
        )
        log_info(
            "Battle rewards granted",
            {"gold": gold, "experience": experience, "leveled_up": leveled_up},
        )
        return self.rewards

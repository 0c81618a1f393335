"""
Enemy abilities module for the simulator.

Each enemy aspect carrying an ability code maps to one `AbilityKind`. The
kinds are resolved through a strategy table; codes that are not recognized
resolve as a standard attack, with a log line saying so.

Every resolution shares the same context (attacker, target, both rosters,
damage model, attack numbering, log and dice roller) and reports whether
the attacker may keep acting: a counter-attack that defeats the attacker
stops whatever the attacker was doing.
"""

from dataclasses import dataclass, field
from typing import Callable

from catchery import log_warning

from wildcombat.combat.damage import (
    calculate_damage,
    calculate_defense_damage,
    calculate_incapacitate_defense,
)
from wildcombat.combat.log import CombatLog
from wildcombat.core.constants import DamageModel, NiceEnum
from wildcombat.core.dice import DiceRoller, get_default_roller
from wildcombat.core.utils import format_rolls
from wildcombat.entities.combatant import EnemyAspect, EnemyInstance, PartyMember
from wildcombat.entities.roster import Encounter, Party


class AbilityKind(NiceEnum):
    """The known enemy ability effects, plus the fallback for unknown codes."""

    INCAPACITATE = "incapacitate"
    DUAL_WIELD_BARRAGE = "dualWieldBarrage"
    HIGH_NOON_DUEL = "highNoonDuel"
    DESERT_MIRAGE = "desertMirage"
    VIOLET_HAZE = "violetHaze"
    BONNIES_REVENGE = "bonniesRevenge"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str | None) -> "AbilityKind":
        """
        Maps an ability code to its kind.

        Codes match exactly, except that "Incapacitate" is also accepted.

        Returns:
            AbilityKind: The matching kind, UNKNOWN when nothing matches.

        """
        if code == "Incapacitate":
            return cls.INCAPACITATE
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == code:
                return kind
        return cls.UNKNOWN


@dataclass
class AbilityContext:
    """Everything an enemy action needs to resolve."""

    enemy: EnemyInstance
    target: PartyMember
    party: Party
    encounter: Encounter
    log: CombatLog
    ability: EnemyAspect | None = None
    damage_model: DamageModel = DamageModel.ZERO_ONE_TWO
    attacks_per_round: int = 1
    attack_num: int = 1
    roller: DiceRoller = field(default_factory=get_default_roller)

    @property
    def attack_label(self) -> str:
        """Attack numbering shown when enemies attack more than once a round."""
        if self.attacks_per_round > 1:
            return f" (attack {self.attack_num}/{self.attacks_per_round})"
        return ""

    @property
    def ability_name(self) -> str:
        return self.ability.name if self.ability else "an attack"


@dataclass
class AbilityResult:
    """Outcome of an enemy action."""

    party: Party
    encounter: Encounter
    log: CombatLog
    should_continue: bool = True


@dataclass(frozen=True)
class Narration:
    """
    Message templates of a defense exchange.

    Templates may reference `{target}`, `{enemy}`, `{skill}`, `{rolls}`,
    `{dice}`, `{advantage}`, `{damage}` and `{bonus}`.
    """

    defend: str = "{target} defends with {skill}{advantage} and rolled {rolls} ({dice} dice)"
    hit: str = "{enemy} does {damage} damage to {target}"
    defeat: str = "{target} was defeated!"
    miss: str | None = None
    counter: str = "{target} rolled doubles and gets a free counter-attack!"


STANDARD_NARRATION = Narration()


def counter_attack(
    defender: PartyMember,
    enemy: EnemyInstance,
    encounter: Encounter,
    log: CombatLog,
    roller: DiceRoller,
) -> bool:
    """
    Free attack made by a defender who rolled doubles.

    Args:
        defender: The party member striking back.
        enemy: The attacker being struck.
        encounter: The enemy roster holding the attacker.
        log: The log receiving the narration.
        roller: Source of dice.

    Returns:
        bool: False if the counter-attack defeated the attacker.

    """
    score = defender.attack_score
    rolls = roller.roll(score)
    damage = calculate_damage(rolls)
    log.player(
        f"{defender.name} counter-attacks {enemy.unique_name} with "
        f"{defender.attack_skill} and rolled {format_rolls(rolls)} ({score} dice)"
    )
    if damage <= 0:
        return True
    struck = encounter.get(enemy.instance_id)
    if struck is None:
        return True
    struck.take_damage(damage)
    log.player(f"{defender.name} does {damage} damage to {struck.unique_name}")
    if struck.is_dead():
        log.neutral(f"{struck.unique_name} was defeated by the counter-attack!")
        return False
    return True


def resolve_defense_exchange(
    ctx: AbilityContext,
    target: PartyMember,
    narration: Narration = STANDARD_NARRATION,
    advantage: int = 0,
    damage_bonus: int = 0,
) -> bool:
    """
    A target defends against the enemy in the context.

    The target rolls its defense dice (plus advantage), takes damage from
    the session's damage model (plus the bonus, if any damage got through)
    and counter-attacks on doubles.

    Returns:
        bool: False if a counter-attack defeated the enemy.

    """
    defender = ctx.party.get(target.party_id) or target
    score = defender.defense_score
    rolls = ctx.roller.roll(score, 0, advantage)
    result = calculate_defense_damage(rolls, ctx.damage_model, defender)
    damage = result.damage + damage_bonus if result.damage > 0 else 0

    fields = {
        "target": defender.name,
        "enemy": ctx.enemy.unique_name,
        "skill": defender.defense_skill,
        "rolls": format_rolls(rolls),
        "dice": score + advantage,
        "advantage": " (with advantage)" if advantage > 0 else "",
        "damage": damage,
        "bonus": damage_bonus,
    }
    ctx.log.player(narration.defend.format(**fields))

    if damage > 0:
        defender.take_damage(damage)
        ctx.log.enemy(narration.hit.format(**fields))
        if defender.is_dead():
            ctx.log.neutral(narration.defeat.format(**fields))
    elif narration.miss:
        ctx.log.player(narration.miss.format(**fields))

    if result.counter:
        ctx.log.player(narration.counter.format(**fields))
        return counter_attack(defender, ctx.enemy, ctx.encounter, ctx.log, ctx.roller)
    return True


def _result(ctx: AbilityContext, should_continue: bool) -> AbilityResult:
    return AbilityResult(
        party=ctx.party,
        encounter=ctx.encounter,
        log=ctx.log,
        should_continue=should_continue,
    )


def resolve_standard_attack(ctx: AbilityContext) -> AbilityResult:
    """A plain attack: the target defends with the session's damage model."""
    ctx.log.enemy(f"{ctx.enemy.unique_name} attacks {ctx.target.name}{ctx.attack_label}")
    return _result(ctx, resolve_defense_exchange(ctx, ctx.target))


# =============================================================================
# Ability effects
# =============================================================================


def _incapacitate(ctx: AbilityContext) -> AbilityResult:
    defender = ctx.party.get(ctx.target.party_id) or ctx.target
    score = defender.defense_score
    rolls = ctx.roller.roll(score)
    outcome = calculate_incapacitate_defense(rolls, defender)

    ctx.log.enemy(f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}")
    ctx.log.player(
        f"{defender.name} defends with {defender.defense_skill} and rolled "
        f"{format_rolls(rolls)} ({score} dice)"
    )

    if outcome.fully_incapacitated:
        defender.defeat()
        ctx.log.enemy(f"{defender.name} is fully incapacitated and loses all HP!")
        ctx.log.neutral(f"{defender.name} was defeated!")
    elif outcome.incapacitated:
        defender.incapacitated = True
        ctx.log.enemy(f"{defender.name} is incapacitated and cannot attack next turn!")
    elif outcome.damage > 0:
        defender.take_damage(outcome.damage)
        ctx.log.enemy(f"{ctx.enemy.unique_name} does {outcome.damage} damage to {defender.name}")
        if defender.is_dead():
            ctx.log.neutral(f"{defender.name} was defeated!")

    should_continue = True
    if outcome.counter:
        ctx.log.player(f"{defender.name} rolled doubles and gets a free counter-attack!")
        should_continue = counter_attack(
            defender, ctx.enemy, ctx.encounter, ctx.log, ctx.roller
        )
    return _result(ctx, should_continue)


_BARRAGE = Narration(
    hit="{target} takes {damage} damage from the barrage",
    miss="{target} successfully defends against the barrage",
)


def _dual_wield_barrage(ctx: AbilityContext) -> AbilityResult:
    ctx.log.enemy(
        f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}"
        " - targeting ALL players!"
    )
    should_continue = True
    for member in ctx.party.alive():
        if not should_continue:
            break
        should_continue = resolve_defense_exchange(ctx, member, _BARRAGE, advantage=1)
    return _result(ctx, should_continue)


_DUEL = Narration(
    hit="{target} takes {damage} damage in the duel",
    defeat="{target} was defeated in the duel!",
    miss="{target} successfully defends in the duel",
    counter="{target} rolled doubles and gets a free counter-attack in the duel!",
)


def _high_noon_duel(ctx: AbilityContext) -> AbilityResult:
    ctx.log.enemy(
        f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}"
        f" - challenging {ctx.target.name} to a duel!"
    )
    return _result(ctx, resolve_defense_exchange(ctx, ctx.target, _DUEL))


_MIRAGE = Narration(
    hit="{target} takes {damage} damage through the mirage",
    miss="{target} successfully defends against the mirage attack",
)


def _desert_mirage(ctx: AbilityContext) -> AbilityResult:
    ctx.log.enemy(
        f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}"
        " - reality shimmers and distorts!"
    )
    ctx.log.neutral("Shimmering mirages make it harder for players to focus their attacks")
    return _result(ctx, resolve_defense_exchange(ctx, ctx.target, _MIRAGE))


_HAZE = Narration(
    defend=(
        "{target} tries to resist the toxic pollen with {skill} and rolled "
        "{rolls} ({dice} dice)"
    ),
    hit="{target} takes {damage} poison damage from the violet haze",
    defeat="{target} succumbs to the toxic pollen!",
    miss="{target} successfully resists the poisonous cloud",
    counter="{target} rolled doubles and fights through the poison for a counter-attack!",
)


def _violet_haze(ctx: AbilityContext) -> AbilityResult:
    ctx.log.enemy(
        f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}"
        " - releasing toxic wisteria pollen!"
    )
    ctx.log.enemy("Purple clouds of poisonous pollen fill the air, choking all enemies")
    should_continue = True
    for member in ctx.party.alive():
        if not should_continue:
            break
        should_continue = resolve_defense_exchange(ctx, member, _HAZE)
    return _result(ctx, should_continue)


_VENGEANCE = Narration(
    hit="{enemy} does {damage} damage to {target} (including +{bonus} vengeance damage)",
    defeat="{target} was defeated by vengeful fury!",
    miss="{target} successfully defends against the vengeful attack",
)
_UNAVENGED = Narration(miss="{target} successfully defends")


def _bonnies_revenge(ctx: AbilityContext) -> AbilityResult:
    fallen = ctx.encounter.defeated_count()
    if fallen > 0:
        allies = "ally" if fallen == 1 else "allies"
        ctx.log.enemy(
            f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}"
            f" - fueled by vengeance for {fallen} fallen {allies}!"
        )
        should_continue = resolve_defense_exchange(
            ctx, ctx.target, _VENGEANCE, damage_bonus=fallen
        )
    else:
        ctx.log.enemy(
            f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}"
            " - but no allies have fallen yet"
        )
        should_continue = resolve_defense_exchange(ctx, ctx.target, _UNAVENGED)
    return _result(ctx, should_continue)


def _unknown(ctx: AbilityContext) -> AbilityResult:
    code = ctx.ability.ability_code if ctx.ability else None
    log_warning(
        f"Unrecognized ability code {code!r}, resolving as a standard attack",
        {"enemy": ctx.enemy.unique_name, "ability": ctx.ability_name, "code": code},
    )
    ctx.log.enemy(f"{ctx.enemy.unique_name} uses {ctx.ability_name}{ctx.attack_label}")
    ctx.log.neutral(
        f"{ctx.ability_name} has unrecognized ability code '{code}'"
        " - resolved as a standard attack"
    )
    return _result(ctx, resolve_defense_exchange(ctx, ctx.target))


AbilityHandler = Callable[[AbilityContext], AbilityResult]

ABILITY_HANDLERS: dict[AbilityKind, AbilityHandler] = {
    AbilityKind.INCAPACITATE: _incapacitate,
    AbilityKind.DUAL_WIELD_BARRAGE: _dual_wield_barrage,
    AbilityKind.HIGH_NOON_DUEL: _high_noon_duel,
    AbilityKind.DESERT_MIRAGE: _desert_mirage,
    AbilityKind.VIOLET_HAZE: _violet_haze,
    AbilityKind.BONNIES_REVENGE: _bonnies_revenge,
    AbilityKind.UNKNOWN: _unknown,
}


def resolve_ability(ctx: AbilityContext) -> AbilityResult:
    """
    Resolves the ability in the context.

    Args:
        ctx (AbilityContext): The action context, `ability` must be set.

    Returns:
        AbilityResult: The updated rosters, the log and whether the enemy may
        keep acting.

    """
    kind = AbilityKind.from_code(ctx.ability.ability_code if ctx.ability else None)
    return ABILITY_HANDLERS[kind](ctx)

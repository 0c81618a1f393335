"""
Tests for the party member and enemy instance records.
"""

from wildcombat.entities.combatant import (
    CharacterAspect,
    EnemyAspect,
    EnemyInstance,
    PartyMember,
)


def test_party_member_defaults():
    """
    Test that missing fields fall back to usable values.
    """
    member = PartyMember(party_id="a-1", name="A", hit_points=5, attack_score=0, defense_score=-1)
    assert member.current_hp == 5
    assert member.hp == 5
    assert member.attack_score == 1
    assert member.defense_score == 1
    assert member.attack_skill == "BREAK"
    assert member.defense_skill == "BRACE"
    assert not member.incapacitated


def test_party_member_blank_skill_uses_default():
    """
    Test that blank skill labels are replaced by the default skills.
    """
    member = PartyMember(party_id="a-1", name="A", attack_skill=" ", defense_skill="")
    assert member.attack_skill == "BREAK"
    assert member.defense_skill == "BRACE"


def test_party_member_damage_clamps_at_zero(fighter):
    """
    Test that hit points never drop below zero.
    """
    assert fighter.take_damage(3) == 7
    assert fighter.is_alive()
    assert fighter.take_damage(50) == 0
    assert fighter.is_dead()


def test_party_member_zero_hit_points_is_dead():
    """
    Test that a member without hit points counts as dead.
    """
    member = PartyMember(party_id="a-1", name="A")
    assert member.is_dead()


def test_party_member_reset(fighter):
    """
    Test that reset restores hit points and clears incapacitation.
    """
    fighter.take_damage(4)
    fighter.incapacitated = True
    fighter.reset()
    assert fighter.hp == 10
    assert not fighter.incapacitated


def test_longest_aspect_track():
    """
    Test that the longest track is used, with a floor of one.
    """
    member = PartyMember(
        party_id="a-1",
        name="A",
        aspects=[CharacterAspect(name="x", track=[0, 0]), CharacterAspect(name="y", track=[0, 1, 0])],
    )
    assert member.longest_aspect_track() == 3
    assert PartyMember(party_id="b-1", name="B").longest_aspect_track() == 1


def test_enemy_hp_derives_from_tracks(spider):
    """
    Test that enemy hit points default to the sum of track lengths.
    """
    assert spider.max_hp == 3
    assert spider.current_hp == 3
    assert spider.is_alive()


def test_enemy_unique_name_defaults_to_name():
    """
    Test that an enemy without a unique name uses its base name.
    """
    enemy = EnemyInstance(instance_id="rat-1", name="Rat")
    assert enemy.unique_name == "Rat"
    assert enemy.is_dead()


def test_enemy_abilities_are_spent_once(spider):
    """
    Test that a used ability is no longer available until reset.
    """
    available = spider.available_abilities()
    assert [aspect.name for aspect in available] == ["Venom Fangs"]

    spider.mark_ability_used(available[0])
    assert spider.available_abilities() == []
    assert spider.used_abilities == {"Venom Fangs"}

    spider.take_damage(2)
    spider.reset()
    assert spider.hp == 3
    assert spider.used_abilities == set()
    assert len(spider.available_abilities()) == 1


def test_enemy_aspect_negative_track_is_corrected():
    """
    Test that a negative track length is corrected to zero.
    """
    aspect = EnemyAspect(name="Broken", track_length=-2)
    assert aspect.track_length == 0
    assert not aspect.has_ability


def test_party_member_null_fields_are_defaulted():
    """
    Test that explicit nulls are treated like missing fields.
    """
    member = PartyMember(
        party_id="a-1",
        name="A",
        hit_points=None,
        attack_score=None,
        attack_skill=None,
        defense_score=None,
        defense_skill=None,
    )
    assert member.hit_points == 0
    assert member.hp == 0
    assert (member.attack_score, member.defense_score) == (1, 1)
    assert (member.attack_skill, member.defense_skill) == ("BREAK", "BRACE")


def test_enemy_aspect_null_track_is_defaulted():
    aspect = EnemyAspect(name="Shell", track_length=None)
    assert aspect.track_length == 0
    enemy = EnemyInstance(instance_id="crab-1", name="Crab", aspects=[aspect])
    assert enemy.hp == 0

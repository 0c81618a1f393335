"""
Wild Combat simulator package.

This package contains the combat resolution engine for party-vs-encounter
skirmishes: dice mechanics, damage models, enemy abilities, round and
session orchestration, and statistical batch simulation.
"""

"""
custom_rules.py — A robots-only tournament with extended rules
==============================================================

Builds a rule graph from "X beats Y" sentences, then lets a few AI
players fight it out for a fixed number of rounds.

    python custom_rules.py
"""

import random

from rps_lobby import AiPlayer, LocalGame, RuleGraph, parse_rule

RULES = [
    "Fire beats Rock",
    "Fire beats Paper",
    "Fire beats Scissors",
    "Water beats Fire",
    "Rock beats Water",
]
ROUNDS = 10

rules = RuleGraph.classic()
for text in RULES:
    rule = parse_rule(text)
    rules.add_rule(rule.beater, rule.beaten)

print("Rules:")
for rule in rules.rules():
    print(f"  {rule}")

rng = random.Random(2024)
game = LocalGame(rules, [AiPlayer(i, rules, rng=rng) for i in range(1, 4)])

for _ in range(ROUNDS):
    result = game.play_round()
    picks = ", ".join(f"{name}: {choice}" for name, choice in result.choices.items())
    print(f"{picks}  ->  {'tie' if result.is_tie else result.winner}")

print()
for name, score in game.scoreboard():
    print(f"{name} had a score of {score}")

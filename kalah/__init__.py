"""
Kalah (6-pit, 4-stone Mancala) rules engine.

Subpackages:
- game: board topology, rules and state encoding
- arena: playout harness for running whole games between move policies
"""

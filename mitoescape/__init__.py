"""
Mitoescape - Escape the Mitochondrion

A deterministic, turn-based engine for a metabolic escape-room game.
The engine provides:
- Immutable run snapshots
- Reactions that spend per-turn actions
- End-of-turn regulation, gate locks and failure evaluation
- A seedable event deck
- Autoplay policies for simulation
"""

__version__ = "0.1.0"

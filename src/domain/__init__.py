"""Ladder rating domain: match types, the Elo engine and the record workflow."""

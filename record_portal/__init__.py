"""Citizen record portal: in-memory record store, audited edits, simulated collaborators."""

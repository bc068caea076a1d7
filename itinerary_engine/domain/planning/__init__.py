"""Deterministic day-plan algorithms; geometry is injected by callers."""

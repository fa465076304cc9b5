"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic
    - Core never logs and never retries — it raises typed errors (core/errors.py)

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
    - State mutations are returned as plans (ActivationPlan, derived-field updates)
      and applied by the shell inside one transaction
"""

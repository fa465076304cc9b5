"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services read through repositories, decide with core functions, then write
    - Services own the commit; repositories only flush (except the activation swap)

Design Decisions:
    - One service per concern: registry, actuator workflow, specimen tests
      (ADR: ExMA no god objects)
"""

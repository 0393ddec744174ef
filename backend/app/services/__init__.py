"""Services Layer — orchestration between the pure core and the player store.

Invariants:
    - Services depend on core Protocols, never on concrete stores
    - Validation always runs before any store mutation
"""

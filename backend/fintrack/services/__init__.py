"""Services Layer — identity resolution, account writes, dashboard reads, probes.

Invariants:
    - Each public operation catches once, at its operation_boundary
    - Multi-row writes run inside unit_of_work (single commit or rollback)
"""

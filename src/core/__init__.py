"""
Core domain models, result contract, and invariants.

This module contains the foundational building blocks that are independent
of the execution environment (clock source, caller identity, external wallets).
"""

"""
Pneuma - On-chain read layer for suiscope.

Provides a JSON-RPC client, BCS schemas, a minimal programmable-transaction
encoder and the devInspect-based query used for view-style reads.

Uses httpx + base58 instead of a full Sui SDK.
"""

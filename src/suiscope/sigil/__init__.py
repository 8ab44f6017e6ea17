"""
Sigil - Credential layer for suiscope.

Decodes Sui private keys (Ed25519, Secp256k1, Secp256r1), scans the local
Sui keystore and resolves which key signs for this client.
"""

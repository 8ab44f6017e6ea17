"""
Theurgy - Command implementations for suiscope.

Each module corresponds to a top-level CLI command:
- inspect:   simulate any Move call and decode its return value
- whitelist: whitelist-id / is-whitelisted workshop queries
"""

"""
Sample operations used by registry and API tests.

Scanning this package binds exactly three contracts:
- Operation[RenameProject, Project]
- Operation[GetProject, Project] (through the generic LookupOperation base)
- Operation[ArchiveProject, None]
"""

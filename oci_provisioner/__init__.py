"""OCI resource provisioner.

Create, read, update, delete, list and status operations for Oracle Cloud
Infrastructure resources, driven by an external orchestrator through
ResourcePlugin.
"""

"""
External collaborators for Earnings Pulse.

- Ingestion Service: fetches and parses the raw documents
"""

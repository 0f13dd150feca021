"""
Pod Identity Probes Infrastructure
HTTP client plumbing, probe implementations and logging setup.
"""

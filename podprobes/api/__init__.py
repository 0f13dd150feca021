"""
Pod Identity Probes API Layer
HTTP surface exposing the probes to the orchestrator.
"""

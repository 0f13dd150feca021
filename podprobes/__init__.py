"""
Pod Identity Probes
Health probes for the pod-identity sidecar stack (IMDS token and NMI liveness).
"""

__version__ = "0.1.0"

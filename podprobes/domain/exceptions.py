class ProbeError(Exception):
    """Base class for all probe errors."""
    pass


class ConfigurationError(ProbeError):
    """The probe is misconfigured and cannot even attempt its check."""
    pass


class HostIPNotSetError(ConfigurationError):
    def __init__(self, env_var: str = "HOST_IP"):
        self.env_var = env_var
        self.message = f"Environment variable '{env_var}' should be set"
        super().__init__(self.message)

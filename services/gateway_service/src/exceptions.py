class GatewayError(Exception):
    pass

class RetryableError(GatewayError):
    """Temporary: network timeout, 429/5xx from the provider, missing upstream."""
    pass

class PermanentError(GatewayError):
    """Won't improve with retry: policy refusal, undecodable provider output."""
    pass

class ProviderUnavailable(RetryableError):
    pass

class PolicyViolation(PermanentError):
    """Identifiable content found and the active policy forbids sending it."""
    pass

class MalformedResponse(PermanentError):
    pass

PHIPolicyViolation = PolicyViolation

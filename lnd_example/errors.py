def describe(cause: Exception) -> str:
    # grpc.RpcError carries a one-line summary in details()
    details = getattr(cause, 'details', None)
    if callable(details):
        return details()
    return str(cause)


class BootstrapError(Exception):
    """Base class for every failure of the bootstrap sequence."""

    step = 'bootstrap'

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause is None:
            return self.message
        return f'{self.message}: {describe(self.cause)}'


class CredentialLoadError(BootstrapError):
    """A certificate or macaroon file is missing, unreadable or malformed."""

    step = 'load credentials'

    def __init__(self, message: str, path: str, cause: Exception = None):
        super().__init__(message, cause)
        self.path = path


class ConnectionError(BootstrapError):
    """Dialing the remote node failed or ran past the deadline."""

    step = 'dial'

    def __init__(self, message: str, address: str,
                 cause: Exception = None,
                 deadline_exceeded: bool = False):
        super().__init__(message, cause)
        self.address = address
        self.deadline_exceeded = deadline_exceeded


class CallError(BootstrapError):
    """The probe RPC failed, including running past the deadline."""

    step = 'call'

    def __init__(self, message: str, method: str,
                 cause: Exception = None,
                 code=None,
                 details: str = None,
                 deadline_exceeded: bool = False):
        super().__init__(message, cause)
        self.method = method
        self.code = code
        self.details = details
        self.deadline_exceeded = deadline_exceeded

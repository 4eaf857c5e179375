class AuthenticationError(Exception):
    pass


class ConfigurationError(AuthenticationError):
    pass


class BadRequestError(AuthenticationError):
    status = 400

    def __init__(self, message: str | None = None):
        self.message = message or "Bad Request"
        super().__init__(self.message)


class VerifierTimeoutError(AuthenticationError):
    pass

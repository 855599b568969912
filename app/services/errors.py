"""Domain errors raised by the service layer and mapped to HTTP codes by controllers."""


class NotFoundError(LookupError):
    pass


class ConflictError(ValueError):
    pass


class InvalidTransitionError(ValueError):
    pass


class PaymentGatewayError(RuntimeError):
    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response

class LoyaltyError(Exception):
    """Base error for the loyalty service. Carries the HTTP status it maps to."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class CustomerNotFound(LoyaltyError):
    status_code = 404
    message = "Customer not found"


class InvalidPurchaseAmount(LoyaltyError):
    message = "Invalid purchase amount"


class InvalidEmail(LoyaltyError):
    message = "Invalid email address"


class EmailAlreadyPresent(LoyaltyError):
    message = "Customer already has an email address"

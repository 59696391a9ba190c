class UnauthorizedError(Exception):
    pass


class ForbiddenError(Exception):
    pass


class BannedUserError(ForbiddenError):
    def __init__(self, reason=None):
        super().__init__("Your account has been banned")
        self.reason = reason


class PublishingRestrictedError(ForbiddenError):
    def __init__(self, reason=None):
        super().__init__("You are restricted from publishing apps")
        self.reason = reason


class NotFoundError(Exception):
    pass


class MissingFieldsError(Exception):
    def __init__(self, fields):
        super().__init__("Missing required fields")
        self.fields = fields


class ValidationError(Exception):
    pass


class ConflictError(Exception):
    pass


class AlreadyRegisteredError(ConflictError):
    def __init__(self, registration=None):
        super().__init__("You are already registered for this event")
        self.registration = registration


class CheckInError(Exception):
    status_code = 400


class InvalidCredentialError(CheckInError):
    status_code = 404


class WrongEventError(CheckInError):
    def __init__(self, registration=None):
        super().__init__("This QR code is for a different event")
        self.registration = registration


class InvalidTransitionError(CheckInError):
    status_code = 409


class AlreadyCheckedInError(InvalidTransitionError):
    def __init__(self, registration):
        super().__init__("Already checked in")
        self.registration = registration

    @property
    def checked_in_at(self):
        return self.registration.checked_in_at

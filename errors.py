class ShortenerError(Exception):
    status_code = 500
    message = "Internal Server Error"
    body_key = "error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingFieldError(ShortenerError):
    status_code = 400


class DuplicateEmailError(ShortenerError):
    status_code = 400
    message = "User already Exist"


class InvalidCredentialsError(ShortenerError):
    # one message for unknown email and wrong password
    status_code = 400
    message = "Please Check your Credentials"


class TokenMissingError(ShortenerError):
    status_code = 401
    message = "Token missing"
    body_key = "message"


class TokenError(ShortenerError):
    status_code = 403
    message = "Invalid or expired token"
    body_key = "message"


class InvalidTokenError(TokenError):
    pass


class ExpiredTokenError(TokenError):
    pass


class UrlNotFoundError(ShortenerError):
    status_code = 404
    message = "Url Not Found"


class ShortIdTakenError(ShortenerError):
    message = "Short id already taken"


class ShortIdExhaustedError(ShortenerError):
    message = "Could not generate a unique short id"


class LoginRequired(Exception):
    """Raised by the auth gate when a protected route should bounce to the login page."""

    def __init__(self, login_path: str):
        self.login_path = login_path
        super().__init__(login_path)

from fastapi import status

from licensing.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    """
    Failure the caller cannot fix. Only public_message reaches the client;
    the base error stays in the logs.
    """

    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        public_message: str = "Internal server error",
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.public_message = public_message
        super().__init__(base_error.message)

"""Exception types shared across the wallet checker."""


class MarketplaceAPIError(Exception):
    """Raised when a marketplace request fails.

    Contained inside the gateway: callers only ever see a failed FetchResult.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PayloadShapeError(MarketplaceAPIError):
    """Raised when an upstream payload has an unusable top-level shape."""


class WalletCheckFailed(Exception):
    """Raised when building a wallet report fails unexpectedly.

    The original exception is attached as __cause__ and as the cause attribute.
    """

    def __init__(self, address: str, cause: BaseException | str):
        self.address = address
        self.cause = cause
        super().__init__(f"Wallet check failed for {address}: {cause}")
